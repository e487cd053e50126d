# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Simulation - Stepping, state capture and episode lifecycle.
"""

from .types import (
    ArmState,
    EpisodeConfig,
    ObjectState,
    SimulationState,
    TaskType,
    create_default_arm_state,
    create_initial_state,
)
from .state_capture import StateCaptureConfig, capture_state
from .simulation_manager import ApplyArmAction, SimulationManager
from .episode_manager import EpisodeManager

__all__ = [
    "ArmState",
    "EpisodeConfig",
    "ObjectState",
    "SimulationState",
    "TaskType",
    "create_default_arm_state",
    "create_initial_state",
    "StateCaptureConfig",
    "capture_state",
    "ApplyArmAction",
    "SimulationManager",
    "EpisodeManager",
]
