# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Tasks - Scripted manipulation environments scored against the simulation.
"""

from ..simulation.types import TaskType
from .types import HandleConfig, PickPlaceConfig, TargetZone, ValveConfig
from .pick_and_place import PickAndPlaceTask
from .valve_turning import ValveTurningTask
from .handle_rotation import HandleRotationTask
from .task_manager import Task, TaskManager

__all__ = [
    "TaskType",
    "HandleConfig",
    "PickPlaceConfig",
    "TargetZone",
    "ValveConfig",
    "PickAndPlaceTask",
    "ValveTurningTask",
    "HandleRotationTask",
    "Task",
    "TaskManager",
]
