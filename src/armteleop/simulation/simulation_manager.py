# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Simulation Manager - One fixed-timestep tick of the teleoperated world.

Each ``step`` applies the left then right arm command, advances the physics
world by one timestep, and captures the resulting state, in that order.
"""

import time
from typing import Callable, Optional

from ..physics.grasp_manager import GraspManager
from ..physics.physics_world import PhysicsWorld
from ..retargeting.types import DualArmAction
from .state_capture import StateCaptureConfig, capture_state
from .types import SimulationState, create_initial_state

ApplyArmAction = Callable[[str, DualArmAction], None]


class SimulationManager:
    """Steps the simulation and keeps the last captured snapshot."""

    def __init__(
        self,
        physics_world: PhysicsWorld,
        grasp_manager: GraspManager,
        apply_arm_action: ApplyArmAction,
        state_capture_config: Optional[StateCaptureConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.physics_world = physics_world
        self.grasp_manager = grasp_manager
        self._apply_arm_action = apply_arm_action
        self.state_capture_config = state_capture_config or StateCaptureConfig()
        self._clock = clock
        self._state = create_initial_state()

    def step(self, action: DualArmAction) -> SimulationState:
        self._apply_arm_action("left", action)
        self._apply_arm_action("right", action)
        self.physics_world.step()
        self._state = self._capture()
        return self._state

    def get_state(self) -> SimulationState:
        """Last captured snapshot; does not advance the simulation."""
        return self._state

    def reset(self) -> SimulationState:
        """Release every grasp and capture a fresh snapshot without stepping."""
        self.grasp_manager.release_all()
        self._state = self._capture()
        return self._state

    def set_state_capture_config(self, config: StateCaptureConfig) -> None:
        self.state_capture_config = config

    def _capture(self) -> SimulationState:
        return capture_state(
            self.physics_world,
            self.grasp_manager,
            self.state_capture_config,
            clock=self._clock,
        )
