# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Valve-turning task: spin a hinged valve handle through a target angle.
"""

from typing import Dict, Optional, Tuple

import numpy as np

from ..hand_tracking.types import Quat, Vec3
from ..physics.physics_world import PhysicsWorld
from ..physics.types import ColliderDesc, JointHandle, PhysicsBodyDescriptor, RigidBodyType
from ..retargeting.transform_utils import quaternion_angle
from ..simulation.types import TaskType
from .types import ValveConfig

MOUNT_ID = "valve-mount"
HANDLE_ID = "valve-handle"


class ValveTurningTask:
    """Succeeds once the handle has turned at least ``target_angle``."""

    task_type = TaskType.VALVE_TURNING

    def __init__(self, physics_world: PhysicsWorld, config: Optional[ValveConfig] = None):
        self.physics_world = physics_world
        self.config = config or ValveConfig()
        self._joint: Optional[JointHandle] = None

    @property
    def object_ids(self) -> Tuple[str, ...]:
        return (HANDLE_ID,)

    @property
    def object_types(self) -> Dict[str, str]:
        return {HANDLE_ID: "valve"}

    def setup(self, rng: Optional[np.random.Generator] = None) -> None:
        position = Vec3(*self.config.position)
        self.physics_world.add_body(
            PhysicsBodyDescriptor(
                id=MOUNT_ID,
                body_type=RigidBodyType.FIXED,
                collider=ColliderDesc.cylinder(0.025, 0.03),
                position=position,
            )
        )
        self.physics_world.add_body(
            PhysicsBodyDescriptor(
                id=HANDLE_ID,
                body_type=RigidBodyType.DYNAMIC,
                collider=ColliderDesc.ball(self.config.radius),
                position=position,
                density=self.config.density,
            )
        )
        self.physics_world.set_angular_damping(HANDLE_ID, self.config.friction)
        self._joint = self.physics_world.create_revolute_joint(
            MOUNT_ID, HANDLE_ID, Vec3(), Vec3(), Vec3(*self.config.axis)
        )

    def teardown(self) -> None:
        if self._joint is not None:
            self.physics_world.remove_joint(self._joint)
            self._joint = None
        self.physics_world.remove_body(MOUNT_ID)
        self.physics_world.remove_body(HANDLE_ID)

    def get_current_angle(self) -> float:
        body = self.physics_world.get_body(HANDLE_ID)
        if body is None:
            return 0.0
        return quaternion_angle(body.rotation())

    def check_success(self) -> bool:
        return abs(self.get_current_angle()) >= abs(self.config.target_angle)

    def get_progress(self) -> float:
        if self.config.target_angle == 0:
            return 1.0
        return min(1.0, abs(self.get_current_angle()) / abs(self.config.target_angle))

    def reset(self) -> None:
        body = self.physics_world.get_body(HANDLE_ID)
        if body is None:
            return
        body.set_rotation(Quat())
        body.set_angvel(Vec3())
        body.set_linvel(Vec3())
