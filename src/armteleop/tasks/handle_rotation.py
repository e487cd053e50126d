# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Handle-rotation task: swing a hinged lever to a target angle.
"""

from typing import Dict, Optional, Tuple

import numpy as np

from ..hand_tracking.types import Quat, Vec3
from ..physics.physics_world import PhysicsWorld
from ..physics.types import ColliderDesc, JointHandle, PhysicsBodyDescriptor, RigidBodyType
from ..retargeting.transform_utils import quaternion_angle
from ..simulation.types import TaskType
from .types import HandleConfig

MOUNT_ID = "handle-mount"
LEVER_ID = "handle-lever"


class HandleRotationTask:
    """Succeeds while the lever angle is within ``tolerance`` of ``target_angle``.

    The lever is a free pendulum: with a horizontal hinge axis it swings down
    under gravity with no operator input. The angle is unsigned, so hanging
    straight down reads as pi/2 and scores as success with the default target.
    """

    task_type = TaskType.HANDLE_ROTATION

    def __init__(self, physics_world: PhysicsWorld, config: Optional[HandleConfig] = None):
        self.physics_world = physics_world
        self.config = config or HandleConfig()
        self._joint: Optional[JointHandle] = None

    @property
    def object_ids(self) -> Tuple[str, ...]:
        return (LEVER_ID,)

    @property
    def object_types(self) -> Dict[str, str]:
        return {LEVER_ID: "handle"}

    def _lever_rest_position(self) -> Vec3:
        x, y, z = self.config.position
        return Vec3(x + self.config.length / 2, y, z)

    def setup(self, rng: Optional[np.random.Generator] = None) -> None:
        self.physics_world.add_body(
            PhysicsBodyDescriptor(
                id=MOUNT_ID,
                body_type=RigidBodyType.FIXED,
                collider=ColliderDesc.cuboid(0.02, 0.02, 0.02),
                position=Vec3(*self.config.position),
            )
        )
        self.physics_world.add_body(
            PhysicsBodyDescriptor(
                id=LEVER_ID,
                body_type=RigidBodyType.DYNAMIC,
                collider=ColliderDesc.cuboid(self.config.length / 2, 0.0125, 0.0125),
                position=self._lever_rest_position(),
                density=1.0,
            )
        )
        self._joint = self.physics_world.create_revolute_joint(
            MOUNT_ID,
            LEVER_ID,
            Vec3(),
            Vec3(-self.config.length / 2, 0.0, 0.0),
            Vec3(*self.config.axis),
        )

    def teardown(self) -> None:
        if self._joint is not None:
            self.physics_world.remove_joint(self._joint)
            self._joint = None
        self.physics_world.remove_body(MOUNT_ID)
        self.physics_world.remove_body(LEVER_ID)

    def get_current_angle(self) -> float:
        body = self.physics_world.get_body(LEVER_ID)
        if body is None:
            return 0.0
        return quaternion_angle(body.rotation())

    def check_success(self) -> bool:
        return abs(self.get_current_angle() - self.config.target_angle) <= self.config.tolerance

    def get_progress(self) -> float:
        if self.config.target_angle == 0:
            return 1.0
        return min(1.0, self.get_current_angle() / self.config.target_angle)

    def reset(self) -> None:
        body = self.physics_world.get_body(LEVER_ID)
        if body is None:
            return
        body.set_translation(self._lever_rest_position())
        body.set_rotation(Quat())
        body.set_angvel(Vec3())
        body.set_linvel(Vec3())
