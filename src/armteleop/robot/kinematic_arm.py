# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Kinematic Arm Driver - Applies incremental arm actions to gripper bodies.

Each arm is represented in the physics world by one kinematic gripper body.
Applying an action translates the gripper by the commanded delta (kept inside
the arm's reach sphere around its base) and rotates it by the commanded
roll/pitch/yaw delta. No inverse kinematics is performed.
"""

import logging
from typing import Dict, Optional

import numpy as np
from scipy.spatial.transform import Rotation

from ..hand_tracking.types import HAND_SIDES, Quat, Vec3
from ..physics.physics_world import PhysicsWorld
from ..physics.types import (
    ColliderDesc,
    CollisionGroups,
    PhysicsBodyDescriptor,
    RigidBodyType,
)
from ..retargeting.types import GRIPPER_OPEN, DualArmAction
from .arm_config import ArmConfig

logger = logging.getLogger(__name__)

_COLLISION_GROUPS = {
    "left": CollisionGroups.ARM_LEFT,
    "right": CollisionGroups.ARM_RIGHT,
}


class KinematicArmDriver:
    """
    Drives the left and right gripper bodies from ``DualArmAction`` commands.

    ``apply`` matches the ``(side, action)`` signature expected by
    :class:`~armteleop.simulation.SimulationManager`.
    """

    def __init__(
        self,
        physics_world: PhysicsWorld,
        left: Optional[ArmConfig] = None,
        right: Optional[ArmConfig] = None,
    ) -> None:
        self.physics_world = physics_world
        self.arms: Dict[str, ArmConfig] = {
            "left": left or ArmConfig.for_side("left"),
            "right": right or ArmConfig.for_side("right"),
        }
        for side, arm in self.arms.items():
            if arm.side != side:
                raise ValueError(f"{side} arm configured with side '{arm.side}'")
        self._gripper_commands: Dict[str, int] = {side: GRIPPER_OPEN for side in HAND_SIDES}

    @property
    def gripper_ids(self) -> Dict[str, str]:
        return {side: arm.gripper_id for side, arm in self.arms.items()}

    def spawn_grippers(self) -> None:
        """Create the kinematic gripper bodies at their home positions."""
        for side, arm in self.arms.items():
            half = arm.gripper_half_extent
            self.physics_world.add_body(
                PhysicsBodyDescriptor(
                    id=arm.gripper_id,
                    body_type=RigidBodyType.KINEMATIC,
                    collider=ColliderDesc.cuboid(half, half, half),
                    position=arm.home_position,
                    collision_group=_COLLISION_GROUPS[side],
                )
            )

    def remove_grippers(self) -> None:
        for arm in self.arms.values():
            self.physics_world.remove_body(arm.gripper_id)

    def apply(self, side: str, action: DualArmAction) -> None:
        """Move ``side``'s gripper by its command in ``action``."""
        arm = self.arms[side]
        arm_action = action.for_side(side)
        self._gripper_commands[side] = arm_action.gripper

        body = self.physics_world.get_body(arm.gripper_id)
        if body is None:
            return

        base = np.asarray(arm.base_position)
        target = body.translation().to_array() + arm_action.translation
        offset = target - base
        distance = np.linalg.norm(offset)
        if distance > arm.reach:
            target = base + offset / distance * arm.reach

        orientation = Rotation.from_euler("xyz", arm_action.rotation) * Rotation.from_quat(
            body.rotation().to_array()
        )

        body.set_translation(Vec3.from_array(target))
        body.set_rotation(Quat.from_array(orientation.as_quat()))

    def get_gripper_command(self, side: str) -> int:
        """Last gripper command applied to ``side`` (0 closed, 1 open)."""
        return self._gripper_commands[side]

    def reset(self) -> None:
        """Return both grippers to their home pose with open grippers."""
        for side, arm in self.arms.items():
            self._gripper_commands[side] = GRIPPER_OPEN
            body = self.physics_world.get_body(arm.gripper_id)
            if body is None:
                continue
            body.set_translation(arm.home_position)
            body.set_rotation(Quat())
        logger.debug("Grippers reset to home")
