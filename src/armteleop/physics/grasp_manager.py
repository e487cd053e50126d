# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Grasp Manager - Lifecycle of rigid grasp constraints between grippers and objects.

Each gripper id is either free or grasping exactly one object. A grasp is a
fixed joint in the physics world created by :meth:`GraspManager.try_grasp` and
removed by :meth:`GraspManager.release`.

Two different grippers are not prevented from grasping the same object.
"""

import logging
from typing import Dict, List, Optional

from .physics_world import PhysicsWorld
from .types import GraspConstraint, PhysicsWorldError

logger = logging.getLogger(__name__)


class GraspManager:
    """Tracks at most one active grasp per gripper."""

    def __init__(self, physics_world: PhysicsWorld) -> None:
        self.physics_world = physics_world
        self._grasps: Dict[str, GraspConstraint] = {}

    def try_grasp(self, gripper_id: str, object_id: str) -> Optional[GraspConstraint]:
        """Attach ``object_id`` to ``gripper_id``.

        Returns:
            The new constraint, or None if the gripper is already grasping,
            either body is missing, or the physics world rejects the joint.
        """
        if gripper_id in self._grasps:
            return None
        if (
            self.physics_world.get_body(gripper_id) is None
            or self.physics_world.get_body(object_id) is None
        ):
            return None

        try:
            joint = self.physics_world.create_fixed_joint(gripper_id, object_id)
        except PhysicsWorldError as e:
            logger.warning("Grasp %s -> %s rejected: %s", gripper_id, object_id, e)
            return None

        constraint = GraspConstraint(object_id=object_id, joint=joint)
        self._grasps[gripper_id] = constraint
        logger.info("Gripper '%s' grasped '%s'", gripper_id, object_id)
        return constraint

    def release(self, gripper_id: str) -> None:
        """Remove the gripper's grasp, if any."""
        constraint = self._grasps.pop(gripper_id, None)
        if constraint is None:
            return
        self.physics_world.remove_joint(constraint.joint)
        logger.info("Gripper '%s' released '%s'", gripper_id, constraint.object_id)

    def is_grasping(self, gripper_id: str) -> bool:
        return gripper_id in self._grasps

    def get_grasped_object_id(self, gripper_id: str) -> Optional[str]:
        constraint = self._grasps.get(gripper_id)
        return constraint.object_id if constraint is not None else None

    def get_grasping_grippers(self) -> List[str]:
        return list(self._grasps)

    def release_all(self) -> None:
        for gripper_id in list(self._grasps):
            self.release(gripper_id)
