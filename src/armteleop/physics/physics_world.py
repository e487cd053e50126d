# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Physics World - Named rigid bodies and joints on top of pybullet.

Runs pybullet headless (``DIRECT`` mode) with one client per world. Bodies are
addressed by string id. Fixed and kinematic bodies are massless; kinematic
bodies are moved by teleporting them with ``set_translation``/``set_rotation``.

A revolute joint is built from two point-to-point constraints placed on the
hinge axis, which leaves the child free to spin about that axis only.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
import pybullet as p

from ..config_utils import OverridableConfig, as_vec3
from ..hand_tracking.types import Quat, Vec3
from .types import (
    BodyNotFoundError,
    ColliderShape,
    JointHandle,
    PhysicsBodyDescriptor,
    PhysicsWorldError,
    RigidBodyType,
)

logger = logging.getLogger(__name__)

# Rotates pybullet's z-aligned cylinder onto the body's y axis.
_CYLINDER_FRAME_ORIENTATION = (-np.sqrt(0.5), 0.0, 0.0, np.sqrt(0.5))

# Distance from the anchor to each pin of a revolute joint, meters.
_REVOLUTE_PIN_OFFSET = 0.05


@dataclass
class PhysicsWorldConfig(OverridableConfig):
    """Configuration for the physics world."""

    gravity: Tuple[float, float, float] = (0.0, -9.81, 0.0)
    """Gravity vector, m/s^2."""

    timestep: float = 1.0 / 120.0
    """Fixed step size, seconds."""

    def __post_init__(self):
        self.gravity = as_vec3(self.gravity)
        if self.timestep <= 0:
            raise ValueError(f"timestep must be positive, got: {self.timestep}")


class PhysicsBodyHandle:
    """Read/write access to one body of a :class:`PhysicsWorld`."""

    def __init__(self, world: "PhysicsWorld", descriptor: PhysicsBodyDescriptor, uid: int):
        self._world = world
        self.descriptor = descriptor
        self.uid = uid

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def body_type(self) -> RigidBodyType:
        return self.descriptor.body_type

    def translation(self) -> Vec3:
        position, _ = p.getBasePositionAndOrientation(self.uid, physicsClientId=self._world.client_id)
        return Vec3.from_array(position)

    def rotation(self) -> Quat:
        _, orientation = p.getBasePositionAndOrientation(self.uid, physicsClientId=self._world.client_id)
        return Quat.from_array(orientation)

    def set_translation(self, position: Vec3) -> None:
        p.resetBasePositionAndOrientation(
            self.uid,
            [position.x, position.y, position.z],
            self.rotation().to_array().tolist(),
            physicsClientId=self._world.client_id,
        )

    def set_rotation(self, rotation: Quat) -> None:
        p.resetBasePositionAndOrientation(
            self.uid,
            self.translation().to_array().tolist(),
            rotation.to_array().tolist(),
            physicsClientId=self._world.client_id,
        )

    def linvel(self) -> Vec3:
        linear, _ = p.getBaseVelocity(self.uid, physicsClientId=self._world.client_id)
        return Vec3.from_array(linear)

    def angvel(self) -> Vec3:
        _, angular = p.getBaseVelocity(self.uid, physicsClientId=self._world.client_id)
        return Vec3.from_array(angular)

    def set_linvel(self, velocity: Vec3) -> None:
        p.resetBaseVelocity(
            self.uid,
            linearVelocity=[velocity.x, velocity.y, velocity.z],
            physicsClientId=self._world.client_id,
        )

    def set_angvel(self, velocity: Vec3) -> None:
        p.resetBaseVelocity(
            self.uid,
            angularVelocity=[velocity.x, velocity.y, velocity.z],
            physicsClientId=self._world.client_id,
        )

    def __repr__(self) -> str:
        return f"PhysicsBodyHandle(id={self.id!r}, type={self.body_type.value})"


class PhysicsWorld:
    """
    Headless rigid-body world.

    Usage:
        with PhysicsWorld() as world:
            world.add_body(PhysicsBodyDescriptor("cube", RigidBodyType.DYNAMIC,
                                                 ColliderDesc.cuboid(0.025, 0.025, 0.025)))
            world.step()
    """

    def __init__(self, config: Optional[PhysicsWorldConfig] = None) -> None:
        self.config = config or PhysicsWorldConfig()
        self.client_id: int = p.connect(p.DIRECT)
        p.setGravity(*self.config.gravity, physicsClientId=self.client_id)
        p.setTimeStep(self.config.timestep, physicsClientId=self.client_id)

        self._bodies: Dict[str, PhysicsBodyHandle] = {}
        self._joints: List[JointHandle] = []
        self._disposed = False

    @property
    def timestep(self) -> float:
        return self.config.timestep

    def step(self) -> None:
        """Advance the world by exactly one fixed timestep."""
        p.stepSimulation(physicsClientId=self.client_id)

    # ========================================================================
    # Bodies
    # ========================================================================

    def add_body(self, descriptor: PhysicsBodyDescriptor) -> PhysicsBodyHandle:
        """Create a rigid body.

        Raises:
            ValueError: If a body with the same id already exists.
        """
        if descriptor.id in self._bodies:
            raise ValueError(f"Body already exists: {descriptor.id}")

        shape = self._create_collision_shape(descriptor)
        uid = p.createMultiBody(
            baseMass=descriptor.mass,
            baseCollisionShapeIndex=shape,
            basePosition=descriptor.position.to_array().tolist(),
            baseOrientation=descriptor.rotation.to_array().tolist(),
            physicsClientId=self.client_id,
        )
        if descriptor.collision_group is not None:
            p.setCollisionFilterGroupMask(
                uid,
                -1,
                descriptor.collision_group.membership,
                descriptor.collision_group.filter,
                physicsClientId=self.client_id,
            )

        handle = PhysicsBodyHandle(self, descriptor, uid)
        self._bodies[descriptor.id] = handle
        logger.debug("Added %s body '%s'", descriptor.body_type.value, descriptor.id)
        return handle

    def _create_collision_shape(self, descriptor: PhysicsBodyDescriptor) -> int:
        collider = descriptor.collider
        if collider.shape == ColliderShape.BOX:
            return p.createCollisionShape(
                p.GEOM_BOX,
                halfExtents=list(collider.half_extents),
                physicsClientId=self.client_id,
            )
        if collider.shape == ColliderShape.SPHERE:
            return p.createCollisionShape(
                p.GEOM_SPHERE, radius=collider.radius, physicsClientId=self.client_id
            )
        return p.createCollisionShape(
            p.GEOM_CYLINDER,
            radius=collider.radius,
            height=2.0 * collider.half_height,
            collisionFrameOrientation=list(_CYLINDER_FRAME_ORIENTATION),
            physicsClientId=self.client_id,
        )

    def remove_body(self, body_id: str) -> None:
        """Remove a body and every joint attached to it. Unknown ids are ignored."""
        handle = self._bodies.pop(body_id, None)
        if handle is None:
            return
        for joint in [j for j in self._joints if body_id in (j.body1, j.body2)]:
            self.remove_joint(joint)
        p.removeBody(handle.uid, physicsClientId=self.client_id)
        logger.debug("Removed body '%s'", body_id)

    def get_body(self, body_id: str) -> Optional[PhysicsBodyHandle]:
        return self._bodies.get(body_id)

    def get_all_bodies(self) -> Dict[str, PhysicsBodyHandle]:
        return dict(self._bodies)

    def set_angular_damping(self, body_id: str, damping: float) -> None:
        handle = self._bodies.get(body_id)
        if handle is None:
            raise BodyNotFoundError(body_id)
        p.changeDynamics(
            handle.uid, -1, angularDamping=damping, physicsClientId=self.client_id
        )

    # ========================================================================
    # Joints
    # ========================================================================

    def _require_bodies(self, body1_id: str, body2_id: str):
        body1 = self._bodies.get(body1_id)
        body2 = self._bodies.get(body2_id)
        if body1 is None or body2 is None:
            raise BodyNotFoundError(body1_id, body2_id)
        return body1, body2

    def create_fixed_joint(
        self,
        body1_id: str,
        body2_id: str,
        anchor1: Vec3 = Vec3(),
        rotation1: Quat = Quat(),
        anchor2: Vec3 = Vec3(),
        rotation2: Quat = Quat(),
    ) -> JointHandle:
        """Rigidly attach body2 to body1.

        Anchors and rotations are the joint frames in each body's local frame.

        Raises:
            BodyNotFoundError: If either body does not exist.
            PhysicsWorldError: If the engine rejects the constraint.
        """
        body1, body2 = self._require_bodies(body1_id, body2_id)
        try:
            constraint = p.createConstraint(
                body1.uid,
                -1,
                body2.uid,
                -1,
                p.JOINT_FIXED,
                [0.0, 0.0, 0.0],
                anchor1.to_array().tolist(),
                anchor2.to_array().tolist(),
                parentFrameOrientation=rotation1.to_array().tolist(),
                childFrameOrientation=rotation2.to_array().tolist(),
                physicsClientId=self.client_id,
            )
        except p.error as e:
            raise PhysicsWorldError(
                f"Failed to create fixed joint between {body1_id} and {body2_id}: {e}"
            ) from e
        return self._register_joint("fixed", body1, body2, (constraint,))

    def create_revolute_joint(
        self,
        body1_id: str,
        body2_id: str,
        anchor1: Vec3,
        anchor2: Vec3,
        axis: Vec3,
    ) -> JointHandle:
        """Hinge body2 to body1 about ``axis`` through the given anchors.

        Raises:
            BodyNotFoundError: If either body does not exist.
            PhysicsWorldError: If the engine rejects the constraint.
        """
        body1, body2 = self._require_bodies(body1_id, body2_id)
        axis_array = axis.to_array()
        norm = np.linalg.norm(axis_array)
        if norm == 0:
            raise ValueError("Revolute joint axis must be non-zero")
        offset = axis_array / norm * _REVOLUTE_PIN_OFFSET

        constraints = []
        try:
            for sign in (1.0, -1.0):
                constraints.append(
                    p.createConstraint(
                        body1.uid,
                        -1,
                        body2.uid,
                        -1,
                        p.JOINT_POINT2POINT,
                        [0.0, 0.0, 0.0],
                        (anchor1.to_array() + sign * offset).tolist(),
                        (anchor2.to_array() + sign * offset).tolist(),
                        physicsClientId=self.client_id,
                    )
                )
        except p.error as e:
            for constraint in constraints:
                p.removeConstraint(constraint, physicsClientId=self.client_id)
            raise PhysicsWorldError(
                f"Failed to create revolute joint between {body1_id} and {body2_id}: {e}"
            ) from e
        return self._register_joint("revolute", body1, body2, tuple(constraints))

    def _register_joint(
        self,
        kind: str,
        body1: PhysicsBodyHandle,
        body2: PhysicsBodyHandle,
        constraint_ids: Tuple[int, ...],
    ) -> JointHandle:
        # Jointed bodies overlap at their anchors; contacts between them are disabled.
        p.setCollisionFilterPair(
            body1.uid, body2.uid, -1, -1, 0, physicsClientId=self.client_id
        )
        joint = JointHandle(kind, body1.id, body2.id, constraint_ids)
        self._joints.append(joint)
        logger.debug("Created %s joint %s -> %s", kind, body1.id, body2.id)
        return joint

    def remove_joint(self, joint: JointHandle) -> None:
        """Remove a joint. Removing an already-removed joint is a no-op."""
        if joint.removed:
            return
        for constraint in joint.constraint_ids:
            p.removeConstraint(constraint, physicsClientId=self.client_id)
        joint.removed = True
        self._joints.remove(joint)

        body1 = self._bodies.get(joint.body1)
        body2 = self._bodies.get(joint.body2)
        still_jointed = any(
            {j.body1, j.body2} == {joint.body1, joint.body2} for j in self._joints
        )
        if body1 is not None and body2 is not None and not still_jointed:
            p.setCollisionFilterPair(
                body1.uid, body2.uid, -1, -1, 1, physicsClientId=self.client_id
            )
        logger.debug("Removed %s joint %s -> %s", joint.kind, joint.body1, joint.body2)

    def get_joints(self) -> List[JointHandle]:
        return list(self._joints)

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def dispose(self) -> None:
        """Disconnect from the engine. Safe to call more than once."""
        if self._disposed:
            return
        self._joints.clear()
        self._bodies.clear()
        p.disconnect(physicsClientId=self.client_id)
        self._disposed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()
        return False
