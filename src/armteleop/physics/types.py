# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Physics Types - Body, collider and joint descriptors for the physics world.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from ..hand_tracking.types import Quat, Vec3


class PhysicsWorldError(LookupError):
    """Base error raised by the physics world."""


class BodyNotFoundError(PhysicsWorldError):
    """Raised when a joint references a body id that does not exist."""

    def __init__(self, *body_ids: str) -> None:
        self.body_ids = body_ids
        super().__init__(f"Body not found: {' or '.join(body_ids)}")


class RigidBodyType(str, Enum):
    DYNAMIC = "dynamic"
    FIXED = "fixed"
    KINEMATIC = "kinematic"


class ColliderShape(str, Enum):
    BOX = "box"
    SPHERE = "sphere"
    CYLINDER = "cylinder"


@dataclass(frozen=True)
class ColliderDesc:
    """Collider geometry. Cylinders are aligned with the body's local y axis."""

    shape: ColliderShape
    half_extents: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    radius: float = 0.0
    half_height: float = 0.0

    @classmethod
    def cuboid(cls, hx: float, hy: float, hz: float) -> "ColliderDesc":
        return cls(ColliderShape.BOX, half_extents=(hx, hy, hz))

    @classmethod
    def ball(cls, radius: float) -> "ColliderDesc":
        return cls(ColliderShape.SPHERE, radius=radius)

    @classmethod
    def cylinder(cls, half_height: float, radius: float) -> "ColliderDesc":
        return cls(ColliderShape.CYLINDER, radius=radius, half_height=half_height)

    def volume(self) -> float:
        if self.shape == ColliderShape.BOX:
            hx, hy, hz = self.half_extents
            return 8.0 * hx * hy * hz
        if self.shape == ColliderShape.SPHERE:
            return 4.0 / 3.0 * math.pi * self.radius**3
        return math.pi * self.radius**2 * 2.0 * self.half_height


@dataclass(frozen=True)
class CollisionGroup:
    """Membership and filter bit masks; two bodies collide when each one's
    membership intersects the other's filter."""

    membership: int
    filter: int


class CollisionGroups:
    DEFAULT = CollisionGroup(0x0001, 0xFFFF)
    ARM_LEFT = CollisionGroup(0x0002, 0xFFFD)
    ARM_RIGHT = CollisionGroup(0x0004, 0xFFFB)
    OBJECT = CollisionGroup(0x0008, 0xFFFF)
    GROUND = CollisionGroup(0x0010, 0xFFFF)


@dataclass(frozen=True)
class PhysicsBodyDescriptor:
    """Everything needed to create a rigid body."""

    id: str
    body_type: RigidBodyType
    collider: ColliderDesc
    position: Vec3 = field(default_factory=Vec3)
    rotation: Quat = field(default_factory=Quat)
    density: float = 1.0
    """Mass density (kg/m^3 scaled); only dynamic bodies use it."""
    collision_group: Optional[CollisionGroup] = None

    @property
    def mass(self) -> float:
        """Mass used by the engine; non-dynamic bodies are massless."""
        if self.body_type != RigidBodyType.DYNAMIC:
            return 0.0
        return self.density * self.collider.volume()


@dataclass(eq=False)
class JointHandle:
    """Handle to a joint created by the physics world.

    A revolute joint is realized by two engine constraints, a fixed joint by one.
    """

    kind: str
    body1: str
    body2: str
    constraint_ids: Tuple[int, ...]
    removed: bool = False


@dataclass(frozen=True)
class GraspConstraint:
    """An active grasp: the object held and the joint holding it."""

    object_id: str
    joint: JointHandle
