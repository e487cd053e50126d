# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Physics - pybullet-backed rigid-body world and grasp constraint management.
"""

from .types import (
    BodyNotFoundError,
    ColliderDesc,
    ColliderShape,
    CollisionGroup,
    CollisionGroups,
    GraspConstraint,
    JointHandle,
    PhysicsBodyDescriptor,
    PhysicsWorldError,
    RigidBodyType,
)
from .physics_world import PhysicsBodyHandle, PhysicsWorld, PhysicsWorldConfig
from .grasp_manager import GraspManager

__all__ = [
    "BodyNotFoundError",
    "ColliderDesc",
    "ColliderShape",
    "CollisionGroup",
    "CollisionGroups",
    "GraspConstraint",
    "JointHandle",
    "PhysicsBodyDescriptor",
    "PhysicsWorldError",
    "RigidBodyType",
    "PhysicsBodyHandle",
    "PhysicsWorld",
    "PhysicsWorldConfig",
    "GraspManager",
]
