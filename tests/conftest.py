# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Pytest configuration and fixtures for armteleop tests."""

import pytest

from armteleop.hand_tracking.types import (
    INDEX_TIP,
    THUMB_TIP,
    WRIST,
    HandPose,
    JointData,
    PinchState,
    Quat,
    Vec3,
)
from armteleop.physics import (
    ColliderDesc,
    GraspManager,
    PhysicsBodyDescriptor,
    PhysicsWorld,
    RigidBodyType,
)


@pytest.fixture
def physics_world():
    """Headless physics world with default gravity and timestep."""
    world = PhysicsWorld()
    yield world
    world.dispose()


@pytest.fixture
def grasp_manager(physics_world):
    return GraspManager(physics_world)


@pytest.fixture
def add_box(physics_world):
    """Factory adding a cube body to the world."""

    def _add(body_id, position=(0.0, 1.0, 0.0), body_type=RigidBodyType.DYNAMIC, half=0.025):
        return physics_world.add_body(
            PhysicsBodyDescriptor(
                id=body_id,
                body_type=body_type,
                collider=ColliderDesc.cuboid(half, half, half),
                position=Vec3(*position),
            )
        )

    return _add


@pytest.fixture
def make_pose():
    """Factory building a HandPose around a wrist pose."""

    def _make(
        handedness="right",
        wrist=(0.0, 0.0, 0.0),
        orientation=(0.0, 0.0, 0.0, 1.0),
        pinching=False,
        timestamp=0.0,
    ):
        wrist_position = Vec3(*wrist)
        wrist_orientation = Quat(*orientation)
        joints = {
            WRIST: JointData(wrist_position, wrist_orientation),
            THUMB_TIP: JointData(Vec3(wrist[0], wrist[1], wrist[2] - 0.1), wrist_orientation),
            INDEX_TIP: JointData(Vec3(wrist[0], wrist[1] + 0.05, wrist[2] - 0.1), wrist_orientation),
        }
        return HandPose(
            handedness=handedness,
            timestamp=timestamp,
            joints=joints,
            pinch_state=PinchState(is_pinching=pinching, distance=0.01 if pinching else 0.05),
            wrist_position=wrist_position,
            wrist_orientation=wrist_orientation,
        )

    return _make
