# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Tests for capture_state - snapshots of arms and objects.
"""

import numpy.testing as npt
import pytest

from armteleop.hand_tracking import Quat, Vec3
from armteleop.physics import RigidBodyType
from armteleop.simulation import (
    ArmState,
    StateCaptureConfig,
    capture_state,
    create_default_arm_state,
)


def _clock():
    return 42.0


class TestArms:
    def test_missing_arm_gives_default_state(self, physics_world, grasp_manager):
        state = capture_state(
            physics_world,
            grasp_manager,
            StateCaptureConfig(arm_ids={"left": "not-there", "right": "also-missing"}),
            clock=_clock,
        )
        assert state.left_arm == create_default_arm_state()
        assert state.left_arm.end_effector_position == Vec3(0.0, 0.0, 0.0)
        assert state.left_arm.gripper_open == 1
        assert state.right_arm.is_grasping is False
        assert state.right_arm.grasped_object_id is None

    def test_present_arm_reads_pose(self, physics_world, grasp_manager, add_box):
        add_box("gripper-left", position=(-0.4, 1.0, 0.0), body_type=RigidBodyType.KINEMATIC)
        state = capture_state(physics_world, grasp_manager, StateCaptureConfig(), clock=_clock)
        npt.assert_allclose(state.left_arm.end_effector_position.to_array(), [-0.4, 1.0, 0.0], atol=1e-9)
        assert state.left_arm.gripper_open == 1
        assert state.right_arm == ArmState()

    def test_grasp_status_reported(self, physics_world, grasp_manager, add_box):
        add_box("gripper-right", position=(0.4, 1.0, 0.0), body_type=RigidBodyType.KINEMATIC)
        add_box("cube-1", position=(0.4, 1.0, 0.0))
        grasp_manager.try_grasp("gripper-right", "cube-1")

        state = capture_state(physics_world, grasp_manager, StateCaptureConfig(), clock=_clock)
        assert state.right_arm.is_grasping is True
        assert state.right_arm.grasped_object_id == "cube-1"
        assert state.left_arm.is_grasping is False


class TestObjects:
    def test_objects_in_configured_order(self, physics_world, grasp_manager, add_box):
        add_box("b", position=(0.2, 1.0, 0.0))
        add_box("a", position=(0.1, 1.0, 0.0))
        config = StateCaptureConfig(object_ids=("a", "b"), object_types={"a": "cube"})

        state = capture_state(physics_world, grasp_manager, config, clock=_clock)

        assert [obj.id for obj in state.objects] == ["a", "b"]
        assert state.objects[0].type == "cube"
        assert state.objects[1].type == "unknown"
        npt.assert_allclose(state.get_object("a").position.to_array(), [0.1, 1.0, 0.0], atol=1e-9)

    def test_missing_object_placeholder_keeps_type(self, physics_world, grasp_manager):
        config = StateCaptureConfig(object_ids=("ghost",), object_types={"ghost": "valve"})
        state = capture_state(physics_world, grasp_manager, config, clock=_clock)
        ghost = state.get_object("ghost")
        assert ghost.position == Vec3()
        assert ghost.orientation == Quat()
        assert ghost.type == "valve"

    def test_unknown_object_lookup(self, physics_world, grasp_manager):
        state = capture_state(physics_world, grasp_manager, StateCaptureConfig(), clock=_clock)
        assert state.objects == ()
        assert state.get_object("anything") is None


class TestSnapshot:
    def test_timestamp_from_clock(self, physics_world, grasp_manager):
        state = capture_state(physics_world, grasp_manager, StateCaptureConfig(), clock=_clock)
        assert state.timestamp == 42.0

    def test_snapshot_is_immutable(self, physics_world, grasp_manager):
        state = capture_state(physics_world, grasp_manager, StateCaptureConfig(), clock=_clock)
        with pytest.raises(AttributeError):
            state.timestamp = 0.0

    def test_arm_accessor(self, physics_world, grasp_manager):
        state = capture_state(physics_world, grasp_manager, StateCaptureConfig(), clock=_clock)
        assert state.arm("left") is state.left_arm
        with pytest.raises(ValueError):
            state.arm("middle")
