# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Tests for TeleopSession - end-to-end frame loop over a real physics world.

Covers session lifecycle, per-side hand mapping, pinch-driven grasping,
task switching and reset.
"""

from unittest.mock import MagicMock

import numpy.testing as npt
import pytest

from armteleop.hand_tracking import SyntheticHand, SyntheticXRFrame, Vec3
from armteleop.retargeting import ArmAction
from armteleop.tasks import PickPlaceConfig, TaskType
from armteleop.teleop_session_manager import TeleopSession, TeleopSessionConfig


# ============================================================================
# Helpers
# ============================================================================

OPEN = 0.06
PINCH = 0.01


def _right_hand(x=0.0, y=1.2, z=-0.3, aperture=OPEN):
    return SyntheticHand(handedness="right", wrist_position=Vec3(x, y, z), pinch_aperture=aperture)


def _frame(*hands):
    return SyntheticXRFrame(list(hands))


@pytest.fixture
def grasp_config():
    """One cube spawned exactly at the right gripper's home position."""
    return TeleopSessionConfig(
        pick_and_place=PickPlaceConfig(object_count=1, object_positions=((0.4, 1.0, 0.0),))
    )


def _right_gripper_position(session):
    return session.physics_world.get_body("gripper-right").translation().to_array()


# ============================================================================
# Lifecycle
# ============================================================================


class TestLifecycle:
    def test_enter_builds_world_and_starts_task(self):
        with TeleopSession() as session:
            bodies = set(session.physics_world.get_all_bodies())
            assert {"gripper-left", "gripper-right", "table"} <= bodies
            assert session.episodes.is_episode_active()
            assert session.episodes.get_current_config().task is TaskType.PICK_AND_PLACE
            assert [o.id for o in session.get_state().objects] == ["pick-object-0", "pick-object-1"]
            assert session.frame_count == 0

    def test_exit_tears_down(self):
        session = TeleopSession()
        with session:
            world = session.physics_world
        assert world.get_all_bodies() == {}
        assert not session.episodes.is_episode_active()

    def test_step_outside_context_raises(self):
        with pytest.raises(RuntimeError, match="with"):
            TeleopSession().step(_frame())

    def test_step_after_exit_raises(self):
        with TeleopSession() as session:
            pass
        with pytest.raises(RuntimeError):
            session.step(_frame())

    def test_elapsed_time_uses_clock(self):
        clock = MagicMock(return_value=10.0)
        with TeleopSession(clock=clock) as session:
            clock.return_value = 12.5
            assert session.get_elapsed_time() == pytest.approx(2.5)

    def test_exception_propagates(self):
        with pytest.raises(KeyError):
            with TeleopSession():
                raise KeyError("boom")


# ============================================================================
# Frame loop
# ============================================================================


class TestStep:
    def test_no_hands_gives_zero_action(self):
        with TeleopSession() as session:
            result = session.step(_frame())
            assert result.hands == {}
            assert result.action.left == ArmAction()
            assert result.action.right == ArmAction()
            assert session.frame_count == 1

    def test_first_frame_has_zero_deltas(self):
        with TeleopSession() as session:
            home = _right_gripper_position(session)
            result = session.step(_frame(_right_hand()))
            assert set(result.hands) == {"right"}
            npt.assert_allclose(result.action.right.translation, [0.0, 0.0, 0.0])
            npt.assert_allclose(_right_gripper_position(session), home, atol=1e-9)

    def test_hand_motion_moves_gripper(self):
        with TeleopSession() as session:
            home = _right_gripper_position(session)
            session.step(_frame(_right_hand(x=0.0)))
            result = session.step(_frame(_right_hand(x=-0.05, y=1.22)))

            npt.assert_allclose(result.action.right.translation, [-0.05, 0.02, 0.0], atol=1e-9)
            npt.assert_allclose(_right_gripper_position(session), home + [-0.05, 0.02, 0.0], atol=1e-9)
            npt.assert_allclose(
                result.state.right_arm.end_effector_position.to_array(), home + [-0.05, 0.02, 0.0], atol=1e-9
            )

    def test_translation_scale_applied(self):
        config = TeleopSessionConfig().with_overrides(
            mapper=TeleopSessionConfig().mapper.with_overrides(translation_scale=2.0)
        )
        with TeleopSession(config) as session:
            session.step(_frame(_right_hand(x=0.0)))
            result = session.step(_frame(_right_hand(x=0.01)))
            assert result.action.right.dx == pytest.approx(0.02)

    def test_lost_hand_restarts_deltas(self):
        with TeleopSession() as session:
            session.step(_frame(_right_hand(x=0.0)))
            lost = session.step(_frame())
            assert lost.action.right == ArmAction()

            reacquired = session.step(_frame(_right_hand(x=0.3)))
            npt.assert_allclose(reacquired.action.right.translation, [0.0, 0.0, 0.0])

    def test_left_hand_only_drives_left_arm(self):
        with TeleopSession() as session:
            right_home = _right_gripper_position(session)
            left = SyntheticHand(handedness="left", wrist_position=Vec3(0.0, 1.0, 0.0))
            session.step(_frame(left))
            moved = SyntheticHand(handedness="left", wrist_position=Vec3(0.02, 1.0, 0.0))
            result = session.step(_frame(moved))
            assert result.action.left.dx == pytest.approx(0.02)
            assert result.action.right == ArmAction()
            npt.assert_allclose(_right_gripper_position(session), right_home, atol=1e-9)


# ============================================================================
# Grasping
# ============================================================================


class TestGrasping:
    def test_pinch_grasps_nearby_object(self, grasp_config):
        with TeleopSession(grasp_config) as session:
            result = session.step(_frame(_right_hand(aperture=PINCH)))
            assert result.action.right.gripper == 0
            assert result.state.right_arm.is_grasping is True
            assert result.state.right_arm.grasped_object_id == "pick-object-0"
            assert result.state.left_arm.is_grasping is False

    def test_open_hand_releases(self, grasp_config):
        with TeleopSession(grasp_config) as session:
            session.step(_frame(_right_hand(aperture=PINCH)))
            result = session.step(_frame(_right_hand(aperture=OPEN)))
            assert result.state.right_arm.is_grasping is False
            assert not session.grasp_manager.is_grasping("gripper-right")

    def test_lost_hand_releases(self, grasp_config):
        with TeleopSession(grasp_config) as session:
            session.step(_frame(_right_hand(aperture=PINCH)))
            result = session.step(_frame())
            assert result.state.right_arm.is_grasping is False

    def test_grasped_object_follows_gripper(self, grasp_config):
        with TeleopSession(grasp_config) as session:
            session.step(_frame(_right_hand(y=1.2, aperture=PINCH)))
            for i in range(1, 31):
                result = session.step(_frame(_right_hand(y=1.2 + 0.002 * i, aperture=PINCH)))
            cube = result.state.get_object("pick-object-0")
            assert result.state.right_arm.is_grasping
            assert cube.position.y == pytest.approx(result.state.right_arm.end_effector_position.y, abs=0.03)

    def test_pinch_far_from_objects_does_not_grasp(self):
        with TeleopSession() as session:
            result = session.step(_frame(_right_hand(aperture=PINCH)))
            assert result.action.right.gripper == 0
            assert result.state.right_arm.is_grasping is False


# ============================================================================
# Task control
# ============================================================================


class TestTaskControl:
    def test_start_task_switches_environment(self):
        with TeleopSession() as session:
            state = session.start_task(TaskType.VALVE_TURNING)
            assert [o.id for o in state.objects] == ["valve-handle"]
            assert state.objects[0].type == "valve"
            assert session.physics_world.get_body("table") is None
            assert session.episodes.get_current_config().task is TaskType.VALVE_TURNING

    def test_start_task_releases_grasps(self, grasp_config):
        with TeleopSession(grasp_config) as session:
            session.step(_frame(_right_hand(aperture=PINCH)))
            state = session.start_task("handle-rotation")
            assert state.right_arm.is_grasping is False
            assert session.grasp_manager.get_grasping_grippers() == []

    def test_reset_task(self, grasp_config):
        with TeleopSession(grasp_config) as session:
            home = _right_gripper_position(session)
            session.step(_frame(_right_hand(x=0.0, aperture=PINCH)))
            session.step(_frame(_right_hand(x=0.05, aperture=PINCH)))

            state = session.reset_task()

            assert state.right_arm.is_grasping is False
            npt.assert_allclose(state.right_arm.end_effector_position.to_array(), home, atol=1e-9)
            npt.assert_allclose(state.get_object("pick-object-0").position.to_array(), [0.4, 1.0, 0.0], atol=1e-9)

    def test_result_reports_progress(self):
        with TeleopSession() as session:
            result = session.step(_frame())
            assert result.task_success is False
            assert result.task_progress == 0.0
