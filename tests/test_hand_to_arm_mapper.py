# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Tests for quaternion decoding and HandToArmMapper.
"""

import math

import numpy as np
import numpy.testing as npt
import pytest
from scipy.spatial.transform import Rotation

from armteleop.hand_tracking import Quat
from armteleop.retargeting import (
    ArmAction,
    DualArmAction,
    HandToArmMapper,
    HandToArmMapperConfig,
    create_zero_action,
    create_zero_dual_action,
    quaternion_angle,
    quaternion_to_euler,
)


# ============================================================================
# Helpers
# ============================================================================


def _quat_from_euler(roll, pitch, yaw) -> tuple:
    return tuple(Rotation.from_euler("xyz", [roll, pitch, yaw]).as_quat())


# ============================================================================
# Quaternion decoding
# ============================================================================


class TestQuaternionToEuler:
    def test_identity(self):
        npt.assert_allclose(quaternion_to_euler(Quat()), [0.0, 0.0, 0.0], atol=1e-12)

    @pytest.mark.parametrize(
        "q, expected",
        [
            ((0.0, 0.0, math.sin(math.pi / 4), math.cos(math.pi / 4)), (0.0, 0.0, math.pi / 2)),
            ((math.sin(math.pi / 8), 0.0, 0.0, math.cos(math.pi / 8)), (math.pi / 4, 0.0, 0.0)),
            ((0.0, math.sin(math.pi / 12), 0.0, math.cos(math.pi / 12)), (0.0, math.pi / 6, 0.0)),
        ],
        ids=["yaw_90", "roll_45", "pitch_30"],
    )
    def test_single_axis(self, q, expected):
        npt.assert_allclose(quaternion_to_euler(Quat(*q)), expected, atol=1e-9)

    def test_matches_scipy_extrinsic_xyz(self):
        angles = (0.3, -0.4, 1.1)
        npt.assert_allclose(
            quaternion_to_euler(Quat(*_quat_from_euler(*angles))), angles, atol=1e-9
        )

    @pytest.mark.parametrize("sign", [1.0, -1.0])
    def test_pitch_saturates_at_gimbal_lock(self, sign):
        half = sign * math.pi / 4
        q = Quat(0.0, math.sin(half) * 1.0000001, 0.0, math.cos(half) * 1.0000001)
        _, pitch, _ = quaternion_to_euler(q)
        assert pitch == pytest.approx(sign * math.pi / 2)


class TestQuaternionAngle:
    def test_identity_is_zero(self):
        assert quaternion_angle(Quat()) == pytest.approx(0.0)

    def test_sign_of_w_ignored(self):
        q = Quat(0.0, 0.0, math.sin(math.pi / 6), math.cos(math.pi / 6))
        flipped = Quat(-q.x, -q.y, -q.z, -q.w)
        assert quaternion_angle(q) == pytest.approx(math.pi / 3)
        assert quaternion_angle(flipped) == pytest.approx(math.pi / 3)


# ============================================================================
# Actions
# ============================================================================


class TestActions:
    def test_zero_action_is_open(self):
        action = create_zero_action()
        npt.assert_array_equal(action.translation, np.zeros(3))
        npt.assert_array_equal(action.rotation, np.zeros(3))
        assert action.gripper == 1
        assert action.is_gripper_closed is False

    def test_zero_dual_action(self):
        dual = create_zero_dual_action()
        assert dual.left == ArmAction()
        assert dual.right == ArmAction()

    def test_for_side(self):
        left = ArmAction(dx=1.0)
        dual = DualArmAction(left=left, right=ArmAction())
        assert dual.for_side("left") is left
        with pytest.raises(ValueError):
            dual.for_side("none")


# ============================================================================
# Mapper
# ============================================================================


class TestFirstObservation:
    def test_no_previous_gives_zero_deltas(self, make_pose):
        pose = make_pose(wrist=(1.0, 2.0, 3.0), orientation=_quat_from_euler(0.5, 0.2, 0.1))
        action = HandToArmMapper().map_hand_to_action(pose, None)
        npt.assert_array_equal(action.translation, np.zeros(3))
        npt.assert_array_equal(action.rotation, np.zeros(3))
        assert action.gripper == 1

    def test_no_previous_still_reports_pinch(self, make_pose):
        action = HandToArmMapper().map_hand_to_action(make_pose(pinching=True), None)
        assert action.gripper == 0


class TestDeltas:
    def test_identical_wrists_give_zero_deltas(self, make_pose):
        previous = make_pose(wrist=(0.1, 1.0, -0.2), orientation=_quat_from_euler(0.2, 0.1, 0.3))
        current = make_pose(wrist=(0.1, 1.0, -0.2), orientation=_quat_from_euler(0.2, 0.1, 0.3))
        action = HandToArmMapper().map_hand_to_action(current, previous)
        npt.assert_allclose(action.translation, np.zeros(3), atol=1e-12)
        npt.assert_allclose(action.rotation, np.zeros(3), atol=1e-12)

    def test_translation_delta(self, make_pose):
        previous = make_pose(wrist=(0.0, 1.0, 0.0))
        current = make_pose(wrist=(0.1, 1.05, -0.02))
        action = HandToArmMapper().map_hand_to_action(current, previous)
        npt.assert_allclose(action.translation, [0.1, 0.05, -0.02], atol=1e-12)

    def test_rotation_delta(self, make_pose):
        previous = make_pose()
        current = make_pose(orientation=_quat_from_euler(0.0, 0.0, math.pi / 2))
        action = HandToArmMapper().map_hand_to_action(current, previous)
        npt.assert_allclose(action.rotation, [0.0, 0.0, math.pi / 2], atol=1e-9)

    def test_scales(self, make_pose):
        mapper = HandToArmMapper(HandToArmMapperConfig(translation_scale=2.0, rotation_scale=0.5))
        previous = make_pose()
        current = make_pose(wrist=(0.1, 0.0, 0.0), orientation=_quat_from_euler(0.2, 0.0, 0.0))
        action = mapper.map_hand_to_action(current, previous)
        npt.assert_allclose(action.translation, [0.2, 0.0, 0.0], atol=1e-12)
        npt.assert_allclose(action.rotation, [0.1, 0.0, 0.0], atol=1e-9)

    def test_gripper_from_current_pinch_only(self, make_pose):
        mapper = HandToArmMapper()
        assert mapper.map_hand_to_action(make_pose(pinching=True), make_pose()).gripper == 0
        assert mapper.map_hand_to_action(make_pose(), make_pose(pinching=True)).gripper == 1

    def test_euler_difference_jumps_across_yaw_wrap(self, make_pose):
        previous = make_pose(orientation=_quat_from_euler(0.0, 0.0, math.pi - 0.01))
        current = make_pose(orientation=_quat_from_euler(0.0, 0.0, -math.pi + 0.01))
        action = HandToArmMapper().map_hand_to_action(current, previous)
        # Raw Euler differencing: no wrap-around correction
        assert action.dyaw == pytest.approx(-2 * math.pi + 0.02, abs=1e-9)


class TestMapperConfig:
    def test_defaults(self):
        config = HandToArmMapperConfig()
        assert config.translation_scale == 1.0
        assert config.rotation_scale == 1.0

    def test_from_dict_warns_on_unknown_keys(self):
        with pytest.warns(UserWarning, match="unknown config keys"):
            config = HandToArmMapperConfig.from_dict({"translation_scale": 3.0, "smoothing": 1})
        assert config.translation_scale == 3.0
