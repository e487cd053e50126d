# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the headless demo runner.
"""

import numpy.testing as npt

from armteleop.demo import OPEN_APERTURE, PINCH_APERTURE, run, scripted_hand
from armteleop.hand_tracking import Vec3


class TestScriptedHand:
    def test_starts_open_at_start(self):
        hand = scripted_hand(0.0, Vec3(0.3, 1.2, -0.2))
        assert hand.handedness == "right"
        assert hand.pinch_aperture == OPEN_APERTURE
        npt.assert_allclose(hand.wrist_position.to_array(), [0.3, 1.2, -0.2])

    def test_pinches_mid_run(self):
        assert scripted_hand(0.5, Vec3()).pinch_aperture == PINCH_APERTURE

    def test_releases_at_end(self):
        assert scripted_hand(1.0, Vec3()).pinch_aperture == OPEN_APERTURE


class TestRun:
    def test_short_run(self):
        assert run(["--frames", "5", "--log-level", "WARNING"]) == 0

    def test_task_and_seed_overrides(self):
        assert run(["--frames", "3", "--task", "valve-turning", "--seed", "1", "--log-level", "ERROR"]) == 0

    def test_missing_config(self, tmp_path):
        assert run(["--config", str(tmp_path / "nope.yaml"), "--log-level", "ERROR"]) == 1
