# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Hand Tracking - Per-joint hand pose extraction and pinch detection.
"""

from .types import (
    ALL_JOINTS,
    DEFAULT_JOINT_RADIUS,
    FINGER_JOINTS,
    HAND_SIDES,
    INDEX_TIP,
    PINCH_THRESHOLD,
    THUMB_TIP,
    WRIST,
    HandPose,
    JointData,
    PinchState,
    Quat,
    Vec3,
)
from .pinch_detector import PinchDetector, PinchDetectorConfig
from .hand_tracker import HandTracker, JointPoseUnavailableError
from .synthetic import SyntheticHand, SyntheticXRFrame

__all__ = [
    "ALL_JOINTS",
    "DEFAULT_JOINT_RADIUS",
    "FINGER_JOINTS",
    "HAND_SIDES",
    "INDEX_TIP",
    "PINCH_THRESHOLD",
    "THUMB_TIP",
    "WRIST",
    "HandPose",
    "JointData",
    "PinchState",
    "Quat",
    "Vec3",
    "PinchDetector",
    "PinchDetectorConfig",
    "HandTracker",
    "JointPoseUnavailableError",
    "SyntheticHand",
    "SyntheticXRFrame",
]
