# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Hand Tracking Types - Joint catalog and immutable hand pose data model.

Joint names follow the WebXR hand input naming (``"wrist"``, ``"thumb-tip"``, ...).

Quaternion Convention:
    Quaternions are stored as (x, y, z, w), matching both the XR input and the
    physics world. No automatic normalization is performed; callers supply
    unit quaternions.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Sequence, Tuple

import numpy as np

# Hand sides that produce a HandPose. Input sources tagged "none" are ignored.
HAND_SIDES: Tuple[str, str] = ("left", "right")

WRIST = "wrist"
THUMB_TIP = "thumb-tip"
INDEX_TIP = "index-finger-tip"

FINGER_JOINTS: Tuple[str, ...] = (
    "thumb-metacarpal",
    "thumb-phalanx-proximal",
    "thumb-phalanx-distal",
    THUMB_TIP,
    "index-finger-metacarpal",
    "index-finger-phalanx-proximal",
    "index-finger-phalanx-intermediate",
    "index-finger-phalanx-distal",
    INDEX_TIP,
    "middle-finger-metacarpal",
    "middle-finger-phalanx-proximal",
    "middle-finger-phalanx-intermediate",
    "middle-finger-phalanx-distal",
    "middle-finger-tip",
    "ring-finger-metacarpal",
    "ring-finger-phalanx-proximal",
    "ring-finger-phalanx-intermediate",
    "ring-finger-phalanx-distal",
    "ring-finger-tip",
    "pinky-finger-metacarpal",
    "pinky-finger-phalanx-proximal",
    "pinky-finger-phalanx-intermediate",
    "pinky-finger-phalanx-distal",
    "pinky-finger-tip",
)

# Fixed extraction order: wrist first, then the 24 finger joints.
ALL_JOINTS: Tuple[str, ...] = (WRIST,) + FINGER_JOINTS

DEFAULT_JOINT_RADIUS = 0.005  # meters, used when the source omits a radius
PINCH_THRESHOLD = 0.02  # meters


@dataclass(frozen=True)
class Vec3:
    """Position or axis in meters."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_array(cls, values: Sequence[float]) -> "Vec3":
        return cls(float(values[0]), float(values[1]), float(values[2]))


@dataclass(frozen=True)
class Quat:
    """Orientation quaternion (x, y, z, w). Defaults to identity."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)

    @classmethod
    def from_array(cls, values: Sequence[float]) -> "Quat":
        return cls(
            float(values[0]), float(values[1]), float(values[2]), float(values[3])
        )


@dataclass(frozen=True)
class JointData:
    """One tracked hand joint."""

    position: Vec3
    orientation: Quat
    radius: float = DEFAULT_JOINT_RADIUS


@dataclass(frozen=True)
class PinchState:
    """Result of pinch detection for one hand.

    ``distance`` is ``math.inf`` when either fingertip was not tracked.
    """

    is_pinching: bool = False
    distance: float = math.inf


@dataclass(frozen=True)
class HandPose:
    """Normalized pose of one hand for one frame.

    Built from scratch every frame with tracking data and never mutated
    afterwards; ``joints`` is exposed as a read-only mapping.
    """

    handedness: str
    timestamp: float
    joints: Mapping[str, JointData]
    pinch_state: PinchState = field(default_factory=PinchState)
    wrist_position: Vec3 = field(default_factory=Vec3)
    wrist_orientation: Quat = field(default_factory=Quat)

    def __post_init__(self):
        if self.handedness not in HAND_SIDES:
            raise ValueError(
                f"handedness must be 'left' or 'right', got: {self.handedness}"
            )
        object.__setattr__(self, "joints", MappingProxyType(dict(self.joints)))
