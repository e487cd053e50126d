# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Synthetic hand input for headless runs and tests.

``SyntheticHand`` generates a full joint set around a wrist pose, with the thumb
tip placed ``pinch_aperture`` meters from the index tip. ``SyntheticXRFrame``
bundles hands into a frame that satisfies the tracker's input interface.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from .types import ALL_JOINTS, INDEX_TIP, THUMB_TIP, WRIST, Quat, Vec3

# Joint offsets from the wrist in the hand's local frame (right hand, fingers
# pointing along -z, palm facing -y). Left hands mirror x.
_FINGER_LATERAL = {"index-finger": 0.02, "middle-finger": 0.0, "ring-finger": -0.02, "pinky-finger": -0.04}
_FINGER_DEPTH = {
    "metacarpal": 0.03,
    "phalanx-proximal": 0.08,
    "phalanx-intermediate": 0.12,
    "phalanx-distal": 0.145,
    "tip": 0.17,
}
_THUMB_OFFSETS = {
    "thumb-metacarpal": (0.03, -0.01, -0.02),
    "thumb-phalanx-proximal": (0.045, -0.015, -0.05),
    "thumb-phalanx-distal": (0.04, -0.02, -0.09),
}


def _local_offsets(handedness: str, pinch_aperture: float) -> Dict[str, np.ndarray]:
    offsets: Dict[str, np.ndarray] = {WRIST: np.zeros(3)}
    for finger, lateral in _FINGER_LATERAL.items():
        for segment, depth in _FINGER_DEPTH.items():
            offsets[f"{finger}-{segment}"] = np.array([lateral, 0.0, -depth])
    for name, offset in _THUMB_OFFSETS.items():
        offsets[name] = np.array(offset)
    offsets[THUMB_TIP] = offsets[INDEX_TIP] + np.array([0.0, -pinch_aperture, 0.0])

    if handedness == "left":
        mirror = np.array([-1.0, 1.0, 1.0])
        offsets = {name: offset * mirror for name, offset in offsets.items()}
    return offsets


@dataclass
class SyntheticJointPose:
    position: Vec3
    orientation: Quat
    radius: Optional[float] = None


@dataclass(frozen=True)
class SyntheticJointSpace:
    source: "SyntheticHand"
    joint_name: str


@dataclass(eq=False)
class SyntheticHand:
    """A generated input source with a hand-tracking feed."""

    handedness: str = "right"
    wrist_position: Vec3 = field(default_factory=Vec3)
    wrist_orientation: Quat = field(default_factory=Quat)
    pinch_aperture: float = 0.05
    """Distance between thumb tip and index tip, meters."""
    radius: Optional[float] = 0.008
    """Joint radius reported by the feed; None emulates a source that omits it."""
    missing_joints: FrozenSet[str] = frozenset()
    """Joints whose tracking space cannot be resolved."""
    unavailable_poses: FrozenSet[str] = frozenset()
    """Joints whose space resolves but whose pose query fails."""
    tracked: bool = True

    @property
    def hand(self) -> Optional["SyntheticHand"]:
        return self if self.tracked else None

    def get(self, joint_name: str) -> Optional[SyntheticJointSpace]:
        if joint_name in self.missing_joints or joint_name not in ALL_JOINTS:
            return None
        return SyntheticJointSpace(self, joint_name)

    def joint_pose(self, joint_name: str) -> Optional[SyntheticJointPose]:
        if joint_name in self.unavailable_poses:
            return None
        rotation = Rotation.from_quat(self.wrist_orientation.to_array())
        offset = _local_offsets(self.handedness, self.pinch_aperture)[joint_name]
        position = self.wrist_position.to_array() + rotation.apply(offset)
        return SyntheticJointPose(
            position=Vec3.from_array(position),
            orientation=self.wrist_orientation,
            radius=self.radius,
        )


class SyntheticXRFrame:
    """Tracking frame over a fixed set of synthetic input sources."""

    def __init__(self, input_sources: Sequence[Any] = ()) -> None:
        self.input_sources: List[Any] = list(input_sources)

    def get_joint_pose(
        self, joint_space: SyntheticJointSpace, reference_space: Any
    ) -> Optional[SyntheticJointPose]:
        return joint_space.source.joint_pose(joint_space.joint_name)
