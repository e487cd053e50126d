# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Hand Tracker - Assembles per-hand poses from raw spatial-tracking input.

For every input source tagged "left" or "right" that carries a hand-tracking
feed, each joint of the fixed catalog is resolved and queried relative to the
reference space. Joints that cannot be resolved this frame are skipped; a hand
that resolves no joints at all is left out of the result.
"""

import logging
import time
from typing import Any, Callable, Dict, Iterable, Optional

from .pinch_detector import PinchDetector
from .types import (
    ALL_JOINTS,
    DEFAULT_JOINT_RADIUS,
    HAND_SIDES,
    WRIST,
    HandPose,
    JointData,
    Quat,
    Vec3,
)
from .xr_input import XRFrame, XRInputSource

logger = logging.getLogger(__name__)


class JointPoseUnavailableError(RuntimeError):
    """Raised when a frame offers no joint-pose query at all."""


class HandTracker:
    """
    Extracts a ``HandPose`` per hand side each frame.

    The most recent result is kept on the instance and can be polled through
    :meth:`get_latest_poses` at a different cadence than :meth:`update`.

    Example:
        tracker = HandTracker()
        poses = tracker.update(frame, reference_space)
        right = poses.get("right")
    """

    def __init__(
        self,
        pinch_detector: Optional[PinchDetector] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.pinch_detector = pinch_detector or PinchDetector()
        self._clock = clock
        self._latest_poses: Dict[str, HandPose] = {}

    def update(self, frame: XRFrame, reference_space: Any) -> Dict[str, HandPose]:
        """Extract hand poses for the current frame.

        Args:
            frame: Tracking frame exposing ``input_sources`` and ``get_joint_pose``.
            reference_space: Space the joint poses are expressed in.

        Returns:
            Fresh dict mapping "left"/"right" to the hand pose of that side.
            Sides without tracking data are absent.

        Raises:
            JointPoseUnavailableError: If a tracked hand is present but the frame
                has no ``get_joint_pose`` capability.
        """
        poses: Dict[str, HandPose] = {}
        get_joint_pose = getattr(frame, "get_joint_pose", None)

        for source in self._hand_sources(getattr(frame, "input_sources", ())):
            if get_joint_pose is None:
                raise JointPoseUnavailableError(
                    "Frame does not provide get_joint_pose(); cannot extract hand joints"
                )
            pose = self._extract_hand(source, get_joint_pose, reference_space)
            if pose is not None:
                poses[source.handedness] = pose

        self._latest_poses = dict(poses)
        logger.debug("Extracted %d hand pose(s): %s", len(poses), sorted(poses))
        return poses

    def get_latest_poses(self) -> Dict[str, HandPose]:
        """Return a copy of the poses produced by the most recent ``update``."""
        return dict(self._latest_poses)

    def clear(self) -> None:
        self._latest_poses = {}

    @staticmethod
    def _hand_sources(input_sources: Iterable[XRInputSource]):
        for source in input_sources:
            if getattr(source, "hand", None) is None:
                continue
            if getattr(source, "handedness", None) not in HAND_SIDES:
                continue
            yield source

    def _extract_hand(
        self,
        source: XRInputSource,
        get_joint_pose: Callable[[Any, Any], Any],
        reference_space: Any,
    ) -> Optional[HandPose]:
        joints: Dict[str, JointData] = {}

        for name in ALL_JOINTS:
            joint_space = source.hand.get(name)
            if joint_space is None:
                continue
            joint_pose = get_joint_pose(joint_space, reference_space)
            if joint_pose is None:
                continue
            radius = getattr(joint_pose, "radius", None)
            joints[name] = JointData(
                position=_to_vec3(joint_pose.position),
                orientation=_to_quat(joint_pose.orientation),
                radius=DEFAULT_JOINT_RADIUS if radius is None else float(radius),
            )

        if not joints:
            return None

        wrist = joints.get(WRIST)
        return HandPose(
            handedness=source.handedness,
            timestamp=self._clock(),
            joints=joints,
            pinch_state=self.pinch_detector.detect(joints),
            wrist_position=wrist.position if wrist is not None else Vec3(),
            wrist_orientation=wrist.orientation if wrist is not None else Quat(),
        )


def _to_vec3(value: Any) -> Vec3:
    if isinstance(value, Vec3):
        return value
    return Vec3(float(value.x), float(value.y), float(value.z))


def _to_quat(value: Any) -> Quat:
    if isinstance(value, Quat):
        return value
    return Quat(float(value.x), float(value.y), float(value.z), float(value.w))
