# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Structural interfaces for the spatial-tracking input consumed by HandTracker.

These mirror the shape of WebXR hand input: a frame exposes the active input
sources and a joint-pose query; each input source carries a handedness tag and,
when hand tracking is available, a hand that resolves joint names to spaces.
"""

from typing import Any, Iterable, Optional, Protocol

from .types import Quat, Vec3


class XRJointPose(Protocol):
    """Pose of one joint relative to a reference space."""

    position: Vec3
    orientation: Quat
    radius: Optional[float]


class XRHand(Protocol):
    def get(self, joint_name: str) -> Optional[Any]:
        """Return the tracking space for ``joint_name``, or None."""
        ...


class XRInputSource(Protocol):
    handedness: str
    hand: Optional[XRHand]


class XRFrame(Protocol):
    """One tracking frame."""

    input_sources: Iterable[XRInputSource]

    def get_joint_pose(
        self, joint_space: Any, reference_space: Any
    ) -> Optional[XRJointPose]:
        """Query a joint pose; returns None when unavailable this frame."""
        ...
