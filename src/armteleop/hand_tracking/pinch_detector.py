# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Pinch Detector Module.

Decides whether the thumb and index fingertips are close enough to count as a pinch.
"""

import math
from dataclasses import dataclass
from typing import Mapping, Optional

import numpy as np

from ..config_utils import OverridableConfig
from .types import INDEX_TIP, PINCH_THRESHOLD, THUMB_TIP, JointData, PinchState


@dataclass
class PinchDetectorConfig(OverridableConfig):
    """Configuration for pinch detection."""

    threshold: float = PINCH_THRESHOLD
    """Fingertip distance (meters) below which the hand is pinching."""


class PinchDetector:
    """
    Stateless pinch classifier.

    Every frame is evaluated on its own: there is no smoothing and no hysteresis,
    so a hand hovering at the threshold may flicker between pinching and open.
    """

    def __init__(self, config: Optional[PinchDetectorConfig] = None) -> None:
        self.config = config or PinchDetectorConfig()

    @property
    def threshold(self) -> float:
        return self.config.threshold

    def detect(self, joints: Mapping[str, JointData]) -> PinchState:
        """Compute the pinch state from a joint map.

        Returns ``PinchState(False, math.inf)`` when either fingertip is absent.
        """
        thumb = joints.get(THUMB_TIP)
        index = joints.get(INDEX_TIP)
        if thumb is None or index is None:
            return PinchState(is_pinching=False, distance=math.inf)

        distance = float(
            np.linalg.norm(thumb.position.to_array() - index.position.to_array())
        )
        return PinchState(is_pinching=distance < self.config.threshold, distance=distance)
