# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Arm Configuration - Per-side geometry of the simulated arms.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..config_utils import OverridableConfig, as_vec3
from ..hand_tracking.types import HAND_SIDES, Vec3

_DEFAULT_BASE_POSITIONS = {
    "left": (-0.4, 0.8, -0.3),
    "right": (0.4, 0.8, -0.3),
}


@dataclass
class ArmConfig(OverridableConfig):
    """Configuration for one arm.

    The gripper starts at ``base_position + home_offset`` and can move anywhere
    within ``reach`` of the base.
    """

    side: str = "left"
    base_position: Tuple[float, float, float] = _DEFAULT_BASE_POSITIONS["left"]
    home_offset: Tuple[float, float, float] = (0.0, 0.2, 0.3)
    upper_arm_length: float = 0.25
    forearm_length: float = 0.2
    gripper_half_extent: float = 0.03
    """Half size of the cube collider used as the gripper body."""

    def __post_init__(self):
        if self.side not in HAND_SIDES:
            raise ValueError(f"side must be 'left' or 'right', got: {self.side}")
        self.base_position = as_vec3(self.base_position)
        self.home_offset = as_vec3(self.home_offset)

    @classmethod
    def for_side(cls, side: str, **overrides) -> "ArmConfig":
        """Default configuration for ``side`` with optional overrides."""
        if side not in HAND_SIDES:
            raise ValueError(f"side must be 'left' or 'right', got: {side}")
        return cls(side=side, base_position=_DEFAULT_BASE_POSITIONS[side]).with_overrides(
            **overrides
        )

    @property
    def gripper_id(self) -> str:
        return f"gripper-{self.side}"

    @property
    def reach(self) -> float:
        return self.upper_arm_length + self.forearm_length

    @property
    def home_position(self) -> Vec3:
        return Vec3.from_array(np.add(self.base_position, self.home_offset))
