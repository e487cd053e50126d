# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Arm action types produced by hand retargeting.
"""

from dataclasses import dataclass, field

import numpy as np

GRIPPER_CLOSED = 0
GRIPPER_OPEN = 1


@dataclass(frozen=True)
class ArmAction:
    """Incremental end-effector command for one arm.

    Deltas are relative to the previous frame, not absolute targets.
    ``gripper`` is 0 for closed (pinching) and 1 for open.
    """

    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0
    droll: float = 0.0
    dpitch: float = 0.0
    dyaw: float = 0.0
    gripper: int = GRIPPER_OPEN

    @property
    def translation(self) -> np.ndarray:
        return np.array([self.dx, self.dy, self.dz], dtype=np.float64)

    @property
    def rotation(self) -> np.ndarray:
        """Roll/pitch/yaw deltas in radians."""
        return np.array([self.droll, self.dpitch, self.dyaw], dtype=np.float64)

    @property
    def is_gripper_closed(self) -> bool:
        return self.gripper == GRIPPER_CLOSED


@dataclass(frozen=True)
class DualArmAction:
    left: ArmAction = field(default_factory=ArmAction)
    right: ArmAction = field(default_factory=ArmAction)

    def for_side(self, side: str) -> ArmAction:
        if side == "left":
            return self.left
        if side == "right":
            return self.right
        raise ValueError(f"side must be 'left' or 'right', got: {side}")


def create_zero_action() -> ArmAction:
    """Action with no motion and an open gripper."""
    return ArmAction()


def create_zero_dual_action() -> DualArmAction:
    return DualArmAction(left=create_zero_action(), right=create_zero_action())
