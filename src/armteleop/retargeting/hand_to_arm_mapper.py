# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Hand To Arm Mapper Module.

Converts consecutive hand poses into incremental arm commands.
"""

from dataclasses import dataclass
from typing import Optional

from ..config_utils import OverridableConfig
from ..hand_tracking.types import HandPose
from .transform_utils import quaternion_to_euler
from .types import GRIPPER_CLOSED, GRIPPER_OPEN, ArmAction


@dataclass
class HandToArmMapperConfig(OverridableConfig):
    """Configuration for hand-to-arm mapping."""

    translation_scale: float = 1.0
    """Multiplier applied to wrist translation deltas."""

    rotation_scale: float = 1.0
    """Multiplier applied to roll/pitch/yaw deltas."""


class HandToArmMapper:
    """
    Maps a (current, previous) hand pose pair to an ``ArmAction``.

    Translation deltas are wrist position differences. Rotation deltas are
    differences of Euler angles decoded independently from each wrist
    orientation, so they jump near pitch = +/- 90 degrees (gimbal lock).
    The gripper follows the current pinch state only.
    """

    def __init__(self, config: Optional[HandToArmMapperConfig] = None) -> None:
        self.config = config or HandToArmMapperConfig()

    def map_hand_to_action(
        self, current: HandPose, previous: Optional[HandPose]
    ) -> ArmAction:
        gripper = GRIPPER_CLOSED if current.pinch_state.is_pinching else GRIPPER_OPEN

        if previous is None:
            return ArmAction(gripper=gripper)

        translation = (
            current.wrist_position.to_array() - previous.wrist_position.to_array()
        ) * self.config.translation_scale

        current_euler = quaternion_to_euler(current.wrist_orientation)
        previous_euler = quaternion_to_euler(previous.wrist_orientation)
        droll, dpitch, dyaw = (
            (c - p) * self.config.rotation_scale
            for c, p in zip(current_euler, previous_euler)
        )

        return ArmAction(
            dx=float(translation[0]),
            dy=float(translation[1]),
            dz=float(translation[2]),
            droll=droll,
            dpitch=dpitch,
            dyaw=dyaw,
            gripper=gripper,
        )
