# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Retargeting - Hand pose to incremental arm command conversion.
"""

from .types import (
    GRIPPER_CLOSED,
    GRIPPER_OPEN,
    ArmAction,
    DualArmAction,
    create_zero_action,
    create_zero_dual_action,
)
from .transform_utils import quaternion_angle, quaternion_to_euler
from .hand_to_arm_mapper import HandToArmMapper, HandToArmMapperConfig

__all__ = [
    "GRIPPER_CLOSED",
    "GRIPPER_OPEN",
    "ArmAction",
    "DualArmAction",
    "create_zero_action",
    "create_zero_dual_action",
    "quaternion_angle",
    "quaternion_to_euler",
    "HandToArmMapper",
    "HandToArmMapperConfig",
]
