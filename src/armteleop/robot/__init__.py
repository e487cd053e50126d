# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Robot - Arm configuration and the kinematic gripper driver.
"""

from .arm_config import ArmConfig
from .kinematic_arm import KinematicArmDriver

__all__ = [
    "ArmConfig",
    "KinematicArmDriver",
]
