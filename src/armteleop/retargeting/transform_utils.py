# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Transform Utilities - Quaternion decoding helpers.

Quaternion Convention:
    Quaternions are (x, y, z, w). Euler angles use the aerospace convention:
    roll about x, pitch about y, yaw about z, in radians.
"""

from typing import Tuple

import numpy as np

from ..hand_tracking.types import Quat


def quaternion_to_euler(q: Quat) -> Tuple[float, float, float]:
    """
    Decode a quaternion into (roll, pitch, yaw).

    Pitch saturates at +/- pi/2 once ``|2(wy - zx)|`` reaches 1 (gimbal lock).

    Args:
        q: Unit quaternion.

    Returns:
        Tuple of (roll, pitch, yaw) in radians.
    """
    x, y, z, w = q.x, q.y, q.z, q.w

    sinr_cosp = 2.0 * (w * x + y * z)
    cosr_cosp = 1.0 - 2.0 * (x * x + y * y)
    roll = np.arctan2(sinr_cosp, cosr_cosp)

    sinp = 2.0 * (w * y - z * x)
    if abs(sinp) >= 1.0:
        pitch = np.copysign(np.pi / 2.0, sinp)
    else:
        pitch = np.arcsin(sinp)

    siny_cosp = 2.0 * (w * z + x * y)
    cosy_cosp = 1.0 - 2.0 * (y * y + z * z)
    yaw = np.arctan2(siny_cosp, cosy_cosp)

    return float(roll), float(pitch), float(yaw)


def quaternion_angle(q: Quat) -> float:
    """Rotation angle of a quaternion in [0, pi], ignoring its axis."""
    return float(2.0 * np.arccos(min(1.0, abs(q.w))))
