# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
armteleop - Hand-tracking teleoperation bridge for a simulated dual-arm robot.

Converts tracked hand poses into incremental arm commands, manages grasp
constraints in a pybullet world, and captures per-step simulation snapshots
for task scoring.
"""

__version__ = "1.0.0"
