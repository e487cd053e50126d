# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Headless teleoperation demo.

Drives a TeleopSession with a scripted synthetic right hand that reaches
toward the table, pinches, lifts and lets go, logging task progress as it goes.

Usage:
    python -m armteleop --task pick-and-place --frames 480
"""

import argparse
import sys
from typing import List, Optional, Tuple

import numpy as np
from loguru import logger

from .hand_tracking.synthetic import SyntheticHand, SyntheticXRFrame
from .hand_tracking.types import Vec3
from .simulation.types import TaskType
from .teleop_session_manager import TeleopSession, TeleopSessionConfig

OPEN_APERTURE = 0.06
PINCH_APERTURE = 0.01

# (fraction of the run, wrist offset from start in meters, pinch aperture)
_WAYPOINTS: List[Tuple[float, Tuple[float, float, float], float]] = [
    (0.0, (0.0, 0.0, 0.0), OPEN_APERTURE),
    (0.35, (-0.3, -0.15, 0.0), OPEN_APERTURE),
    (0.45, (-0.3, -0.15, 0.0), PINCH_APERTURE),
    (0.8, (-0.3, 0.0, 0.1), PINCH_APERTURE),
    (0.9, (-0.3, 0.0, 0.1), OPEN_APERTURE),
    (1.0, (-0.3, 0.0, 0.1), OPEN_APERTURE),
]


def scripted_hand(progress: float, start: Vec3) -> SyntheticHand:
    """Synthetic right hand at ``progress`` (0..1) along the scripted path."""
    fractions = [w[0] for w in _WAYPOINTS]
    offsets = np.array([w[1] for w in _WAYPOINTS])
    offset = [np.interp(progress, fractions, offsets[:, axis]) for axis in range(3)]

    # Aperture switches at waypoints rather than blending through the threshold
    aperture = OPEN_APERTURE
    for fraction, _, waypoint_aperture in _WAYPOINTS:
        if progress >= fraction:
            aperture = waypoint_aperture

    return SyntheticHand(
        handedness="right",
        wrist_position=Vec3.from_array(start.to_array() + np.array(offset)),
        pinch_aperture=aperture,
    )


def run(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="armteleop demo: headless teleoperation with a scripted hand"
    )
    parser.add_argument(
        "--task",
        type=str,
        choices=[t.value for t in TaskType],
        default=None,
        help="Override the task to run",
    )
    parser.add_argument(
        "--frames", type=int, default=480, help="Number of frames to simulate"
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Path to a session YAML config"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Randomize object spawn positions with this seed",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    if args.config:
        logger.info(f"Loading config from: {args.config}")
        try:
            config = TeleopSessionConfig.from_yaml(args.config)
        except FileNotFoundError as e:
            logger.error(str(e))
            return 1
    else:
        config = TeleopSessionConfig()

    # Apply command-line overrides
    overrides = {}
    if args.task:
        overrides["task"] = TaskType(args.task)
    if args.seed is not None:
        overrides.update(randomize=True, seed=args.seed)
    config = config.with_overrides(**overrides)

    logger.info("=" * 60)
    logger.info("armteleop demo")
    logger.info("=" * 60)
    logger.info(f"Task: {config.task.value}")
    logger.info(f"Frames: {args.frames} at {1.0 / config.physics.timestep:.0f} Hz")

    start = Vec3(0.3, 1.2, -0.2)
    result = None
    with TeleopSession(config) as session:
        for i in range(args.frames):
            hand = scripted_hand(i / max(1, args.frames - 1), start)
            result = session.step(SyntheticXRFrame([hand]))
            if i % 60 == 0:
                right = result.state.right_arm
                logger.info(
                    f"frame {i:4d}  gripper={right.end_effector_position.to_array().round(3)}  "
                    f"grasping={right.grasped_object_id}  progress={result.task_progress:.2f}"
                )

        logger.info(f"Simulated {session.frame_count} frames")

    if result is not None:
        logger.info(f"Task success: {result.task_success}")
    return 0
