# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Simulation Types - Immutable world snapshots and episode configuration.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from ..hand_tracking.types import Quat, Vec3


class TaskType(str, Enum):
    PICK_AND_PLACE = "pick-and-place"
    VALVE_TURNING = "valve-turning"
    HANDLE_ROTATION = "handle-rotation"


@dataclass(frozen=True)
class ArmState:
    """Per-arm reading taken from one physics step."""

    end_effector_position: Vec3 = field(default_factory=Vec3)
    end_effector_orientation: Quat = field(default_factory=Quat)
    gripper_open: float = 1.0
    is_grasping: bool = False
    grasped_object_id: Optional[str] = None


@dataclass(frozen=True)
class ObjectState:
    id: str
    position: Vec3
    orientation: Quat
    type: str = "unknown"


@dataclass(frozen=True)
class SimulationState:
    """World snapshot handed to scoring and visualization.

    All readings are taken after the same physics step.
    """

    timestamp: float
    left_arm: ArmState
    right_arm: ArmState
    objects: Tuple[ObjectState, ...] = ()

    def arm(self, side: str) -> ArmState:
        if side == "left":
            return self.left_arm
        if side == "right":
            return self.right_arm
        raise ValueError(f"side must be 'left' or 'right', got: {side}")

    def get_object(self, object_id: str) -> Optional[ObjectState]:
        for obj in self.objects:
            if obj.id == object_id:
                return obj
        return None


@dataclass(frozen=True)
class EpisodeConfig:
    """One task attempt.

    ``seed`` makes a randomized episode reproducible.
    """

    task: TaskType
    randomize: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "task", TaskType(self.task))


def create_default_arm_state() -> ArmState:
    """Arm state at the origin, identity orientation, open and not grasping."""
    return ArmState()


def create_initial_state() -> SimulationState:
    return SimulationState(
        timestamp=0.0,
        left_arm=create_default_arm_state(),
        right_arm=create_default_arm_state(),
        objects=(),
    )
