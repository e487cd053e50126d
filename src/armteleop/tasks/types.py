# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Task configuration dataclasses.

Angles are radians, lengths meters, positions are (x, y, z) in the world frame
with y up.
"""

import math
from dataclasses import dataclass
from typing import Any, Tuple

from ..config_utils import OverridableConfig, as_vec3


@dataclass(frozen=True)
class TargetZone:
    """Circular zone on the horizontal (x-z) plane."""

    center: Tuple[float, float, float]
    radius: float

    def contains(self, position) -> bool:
        dx = position[0] - self.center[0]
        dz = position[2] - self.center[2]
        return math.sqrt(dx * dx + dz * dz) <= self.radius


def _default_zones() -> Tuple[TargetZone, ...]:
    return (
        TargetZone(center=(0.2, 0.81, 0.15), radius=0.06),
        TargetZone(center=(-0.2, 0.81, 0.15), radius=0.06),
    )


@dataclass
class PickPlaceConfig(OverridableConfig):
    """Configuration for the pick-and-place task."""

    object_count: int = 2
    object_positions: Tuple[Tuple[float, float, float], ...] = (
        (-0.1, 0.85, 0.0),
        (0.1, 0.85, 0.0),
    )
    """Spawn position per object; objects beyond this list spawn at (0, 0.85, 0)."""
    target_zones: Tuple[TargetZone, ...] = _default_zones()
    object_size: float = 0.05
    """Edge length of each cube."""
    table_height: float = 0.8
    position_jitter: float = 0.03
    """Max x/z spawn offset applied when an episode is randomized."""

    def __post_init__(self):
        self.object_positions = tuple(as_vec3(pos) for pos in self.object_positions)
        self.target_zones = tuple(self.target_zones)

    @classmethod
    def _convert_field(cls, name: str, value: Any) -> Any:
        if name == "target_zones":
            return tuple(
                TargetZone(center=as_vec3(zone["center"]), radius=float(zone["radius"]))
                for zone in value
            )
        return super()._convert_field(name, value)


@dataclass
class ValveConfig(OverridableConfig):
    """Configuration for the valve-turning task."""

    position: Tuple[float, float, float] = (0.0, 1.0, -0.4)
    axis: Tuple[float, float, float] = (0.0, 0.0, 1.0)
    target_angle: float = math.pi
    friction: float = 0.5
    """Angular damping applied to the valve handle."""
    radius: float = 0.1
    density: float = 2.0

    def __post_init__(self):
        self.position = as_vec3(self.position)
        self.axis = as_vec3(self.axis)


@dataclass
class HandleConfig(OverridableConfig):
    """Configuration for the handle-rotation task.

    ``min_angle``/``max_angle`` describe the intended travel of the lever; they
    are not enforced by the hinge.
    """

    position: Tuple[float, float, float] = (0.3, 1.0, -0.3)
    axis: Tuple[float, float, float] = (0.0, 0.0, 1.0)
    min_angle: float = 0.0
    max_angle: float = math.pi / 2
    target_angle: float = math.pi / 2
    length: float = 0.15
    tolerance: float = 0.1
    """Allowed |angle - target_angle| for success (about 5.7 degrees)."""

    def __post_init__(self):
        self.position = as_vec3(self.position)
        self.axis = as_vec3(self.axis)
