# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Configuration dataclasses for TeleopSession.

A session config gathers every component configuration in one place and can be
loaded from YAML:

    task: valve-turning
    grasp_radius: 0.1
    mapper:
      translation_scale: 1.5
    right_arm:
      base_position: [0.5, 0.8, -0.3]
"""

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..config_utils import OverridableConfig
from ..hand_tracking.pinch_detector import PinchDetectorConfig
from ..physics.physics_world import PhysicsWorldConfig
from ..retargeting.hand_to_arm_mapper import HandToArmMapperConfig
from ..robot.arm_config import ArmConfig
from ..simulation.types import TaskType
from ..tasks.types import HandleConfig, PickPlaceConfig, ValveConfig

_NESTED_CONFIGS = {
    "pinch": PinchDetectorConfig,
    "mapper": HandToArmMapperConfig,
    "physics": PhysicsWorldConfig,
    "pick_and_place": PickPlaceConfig,
    "valve": ValveConfig,
    "handle": HandleConfig,
}

_ARM_FIELDS = {"left_arm": "left", "right_arm": "right"}


@dataclass
class TeleopSessionConfig(OverridableConfig):
    """Complete configuration for a teleop session.

    Attributes:
        task: Task loaded when the session starts
        randomize: Whether episodes jitter object spawn positions
        seed: Seed for randomized episodes (None for non-deterministic)
        grasp_radius: Max gripper-to-object distance for a pinch to grasp, meters
        pinch: Pinch detection settings
        mapper: Hand-to-arm delta scaling
        physics: Gravity and timestep
        left_arm: Left arm geometry
        right_arm: Right arm geometry
        pick_and_place: Pick-and-place task settings
        valve: Valve-turning task settings
        handle: Handle-rotation task settings
    """

    task: TaskType = TaskType.PICK_AND_PLACE
    randomize: bool = False
    seed: Optional[int] = None
    grasp_radius: float = 0.08
    pinch: PinchDetectorConfig = field(default_factory=PinchDetectorConfig)
    mapper: HandToArmMapperConfig = field(default_factory=HandToArmMapperConfig)
    physics: PhysicsWorldConfig = field(default_factory=PhysicsWorldConfig)
    left_arm: ArmConfig = field(default_factory=lambda: ArmConfig.for_side("left"))
    right_arm: ArmConfig = field(default_factory=lambda: ArmConfig.for_side("right"))
    pick_and_place: PickPlaceConfig = field(default_factory=PickPlaceConfig)
    valve: ValveConfig = field(default_factory=ValveConfig)
    handle: HandleConfig = field(default_factory=HandleConfig)

    def __post_init__(self):
        self.task = TaskType(self.task)
        if self.grasp_radius < 0:
            raise ValueError(f"grasp_radius must be non-negative, got: {self.grasp_radius}")

    @classmethod
    def _convert_field(cls, name: str, value: Any) -> Any:
        if name in _NESTED_CONFIGS:
            return _NESTED_CONFIGS[name].from_dict(value)
        if name in _ARM_FIELDS:
            merged = dataclasses.asdict(ArmConfig.for_side(_ARM_FIELDS[name]))
            merged.update(value or {})
            return ArmConfig.from_dict(merged)
        return super()._convert_field(name, value)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "TeleopSessionConfig":
        """Load a session config from a YAML file.

        Raises:
            FileNotFoundError: If ``path`` does not exist.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")
        with path.open("r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})
