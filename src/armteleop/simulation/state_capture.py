# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
State Capture - Reads the physics world into an immutable ``SimulationState``.

Missing bodies never fail a capture: a missing gripper yields the default arm
state and a missing object yields an origin/identity placeholder.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Tuple

from ..config_utils import OverridableConfig
from ..hand_tracking.types import Quat, Vec3
from ..physics.grasp_manager import GraspManager
from ..physics.physics_world import PhysicsWorld
from .types import ArmState, ObjectState, SimulationState, create_default_arm_state


def _default_arm_ids() -> Dict[str, str]:
    return {"left": "gripper-left", "right": "gripper-right"}


@dataclass
class StateCaptureConfig(OverridableConfig):
    """Which bodies to read and how to tag them."""

    arm_ids: Dict[str, str] = field(default_factory=_default_arm_ids)
    """Gripper body id per arm side."""

    object_ids: Tuple[str, ...] = ()
    """Tracked objects, in snapshot order."""

    object_types: Dict[str, str] = field(default_factory=dict)
    """Type tag per object id; untagged objects are "unknown"."""

    def __post_init__(self):
        self.object_ids = tuple(self.object_ids)


def _capture_arm(
    physics_world: PhysicsWorld, grasp_manager: GraspManager, gripper_id: str
) -> ArmState:
    body = physics_world.get_body(gripper_id)
    if body is None:
        return create_default_arm_state()
    return ArmState(
        end_effector_position=body.translation(),
        end_effector_orientation=body.rotation(),
        gripper_open=1.0,
        is_grasping=grasp_manager.is_grasping(gripper_id),
        grasped_object_id=grasp_manager.get_grasped_object_id(gripper_id),
    )


def _capture_object(
    physics_world: PhysicsWorld, object_id: str, object_type: str
) -> ObjectState:
    body = physics_world.get_body(object_id)
    if body is None:
        return ObjectState(id=object_id, position=Vec3(), orientation=Quat(), type=object_type)
    return ObjectState(
        id=object_id,
        position=body.translation(),
        orientation=body.rotation(),
        type=object_type,
    )


def capture_state(
    physics_world: PhysicsWorld,
    grasp_manager: GraspManager,
    config: StateCaptureConfig,
    clock: Callable[[], float] = time.monotonic,
) -> SimulationState:
    """Snapshot arms and tracked objects from the current world state."""
    left_id = config.arm_ids.get("left")
    right_id = config.arm_ids.get("right")
    return SimulationState(
        timestamp=clock(),
        left_arm=_capture_arm(physics_world, grasp_manager, left_id)
        if left_id is not None
        else create_default_arm_state(),
        right_arm=_capture_arm(physics_world, grasp_manager, right_id)
        if right_id is not None
        else create_default_arm_state(),
        objects=tuple(
            _capture_object(
                physics_world, object_id, config.object_types.get(object_id, "unknown")
            )
            for object_id in config.object_ids
        ),
    )
