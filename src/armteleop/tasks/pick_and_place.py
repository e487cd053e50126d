# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Pick-and-place task: move cubes from the table into target zones.
"""

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..hand_tracking.types import Quat, Vec3
from ..physics.physics_world import PhysicsWorld
from ..physics.types import (
    ColliderDesc,
    CollisionGroups,
    PhysicsBodyDescriptor,
    RigidBodyType,
)
from ..simulation.types import TaskType
from .types import PickPlaceConfig

logger = logging.getLogger(__name__)

TABLE_ID = "table"
OBJECT_TYPE = "cube"
_FALLBACK_POSITION = (0.0, 0.85, 0.0)


class PickAndPlaceTask:
    """Succeeds when every target zone holds at least one cube."""

    task_type = TaskType.PICK_AND_PLACE

    def __init__(self, physics_world: PhysicsWorld, config: Optional[PickPlaceConfig] = None):
        self.physics_world = physics_world
        self.config = config or PickPlaceConfig()
        self._object_ids: List[str] = []
        self._spawn_positions: List[Tuple[float, float, float]] = []

    @property
    def object_ids(self) -> Tuple[str, ...]:
        return tuple(self._object_ids)

    @property
    def object_types(self) -> Dict[str, str]:
        return {object_id: OBJECT_TYPE for object_id in self._object_ids}

    def setup(self, rng: Optional[np.random.Generator] = None) -> None:
        """Create the table and cubes; ``rng`` jitters cube spawn positions."""
        self.physics_world.add_body(
            PhysicsBodyDescriptor(
                id=TABLE_ID,
                body_type=RigidBodyType.FIXED,
                collider=ColliderDesc.cuboid(0.4, 0.01, 0.3),
                position=Vec3(0.0, self.config.table_height, 0.0),
                collision_group=CollisionGroups.GROUND,
            )
        )

        half = self.config.object_size / 2
        for i in range(self.config.object_count):
            position = np.array(
                self.config.object_positions[i]
                if i < len(self.config.object_positions)
                else _FALLBACK_POSITION
            )
            if rng is not None:
                jitter = self.config.position_jitter
                position[[0, 2]] += rng.uniform(-jitter, jitter, size=2)

            object_id = f"pick-object-{i}"
            self.physics_world.add_body(
                PhysicsBodyDescriptor(
                    id=object_id,
                    body_type=RigidBodyType.DYNAMIC,
                    collider=ColliderDesc.cuboid(half, half, half),
                    position=Vec3.from_array(position),
                    collision_group=CollisionGroups.OBJECT,
                )
            )
            self._object_ids.append(object_id)
            self._spawn_positions.append(tuple(float(v) for v in position))

    def teardown(self) -> None:
        for object_id in self._object_ids:
            self.physics_world.remove_body(object_id)
        self.physics_world.remove_body(TABLE_ID)
        self._object_ids.clear()
        self._spawn_positions.clear()

    def _matched_zones(self) -> int:
        positions = []
        for object_id in self._object_ids:
            body = self.physics_world.get_body(object_id)
            if body is not None:
                positions.append(body.translation().to_array())

        return sum(
            1
            for zone in self.config.target_zones
            if any(zone.contains(position) for position in positions)
        )

    def check_success(self) -> bool:
        if not self.config.target_zones or not self._object_ids:
            return False
        return self._matched_zones() >= len(self.config.target_zones)

    def get_progress(self) -> float:
        if not self.config.target_zones:
            return 0.0
        return self._matched_zones() / len(self.config.target_zones)

    def reset(self) -> None:
        """Put every cube back on its spawn position, at rest."""
        for object_id, position in zip(self._object_ids, self._spawn_positions):
            body = self.physics_world.get_body(object_id)
            if body is None:
                continue
            body.set_translation(Vec3(*position))
            body.set_rotation(Quat())
            body.set_linvel(Vec3())
            body.set_angvel(Vec3())
