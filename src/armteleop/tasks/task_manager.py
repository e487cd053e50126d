# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Task Manager - Loads one task environment at a time.

The task set is closed: every :class:`~armteleop.simulation.TaskType` maps to
exactly one task class, and all of them share the same interface
(``setup``/``teardown``/``check_success``/``reset``/``get_progress``).
"""

import logging
from typing import Optional, Union

import numpy as np

from ..physics.physics_world import PhysicsWorld
from ..simulation.types import TaskType
from .handle_rotation import HandleRotationTask
from .pick_and_place import PickAndPlaceTask
from .types import HandleConfig, PickPlaceConfig, ValveConfig
from .valve_turning import ValveTurningTask

logger = logging.getLogger(__name__)

Task = Union[PickAndPlaceTask, ValveTurningTask, HandleRotationTask]


class TaskManager:
    def __init__(
        self,
        physics_world: PhysicsWorld,
        pick_and_place: Optional[PickPlaceConfig] = None,
        valve: Optional[ValveConfig] = None,
        handle: Optional[HandleConfig] = None,
    ) -> None:
        self.physics_world = physics_world
        self.pick_and_place_config = pick_and_place or PickPlaceConfig()
        self.valve_config = valve or ValveConfig()
        self.handle_config = handle or HandleConfig()
        self._current: Optional[Task] = None

    def _create_task(self, task_type: TaskType) -> Task:
        if task_type == TaskType.PICK_AND_PLACE:
            return PickAndPlaceTask(self.physics_world, self.pick_and_place_config)
        elif task_type == TaskType.VALVE_TURNING:
            return ValveTurningTask(self.physics_world, self.valve_config)
        elif task_type == TaskType.HANDLE_ROTATION:
            return HandleRotationTask(self.physics_world, self.handle_config)
        raise ValueError(f"Unknown task type: {task_type}")

    def load_task(
        self, task_type: Union[TaskType, str], randomize: bool = False, seed: Optional[int] = None
    ) -> Task:
        """Tear down the current task (if any) and set up a new one.

        Raises:
            ValueError: If ``task_type`` is not a known task.
        """
        try:
            task_type = TaskType(task_type)
        except ValueError:
            raise ValueError(
                f"Unknown task type: {task_type!r} (valid: {[t.value for t in TaskType]})"
            ) from None

        task = self._create_task(task_type)
        self.unload_task()

        rng = np.random.default_rng(seed) if randomize else None
        task.setup(rng)
        self._current = task
        logger.info("Loaded task '%s'", task_type.value)
        return task

    def get_current_task(self) -> Optional[Task]:
        return self._current

    def unload_task(self) -> None:
        if self._current is None:
            return
        self._current.teardown()
        logger.info("Unloaded task '%s'", self._current.task_type.value)
        self._current = None

    def check_success(self) -> bool:
        return self._current.check_success() if self._current is not None else False

    def get_progress(self) -> float:
        return self._current.get_progress() if self._current is not None else 0.0

    def reset_current_task(self) -> None:
        if self._current is not None:
            self._current.reset()
