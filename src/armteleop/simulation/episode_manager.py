# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Episode Manager - Brackets task setup and teardown around the simulation.
"""

import logging
from typing import Callable, Optional

from .simulation_manager import SimulationManager
from .types import EpisodeConfig, SimulationState

logger = logging.getLogger(__name__)


class EpisodeManager:
    """
    Runs at most one episode at a time.

    Starting an episode while another is active tears the previous one down
    before the new task is set up.
    """

    def __init__(
        self,
        simulation_manager: SimulationManager,
        setup_task: Callable[[EpisodeConfig], None],
        teardown_task: Callable[[], None],
    ) -> None:
        self.simulation_manager = simulation_manager
        self._setup_task = setup_task
        self._teardown_task = teardown_task
        self._active_config: Optional[EpisodeConfig] = None

    def start_episode(self, config: EpisodeConfig) -> SimulationState:
        if self._active_config is not None:
            self._teardown_task()

        self._active_config = config
        self._setup_task(config)
        logger.info("Episode started: task=%s randomize=%s", config.task.value, config.randomize)
        return self.simulation_manager.reset()

    def is_episode_active(self) -> bool:
        return self._active_config is not None

    def get_current_config(self) -> Optional[EpisodeConfig]:
        return self._active_config

    def end_episode(self) -> None:
        if self._active_config is None:
            return
        self._teardown_task()
        logger.info("Episode ended: task=%s", self._active_config.task.value)
        self._active_config = None
