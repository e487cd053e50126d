# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
TeleopSession - A high-level wrapper for the complete teleoperation loop.

This class wires hand tracking, retargeting, grasping, simulation and task
scoring together so that a caller only has to feed tracking frames.
"""

import logging
import time
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

import numpy as np

from ..hand_tracking.hand_tracker import HandTracker
from ..hand_tracking.pinch_detector import PinchDetector
from ..hand_tracking.types import HAND_SIDES, HandPose
from ..physics.grasp_manager import GraspManager
from ..physics.physics_world import PhysicsWorld
from ..retargeting.hand_to_arm_mapper import HandToArmMapper
from ..retargeting.types import DualArmAction, create_zero_action
from ..robot.kinematic_arm import KinematicArmDriver
from ..simulation.episode_manager import EpisodeManager
from ..simulation.simulation_manager import SimulationManager
from ..simulation.state_capture import StateCaptureConfig
from ..simulation.types import EpisodeConfig, SimulationState, TaskType
from ..tasks.task_manager import TaskManager
from .config import TeleopSessionConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionStepResult:
    """Everything produced by one :meth:`TeleopSession.step`."""

    state: SimulationState
    action: DualArmAction
    hands: Dict[str, HandPose]
    task_success: bool
    task_progress: float


class TeleopSession:
    """High-level teleop session manager with RAII pattern.

    The session handles:
    1. Creating the physics world and spawning the gripper bodies
    2. Starting an episode for the configured task
    3. Running the per-frame pipeline via step()
    4. Tearing down the episode and the physics world on exit

    Usage:
        config = TeleopSessionConfig(task=TaskType.VALVE_TURNING)
        with TeleopSession(config) as session:
            while running:
                result = session.step(frame, reference_space)
                if result.task_success:
                    break
    """

    def __init__(
        self,
        config: Optional[TeleopSessionConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the teleop session.

        Actual resource creation happens in __enter__.

        Args:
            config: Session configuration (defaults used when None)
            clock: Time source for hand pose and snapshot timestamps
        """
        self.config = config or TeleopSessionConfig()
        self._clock = clock

        # Core components (will be created in __enter__)
        self.physics_world: Optional[PhysicsWorld] = None
        self.grasp_manager: Optional[GraspManager] = None
        self.arm_driver: Optional[KinematicArmDriver] = None
        self.task_manager: Optional[TaskManager] = None
        self.simulation: Optional[SimulationManager] = None
        self.episodes: Optional[EpisodeManager] = None

        self.hand_tracker = HandTracker(PinchDetector(self.config.pinch), clock=clock)
        self.mapper = HandToArmMapper(self.config.mapper)

        # Exit stack for RAII resource management
        self._exit_stack = ExitStack()

        # Previous hand pose per side, cleared when a hand is lost
        self._previous_poses: Dict[str, HandPose] = {}

        # Runtime state
        self.frame_count: int = 0
        self.start_time: float = 0.0
        self._setup_complete: bool = False

    # ========================================================================
    # Per-frame pipeline
    # ========================================================================

    def step(self, frame: Any, reference_space: Any = None) -> SessionStepResult:
        """Execute a single step of the teleop session.

        Extracts hand poses, maps them to arm deltas, updates grasps from the
        gripper commands, advances the simulation by one timestep and scores
        the current task.

        Raises:
            RuntimeError: If called outside of a ``with`` block.
        """
        if not self._setup_complete:
            raise RuntimeError("TeleopSession.step() called outside of a 'with' block")

        hands = self.hand_tracker.update(frame, reference_space)
        action = self._map_hands(hands)
        self._update_grasps(action)
        state = self.simulation.step(action)

        self.frame_count += 1
        return SessionStepResult(
            state=state,
            action=action,
            hands=hands,
            task_success=self.task_manager.check_success(),
            task_progress=self.task_manager.get_progress(),
        )

    def _map_hands(self, hands: Dict[str, HandPose]) -> DualArmAction:
        actions = {}
        for side in HAND_SIDES:
            current = hands.get(side)
            if current is None:
                # Tracking lost: hold still with an open gripper, restart deltas on reacquire
                self._previous_poses.pop(side, None)
                actions[side] = create_zero_action()
                continue
            actions[side] = self.mapper.map_hand_to_action(
                current, self._previous_poses.get(side)
            )
            self._previous_poses[side] = current
        return DualArmAction(left=actions["left"], right=actions["right"])

    def _update_grasps(self, action: DualArmAction) -> None:
        for side, gripper_id in self.arm_driver.gripper_ids.items():
            closed = action.for_side(side).is_gripper_closed
            grasping = self.grasp_manager.is_grasping(gripper_id)
            if closed and not grasping:
                object_id = self._nearest_object(gripper_id)
                if object_id is not None:
                    self.grasp_manager.try_grasp(gripper_id, object_id)
            elif not closed and grasping:
                self.grasp_manager.release(gripper_id)

    def _nearest_object(self, gripper_id: str) -> Optional[str]:
        task = self.task_manager.get_current_task()
        gripper = self.physics_world.get_body(gripper_id)
        if task is None or gripper is None:
            return None

        gripper_position = gripper.translation().to_array()
        nearest, nearest_distance = None, self.config.grasp_radius
        for object_id in task.object_ids:
            body = self.physics_world.get_body(object_id)
            if body is None:
                continue
            distance = float(np.linalg.norm(body.translation().to_array() - gripper_position))
            if distance <= nearest_distance:
                nearest, nearest_distance = object_id, distance
        return nearest

    # ========================================================================
    # Task control
    # ========================================================================

    def start_task(self, task: Union[TaskType, str]) -> SimulationState:
        """Start a new episode of ``task``, tearing down the current one."""
        self._require_setup()
        self._previous_poses.clear()
        return self.episodes.start_episode(
            EpisodeConfig(task=task, randomize=self.config.randomize, seed=self.config.seed)
        )

    def reset_task(self) -> SimulationState:
        """Put the current task and both grippers back in their start pose."""
        self._require_setup()
        self._previous_poses.clear()
        self.grasp_manager.release_all()
        self.task_manager.reset_current_task()
        self.arm_driver.reset()
        return self.simulation.reset()

    def get_state(self) -> SimulationState:
        self._require_setup()
        return self.simulation.get_state()

    def _require_setup(self) -> None:
        if not self._setup_complete:
            raise RuntimeError("TeleopSession used outside of a 'with' block")

    def _setup_task(self, config: EpisodeConfig) -> None:
        task = self.task_manager.load_task(config.task, randomize=config.randomize, seed=config.seed)
        self.arm_driver.reset()
        self.simulation.set_state_capture_config(
            self.simulation.state_capture_config.with_overrides(
                object_ids=task.object_ids, object_types=task.object_types
            )
        )

    def _teardown_task(self) -> None:
        self.grasp_manager.release_all()
        self.task_manager.unload_task()
        self.simulation.set_state_capture_config(
            self.simulation.state_capture_config.with_overrides(object_ids=(), object_types={})
        )

    def get_elapsed_time(self) -> float:
        """Get elapsed time since session started."""
        return self._clock() - self.start_time

    # ========================================================================
    # Context manager protocol
    # ========================================================================

    def __enter__(self):
        """Enter the context - create the world and start the first episode.

        Returns:
            self for context manager protocol
        """
        try:
            self._setup()
        except BaseException:
            self._setup_complete = False
            self._exit_stack.close()
            raise
        logger.info("Teleop session started (task=%s)", self.config.task.value)
        return self

    def _setup(self) -> None:
        self.physics_world = self._exit_stack.enter_context(PhysicsWorld(self.config.physics))
        self.grasp_manager = GraspManager(self.physics_world)

        self.arm_driver = KinematicArmDriver(
            self.physics_world, self.config.left_arm, self.config.right_arm
        )
        self.arm_driver.spawn_grippers()

        self.task_manager = TaskManager(
            self.physics_world,
            pick_and_place=self.config.pick_and_place,
            valve=self.config.valve,
            handle=self.config.handle,
        )
        self.simulation = SimulationManager(
            self.physics_world,
            self.grasp_manager,
            self.arm_driver.apply,
            StateCaptureConfig(arm_ids=self.arm_driver.gripper_ids),
            clock=self._clock,
        )
        self.episodes = EpisodeManager(self.simulation, self._setup_task, self._teardown_task)
        self._exit_stack.callback(self.episodes.end_episode)

        self._previous_poses.clear()
        self.hand_tracker.clear()
        self.frame_count = 0
        self.start_time = self._clock()
        self._setup_complete = True

        self.start_task(self.config.task)

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit the context - cleanup resources."""
        if not self._setup_complete:
            return False

        self._setup_complete = False
        # ExitStack tears down the episode, then disposes the physics world
        self._exit_stack.__exit__(exc_type, exc_val, exc_tb)
        logger.info("Teleop session closed after %d frames", self.frame_count)
        return False
