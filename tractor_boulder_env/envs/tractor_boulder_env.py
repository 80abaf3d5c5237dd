import re
from pathlib import Path

import gymnasium as gym
from gymnasium import spaces
import numpy as np
import yaml

from tractor_boulder_env.utils.logging_utils import *
from tractor_boulder_env.utils.cell import Cell, is_boulder
from tractor_boulder_env.utils.grid_utils import DIRECTIONS, move_one
from tractor_boulder_env.utils.level_utils import format_grid
from tractor_boulder_env.planning.explorer import attempt_push, initial_state
from tractor_boulder_env.planning.solver import Solver
from tractor_boulder_env.envs.task_interface import BaseTask
from tractor_boulder_env.envs import tasks

DEFAULT_INIT_LOG_LEVEL = logging.ERROR
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)


class TractorBoulderEnv(gym.Env):
    """
    Gymnasium environment for the tractor/boulder grid puzzle.

    An action (cell, direction) pushes the boulder on `cell` one step in
    `direction`, following the same legality rule as state-space exploration.
    Observations are the size x size grid of cell values, reachability
    markers included. Levels come from a task class named in the config.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(self, render_mode=None,
                 task_config_file="fixed_level.yaml",
                 base_config_file="base_config.yaml"):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode '{render_mode}'")
        self.render_mode = render_mode

        # --- Load configuration files ---
        self._load_and_merge_configs(base_config_file, task_config_file)
        self.config = self.config or {}
        self._configure_logging()

        # --- Load task settings and task logic ---
        self._load_task_settings()
        self._load_and_instantiate_task(tasks, BaseTask)

        # --- Setup Gym RL interface ---
        self._setup_action_space()
        self._setup_observation_space()

        # --- Internal runtime state ---
        self.current_steps = 0
        self.state = None
        self.tractor = None

        logger.info("Environment initialized.")

    # region CONFIGURATION LOADING + LOGGING

    def _load_and_merge_configs(self, base_config_file, task_config_file):
        """
        Loads and merges two YAML config files: base + task-specific.
        Result is stored in self.config.
        """
        config_dir = Path(__file__).parent / "configs"
        base_path = config_dir / base_config_file
        task_path = config_dir / "tasks" / task_config_file

        base_config = self._read_yaml(base_path) if base_path.exists() else {}

        if task_path.exists():
            task_config = self._read_yaml(task_path)
        elif Path(task_config_file).exists():
            # A path outside the packaged configs
            task_config = self._read_yaml(Path(task_config_file))
        else:
            raise ValueError(f"Task config '{task_config_file}' not found.")

        def deep_merge(a, b):
            # Recursive dict merge: values in b overwrite those in a
            for k, v in b.items():
                if isinstance(v, dict):
                    a[k] = deep_merge(a.get(k, {}), v)
                else:
                    a[k] = v
            return a

        self.config = deep_merge(base_config.copy(), task_config)

    @staticmethod
    def _read_yaml(path):
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must hold a mapping.")
        return data

    def _configure_logging(self):
        """
        Applies the logging level from the config.
        """
        log_cfg = self.config.get("logging", {})
        level_str = log_cfg.get("level", "INFO").upper()
        set_logger_level(logger, get_level_from_string(level_str))
        logger.info(f"Log level set to {level_str}")

    # endregion

    # region TASK SETUP

    def _load_and_instantiate_task(self, task_package, base_class):
        """
        Dynamically loads the task class and instantiates it.
        """
        task_cfg = self.config.get("task", {})
        class_name = task_cfg.get("task_class_name", "FixedLevelTask")

        if not task_cfg.get("task_class_name"):
            logger.warning(f"task_class_name missing in config, defaulting to {class_name}")

        # Infer module name (e.g., FixedLevelTask → fixed_level_task)
        module_name = re.sub(r'(?<!^)(?=[A-Z])', '_', class_name).lower()
        if not module_name.endswith("_task"):
            module_name += "_task"

        task_class = None
        task_module = getattr(task_package, module_name, None)
        if task_module:
            task_class = getattr(task_module, class_name, None)

        if not isinstance(task_class, type) or not issubclass(task_class, base_class):
            raise ValueError(f"Invalid task class '{class_name}' or not subclass of {base_class.__name__}.")

        self.task = task_class(self, task_cfg)
        self.size = self.task.size
        logger.info(f"Loaded task class: {self.task.__class__.__name__} ({self.size}x{self.size})")

    def _load_task_settings(self):
        """
        Loads episode limits, reward and exploration parameters.
        """
        sim_cfg = self.config.get("simulation", {})
        reward_cfg = self.config.get("reward", {})
        exploration_cfg = self.config.get("exploration", {})

        self.max_steps = sim_cfg.get("max_episode_steps", 100)

        # Rewards
        self.goal_reward = reward_cfg.get("goal_reward", 1.0)
        self.step_penalty = reward_cfg.get("step_penalty", -0.01)
        self.move_fail_penalty = reward_cfg.get("move_fail_penalty", -0.05)

        self.max_explored_states = exploration_cfg.get("max_states")

    # endregion

    # region RL INTERFACE SETUP
    def _setup_action_space(self):
        # (boulder cell, direction index in DIRECTIONS)
        self.action_space = spaces.MultiDiscrete([self.size * self.size, len(DIRECTIONS)])
        logger.info(f"Action space = MultiDiscrete({self.action_space.nvec.tolist()})")

    def _setup_observation_space(self):
        self.observation_space = spaces.Box(
            low=int(min(Cell)), high=int(max(Cell)),
            shape=(self.size, self.size), dtype=np.int8,
        )
        logger.info(f"Observation space = Box({self.size}, {self.size})")
    # endregion

    # region RESET / STEP
    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        self.current_steps = 0

        task_info = self.task.reset_task_scenario()
        self.tractor = task_info["tractor"]
        self.state = initial_state(self.tractor, task_info["grid"], self.size)

        obs = self._get_obs()
        info = self._get_info()
        info.update({k: v for k, v in task_info.items() if k not in ("grid", "tractor")})
        return obs, info

    def step(self, action):
        """Pushes the boulder on cell action[0] in direction DIRECTIONS[action[1]]."""
        if self.state is None:
            raise RuntimeError("Call reset() before step().")

        cell_idx, dir_idx = int(action[0]), int(action[1])
        self.current_steps += 1
        truncated = self.current_steps >= self.max_steps
        fail_reward = self.step_penalty + self.move_fail_penalty

        if not (0 <= cell_idx < self.size * self.size and 0 <= dir_idx < len(DIRECTIONS)):
            logger.warning(f"Invalid action: {action}")
            return self._get_obs(), fail_reward, False, truncated, {"error": "invalid_action"}

        if not is_boulder(self.state[cell_idx]):
            logger.warning(f"Push failed: no boulder at cell {cell_idx}")
            return self._get_obs(), fail_reward, False, truncated, {"error": "no_boulder"}

        direction = DIRECTIONS[dir_idx]
        new_state = attempt_push(self.state, cell_idx, direction, self.size)
        if new_state is None:
            logger.debug(f"Push of boulder {cell_idx} {direction.name} is blocked")
            return self._get_obs(), fail_reward, False, truncated, {"error": "illegal_push"}

        self.state = new_state
        # The tractor ends one cell beyond the boulder's new cell
        self.tractor = move_one(move_one(cell_idx, direction, self.size), direction, self.size)

        terminated = self.task.check_goal(self.state)
        reward = self.goal_reward if terminated else self.step_penalty

        info = self._get_info()
        info["push"] = (cell_idx, direction.name)
        return self._get_obs(), reward, terminated, truncated, info

    # endregion

    # region RL HELPER
    def get_state(self):
        """Returns the current configuration as a tuple of Cell values."""
        return self.state

    def plan(self):
        """Shortest push plan from the current configuration, or None."""
        if self.state is None:
            raise RuntimeError("Call reset() before plan().")
        solver = Solver(self.size, max_states=self.max_explored_states)
        return solver.solve(self.state, self.tractor, goal=self.task.check_goal)

    def render(self):
        if self.render_mode == "ansi" and self.state is not None:
            return format_grid(self.state, self.size, tractor=self.tractor)
        return None

    def _get_obs(self):
        return np.asarray(self.state, dtype=np.int8).reshape(self.size, self.size)

    def _get_info(self):
        return {
            "tractor": self.tractor,
            "reachable_cells": sum(1 for cell in self.state if cell == Cell.REACHABLE),
            "boulders_seated": sum(1 for cell in self.state if cell == Cell.BOULDER_IN_HOLE),
        }

    # endregion
