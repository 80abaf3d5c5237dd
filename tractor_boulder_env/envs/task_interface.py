# tractor_boulder_env/envs/task_interface.py
from abc import ABC, abstractmethod

from tractor_boulder_env.planning.solver import Solver


class BaseTask(ABC):
    """Abstract Base Class for the levels the tractor environment plays."""

    def __init__(self, env_instance, task_config: dict):
        """
        Initializes the Task.

        Args:
            env_instance: A reference to the main TractorBoulderEnv instance.
            task_config (dict): The 'task' section of the merged configuration.
        """
        self.env = env_instance
        self.config = task_config
        # --- Core Task Attributes (set in _load_task_params) ---
        self.size = 0
        self.num_boulders = 0
        self._load_task_params()

    @abstractmethod
    def _load_task_params(self):
        """Load task-specific parameters from self.config; must set self.size."""
        raise NotImplementedError

    @abstractmethod
    def reset_task_scenario(self) -> dict:
        """
        Produce the level for a new episode.

        Returns:
            dict: at least "grid" (flat list of Cell, length size*size) and
            "tractor" (start index). Other keys are added to the reset info.
        """
        raise NotImplementedError

    def check_goal(self, state) -> bool:
        """
        Check whether a configuration finishes the episode.

        Default: every boulder sits in a hole.
        """
        return Solver.is_goal(state)
