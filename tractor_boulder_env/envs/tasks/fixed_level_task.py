import logging

from ..task_interface import BaseTask
from tractor_boulder_env.utils.cell import is_boulder
from tractor_boulder_env.utils.level_utils import parse_level
from tractor_boulder_env.utils.logging_utils import setup_logger

DEFAULT_INIT_LOG_LEVEL = logging.ERROR
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)


class FixedLevelTask(BaseTask):
    """
    Task: play the same hand-written level every episode.

    The level comes from config as a list of rows (or one multi-line string)
    using the symbols of `parse_level`.
    """

    def _load_task_params(self):
        level = self.config.get("level")
        if not level:
            raise ValueError("FixedLevelTask needs a 'level' entry in the task config.")

        self.grid, self.tractor, self.size = parse_level(level)
        self.num_boulders = sum(1 for cell in self.grid if is_boulder(cell))
        logger.debug(f"Loaded {self.size}x{self.size} level with {self.num_boulders} boulders")

    def reset_task_scenario(self):
        return {
            "grid": list(self.grid),
            "tractor": self.tractor,
        }
