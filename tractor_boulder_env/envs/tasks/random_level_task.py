import logging

from ..task_interface import BaseTask
from tractor_boulder_env.utils.cell import Cell
from tractor_boulder_env.utils.logging_utils import setup_logger

DEFAULT_INIT_LOG_LEVEL = logging.ERROR
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)


class RandomLevelTask(BaseTask):
    """
    Task: scatter holes, boulders and the tractor over an empty grid.

    Placement uses the environment's `np_random`, so seeding `reset` makes
    levels reproducible.
    """

    def _load_task_params(self):
        self.size = self.config.get("size", 5)
        self.num_boulders = self.config.get("num_boulders", 2)
        self.num_holes = self.config.get("num_holes", self.num_boulders)
        self.seated_fraction = self.config.get("seated_fraction", 0.0)

        # === Safety checks based on config ===
        if self.size <= 0:
            raise ValueError("Grid size must be positive.")
        if self.num_boulders + self.num_holes + 1 > self.size * self.size:
            raise ValueError("Too few cells for chosen number of boulders + holes + tractor.")
        if not 0.0 <= self.seated_fraction <= 1.0:
            raise ValueError("seated_fraction must lie in [0, 1].")

    def reset_task_scenario(self):
        rng = self.env.np_random
        num_cells = self.size * self.size
        picks = rng.choice(num_cells, size=self.num_holes + self.num_boulders + 1, replace=False)
        picks = [int(idx) for idx in picks]

        holes = picks[:self.num_holes]
        boulders = picks[self.num_holes:-1]
        tractor = picks[-1]

        grid = [Cell.UNREACHABLE] * num_cells
        for idx in holes:
            grid[idx] = Cell.HOLE

        # The first num_seated boulders start in a hole of their own
        num_seated = int(round(self.seated_fraction * self.num_boulders))
        for i, idx in enumerate(boulders):
            grid[idx] = Cell.BOULDER_IN_HOLE if i < num_seated else Cell.BOULDER

        logger.debug(f"Random level: holes={holes}, boulders={boulders}, tractor={tractor}")
        return {
            "grid": grid,
            "tractor": tractor,
            "hole_cells": holes,
            "boulder_cells": boulders,
        }
