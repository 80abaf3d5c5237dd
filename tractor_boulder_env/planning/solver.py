# solver.py

import logging

from tractor_boulder_env.planning.explorer import attempt_push, find_solvable_states
from tractor_boulder_env.utils.cell import Cell, is_boulder
from tractor_boulder_env.utils.grid_utils import DIRECTIONS
from tractor_boulder_env.utils.logging_utils import setup_logger

DEFAULT_INIT_LOG_LEVEL = logging.ERROR
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)


class Solver:
    """
    Shortest push planner for the tractor/boulder puzzle.

    The whole state graph reachable from the start grid is enumerated, a BFS
    tree is grown from its root, and the closest configuration satisfying the
    goal is traced back to a list of pushes.

    A push is a tuple (boulder cell index, Direction).
    """

    def __init__(self, size, max_states=None):
        self.size = size
        self.max_states = max_states
        self.graph = None

    @staticmethod
    def is_goal(state):
        """Default goal: no boulder left outside a hole."""
        return Cell.BOULDER not in state

    def find_push(self, from_state, to_state):
        """
        Recovers the push that turns `from_state` into `to_state`.

        Returns:
            tuple or None: (boulder index, Direction), the first match in
            exploration order, or None if no single push does it.
        """
        to_state = tuple(to_state)
        for idx, cell in enumerate(from_state):
            if not is_boulder(cell):
                continue
            for direction in DIRECTIONS:
                if attempt_push(from_state, idx, direction, self.size) == to_state:
                    return idx, direction
        return None

    def solve(self, grid, tractor, goal=None):
        """
        Finds a minimal push sequence from `grid` to a goal configuration.

        Args:
            grid: flat cell sequence.
            tractor (int): tractor start index.
            goal (callable, optional): predicate over configurations.
                Defaults to `is_goal`.

        Returns:
            list or None: pushes to apply in order ([] if the start already
            satisfies the goal), or None if no goal configuration is reachable.
        """
        goal = goal or self.is_goal
        self.graph = find_solvable_states(tractor, grid, self.size, max_states=self.max_states)
        tree = self.graph.build_shortest_path_from(0)

        goal_ids = [i for i in self.graph.ids() if i in tree and goal(self.graph.get_state(i))]
        if not goal_ids:
            logger.info(f"No goal state among {len(self.graph)} reachable states.")
            return None

        # Nearest goal; ties go to the earliest discovered state
        target = min(goal_ids, key=lambda i: (tree.distance_to(i), i))
        path = tree.path_to(target)

        plan = []
        for from_id, to_id in zip(path, path[1:]):
            push = self.find_push(self.graph.get_state(from_id), self.graph.get_state(to_id))
            if push is None:
                raise RuntimeError(f"Edge {from_id} -> {to_id} has no matching push.")
            plan.append(push)

        logger.info(f"Plan of {len(plan)} pushes to state {target}.")
        return plan
