# tractor_boulder_env/planning/explorer.py

import logging

from tractor_boulder_env.planning.state_graph import StateGraph
from tractor_boulder_env.utils.cell import Cell, is_boulder
from tractor_boulder_env.utils.grid_utils import (
    DIRECTIONS,
    check_grid,
    clear_reachable_cells,
    fill_reachable_cells,
    move_one,
)
from tractor_boulder_env.utils.logging_utils import setup_logger

DEFAULT_INIT_LOG_LEVEL = logging.ERROR
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)

PROGRESS_LOG_EVERY = 10000


def attempt_push(grid, boulder: int, direction, size: int):
    """
    Tries to move the boulder at `boulder` one cell in `direction`.

    The push is legal when the cell the boulder moves into and the cell
    beyond it (where the tractor ends up) are both in the grid and marked
    REACHABLE in `grid`. `grid` must carry the reachability markers of its
    own flood-fill.

    Args:
        grid: configuration to push in; never modified.
        boulder (int): index of a BOULDER or BOULDER_IN_HOLE cell.
        direction (Direction): push direction.
        size (int): grid side length.

    Returns:
        tuple or None: the resulting configuration, with reachability
        recomputed from the tractor's new cell, or None if the push is illegal.

    Raises:
        ValueError: if `grid[boulder]` holds no boulder.
    """
    if not is_boulder(grid[boulder]):
        raise ValueError(f"Cell {boulder} holds {Cell(grid[boulder]).name}, not a boulder.")

    new_boulder = move_one(boulder, direction, size)
    if new_boulder is None or grid[new_boulder] != Cell.REACHABLE:
        return None
    new_tractor = move_one(new_boulder, direction, size)
    if new_tractor is None or grid[new_tractor] != Cell.REACHABLE:
        return None

    new_grid = list(grid)
    if new_grid[boulder] == Cell.BOULDER:
        new_grid[boulder] = Cell.UNREACHABLE
    else:
        new_grid[boulder] = Cell.HOLE
    # A boulder only ever lands on a REACHABLE cell, so never straight into a hole.
    new_grid[new_boulder] = Cell.BOULDER

    clear_reachable_cells(new_grid)
    fill_reachable_cells(new_tractor, new_grid, size)
    return tuple(new_grid)


def _push_results(state, size: int):
    """Yields every configuration one legal push away, in exploration order."""
    for idx, cell in enumerate(state):
        if not is_boulder(cell):
            continue
        for direction in DIRECTIONS:
            new_state = attempt_push(state, idx, direction, size)
            if new_state is not None:
                yield new_state


def explore(state, graph: StateGraph, size: int, max_states: int = None) -> bool:
    """
    Depth-first discovery of every configuration reachable from `state`.

    `state` must already be in `graph`. A configuration seen for the first
    time is inserted, connected and fully explored before the pushes after it
    are tried; one already in the graph only gains an edge. A stack of
    per-state push generators stands in for recursion and keeps that order.

    Args:
        max_states (int, optional): stop once the graph holds this many states
            and another unseen one turns up. None explores everything.

    Returns:
        bool: True if exploration finished, False if `max_states` cut it short.
    """
    state = tuple(state)
    if not graph.contains_state(state):
        raise ValueError("Exploration must start from a state already in the graph.")

    stack = [(state, _push_results(state, size))]
    while stack:
        current, pending = stack[-1]
        new_state = next(pending, None)
        if new_state is None:
            stack.pop()
            continue

        if graph.contains_state(new_state):
            graph.connect_states(current, new_state)
            continue

        if max_states is not None and len(graph) >= max_states:
            logger.warning(f"State budget of {max_states} reached; exploration stopped early.")
            return False

        graph.insert_state(new_state)
        graph.connect_states(current, new_state)
        if len(graph) % PROGRESS_LOG_EVERY == 0:
            logger.debug(f"Discovered {len(graph)} states, stack depth {len(stack)}")
        stack.append((new_state, _push_results(new_state, size)))

    return True


def initial_state(tractor: int, grid, size: int) -> tuple:
    """
    Turns a level grid into a configuration: the tractor's cell is emptied
    and every cell it can drive to is marked REACHABLE.
    """
    check_grid(grid, size)
    if not 0 <= tractor < size * size:
        raise ValueError(f"Tractor index {tractor} is outside a {size}x{size} grid.")

    state = [Cell(cell) for cell in grid]
    state[tractor] = Cell.UNREACHABLE
    clear_reachable_cells(state)
    fill_reachable_cells(tractor, state, size)
    return tuple(state)


def find_solvable_states(tractor: int, grid, size: int, max_states: int = None) -> StateGraph:
    """
    Explores every configuration reachable from `grid` with the tractor at
    `tractor` and returns them as a StateGraph whose root (id 0) is the
    initial grid with its reachable cells marked.
    """
    root = initial_state(tractor, grid, size)
    graph = StateGraph(root)
    complete = explore(root, graph, size, max_states=max_states)
    logger.info(
        f"Exploration {'finished' if complete else 'stopped'}: "
        f"{len(graph)} states, {graph.num_edges()} pushes"
    )
    return graph
