import pytest

from tractor_boulder_env.planning.explorer import (
    attempt_push,
    explore,
    find_solvable_states,
    initial_state,
)
from tractor_boulder_env.planning.state_graph import StateGraph
from tractor_boulder_env.utils.cell import Cell, is_boulder, symbols_to_state
from tractor_boulder_env.utils.grid_utils import DIRECTIONS, Direction
from tractor_boulder_env.utils.level_utils import parse_level

HOLE_ROWS = ["OOOO"] * 3


def legal_results(state, size):
    results = []
    for idx, cell in enumerate(state):
        if not is_boulder(cell):
            continue
        for direction in DIRECTIONS:
            new_state = attempt_push(state, idx, direction, size)
            if new_state is not None:
                results.append(new_state)
    return results


def test_row_level_states_and_edges():
    grid, tractor, size = parse_level(["B..T"] + HOLE_ROWS)
    graph = find_solvable_states(tractor, grid, size)

    assert len(graph) == 3
    assert graph.get_state(0) == symbols_to_state("B+++" + "O" * 12)
    assert graph.get_state(1) == symbols_to_state(".B++" + "O" * 12)
    assert graph.get_state(2) == symbols_to_state("..B+" + "O" * 12)
    assert [graph.get_neighbors(i) for i in range(3)] == [[1], [2], []]


def test_boulder_leaving_a_hole_reopens_it():
    grid, tractor, size = parse_level(["@..T"] + HOLE_ROWS)
    graph = find_solvable_states(tractor, grid, size)

    assert len(graph) == 3
    assert graph.get_state(1) == symbols_to_state("OB++" + "O" * 12)
    assert graph.get_state(2) == symbols_to_state("O.B+" + "O" * 12)


def test_push_requires_a_boulder(corner_grid):
    root = initial_state(8, corner_grid, 4)
    with pytest.raises(ValueError):
        attempt_push(root, 5, Direction.UP, 4)


def test_push_moves_boulder_and_tractor(corner_grid):
    root = initial_state(8, corner_grid, 4)
    before = list(root)

    result = attempt_push(root, 0, Direction.DOWN, 4)

    assert list(root) == before
    assert result[0] == Cell.HOLE
    assert result[4] == Cell.BOULDER
    # Tractor lands one cell beyond the boulder's new cell
    assert result[8] == Cell.REACHABLE
    reachable = {i for i, cell in enumerate(result) if cell == Cell.REACHABLE}
    assert reachable == {1, 2, 5, 6, 7, 8, 9, 10, 11, 13, 14}


def test_push_off_grid_or_blocked_is_none(corner_grid):
    root = initial_state(8, corner_grid, 4)
    assert attempt_push(root, 0, Direction.UP, 4) is None
    assert attempt_push(root, 0, Direction.LEFT, 4) is None
    assert attempt_push(root, 0, Direction.RIGHT, 4) is not None


def test_push_never_lands_in_a_hole():
    grid, tractor, size = parse_level(["TBO.", "....", "....", "...."])
    root = initial_state(tractor, grid, size)

    assert attempt_push(root, 1, Direction.RIGHT, size) is None
    result = attempt_push(root, 1, Direction.DOWN, size)
    assert result[5] == Cell.BOULDER
    assert result[9] == Cell.REACHABLE


def test_corner_level_terminates(corner_grid):
    graph = find_solvable_states(8, corner_grid, 4)

    assert len(graph) > 1
    assert graph.get_state(0) == initial_state(8, corner_grid, 4)


def test_graph_invariants(corner_grid):
    graph = find_solvable_states(8, corner_grid, 4)
    states = [graph.get_state(i) for i in range(len(graph))]

    assert None not in states
    assert graph.get_state(len(graph)) is None
    assert len(set(states)) == len(states)


def test_edges_list_every_legal_push_in_order(corner_grid):
    graph = find_solvable_states(8, corner_grid, 4)
    for state_id in graph.ids():
        expected = [graph.get_id(s) for s in legal_results(graph.get_state(state_id), 4)]
        assert graph.get_neighbors(state_id) == expected


def test_exploration_is_deterministic(corner_grid):
    first = find_solvable_states(8, list(corner_grid), 4)
    second = find_solvable_states(8, list(corner_grid), 4)
    assert first.to_dict() == second.to_dict()


def test_state_budget_stops_early(corner_grid):
    full = find_solvable_states(8, corner_grid, 4)
    partial = find_solvable_states(8, corner_grid, 4, max_states=5)

    assert len(partial) == 5
    # Discovery order is the same up to the cut
    for state_id in partial.ids():
        assert partial.get_state(state_id) == full.get_state(state_id)


def test_explore_needs_registered_state(corner_grid):
    graph = StateGraph(initial_state(8, corner_grid, 4))
    with pytest.raises(ValueError):
        explore(tuple([Cell.HOLE] * 16), graph, 4)


def test_bad_inputs_fail_fast(corner_grid):
    with pytest.raises(ValueError):
        find_solvable_states(8, corner_grid[:-1], 4)
    with pytest.raises(ValueError):
        find_solvable_states(16, corner_grid, 4)
