# tractor_boulder_env/utils/grid_utils.py

from collections import deque
from enum import Enum

from tractor_boulder_env.utils.cell import Cell, is_traversable


class Direction(Enum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


# Scan order for every neighbor walk; exploration and edge order depend on it.
DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def to_index(row: int, col: int, size: int) -> int:
    return row * size + col


def to_row_col(idx: int, size: int) -> tuple:
    return divmod(idx, size)


def move_one(idx: int, direction: Direction, size: int):
    """
    Returns the index one step from `idx` in `direction`, or None if that
    step leaves the size x size grid.
    """
    row, col = to_row_col(idx, size)
    if direction is Direction.UP:
        return None if row == 0 else to_index(row - 1, col, size)
    if direction is Direction.DOWN:
        return None if row >= size - 1 else to_index(row + 1, col, size)
    if direction is Direction.LEFT:
        return None if col == 0 else to_index(row, col - 1, size)
    if direction is Direction.RIGHT:
        return None if col >= size - 1 else to_index(row, col + 1, size)
    raise ValueError(f"Unknown direction {direction!r}")


def neighbors_of(idx: int, size: int):
    """Yields in-grid neighbor indices in DIRECTIONS order."""
    for direction in DIRECTIONS:
        neighbor = move_one(idx, direction, size)
        if neighbor is not None:
            yield neighbor


def check_grid(grid, size: int):
    """Raises ValueError unless `grid` is a flat size x size cell sequence."""
    if size <= 0:
        raise ValueError(f"Grid size must be positive, got {size}")
    if len(grid) != size * size:
        raise ValueError(f"Grid has {len(grid)} cells, expected {size * size} for size {size}")


def fill_reachable_cells(start: int, grid: list, size: int) -> int:
    """
    Marks, in place, every cell the tractor can drive to from `start` as
    Cell.REACHABLE. Only UNREACHABLE cells are entered; holes and boulders
    block the fill. Stale REACHABLE markers must be cleared beforehand.

    Returns:
        int: number of cells newly marked reachable.
    """
    if grid[start] != Cell.UNREACHABLE:
        return 0

    grid[start] = Cell.REACHABLE
    marked = 1
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in neighbors_of(current, size):
            if grid[neighbor] == Cell.UNREACHABLE:
                grid[neighbor] = Cell.REACHABLE
                marked += 1
                queue.append(neighbor)
    return marked


def clear_reachable_cells(grid: list):
    """Turns every REACHABLE marker back into UNREACHABLE, in place."""
    for idx, cell in enumerate(grid):
        if cell == Cell.REACHABLE:
            grid[idx] = Cell.UNREACHABLE


def grid_to_movement_graph(grid, size: int) -> dict:
    """
    Builds the tractor's movement graph: traversable cell -> traversable
    neighbors, in DIRECTIONS order. Non-traversable cells have no entry.
    """
    graph = {}
    for idx, cell in enumerate(grid):
        if not is_traversable(cell):
            continue
        graph[idx] = [n for n in neighbors_of(idx, size) if is_traversable(grid[n])]
    return graph


def walk_graph_from(start: int, graph: dict) -> set:
    """Collects every node reachable from `start` in a movement graph."""
    if start not in graph:
        return set()

    visited = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in graph.get(current, []):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return visited
