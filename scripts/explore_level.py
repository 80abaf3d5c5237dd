# scripts/explore_level.py
"""Explore a level's full state space and print what was found.

Usage: python scripts/explore_level.py [level_file] [graph_out.yaml]
"""

import sys
import time

from tractor_boulder_env.planning.explorer import find_solvable_states
from tractor_boulder_env.planning.solver import Solver
from tractor_boulder_env.utils.level_utils import format_grid, parse_level

DEFAULT_LEVEL = """
@..@
....
T...
@..@
"""

if __name__ == "__main__":
    level_text = DEFAULT_LEVEL
    if len(sys.argv) > 1:
        with open(sys.argv[1], "r") as f:
            level_text = f.read()

    grid, tractor, size = parse_level(level_text)
    print(f"Level ({size}x{size}), tractor at {tractor}:")
    print(format_grid(grid, size, tractor=tractor))

    start = time.time()
    graph = find_solvable_states(tractor, grid, size)
    print(f"\n{len(graph)} states, {graph.num_edges()} pushes, explored in {time.time() - start:.2f}s")

    tree = graph.build_shortest_path_from(0)
    deepest = max(tree.distances, key=tree.distances.get)
    print(f"Farthest state {deepest} is {tree.distance_to(deepest)} pushes away:")
    print(format_grid(graph.get_state(deepest), size))

    plan = Solver(size).solve(grid, tractor)
    print(f"\nShortest plan to seat every boulder: {plan}")

    if len(sys.argv) > 2:
        graph.save(sys.argv[2])
        print(f"Graph written to {sys.argv[2]}")
