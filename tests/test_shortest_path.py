import pytest

from tractor_boulder_env.planning.shortest_path import ShortestPathTree, build_shortest_path_from
from tractor_boulder_env.planning.state_graph import StateGraph
from tractor_boulder_env.utils.cell import Cell

EDGES = {
    0: [1, 2],
    1: [3, 3],
    2: [3],
    3: [4],
    4: [0],
    5: [0],
}


def make_state(i):
    state = [Cell.UNREACHABLE] * 9
    state[i] = Cell.BOULDER
    return tuple(state)


def build_graph():
    graph = StateGraph(make_state(0))
    for i in range(1, 6):
        graph.insert_state(make_state(i))
    for source, targets in EDGES.items():
        for target in targets:
            graph.connect_states(make_state(source), make_state(target))
    return graph


def brute_force_distances(edges, source):
    # Relax every edge until nothing changes
    dist = {source: 0}
    changed = True
    while changed:
        changed = False
        for u, targets in edges.items():
            if u not in dist:
                continue
            for v in targets:
                if v not in dist or dist[u] + 1 < dist[v]:
                    dist[v] = dist[u] + 1
                    changed = True
    return dist


def test_distances_are_minimal():
    graph = build_graph()
    for source in graph.ids():
        tree = build_shortest_path_from(graph, source)
        assert tree.distances == brute_force_distances(EDGES, source)


def test_unreachable_ids_are_absent():
    tree = build_graph().build_shortest_path_from(0)
    assert len(tree) == 5
    assert 5 not in tree
    assert tree.distance_to(5) is None
    assert tree.path_to(5) is None


def test_parents_follow_first_discovery():
    tree = build_graph().build_shortest_path_from(0)
    assert tree.parent_of(0) is None
    assert tree.parent_of(3) == 1
    assert tree.path_to(4) == [0, 1, 3, 4]
    assert tree.path_to(0) == [0]


def test_unknown_source_is_a_lookup_miss():
    assert build_shortest_path_from(build_graph(), 42) is None


def test_tree_insert_checks_parent():
    tree = ShortestPathTree(0)
    tree.insert(0, 1)
    assert tree.distance_to(1) == 1
    with pytest.raises(ValueError):
        tree.insert(7, 2)
    with pytest.raises(ValueError):
        tree.insert(0, 1)
