# tractor_boulder_env/planning/shortest_path.py

from collections import deque


class ShortestPathTree:
    """
    BFS tree over a state graph, rooted at `source`.

    Every discovered id maps to the id it was first reached from (the source
    maps to None) and to its push count from the source. Ids with no directed
    path from the source are simply absent.
    """

    def __init__(self, source: int):
        self.source = source
        self.parents = {source: None}
        self.distances = {source: 0}

    def __len__(self):
        return len(self.parents)

    def __contains__(self, state_id):
        return state_id in self.parents

    def insert(self, parent: int, child: int):
        """Hangs `child` under `parent`, which must already be in the tree."""
        if parent not in self.parents:
            raise ValueError(f"Parent {parent} is not in the tree.")
        if child in self.parents:
            raise ValueError(f"Node {child} is already in the tree.")
        self.parents[child] = parent
        self.distances[child] = self.distances[parent] + 1

    def contains(self, state_id) -> bool:
        return state_id in self.parents

    def parent_of(self, state_id):
        return self.parents.get(state_id)

    def distance_to(self, state_id):
        return self.distances.get(state_id)

    def path_to(self, state_id):
        """Returns the ids from the source to `state_id` (inclusive), or None."""
        if state_id not in self.parents:
            return None
        path = [state_id]
        while path[-1] != self.source:
            path.append(self.parents[path[-1]])
        path.reverse()
        return path


def build_shortest_path_from(graph, source: int):
    """
    Breadth-first walk of `graph` from `source`.

    Returns:
        ShortestPathTree, or None when `source` is not an id of `graph`.
    """
    if not graph.contains_id(source):
        return None

    tree = ShortestPathTree(source)
    visited = {source}
    queue = deque([source])
    while queue:
        current = queue.popleft()
        for neighbor in graph.get_neighbors(current) or []:
            if neighbor in visited:
                continue
            visited.add(neighbor)
            tree.insert(current, neighbor)
            queue.append(neighbor)
    return tree
