# tractor_boulder_env/planning/state_graph.py

import logging
from numbers import Integral

import yaml

from tractor_boulder_env.planning.shortest_path import build_shortest_path_from
from tractor_boulder_env.utils.cell import state_to_symbols, symbols_to_state
from tractor_boulder_env.utils.logging_utils import setup_logger

DEFAULT_INIT_LOG_LEVEL = logging.ERROR
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)


class StateGraph:
    """
    Directed graph of grid configurations.

    Configurations live in an append-only list whose positions are their ids,
    with a dict indexing them back by value, so the two views cannot drift
    apart. The root passed to the constructor always has id 0.

    Edges are kept once per push that produces them: two different pushes
    leading to the same configuration give two identical entries.
    """

    def __init__(self, root):
        self._states = []       # id -> configuration
        self._ids = {}          # configuration -> id
        self._neighbors = []    # id -> [neighbor ids]
        self.insert_state(root)

    def __len__(self):
        return len(self._states)

    def __repr__(self):
        return f"StateGraph(states={len(self)}, edges={self.num_edges()})"

    # region ACCESSORS

    def get_neighbors(self, state_id):
        """Returns the neighbor id list of `state_id`, or None for an unknown id."""
        if not self.contains_id(state_id):
            return None
        return self._neighbors[state_id]

    def get_state(self, state_id):
        if not self.contains_id(state_id):
            return None
        return self._states[state_id]

    def get_id(self, state):
        return self._ids.get(tuple(state))

    def contains_id(self, state_id) -> bool:
        return isinstance(state_id, Integral) and 0 <= state_id < len(self._states)

    def contains_state(self, state) -> bool:
        return tuple(state) in self._ids

    def ids(self):
        return range(len(self._states))

    def states(self):
        return iter(self._states)

    def num_edges(self) -> int:
        return sum(len(neighbors) for neighbors in self._neighbors)

    def build_shortest_path_from(self, source):
        return build_shortest_path_from(self, source)

    # endregion

    # region BUILDERS

    def insert_state(self, state) -> int:
        """
        Registers a new configuration and returns its id.

        Raises:
            ValueError: if the configuration is already in the graph. Callers
                check `contains_state` first.
        """
        state = tuple(state)
        if state in self._ids:
            raise ValueError(f"State already in graph with id {self._ids[state]}")

        state_id = len(self._states)
        self._states.append(state)
        self._ids[state] = state_id
        self._neighbors.append([])
        return state_id

    def connect_states(self, from_state, to_state):
        """
        Records that `to_state` is reached from `from_state` by one push.

        Raises:
            ValueError: if either configuration was never inserted.
        """
        from_id = self._ids.get(tuple(from_state))
        if from_id is None:
            raise ValueError("Cannot connect from a state that is not in the graph.")
        to_id = self._ids.get(tuple(to_state))
        if to_id is None:
            raise ValueError("Cannot connect to a state that is not in the graph.")
        self._neighbors[from_id].append(to_id)

    # endregion

    # region SERIALIZATION

    def to_dict(self) -> dict:
        """
        Returns the graph as plain mappings: configuration symbols -> id,
        id -> configuration symbols, id -> ordered neighbor ids.
        """
        symbols = [state_to_symbols(state) for state in self._states]
        return {
            "state_to_id": {s: i for i, s in enumerate(symbols)},
            "id_to_state": {i: s for i, s in enumerate(symbols)},
            "neighbors": {i: list(n) for i, n in enumerate(self._neighbors)},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StateGraph":
        """Rebuilds a graph from `to_dict` output, keeping ids and edge order."""
        try:
            id_to_state = {int(k): v for k, v in data["id_to_state"].items()}
            state_to_id = {k: int(v) for k, v in data["state_to_id"].items()}
            neighbors = {int(k): [int(n) for n in v] for k, v in data["neighbors"].items()}
        except (KeyError, AttributeError, TypeError) as e:
            raise ValueError(f"Malformed state graph data: {e}") from e

        count = len(id_to_state)
        if count == 0:
            raise ValueError("Serialized state graph has no states.")
        if set(id_to_state) != set(range(count)):
            raise ValueError("State ids must be exactly 0..N-1.")
        if state_to_id != {s: i for i, s in id_to_state.items()}:
            raise ValueError("state_to_id and id_to_state disagree.")
        if set(neighbors) - set(range(count)):
            raise ValueError("Neighbor lists reference unknown source ids.")

        graph = cls(symbols_to_state(id_to_state[0]))
        for state_id in range(1, count):
            graph.insert_state(symbols_to_state(id_to_state[state_id]))
        for state_id in range(count):
            targets = neighbors.get(state_id, [])
            for target in targets:
                if not graph.contains_id(target):
                    raise ValueError(f"Edge {state_id} -> {target} points to an unknown id.")
            graph._neighbors[state_id] = list(targets)
        return graph

    def save(self, path):
        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
        logger.info(f"Saved state graph ({len(self)} states) to {path}")

    @classmethod
    def load(cls, path) -> "StateGraph":
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path} does not contain a serialized state graph.")
        graph = cls.from_dict(data)
        logger.info(f"Loaded state graph ({len(graph)} states) from {path}")
        return graph

    # endregion
