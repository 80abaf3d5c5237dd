from tractor_boulder_env.planning.state_graph import StateGraph
from tractor_boulder_env.planning.shortest_path import ShortestPathTree, build_shortest_path_from
from tractor_boulder_env.planning.explorer import attempt_push, explore, find_solvable_states
from tractor_boulder_env.planning.solver import Solver
