# region Imports
import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple
import numpy as np

from jump_checker.astar_core import astar
from jump_checker.models import GraphNode, JumpParams, Level
from jump_checker.reachability import check_jump
# endregion

log = logging.getLogger(__name__)

JumpEdges = Dict[int, List[Tuple[int, float]]]

# region Edge Building
def build_jump_edges(
    nodes: Sequence[GraphNode],
    level: Level,
    params: Optional[JumpParams] = None,
    *,
    max_distance: Optional[float] = None,
) -> JumpEdges:
    """
    Directed jump edges between every ordered node pair, cost = |dp|.

    Anchors are validated first so a bad node fails before any query runs.
    The level must not change while this runs.
    """
    params = params or JumpParams()
    for node in nodes:
        level.validate_node(node)

    edges: JumpEdges = {i: [] for i in range(len(nodes))}
    checked = 0
    for i, a in enumerate(nodes):
        for j, b in enumerate(nodes):
            if i == j:
                continue
            dist = float(np.hypot(*(b.position - a.position)))
            if max_distance is not None and dist > max_distance:
                continue
            checked += 1
            if check_jump(a, b, level, params).feasible:
                edges[i].append((j, dist))

    log.info("checked %d node pairs, kept %d jump edges",
             checked, sum(len(v) for v in edges.values()))
    return edges
# endregion

# region Route Search
def find_jump_route(
    start: int,
    goal: int,
    nodes: Sequence[GraphNode],
    edges: JumpEdges,
):
    """A* over node indices; returns (path, cost) or (None, inf)."""
    def neigh(u):
        return edges.get(u, ())

    def h(u, g):
        d = nodes[g].position - nodes[u].position
        return math.hypot(d[0], d[1])

    path, cost, expansions = astar(start, goal, neigh, h)
    log.debug("route %d -> %d: %s after %d expansions",
              start, goal, "found" if path else "none", expansions)
    return path, cost
# endregion
