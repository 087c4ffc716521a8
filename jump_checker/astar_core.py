# region Imports
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Tuple
import heapq
# endregion

# region Path Reconstruction
def reconstruct(parent, goal):
    path = []
    v = goal
    while v is not None:
        path.append(v)
        v = parent.get(v)
    path.reverse()
    return path
# endregion

# region A* Algorithm
def astar(
    start: Hashable,
    goal: Hashable,
    neighbors_fn: Callable[[Hashable], Iterable[Tuple[Hashable, float]]],
    heuristic_fn: Callable[[Hashable, Hashable], float],
    *,
    weight: float = 1.0,
    max_expansions: Optional[int] = None,
):
    """
    Returns:
      path (list of nodes or None), total_cost, expansions

    neighbors_fn yields (node, edge_cost) pairs. weight > 1.0 gives weighted
    A* (f = g + weight*h), no longer optimal.
    """
    if start == goal:
        return [start], 0.0, 0

    counter = 0
    openh: List[Tuple[float, float, int, Hashable]] = []
    h0 = heuristic_fn(start, goal)
    heapq.heappush(openh, (h0 * weight, h0, counter, start))
    g: Dict[Hashable, float] = {start: 0.0}
    parent = {start: None}
    closed = set()
    expansions = 0

    while openh:
        f, h, _, u = heapq.heappop(openh)
        if u in closed:
            continue
        closed.add(u)
        expansions += 1

        if u == goal:
            return reconstruct(parent, u), g[u], expansions
        if max_expansions is not None and expansions >= max_expansions:
            break

        gu = g[u]
        # region Neighbor Loop
        for v, c in neighbors_fn(u):
            if v in closed:
                continue
            alt = gu + c
            old = g.get(v)
            if old is None or alt < old - 1e-12:
                g[v] = alt
                parent[v] = u
                hv = heuristic_fn(v, goal)
                counter += 1
                heapq.heappush(openh, (alt + weight * hv, hv, counter, v))
        # endregion

    return None, float("inf"), expansions
# endregion
