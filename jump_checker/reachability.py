# region Imports
import logging
from typing import Iterable, Optional, Sequence, Tuple, Union
import numpy as np

from jump_checker.exceptions import InvalidParamsError
from jump_checker.geometry import as_point
from jump_checker.models import GraphNode, JumpParams, Level, ReachabilityResult
from jump_checker.solver import candidate_trajectories, is_speed_feasible, speed_discriminant
from jump_checker.sweep import anchor_exclusions, sweep_trajectory
# endregion

log = logging.getLogger(__name__)

# region Node Pair Check
def check_jump(
    start_node: GraphNode,
    goal_node: GraphNode,
    level: Union[Level, Sequence],
    params: Optional[JumpParams] = None,
) -> ReachabilityResult:
    """
    Feasible iff some launch velocity within params.v_max reaches the goal
    and a tested candidate arc, thickened by params.radius, clears every
    obstacle edge the two nodes are not anchored to.

    Only the low-energy arc is tested unless params.extra_arcs > 0. The
    trajectory on the result is the one that cleared, else the low-energy arc.
    """
    params = params or JumpParams()
    polygons = level.polygons if isinstance(level, Level) else level
    a = params.gravity
    delta_p = goal_node.position - start_node.position
    disc = speed_discriminant(delta_p, a, params.v_max)

    arcs = candidate_trajectories(start_node.position, goal_node.position, params)
    if arcs and arcs[0].flight_time == 0.0:
        return ReachabilityResult(True, True, disc, trajectory=arcs[0])

    speed_ok = is_speed_feasible(delta_p, a, params.v_max)
    if not speed_ok or not arcs:
        return ReachabilityResult(False, speed_ok, disc, trajectory=arcs[0] if arcs else None)

    excluded = anchor_exclusions(start_node, goal_node)
    first_hit = None
    for n, arc in enumerate(arcs, start=1):
        swept, col = sweep_trajectory(arc, polygons, params.radius, excluded)
        if col is None and not np.all(np.isfinite(swept.points)):
            log.warning("arc %d has non-finite samples; treated as blocked", n)
            continue
        if col is None:
            return ReachabilityResult(True, True, disc, trajectory=arc, arcs_tested=n)
        if first_hit is None:
            first_hit = col

    log.debug("jump blocked on all %d candidate arc(s)", len(arcs))
    return ReachabilityResult(
        feasible=False,
        speed_feasible=True,
        discriminant=disc,
        trajectory=arcs[0],
        hit_point=None if first_hit is None else first_hit.point,
        hit_polygon=None if first_hit is None else first_hit.polygon_index,
        hit_edge=None if first_hit is None else first_hit.edge_index,
        arcs_tested=len(arcs),
    )
# endregion

# region Flat Entry Point
def is_jump_feasible(
    start_position,
    start_attached_edges: Iterable[int],
    start_polygon_index: int,
    goal_position,
    goal_attached_edges: Iterable[int],
    goal_polygon_index: int,
    level_polygons: Sequence,
    gravity,
    max_launch_speed: float,
    agent_radius: float,
    *,
    arc_segments: Optional[int] = None,
    extra_arcs: int = 0,
    return_hit: bool = False,
) -> Union[bool, Tuple[bool, Optional[np.ndarray]]]:
    """
    Boolean verdict for one node pair given as plain values.

    Anchors are not validated here; build nodes through Level.make_node to
    reject bad edge indices up front.
    """
    for name, value in (("gravity", gravity), ("max_launch_speed", max_launch_speed),
                        ("agent_radius", agent_radius)):
        if value is None:
            raise InvalidParamsError(f"{name} is required")
    params = JumpParams.from_dict({
        "gravity": gravity,
        "v_max": max_launch_speed,
        "radius": agent_radius,
        "arc_segments": arc_segments,
        "extra_arcs": extra_arcs,
    })
    start = GraphNode(as_point(start_position), int(start_polygon_index),
                      frozenset(int(k) for k in start_attached_edges))
    goal = GraphNode(as_point(goal_position), int(goal_polygon_index),
                     frozenset(int(k) for k in goal_attached_edges))

    result = check_jump(start, goal, level_polygons, params)
    if return_hit:
        return result.feasible, result.hit_point
    return result.feasible
# endregion
