# region Imports
from dataclasses import dataclass
import logging
from typing import AbstractSet, Iterable, Optional, Sequence, Set, Tuple
import numpy as np

from jump_checker.geometry import batch_line_intersect, unit_normal
from jump_checker.models import GraphNode, Polygon, Trajectory
# endregion

log = logging.getLogger(__name__)

# region Types
@dataclass(frozen=True, eq=False)
class Collision:
    point: np.ndarray
    polygon_index: int
    edge_index: int
    segment_index: int


@dataclass(frozen=True, eq=False)
class SweptArc:
    """Arc samples plus the rails tested against obstacles, in segment-major order."""
    points: np.ndarray        # (S+1,2)
    rail_starts: np.ndarray   # (K,2)
    rail_ends: np.ndarray     # (K,2)
    rail_segment: np.ndarray  # (K,) index of the arc segment each rail belongs to
# endregion

# region Rails
def sweep_rails(points: np.ndarray, radius: float) -> SweptArc:
    """
    Centre line of every arc segment plus its two copies offset by +-radius
    along the segment normal. End caps are not modelled.
    """
    points = np.asarray(points, dtype=np.float64)
    starts, ends, seg = [], [], []
    for i in range(len(points) - 1):
        p0, p1 = points[i], points[i + 1]
        starts.append(p0); ends.append(p1); seg.append(i)
        if radius <= 0.0:
            continue
        n = unit_normal(p0, p1)
        if n is None:
            continue
        off = n * radius
        starts.append(p0 + off); ends.append(p1 + off); seg.append(i)
        starts.append(p0 - off); ends.append(p1 - off); seg.append(i)

    if not starts:
        empty = np.zeros((0, 2))
        return SweptArc(points, empty, empty, np.zeros(0, dtype=int))
    return SweptArc(points, np.array(starts), np.array(ends), np.array(seg, dtype=int))
# endregion

# region Exclusions
def anchor_exclusions(*nodes: Optional[GraphNode]) -> Set[Tuple[int, int]]:
    """(polygon_index, edge_index) pairs the given nodes stand on."""
    out: Set[Tuple[int, int]] = set()
    for node in nodes:
        if node is None:
            continue
        out.update((node.polygon_index, k) for k in node.edge_indices)
    return out
# endregion

# region Collision Search
def _as_polygon(poly) -> Polygon:
    return poly if isinstance(poly, Polygon) else Polygon(poly)


def find_first_collision(
    swept: SweptArc,
    polygons: Sequence,
    excluded: AbstractSet[Tuple[int, int]] = frozenset(),
) -> Optional[Collision]:
    """
    First rail/edge intersection in polygon, edge, arc-segment order.

    Edges listed in `excluded` are never tested; polygons with fewer than two
    points have no edges and are skipped.
    """
    if len(swept.rail_starts) == 0:
        return None

    for pi, poly in enumerate(polygons):
        poly = _as_polygon(poly)
        if poly.edge_count == 0:
            log.debug("polygon %d has %d point(s); skipped", pi, len(poly.points))
            continue

        for k in range(poly.edge_count):
            if (pi, k) in excluded:
                continue
            q1, q2 = poly.edge(k)
            hit, where = batch_line_intersect(swept.rail_starts, swept.rail_ends, q1, q2)
            if not hit.any():
                continue
            j = int(np.argmax(hit))
            col = Collision(where[j].copy(), pi, k, int(swept.rail_segment[j]))
            log.debug("arc blocked by polygon %d edge %d at (%.3f, %.3f)",
                      pi, k, col.point[0], col.point[1])
            return col
    return None


def sweep_trajectory(
    trajectory: Trajectory,
    polygons: Sequence,
    radius: float,
    excluded: AbstractSet[Tuple[int, int]] = frozenset(),
) -> Tuple[SweptArc, Optional[Collision]]:
    swept = sweep_rails(trajectory.sample(), radius)
    return swept, find_first_collision(swept, polygons, excluded)


def is_sweep_clear(
    trajectory: Trajectory,
    polygons: Sequence,
    radius: float,
    excluded: Iterable[Tuple[int, int]] = (),
) -> bool:
    _, col = sweep_trajectory(trajectory, polygons, radius, frozenset(excluded))
    return col is None
# endregion
