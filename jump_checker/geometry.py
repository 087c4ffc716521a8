# region Imports
from typing import Optional, Tuple
import numpy as np
from jump_checker.config import PARALLEL_EPS
# endregion

# region Vector Helpers
def vec2(x: float, y: float) -> np.ndarray:
    return np.array([x, y], dtype=np.float64)


def as_point(p) -> np.ndarray:
    """Coerce any (x, y) pair into a float64 vector of shape (2,)."""
    arr = np.asarray(p, dtype=np.float64).reshape(-1)
    if arr.shape != (2,):
        raise ValueError(f"expected a 2D point, got shape {np.shape(p)}")
    return arr


def perp(v: np.ndarray) -> np.ndarray:
    # 90 degrees counter-clockwise
    return np.array([-v[1], v[0]], dtype=np.float64)


def unit_normal(p0: np.ndarray, p1: np.ndarray) -> Optional[np.ndarray]:
    """Left-hand unit normal of the segment p0 -> p1, None for zero length."""
    d = p1 - p0
    n = float(np.hypot(d[0], d[1]))
    if n <= 1e-12:
        return None
    return perp(d / n)
# endregion

# region Segment Intersection
def batch_line_intersect(
    p1s: np.ndarray,
    p2s: np.ndarray,
    q1: np.ndarray,
    q2: np.ndarray,
    eps: float = PARALLEL_EPS,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Intersections of many segments (K,2)-(K,2) against one edge q1-q2.

    Solves p1 + t*r == q1 + u*s per row and accepts t, u in [0, 1]. Parallel
    and collinear rows report no hit, even when they overlap.

    Returns (hit_mask (K,), points (K,2)); rows with no hit hold NaN.
    """
    r = p2s - p1s                      # (K,2)
    s = q2 - q1                        # (2,)
    qp = q1[None, :] - p1s             # (K,2)

    denom = r[:, 0] * s[1] - r[:, 1] * s[0]
    ok = np.abs(denom) >= eps
    safe = np.where(ok, denom, 1.0)

    t = (qp[:, 0] * s[1] - qp[:, 1] * s[0]) / safe
    u = (qp[:, 0] * r[:, 1] - qp[:, 1] * r[:, 0]) / safe
    hit = ok & (t >= 0.0) & (t <= 1.0) & (u >= 0.0) & (u <= 1.0)

    pts = np.full_like(p1s, np.nan)
    pts[hit] = p1s[hit] + t[hit, None] * r[hit]
    return hit, pts
# endregion
