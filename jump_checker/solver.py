# region Imports
import logging
import math
from typing import List, Optional, Tuple
import numpy as np

from jump_checker.exceptions import DegenerateAccelerationError
from jump_checker.geometry import as_point
from jump_checker.models import JumpParams, Trajectory
# endregion

log = logging.getLogger(__name__)

# region Existence Test
def speed_discriminant(delta_p: np.ndarray, acceleration: np.ndarray, v_max: float) -> float:
    """
    b1 = dp.a + v_max^2 ; disc = b1^2 - (a.a)(dp.dp)
    """
    b1 = float(np.dot(delta_p, acceleration)) + v_max * v_max
    return b1 * b1 - float(np.dot(acceleration, acceleration)) * float(np.dot(delta_p, delta_p))


def is_speed_feasible(delta_p: np.ndarray, acceleration: np.ndarray, v_max: float) -> bool:
    """
    True when some launch velocity with |v0| <= v_max reaches delta_p under
    acceleration, obstacles ignored.

    The discriminant alone also passes when b1 < 0 (goal straight above with
    v_max == 0), so b1 >= 0 is required too.
    """
    if not np.any(delta_p):
        return True
    if float(np.dot(acceleration, acceleration)) == 0.0:
        # straight-line motion, any positive speed gets there
        return v_max > 0.0
    b1 = float(np.dot(delta_p, acceleration)) + v_max * v_max
    return b1 >= 0.0 and speed_discriminant(delta_p, acceleration, v_max) >= 0.0


def flight_time_window(
    delta_p: np.ndarray,
    acceleration: np.ndarray,
    v_max: float,
) -> Optional[Tuple[float, float]]:
    """
    Range [t_fast, t_slow] of flight times whose launch speed stays within v_max.

    |v0|^2 = dp.dp / T^2 - dp.a + (a.a) T^2 / 4 ; setting it to v_max^2 gives
    T^2 = 2 (b1 -+ sqrt(disc)) / (a.a).
    """
    aa = float(np.dot(acceleration, acceleration))
    if aa == 0.0:
        raise DegenerateAccelerationError("flight time window undefined for zero acceleration")
    if not is_speed_feasible(delta_p, acceleration, v_max):
        return None

    b1 = float(np.dot(delta_p, acceleration)) + v_max * v_max
    root = math.sqrt(max(0.0, speed_discriminant(delta_p, acceleration, v_max)))
    u_lo = 2.0 * (b1 - root) / aa
    u_hi = 2.0 * (b1 + root) / aa
    return math.sqrt(max(0.0, u_lo)), math.sqrt(max(0.0, u_hi))
# endregion

# region Low-energy Arc
def low_energy_flight_time(delta_p: np.ndarray, acceleration: np.ndarray) -> float:
    aa = float(np.dot(acceleration, acceleration))
    if aa == 0.0:
        raise DegenerateAccelerationError("time of flight undefined for zero acceleration")
    t = math.sqrt(math.sqrt(4.0 * float(np.dot(delta_p, delta_p)) / aa))
    # denormal |a|^2 overflows the quotient
    if not math.isfinite(t):
        raise DegenerateAccelerationError(f"acceleration {acceleration} too small for a finite flight time")
    return t


def launch_velocity(delta_p: np.ndarray, acceleration: np.ndarray, t: float) -> np.ndarray:
    return delta_p / t - acceleration * t / 2.0


def _arc(start, goal, acceleration, t, segments) -> Trajectory:
    return Trajectory(
        start=start,
        goal=goal,
        launch_velocity=launch_velocity(goal - start, acceleration, t),
        acceleration=acceleration,
        flight_time=t,
        segments=segments,
    )


def solve_trajectory(start, goal, params: JumpParams) -> Optional[Trajectory]:
    """
    Low-energy candidate arc from start to goal.

    Zero displacement gives a stationary trajectory with zero flight time.
    Zero acceleration, or one too small for a finite flight time, falls back
    to straight-line motion at v_max; None when v_max is also zero.
    """
    start, goal = as_point(start), as_point(goal)
    a = params.gravity
    delta_p = goal - start

    if not np.any(delta_p):
        return Trajectory(start, goal, np.zeros(2), a, 0.0, params.arc_segments)

    try:
        t = low_energy_flight_time(delta_p, a)
    except DegenerateAccelerationError:
        if params.v_max <= 0.0:
            log.debug("zero gravity and zero launch speed; no trajectory")
            return None
        dist = float(np.hypot(*delta_p))
        log.debug("degenerate gravity; straight-line fallback over %.3f units", dist)
        return Trajectory(
            start=start,
            goal=goal,
            launch_velocity=delta_p / dist * params.v_max,
            acceleration=a,
            flight_time=dist / params.v_max,
            segments=params.arc_segments,
        )

    return _arc(start, goal, a, t, params.arc_segments)


def candidate_trajectories(start, goal, params: JumpParams) -> List[Trajectory]:
    """
    Low-energy arc first, then params.extra_arcs arcs spread evenly across the
    speed-legal flight-time window.
    """
    first = solve_trajectory(start, goal, params)
    if first is None:
        return []
    out = [first]
    if params.extra_arcs == 0 or first.flight_time == 0.0:
        return out

    a = params.gravity
    if float(np.dot(a, a)) == 0.0:
        return out
    window = flight_time_window(first.goal - first.start, a, params.v_max)
    if window is None:
        return out

    t_fast, t_slow = window
    if not (math.isfinite(t_fast) and math.isfinite(t_slow)):
        log.debug("flight-time window (%s, %s) not finite; extra arcs skipped", t_fast, t_slow)
        return out
    for t in np.linspace(t_fast, t_slow, params.extra_arcs):
        if t <= 0.0 or math.isclose(t, first.flight_time, rel_tol=1e-9):
            continue
        out.append(_arc(first.start, first.goal, a, float(t), params.arc_segments))
    return out
# endregion
