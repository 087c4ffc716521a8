# tests/test_solver.py
import math

import numpy as np
import pytest

from jump_checker.exceptions import DegenerateAccelerationError
from jump_checker.geometry import vec2
from jump_checker.models import JumpParams
from jump_checker.solver import (
    candidate_trajectories,
    flight_time_window,
    is_speed_feasible,
    launch_velocity,
    low_energy_flight_time,
    solve_trajectory,
    speed_discriminant,
)

G = vec2(0.0, -0.5)
DP = vec2(100.0, 0.0)


# ---- existence test ----
def test_discriminant_for_flat_jump():
    # b1 = 64 ; 64^2 - 0.25 * 100^2
    assert speed_discriminant(DP, G, 8.0) == pytest.approx(1596.0)
    assert is_speed_feasible(DP, G, 8.0)


def test_feasibility_is_monotone_in_v_max():
    for dp in (vec2(100, 0), vec2(30, 60), vec2(-80, -40), vec2(0, 25)):
        verdicts = [is_speed_feasible(dp, G, v) for v in np.linspace(12.0, 0.0, 49)]
        # once infeasible, stays infeasible as v_max shrinks
        first_false = verdicts.index(False) if False in verdicts else len(verdicts)
        assert not any(verdicts[first_false:])

        discs = [speed_discriminant(dp, G, v) for v in np.linspace(12.0, 0.0, 49)]
        feasible_discs = [d for d, ok in zip(discs, verdicts) if ok]
        assert feasible_discs == sorted(feasible_discs, reverse=True)


def test_goal_straight_above_with_zero_speed_is_infeasible():
    dp = vec2(0.0, 10.0)
    # the bare discriminant is exactly zero here
    assert speed_discriminant(dp, G, 0.0) == pytest.approx(0.0)
    assert not is_speed_feasible(dp, G, 0.0)


def test_flat_jump_needs_sqrt_50():
    assert is_speed_feasible(DP, G, 7.1)
    assert not is_speed_feasible(DP, G, 7.0)


# ---- low-energy arc ----
def test_low_energy_arc_for_flat_jump():
    t = low_energy_flight_time(DP, G)
    assert t == pytest.approx(20.0)
    assert np.allclose(launch_velocity(DP, G, t), [5.0, 5.0])


def test_low_energy_arc_is_within_speed_bound_when_feasible():
    params = JumpParams(gravity=G, v_max=8.0)
    for goal in ((100, 0), (40, 50), (-60, -90), (10, 60)):
        if not is_speed_feasible(vec2(*goal), G, params.v_max):
            continue
        traj = solve_trajectory((0, 0), goal, params)
        assert traj.launch_speed <= params.v_max + 1e-9
        assert np.allclose(traj.position(traj.flight_time), goal)


def test_zero_acceleration_is_degenerate():
    with pytest.raises(DegenerateAccelerationError):
        low_energy_flight_time(DP, vec2(0, 0))
    with pytest.raises(DegenerateAccelerationError):
        flight_time_window(DP, vec2(0, 0), 8.0)


def test_zero_gravity_falls_back_to_straight_line():
    params = JumpParams(gravity=(0, 0), v_max=5.0)
    traj = solve_trajectory((0, 0), (30, 40), params)
    assert traj.flight_time == pytest.approx(10.0)
    assert np.allclose(traj.launch_velocity, [3.0, 4.0])
    assert np.allclose(traj.sample()[5], [15.0, 20.0])


def test_zero_gravity_and_zero_speed_has_no_trajectory():
    assert solve_trajectory((0, 0), (30, 40), JumpParams(gravity=(0, 0), v_max=0.0)) is None


def test_self_jump_is_stationary():
    traj = solve_trajectory((5, 5), (5, 5), JumpParams())
    assert traj.flight_time == 0.0
    assert np.allclose(traj.launch_velocity, [0.0, 0.0])


# ---- flight-time window ----
def test_window_ends_hit_the_speed_bound():
    t_fast, t_slow = flight_time_window(DP, G, 8.0)
    assert t_fast < 20.0 < t_slow
    for t in (t_fast, t_slow):
        assert math.hypot(*launch_velocity(DP, G, t)) == pytest.approx(8.0, rel=1e-7)


def test_window_is_none_when_out_of_reach():
    assert flight_time_window(DP, G, 7.0) is None


def test_extra_arcs_stay_within_speed_bound():
    params = JumpParams(gravity=G, v_max=8.0, extra_arcs=3)
    arcs = candidate_trajectories((0, 0), (100, 0), params)
    assert len(arcs) == 4
    assert arcs[0].flight_time == pytest.approx(20.0)
    for arc in arcs:
        assert arc.launch_speed <= 8.0 + 1e-6
        assert np.allclose(arc.sample()[-1], [100.0, 0.0])


def test_sample_ends_exactly_at_goal():
    traj = solve_trajectory((0, 0), (100, 0), JumpParams(gravity=G, v_max=8.0))
    pts = traj.sample()
    assert pts.shape == (11, 2)
    assert np.array_equal(pts[0], [0.0, 0.0])
    assert np.array_equal(pts[-1], [100.0, 0.0])
    # apex at mid flight
    assert np.allclose(pts[5], [50.0, 25.0])


def test_tiny_gravity_is_degenerate_not_infinite():
    # |a|^2 underflows to a denormal and the quotient overflows
    tiny = vec2(0.0, -1e-160)
    with pytest.raises(DegenerateAccelerationError):
        low_energy_flight_time(DP, tiny)
    traj = solve_trajectory((0, 0), (100, 0), JumpParams(gravity=tiny, v_max=8.0))
    assert traj.flight_time == pytest.approx(12.5)
    assert np.all(np.isfinite(traj.sample()))


def test_tiny_gravity_skips_extra_arcs():
    params = JumpParams(gravity=(0.0, -1e-160), v_max=8.0, extra_arcs=3)
    arcs = candidate_trajectories((0, 0), (100, 0), params)
    assert len(arcs) == 1
    assert all(np.all(np.isfinite(arc.sample())) for arc in arcs)


def test_zero_gravity_needs_some_launch_speed():
    zero = vec2(0.0, 0.0)
    assert is_speed_feasible(DP, zero, 0.5)
    assert not is_speed_feasible(DP, zero, 0.0)
    assert is_speed_feasible(vec2(0.0, 0.0), zero, 0.0)
