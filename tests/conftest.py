# tests/conftest.py
import matplotlib

matplotlib.use("Agg")

import pytest

from jump_checker.models import JumpParams, Level


@pytest.fixture
def flat_params():
    return JumpParams(gravity=(0.0, -0.5), v_max=8.0, radius=10.0)


@pytest.fixture
def wall_level():
    # floor under both nodes, thin wall halfway
    return Level.from_points([
        [(-10, 0), (110, 0)],
        [(50, -50), (50, 50)],
    ])


@pytest.fixture
def floor_nodes(wall_level):
    start = wall_level.make_node((0, 0), 0, [0])
    goal = wall_level.make_node((100, 0), 0, [0])
    return start, goal
