# region Header
"""
run_jump_check.py - Platformer jump checker demo

Builds a small level, checks one jump per pair below and draws the swept arc.

Requires:
  pip install numpy matplotlib
"""
# endregion

# region Imports
import logging
import matplotlib.pyplot as plt

from jump_checker.graph import build_jump_edges, find_jump_route
from jump_checker.models import JumpParams, Level
from jump_checker.reachability import check_jump
from jump_checker.viz import show_jump_arc
# endregion

# region Demo Level
LEVEL_POLYGONS = [
    # floor with a step; open polyline, left to right
    [(-300, -100), (-50, -100), (-50, -60), (300, -60)],
    # floating ledge (closed)
    [(40, 20), (160, 20), (160, 40), (40, 40), (40, 20)],
    # pillar
    [(-20, -60), (-20, 60), (0, 60), (0, -60)],
]

# (position, polygon, edges)
NODES = [
    ((-200, -100), 0, [0]),
    ((-50, -100), 0, [0, 1]),
    ((100, 40), 1, [2]),
    ((200, -60), 0, [2]),
]
# endregion

def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    level = Level.from_points(LEVEL_POLYGONS)
    nodes = [level.make_node(p, poly, edges) for p, poly, edges in NODES]
    params = JumpParams(radius=10.0)

    edges = build_jump_edges(nodes, level, params)
    path, cost = find_jump_route(0, len(nodes) - 1, nodes, edges)
    print(f"Route {path} cost={cost:.1f}")

    pairs = [(0, 3), (1, 2), (2, 3)]
    fig, axes = plt.subplots(1, len(pairs), figsize=(6 * len(pairs), 6))
    for ax, (i, j) in zip(axes, pairs):
        result = check_jump(nodes[i], nodes[j], level, params)
        print(f"{i} -> {j}: feasible={result.feasible} hit={result.hit_point}")
        show_jump_arc(level, result, params, ax=ax, title=f"{i} -> {j}")
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
