# region Imports
from typing import Optional
import matplotlib.pyplot as plt
from matplotlib.lines import Line2D

from jump_checker.models import JumpParams, Level, ReachabilityResult
from jump_checker.sweep import sweep_rails
# endregion

# region Visualization Function
def show_jump_arc(
    level: Level,
    result: ReachabilityResult,
    params: Optional[JumpParams] = None,
    ax=None,
    title: str = "Jump check",
    show: bool = True,
):
    """
    Draw level polygons, the swept arc rails and the first blocking point.
    Green rails when the jump is feasible, red otherwise.
    """
    params = params or JumpParams()
    own_fig = ax is None
    if own_fig:
        fig, ax = plt.subplots(figsize=(8, 8))

    # region Level
    for poly in level.polygons:
        if len(poly.points) >= 2:
            ax.plot(poly.points[:, 0], poly.points[:, 1], color="white", alpha=0.6, linewidth=1.5)
    # endregion

    # region Arc Overlay
    color = "lime" if result.feasible else "red"
    traj = result.trajectory
    if traj is not None:
        swept = sweep_rails(traj.sample(), params.radius)
        for p0, p1 in zip(swept.rail_starts, swept.rail_ends):
            ax.plot([p0[0], p1[0]], [p0[1], p1[1]], color=color, alpha=0.35, linewidth=1.0)
        for p in (traj.start, traj.goal):
            ax.add_patch(plt.Circle(p, max(params.radius, 2.5), fill=False, color=color, alpha=0.5))
        ax.scatter([traj.start[0]], [traj.start[1]], s=40, color="lime", zorder=3)
        ax.scatter([traj.goal[0]], [traj.goal[1]], s=40, color="yellow", zorder=3)
    # endregion

    if result.hit_point is not None:
        ax.add_patch(plt.Circle(result.hit_point, 5.0, fill=False, color="red", linewidth=2))

    # region Legend / Layout
    legend_elements = [
        Line2D([0], [0], color=color, lw=2, label="Swept arc"),
        Line2D([0], [0], marker="o", color="w", label="Start",
               markerfacecolor="lime", markersize=8),
        Line2D([0], [0], marker="o", color="w", label="Goal",
               markerfacecolor="yellow", markersize=8),
        Line2D([0], [0], marker="o", color="w", label="Blocking point",
               markerfacecolor="none", markeredgecolor="red", markersize=9),
    ]
    ax.legend(handles=legend_elements, loc="lower right", fontsize=8, framealpha=0.85)
    ax.set_facecolor("black")
    ax.set_aspect("equal")
    ax.set_title(f"{title}: {'feasible' if result.feasible else 'blocked'}")
    if own_fig:
        plt.tight_layout()
        if show:
            plt.show()
    # endregion
    return ax
# endregion
