from __future__ import annotations

from typing import Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.patches import Circle, Rectangle

from .evaluator import Outcome
from .primitives import PoseSample
from .trajectory import trajectory_to_array
from .world import CircleObstacle, RectObstacle, WorldConfig


# Dark palette
THEME = {
    "bg": "#121620",
    "obstacle_fill": "#2d3446",
    "obstacle_edge": "#414b62",
    "goal_ok": "#00e6b4",
    "goal_miss": "#ff5a5a",
    "path": "#64dcff",
    "start": "#3ca0c8",
}


def plot_run(
    world: WorldConfig,
    trajectory: Sequence[PoseSample],
    outcome: Optional[Outcome] = None,
    ax: Optional[Axes] = None,
) -> Axes:
    """Draw obstacles, goal region and the driven path on ``ax``.

    The goal is drawn green on success and red on a miss; without an outcome
    it uses the success color.
    """
    if ax is None:
        _, ax = plt.subplots()
    ax.set_facecolor(THEME["bg"])

    for obs in world.geometry.obstacles:
        if isinstance(obs, CircleObstacle):
            patch = Circle((obs.x, obs.y), obs.radius)
        elif isinstance(obs, RectObstacle):
            xmin, ymin, _, _ = obs.bounds
            patch = Rectangle((xmin, ymin), obs.width, obs.height)
        else:
            raise TypeError(f"Unsupported obstacle: {obs!r}")
        patch.set_facecolor(THEME["obstacle_fill"])
        patch.set_edgecolor(THEME["obstacle_edge"])
        ax.add_patch(patch)

    goal = world.goal
    goal_color = THEME["goal_miss"] if outcome is not None and not outcome.success else THEME["goal_ok"]
    ax.add_patch(Circle((goal.x, goal.y), goal.r, fill=False, edgecolor=goal_color, linewidth=2))
    ax.scatter([goal.x], [goal.y], c=goal_color, marker="*", label="Goal")

    arr = trajectory_to_array(trajectory)
    ax.plot(arr[:, 1], arr[:, 2], "-", color=THEME["path"], label="Path")
    ax.scatter([arr[0, 1]], [arr[0, 2]], c=THEME["start"], marker="o", label="Start")
    ax.scatter([arr[-1, 1]], [arr[-1, 2]], c=THEME["path"], marker="^", label="End")

    ax.set_aspect("equal", adjustable="datalim")
    ax.autoscale_view()
    ax.set_xlabel("x [m]")
    ax.set_ylabel("y [m]")
    title = "Rover Path"
    if outcome is not None:
        title += " - success" if outcome.success else " - missed goal"
    ax.set_title(title)
    ax.legend(loc="upper left")
    return ax


def save_run_plot(
    world: WorldConfig,
    trajectory: Sequence[PoseSample],
    path: str,
    outcome: Optional[Outcome] = None,
) -> None:
    fig, ax = plt.subplots()
    plot_run(world, trajectory, outcome, ax=ax)
    fig.savefig(path, dpi=120, bbox_inches="tight")
    plt.close(fig)
