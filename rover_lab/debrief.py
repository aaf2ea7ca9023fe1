from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .commands import ANGULAR_SPEED_DEG, LINEAR_SPEED, RobotCommand
from .geometry_utils import heading_deg
from .host import ScriptHost
from .primitives import Pose
from .rover import DEFAULT_DT
from .world import WorldGeometry


@dataclass(frozen=True)
class PoseTableRow:
    step: int
    command: str
    pose_before: str
    pose_after: str


def format_pose(pose: Pose) -> str:
    """``(x.xx, y.yy, θ°)`` with the heading wrapped to [0, 360)."""
    deg = round(heading_deg(pose.theta)) % 360
    return f"({pose.x:.2f}, {pose.y:.2f}, {deg}°)"


def pose_table_from_host(host: ScriptHost) -> List[PoseTableRow]:
    """One row per motion or teleport call the host executed.

    Poses are the host's live poses, so the table matches the plotted path
    without integrating anything again. Row 0 is the start pose; sensor
    reads do not get a row.
    """
    rows = [
        PoseTableRow(step=0, command="(start)", pose_before="-", pose_after=format_pose(host.state.start))
    ]
    for i, step in enumerate(host.history, start=1):
        rows.append(
            PoseTableRow(
                step=i,
                command=step.command,
                pose_before=format_pose(step.before),
                pose_after=format_pose(step.after),
            )
        )
    return rows


def build_pose_table(
    commands: Iterable[RobotCommand],
    start_pose: Optional[Pose] = None,
    dt: float = DEFAULT_DT,
    linear_speed: float = LINEAR_SPEED,
    angular_speed_deg: float = ANGULAR_SPEED_DEG,
) -> List[PoseTableRow]:
    """Pose table for a parsed command list run on a fresh host."""
    host = ScriptHost(
        WorldGeometry(),
        start_pose=start_pose,
        dt=dt,
        linear_speed=linear_speed,
        angular_speed_deg=angular_speed_deg,
    )
    host.run_commands(commands)
    return pose_table_from_host(host)


def render_pose_table(rows: List[PoseTableRow]) -> str:
    """Plain-text table for terminal output."""
    header = f"{'step':>4}  {'command':<22} {'before':<24} {'after':<24}"
    lines = [header, "-" * len(header)]
    for r in rows:
        lines.append(f"{r.step:>4}  {r.command:<22} {r.pose_before:<24} {r.pose_after:<24}")
    return "\n".join(lines)
