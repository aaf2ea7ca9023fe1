"""
Command translator: learner-level commands to drive primitives.

Each command maps on its own to zero or one primitive, at fixed nominal
speeds. Left turns are positive (CCW) angular velocity, right turns
negative; a negative argument reverses the direction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
import math

from .primitives import Drive


LINEAR_SPEED = 0.25  # m/s
ANGULAR_SPEED_DEG = 45.0  # deg/s

MOVE_FORWARD = "move_forward"
TURN_LEFT = "turn_left"
TURN_RIGHT = "turn_right"
MOTION_OPS = (MOVE_FORWARD, TURN_LEFT, TURN_RIGHT)


@dataclass(frozen=True)
class RobotCommand:
    """A parsed motion command, e.g. ``move_forward(1.5)``."""

    op: str
    arg: float

    def __str__(self) -> str:
        return f"{self.op}({self.arg:g})"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RobotCommand":
        return cls(op=str(data["op"]), arg=float(data["arg"]))

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.op, "arg": self.arg}


def parse_commands(records: Iterable[Dict[str, Any]]) -> List[RobotCommand]:
    """Read ``{"op": ..., "arg": ...}`` records as used in mission files."""
    return [RobotCommand.from_dict(r) for r in records]


def move_primitive(distance: float, speed: float = LINEAR_SPEED) -> Optional[Drive]:
    if distance == 0.0:
        return None
    return Drive(v=math.copysign(speed, distance), w=0.0, duration=abs(distance) / speed)


def turn_primitive(angle_deg: float, angular_speed_deg: float = ANGULAR_SPEED_DEG) -> Optional[Drive]:
    """In-place turn; positive angle is counterclockwise."""
    if angle_deg == 0.0:
        return None
    w = math.copysign(math.radians(angular_speed_deg), angle_deg)
    return Drive(v=0.0, w=w, duration=abs(angle_deg) / angular_speed_deg)


def translate_command(
    cmd: RobotCommand,
    speed: float = LINEAR_SPEED,
    angular_speed_deg: float = ANGULAR_SPEED_DEG,
) -> Optional[Drive]:
    """Translate one command; zero-argument commands give None."""
    if cmd.op == MOVE_FORWARD:
        return move_primitive(cmd.arg, speed)
    if cmd.op == TURN_LEFT:
        return turn_primitive(cmd.arg, angular_speed_deg)
    if cmd.op == TURN_RIGHT:
        return turn_primitive(-cmd.arg, angular_speed_deg)
    raise ValueError(f"Unknown command: {cmd.op!r}. Available: {list(MOTION_OPS)}")


def build_program(
    commands: Iterable[RobotCommand],
    speed: float = LINEAR_SPEED,
    angular_speed_deg: float = ANGULAR_SPEED_DEG,
) -> List[Drive]:
    """Translate commands in order, dropping the ones that produce no motion."""
    primitives: List[Drive] = []
    for cmd in commands:
        p = translate_command(cmd, speed, angular_speed_deg)
        if p is not None:
            primitives.append(p)
    return primitives
