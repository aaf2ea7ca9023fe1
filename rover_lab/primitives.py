from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Pose:
    """Planar pose in world coordinates.

    Attributes
    ----------
    x : float
        X position (meters).
    y : float
        Y position (meters).
    theta : float
        Heading (radians), CCW from +x. Never wrapped by the simulator.
    """

    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "theta": self.theta}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pose":
        return cls(
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            theta=float(data.get("theta", 0.0)),
        )


@dataclass(frozen=True)
class PoseSample:
    """One row of a trajectory: elapsed simulated time plus pose."""

    t: float
    x: float
    y: float
    theta: float

    @property
    def pose(self) -> Pose:
        return Pose(self.x, self.y, self.theta)

    def to_dict(self) -> Dict[str, float]:
        return {"t": self.t, "x": self.x, "y": self.y, "theta": self.theta}


@dataclass(frozen=True)
class Drive:
    """Constant-velocity segment: straight line, arc or in-place turn.

    Attributes
    ----------
    v : float
        Linear velocity (m/s), negative drives backwards.
    w : float
        Angular velocity (rad/s), positive turns CCW.
    duration : float
        Segment length in seconds. Non-positive durations are skipped.
    """

    v: float
    w: float
    duration: float

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "drive", "v": self.v, "w": self.w, "duration": self.duration}


@dataclass(frozen=True)
class SetPose:
    """Zero-duration teleport that overrides the integrated pose."""

    pose: Pose

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "set_pose", "pose": self.pose.to_dict()}


Primitive = Union[Drive, SetPose]


def primitive_from_dict(data: Dict[str, Any]) -> Primitive:
    """Rebuild a primitive from its ``to_dict`` form."""
    kind = data.get("type")
    if kind == "drive":
        return Drive(v=float(data["v"]), w=float(data["w"]), duration=float(data["duration"]))
    if kind == "set_pose":
        return SetPose(pose=Pose.from_dict(data["pose"]))
    raise ValueError(f"Unknown primitive type: {kind!r}")
