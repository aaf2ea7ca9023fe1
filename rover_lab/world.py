from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple, Union
import json
import math

from .primitives import Pose


@dataclass(frozen=True)
class CircleObstacle:
    """Circular obstacle in world coordinates.

    Attributes
    ----------
    x : float
        X coordinate of the center (meters).
    y : float
        Y coordinate of the center (meters).
    radius : float
        Radius (meters). Zero is allowed and behaves like a point.
    """

    x: float
    y: float
    radius: float

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "circle", "x": self.x, "y": self.y, "radius": self.radius}


@dataclass(frozen=True)
class RectObstacle:
    """Axis-aligned rectangular obstacle in world coordinates.

    Coordinates are defined with x increasing to the right and y upward.

    Attributes
    ----------
    x : float
        X coordinate of the rectangle center (meters).
    y : float
        Y coordinate of the rectangle center (meters).
    width : float
        Extent along x (meters).
    height : float
        Extent along y (meters).
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Return (xmin, ymin, xmax, ymax)."""
        half_w = self.width / 2.0
        half_h = self.height / 2.0
        return (self.x - half_w, self.y - half_h, self.x + half_w, self.y + half_h)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "rectangle",
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


Obstacle = Union[CircleObstacle, RectObstacle]


def obstacle_from_dict(data: Dict[str, Any]) -> Obstacle:
    """Create an obstacle from a ``{"type": ...}`` record."""
    kind = data.get("type")
    if kind == "circle":
        return CircleObstacle(float(data["x"]), float(data["y"]), float(data["radius"]))
    if kind == "rectangle":
        return RectObstacle(
            float(data["x"]),
            float(data["y"]),
            float(data["width"]),
            float(data["height"]),
        )
    raise ValueError(f"Unknown obstacle type: {kind!r}")


@dataclass(frozen=True)
class WorldGeometry:
    """Static set of obstacles queried by the sensor model."""

    obstacles: Tuple[Obstacle, ...] = ()

    @classmethod
    def of(cls, obstacles: Iterable[Obstacle]) -> "WorldGeometry":
        return cls(obstacles=tuple(obstacles))

    def to_list(self) -> List[Dict[str, Any]]:
        return [o.to_dict() for o in self.obstacles]


@dataclass(frozen=True)
class Goal:
    """Circular acceptance region."""

    x: float
    y: float
    r: float

    def contains(self, x: float, y: float) -> bool:
        """True when (x, y) is within r of the goal center (boundary included)."""
        return math.hypot(x - self.x, y - self.y) <= self.r

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "r": self.r}


@dataclass(frozen=True)
class WorldConfig:
    """Mission world: start pose, goal region and obstacles."""

    start: Pose = field(default_factory=Pose)
    goal: Goal = field(default_factory=lambda: Goal(0.0, 0.0, 0.0))
    geometry: WorldGeometry = field(default_factory=WorldGeometry)

    # ------------------------------------------------------------------
    # Map loading
    # ------------------------------------------------------------------
    @classmethod
    def from_map_dict(cls, data: Dict[str, Any]) -> "WorldConfig":
        """Create world from a dict describing start, goal and obstacles."""
        start = Pose.from_dict(data.get("start", {}))
        goal_data = data.get("goal", {"x": 0.0, "y": 0.0, "r": 0.0})
        goal = Goal(float(goal_data["x"]), float(goal_data["y"]), float(goal_data["r"]))
        obstacles = [obstacle_from_dict(o) for o in data.get("obstacles", [])]
        return cls(start=start, goal=goal, geometry=WorldGeometry.of(obstacles))

    @classmethod
    def from_map_file(cls, path: str) -> "WorldConfig":
        """Create world from a JSON map file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_map_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize world description to a Python dict."""
        return {
            "start": self.start.to_dict(),
            "goal": self.goal.to_dict(),
            "obstacles": self.geometry.to_list(),
        }
