from __future__ import annotations

from abc import ABC, abstractmethod


class RoverAPI(ABC):
    """The five calls a learner script may make.

    A script sandbox binds these names into the script's globals; anything
    outside this vocabulary is not part of the rover.
    """

    @abstractmethod
    def move_forward(self, distance_m: float) -> None:
        """Drive straight along the current heading (negative = reverse)."""

    @abstractmethod
    def turn_left(self, angle_deg: float) -> None:
        """Rotate in place counterclockwise."""

    @abstractmethod
    def turn_right(self, angle_deg: float) -> None:
        """Rotate in place clockwise."""

    @abstractmethod
    def get_front_distance(self) -> float:
        """Distance (meters) to the nearest obstacle straight ahead."""

    @abstractmethod
    def set_pose(self, x: float, y: float, heading_deg: float) -> None:
        """Teleport to a known pose."""
