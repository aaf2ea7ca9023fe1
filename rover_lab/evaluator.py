from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from .geometry_utils import distance
from .primitives import PoseSample
from .world import Goal


@dataclass(frozen=True)
class Outcome:
    """Result of a completed run."""

    success: bool
    final_distance: float

    def as_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "final_distance": float(self.final_distance)}


def evaluate(trajectory: Sequence[PoseSample], goal: Goal) -> Outcome:
    """Judge a run by its final sample only.

    Success when the final position is within ``goal.r`` of the goal center,
    boundary included.
    """
    final = trajectory[-1]
    d = distance(final.x, final.y, goal.x, goal.y)
    return Outcome(success=d <= goal.r, final_distance=d)


class MissionRun:
    """Guards one-shot completion side effects for a single run.

    ``evaluate`` is pure and may be called any number of times; ``complete``
    records the outcome once and refuses a second completion.
    """

    def __init__(self, mission_id: str, goal: Goal) -> None:
        self.mission_id = mission_id
        self.goal = goal
        self.outcome: Optional[Outcome] = None

    @property
    def completed(self) -> bool:
        return self.outcome is not None

    def complete(self, trajectory: Sequence[PoseSample]) -> Outcome:
        if self.outcome is not None:
            raise RuntimeError(f"Run for mission {self.mission_id!r} already completed")
        self.outcome = evaluate(trajectory, self.goal)
        return self.outcome
