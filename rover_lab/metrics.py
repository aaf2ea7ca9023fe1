"""
Run metrics for rover lab missions.

Per-run summaries (outcome, path length, duration) and a per-mission
aggregator used when replaying several runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .evaluator import evaluate
from .primitives import PoseSample
from .trajectory import trajectory_to_array
from .world import Goal


# ---------------------------------------------------------------------------
# Run-level metrics
# ---------------------------------------------------------------------------


@dataclass
class RunMetrics:
    """Metrics for a single run."""

    success: bool
    final_distance: float
    path_length: float
    duration: float
    num_samples: int
    num_primitives: int = 0
    mission_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mission_id": self.mission_id,
            "success": self.success,
            "final_distance": float(self.final_distance),
            "path_length": float(self.path_length),
            "duration": float(self.duration),
            "num_samples": int(self.num_samples),
            "num_primitives": int(self.num_primitives),
            **self.extra,
        }


def path_length(trajectory: Sequence[PoseSample]) -> float:
    """Distance travelled along the samples.

    Teleports count as jumps between consecutive samples, so callers that
    use ``set_pose`` mid-run get the drawn length, not the driven one.
    """
    arr = trajectory_to_array(trajectory)
    if arr.shape[0] < 2:
        return 0.0
    steps = np.diff(arr[:, 1:3], axis=0)
    return float(np.sum(np.hypot(steps[:, 0], steps[:, 1])))


def compute_run_metrics(
    trajectory: Sequence[PoseSample],
    goal: Goal,
    mission_id: Optional[str] = None,
    num_primitives: int = 0,
) -> RunMetrics:
    outcome = evaluate(trajectory, goal)
    return RunMetrics(
        success=outcome.success,
        final_distance=outcome.final_distance,
        path_length=path_length(trajectory),
        duration=float(trajectory[-1].t),
        num_samples=len(trajectory),
        num_primitives=num_primitives,
        mission_id=mission_id,
    )


# ---------------------------------------------------------------------------
# Per-mission aggregator
# ---------------------------------------------------------------------------


class MissionAggregator:
    """Aggregate run metrics per mission id."""

    def __init__(self) -> None:
        self._by_mission: Dict[str, List[RunMetrics]] = {}

    def add(self, metrics: RunMetrics) -> None:
        key = metrics.mission_id or "unknown"
        self._by_mission.setdefault(key, []).append(metrics)

    def summary(self) -> Dict[str, Dict[str, float]]:
        out: Dict[str, Dict[str, float]] = {}
        for mission_id, runs in self._by_mission.items():
            successes = [r.success for r in runs]
            distances = [r.final_distance for r in runs]
            lengths = [r.path_length for r in runs]
            out[mission_id] = {
                "num_runs": float(len(runs)),
                "success_rate": float(np.mean(successes)),
                "mean_final_distance": float(np.mean(distances)),
                "mean_path_length": float(np.mean(lengths)),
            }
        return out

    def mission_ids(self) -> List[str]:
        return list(self._by_mission.keys())
