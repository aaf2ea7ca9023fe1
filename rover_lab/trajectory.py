from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import numpy as np

from .primitives import Drive, Pose, PoseSample, Primitive
from .rover import DEFAULT_DT, Rover


def build_trajectory(
    primitives: Iterable[Primitive],
    start_pose: Optional[Pose] = None,
    dt: float = DEFAULT_DT,
) -> List[PoseSample]:
    """Integrate primitives into a dense, time-stamped pose sequence.

    Parameters
    ----------
    primitives : iterable of Drive / SetPose
        Executed in order. Drives with non-positive duration add nothing.
    start_pose : Pose, optional
        Pose at t = 0. Defaults to the origin facing +x.
    dt : float
        Nominal integration step (seconds). Each drive adjusts it so the
        segment duration is reproduced exactly.

    Returns
    -------
    list[PoseSample]
        Never empty: the first sample is the start pose at t = 0.

    Raises
    ------
    ValueError
        If ``dt`` is not a positive finite number.
    """
    rover = Rover(start=start_pose, dt=dt)
    samples: List[PoseSample] = [rover.state.sample()]
    for primitive in primitives:
        samples.extend(rover.apply(primitive))
    return samples


def final_pose(trajectory: Sequence[PoseSample]) -> Pose:
    return trajectory[-1].pose


def total_duration(primitives: Iterable[Primitive]) -> float:
    """Sum of drive durations; teleports take no time."""
    return sum(p.duration for p in primitives if isinstance(p, Drive) and p.duration > 0.0)


def trajectory_to_array(trajectory: Sequence[PoseSample]) -> np.ndarray:
    """Stack samples into an (N, 4) float array with columns t, x, y, theta."""
    return np.array([[s.t, s.x, s.y, s.theta] for s in trajectory], dtype=np.float64).reshape(-1, 4)
