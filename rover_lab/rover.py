from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
import math

from .primitives import Drive, Pose, PoseSample, Primitive, SetPose


DEFAULT_DT = 0.02


def check_dt(dt: float) -> float:
    """Return ``dt`` as float, rejecting non-positive or non-finite steps."""
    dt = float(dt)
    if not math.isfinite(dt) or dt <= 0.0:
        raise ValueError(f"dt must be a positive finite number, got {dt}")
    return dt


@dataclass
class RoverState:
    """Integrated state of the rover.

    Attributes
    ----------
    x : float
        X position (meters).
    y : float
        Y position (meters).
    theta : float
        Heading (radians), CCW from +x. Accumulates without wrapping.
    t : float
        Simulated time since the start of the run (seconds).
    """

    x: float
    y: float
    theta: float
    t: float = 0.0

    @property
    def pose(self) -> Pose:
        return Pose(self.x, self.y, self.theta)

    def sample(self) -> PoseSample:
        return PoseSample(t=self.t, x=self.x, y=self.y, theta=self.theta)


class Rover:
    """Differential-drive rover driven by (v, w) primitives.

    The simulator uses a unicycle model with forward-Euler integration. There
    is no acceleration limit, friction or slip: a drive primitive's velocities
    apply for its whole duration.
    """

    def __init__(self, start: Optional[Pose] = None, dt: float = DEFAULT_DT) -> None:
        self.dt = check_dt(dt)
        start = start or Pose()
        self.state = RoverState(x=start.x, y=start.y, theta=start.theta, t=0.0)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def get_state(self) -> RoverState:
        """Return a copy of current state."""
        s = self.state
        return RoverState(x=s.x, y=s.y, theta=s.theta, t=s.t)

    @property
    def pose(self) -> Pose:
        return self.state.pose

    # ------------------------------------------------------------------
    # Kinematics
    # ------------------------------------------------------------------
    def step(self, v: float, w: float, dt: float) -> None:
        """Advance one forward-Euler step of the unicycle model."""
        s = self.state
        x = s.x + v * math.cos(s.theta) * dt
        y = s.y + v * math.sin(s.theta) * dt
        theta = s.theta + w * dt
        self.state = RoverState(x=x, y=y, theta=theta, t=s.t + dt)

    def apply(self, primitive: Primitive) -> List[PoseSample]:
        """Execute one primitive and return the samples it produces.

        A drive is split into ``max(1, round(duration / dt))`` equal steps so
        the segment lasts exactly ``duration``. A teleport yields a single
        sample at the current time.
        """
        if isinstance(primitive, SetPose):
            p = primitive.pose
            self.state = RoverState(x=p.x, y=p.y, theta=p.theta, t=self.state.t)
            return [self.state.sample()]

        if isinstance(primitive, Drive):
            if not primitive.duration > 0.0:
                return []
            steps = max(1, round(primitive.duration / self.dt))
            dt_step = primitive.duration / steps
            samples: List[PoseSample] = []
            for _ in range(steps):
                self.step(primitive.v, primitive.w, dt_step)
                samples.append(self.state.sample())
            return samples

        raise TypeError(f"Unsupported primitive: {primitive!r}")

