from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional
import math

from .api import RoverAPI
from .commands import (
    ANGULAR_SPEED_DEG,
    LINEAR_SPEED,
    RobotCommand,
    move_primitive,
    translate_command,
    turn_primitive,
)
from .primitives import Pose, PoseSample, Primitive, SetPose
from .rover import DEFAULT_DT, Rover
from .sensors import DEFAULT_MAX_RANGE, compute_front_distance
from .trajectory import build_trajectory
from .world import WorldGeometry


DEFAULT_MAX_CALLS = 10_000


class ScriptStepLimitError(RuntimeError):
    """Raised when a script makes more rover calls than the host allows."""


@dataclass(frozen=True)
class HostStep:
    """One motion or teleport call with the live pose around it."""

    command: str
    before: Pose
    after: Pose


@dataclass
class SimulationState:
    """Mutable state of one script run, owned by the host.

    ``rover`` integrates every primitive as it is produced, so sensor reads
    see the same pose that playback will show at that point.
    """

    start: Pose
    rover: Rover
    primitives: List[Primitive] = field(default_factory=list)
    history: List[HostStep] = field(default_factory=list)
    calls: int = 0

    @property
    def pose(self) -> Pose:
        return self.rover.pose


class ScriptHost(RoverAPI):
    """RoverAPI implementation that records primitives for one run.

    Parameters
    ----------
    world : WorldGeometry
        Obstacles seen by ``get_front_distance``.
    start_pose : Pose, optional
        Pose at the start of the run.
    dt : float
        Integration step, shared with the trajectory builder.
    max_range : float
        Front sensor range.
    max_calls : int
        Watchdog: a run may make at most this many rover calls.
    """

    def __init__(
        self,
        world: WorldGeometry,
        start_pose: Optional[Pose] = None,
        dt: float = DEFAULT_DT,
        max_range: float = DEFAULT_MAX_RANGE,
        max_calls: int = DEFAULT_MAX_CALLS,
        linear_speed: float = LINEAR_SPEED,
        angular_speed_deg: float = ANGULAR_SPEED_DEG,
    ) -> None:
        self.world = world
        self.dt = dt
        self.max_range = max_range
        self.max_calls = max_calls
        self.linear_speed = linear_speed
        self.angular_speed_deg = angular_speed_deg
        start = start_pose or Pose()
        self.state = SimulationState(start=start, rover=Rover(start=start, dt=dt))

    # ------------------------------------------------------------------
    # RoverAPI
    # ------------------------------------------------------------------
    def move_forward(self, distance_m: float) -> None:
        self._tick()
        d = float(distance_m)
        self._record(f"move_forward({d:g})", move_primitive(d, self.linear_speed))

    def turn_left(self, angle_deg: float) -> None:
        self._tick()
        a = float(angle_deg)
        self._record(f"turn_left({a:g})", turn_primitive(a, self.angular_speed_deg))

    def turn_right(self, angle_deg: float) -> None:
        self._tick()
        a = float(angle_deg)
        self._record(f"turn_right({a:g})", turn_primitive(-a, self.angular_speed_deg))

    def get_front_distance(self) -> float:
        self._tick()
        return compute_front_distance(self.state.pose, self.world, self.max_range)

    def set_pose(self, x: float, y: float, heading_deg: float) -> None:
        self._tick()
        x, y, heading = float(x), float(y), float(heading_deg)
        self._record(f"set_pose({x:g}, {y:g}, {heading:g})", SetPose(Pose(x, y, math.radians(heading))))

    # ------------------------------------------------------------------
    # Running programs
    # ------------------------------------------------------------------
    def builtins(self) -> Dict[str, Callable[..., object]]:
        """Name -> bound method, ready to inject into a script namespace."""
        return {
            "move_forward": self.move_forward,
            "turn_left": self.turn_left,
            "turn_right": self.turn_right,
            "get_front_distance": self.get_front_distance,
            "set_pose": self.set_pose,
        }

    def run(self, program: Callable[[RoverAPI], object]) -> List[Primitive]:
        """Call ``program(self)`` and return the primitives it produced."""
        program(self)
        return self.primitives

    def run_commands(self, commands: Iterable[RobotCommand]) -> List[Primitive]:
        """Replay parsed motion commands through the host."""
        for cmd in commands:
            self._tick()
            self._record(str(cmd), translate_command(cmd, self.linear_speed, self.angular_speed_deg))
        return self.primitives

    @property
    def primitives(self) -> List[Primitive]:
        return list(self.state.primitives)

    @property
    def history(self) -> List[HostStep]:
        return list(self.state.history)

    @property
    def pose(self) -> Pose:
        return self.state.pose

    def trajectory(self) -> List[PoseSample]:
        return build_trajectory(self.state.primitives, self.state.start, self.dt)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _tick(self) -> None:
        self.state.calls += 1
        if self.state.calls > self.max_calls:
            raise ScriptStepLimitError(
                f"Script exceeded {self.max_calls} rover calls; is it stuck in a loop?"
            )

    def _record(self, command: str, primitive: Optional[Primitive]) -> None:
        before = self.state.pose
        if primitive is not None:
            self.state.primitives.append(primitive)
            self.state.rover.apply(primitive)
        self.state.history.append(HostStep(command, before, self.state.pose))
