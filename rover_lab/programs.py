"""
Reference solutions that need live sensor feedback.

Missions whose solution is a fixed command list keep it in the mission JSON
``program``. Closed-loop solutions cannot be written that way, so they are
registered here as callables that take a :class:`RoverAPI`.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from .api import RoverAPI


ProgramFn = Callable[[RoverAPI], None]

# Stop distance and creep step for the front sensor lab (meters)
STOP_DISTANCE = 0.5
CREEP_STEP = 0.1


def front_sensor_stop(rover: RoverAPI) -> None:
    """Creep toward the wall until the front sensor reads under 0.5 m."""
    rover.set_pose(0, 0, 0)
    while True:
        d = rover.get_front_distance()
        if d < STOP_DISTANCE:
            break
        rover.move_forward(CREEP_STEP)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_PROGRAM_REGISTRY: Dict[str, ProgramFn] = {
    "sensor_stop": front_sensor_stop,
}


def get_scripted_program(mission_id: str) -> ProgramFn:
    if mission_id not in _PROGRAM_REGISTRY:
        raise KeyError(f"No scripted program for mission: {mission_id}. Available: {list(_PROGRAM_REGISTRY.keys())}")
    return _PROGRAM_REGISTRY[mission_id]


def has_scripted_program(mission_id: str) -> bool:
    return mission_id in _PROGRAM_REGISTRY


def list_scripted_programs() -> List[str]:
    return list(_PROGRAM_REGISTRY.keys())
