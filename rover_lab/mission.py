from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List
import json
import os

from .commands import RobotCommand, parse_commands
from .world import WorldConfig


MAPS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "maps")


@dataclass(frozen=True)
class Mission:
    """A mission: world layout plus learner-facing text.

    ``program`` is an optional reference solution as parsed commands.
    """

    id: str
    title: str
    world: WorldConfig
    briefing: str = ""
    program: List[RobotCommand] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Mission":
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", data["id"])),
            world=WorldConfig.from_map_dict(data.get("world", {})),
            briefing=str(data.get("briefing", "")),
            program=parse_commands(data.get("program", [])),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "briefing": self.briefing,
            "world": self.world.to_dict(),
            "program": [c.to_dict() for c in self.program],
        }


def load_mission(path: str) -> Mission:
    """Load a mission from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return Mission.from_dict(data)


def list_builtin_missions() -> List[str]:
    """Ids of the missions bundled in ``rover_lab/maps``."""
    ids = []
    for name in sorted(os.listdir(MAPS_DIR)):
        if name.endswith(".json"):
            ids.append(load_mission(os.path.join(MAPS_DIR, name)).id)
    return ids


def load_builtin_mission(mission_id: str) -> Mission:
    for name in sorted(os.listdir(MAPS_DIR)):
        if not name.endswith(".json"):
            continue
        mission = load_mission(os.path.join(MAPS_DIR, name))
        if mission.id == mission_id:
            return mission
    raise KeyError(f"Unknown mission: {mission_id}. Available: {list_builtin_missions()}")
