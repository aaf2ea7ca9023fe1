from __future__ import annotations

import json
import math
from pathlib import Path

import pytest

from rover_lab.config import SimConfig
from rover_lab.evaluator import evaluate
from rover_lab.host import ScriptHost
from rover_lab.mission import Mission, list_builtin_missions, load_builtin_mission, load_mission
from rover_lab.world import RectObstacle, WorldConfig


CONFIG_PATH = Path(__file__).resolve().parents[1] / "configs" / "sim.yaml"


def test_builtin_missions_are_listed() -> None:
    assert set(list_builtin_missions()) >= {"exo1-m1", "sensor_stop"}


def test_unknown_mission_raises_key_error() -> None:
    with pytest.raises(KeyError):
        load_builtin_mission("no-such-mission")


def test_first_mission_reference_program_succeeds() -> None:
    mission = load_builtin_mission("exo1-m1")
    host = ScriptHost(mission.world.geometry, start_pose=mission.world.start)
    host.run_commands(mission.program)
    outcome = evaluate(host.trajectory(), mission.world.goal)

    assert outcome.success
    assert outcome.final_distance < 1e-6


def test_sensor_mission_world_has_wall() -> None:
    mission = load_builtin_mission("sensor_stop")
    obstacles = mission.world.geometry.obstacles
    assert obstacles == (RectObstacle(x=3.0, y=0.0, width=0.2, height=10.0),)
    assert mission.world.goal.r == 0.5


def test_world_round_trips_through_dict() -> None:
    world = load_builtin_mission("sensor_stop").world
    assert WorldConfig.from_map_dict(world.to_dict()) == world


def test_unknown_obstacle_type_is_rejected() -> None:
    with pytest.raises(ValueError):
        WorldConfig.from_map_dict({"obstacles": [{"type": "triangle", "x": 0, "y": 0}]})


def test_load_mission_from_file(tmp_path: Path) -> None:
    data = {
        "id": "custom",
        "world": {
            "start": {"x": 1.0, "y": 1.0, "theta": math.pi},
            "goal": {"x": 0.0, "y": 1.0, "r": 0.1},
            "obstacles": [{"type": "circle", "x": -2.0, "y": 1.0, "radius": 0.5}],
        },
        "program": [{"op": "move_forward", "arg": 1.0}],
    }
    path = tmp_path / "custom.json"
    path.write_text(json.dumps(data), encoding="utf-8")

    mission = load_mission(str(path))
    assert mission.title == "custom"
    assert Mission.from_dict(mission.to_dict()) == mission

    host = ScriptHost(mission.world.geometry, start_pose=mission.world.start)
    assert math.isclose(host.get_front_distance(), 2.5, rel_tol=1e-9)
    host.run_commands(mission.program)
    assert evaluate(host.trajectory(), mission.world.goal).success


def test_sim_config_from_yaml() -> None:
    cfg = SimConfig.from_yaml(str(CONFIG_PATH))
    assert cfg.dt == 0.02
    assert cfg.linear_speed == 0.25
    assert cfg.angular_speed_deg == 45.0
    assert cfg.max_range == 5.0
    assert cfg.lidar_config().num_beams == cfg.num_beams


def test_sim_config_defaults_for_missing_sections() -> None:
    cfg = SimConfig.from_dict({"sim": {"dt": 0.05}})
    assert cfg.dt == 0.05
    assert cfg.max_calls == 10_000
    assert cfg.telemetry_path == "telemetry_logs/runs.jsonl"
