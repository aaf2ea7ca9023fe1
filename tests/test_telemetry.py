from __future__ import annotations

import importlib
from pathlib import Path

import matplotlib

import rover_lab.plot
from rover_lab.evaluator import evaluate
from rover_lab.mission import load_builtin_mission
from rover_lab.host import ScriptHost
from rover_lab.plot import plot_run, save_run_plot
from rover_lab.primitives import primitive_from_dict
from rover_lab.trajectory import build_trajectory
from telemetry.logger import TelemetryLogger, load_telemetry


def _beacon_run():
    mission = load_builtin_mission("exo1-m1")
    host = ScriptHost(mission.world.geometry, start_pose=mission.world.start)
    host.run_commands(mission.program)
    traj = host.trajectory()
    return mission, host.primitives, traj, evaluate(traj, mission.world.goal)


def test_run_record_round_trips_through_jsonl(tmp_path: Path) -> None:
    mission, primitives, traj, outcome = _beacon_run()
    log_path = tmp_path / "logs" / "runs.jsonl"

    with TelemetryLogger(str(log_path)) as logger:
        logger.log_run(mission.id, primitives, traj, outcome, {"path_length": 5.0})
    with open(log_path, "a", encoding="utf-8") as f:
        f.write("not json\n")

    df = load_telemetry(str(log_path))
    assert len(df) == 1
    row = df.iloc[0]
    assert row["mission_id"] == "exo1-m1"
    assert bool(row["outcome.success"]) is True
    assert len(row["samples"]) == len(traj)
    assert row["primitives"][0]["type"] == "drive"


def test_missing_log_gives_empty_frame(tmp_path: Path) -> None:
    assert load_telemetry(str(tmp_path / "missing.jsonl")).empty


def test_plot_draws_path_and_saves(tmp_path: Path) -> None:
    mission, _, traj, outcome = _beacon_run()
    ax = plot_run(mission.world, traj, outcome)
    assert ax.get_title() == "Rover Path - success"
    assert len(ax.lines) == 1

    sensor = load_builtin_mission("sensor_stop")
    out = tmp_path / "run.png"
    save_run_plot(sensor.world, traj, str(out))
    assert out.exists() and out.stat().st_size > 0


def test_logged_primitives_rebuild_the_trajectory(tmp_path: Path) -> None:
    mission, primitives, traj, outcome = _beacon_run()
    log_path = tmp_path / "runs.jsonl"
    with TelemetryLogger(str(log_path)) as logger:
        logger.log_run(mission.id, primitives, traj, outcome)

    row = load_telemetry(str(log_path)).iloc[0]
    rebuilt = [primitive_from_dict(p) for p in row["primitives"]]
    assert rebuilt == primitives
    assert build_trajectory(rebuilt, mission.world.start) == traj


def test_importing_plot_keeps_callers_backend() -> None:
    previous = matplotlib.get_backend()
    matplotlib.use("svg")
    try:
        importlib.reload(rover_lab.plot)
        assert matplotlib.get_backend().lower() == "svg"
    finally:
        matplotlib.use(previous)
