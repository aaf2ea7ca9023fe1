from __future__ import annotations

import math

from rover_lab.commands import RobotCommand
from rover_lab.debrief import build_pose_table, format_pose, pose_table_from_host, render_pose_table
from rover_lab.geometry_utils import heading_deg
from rover_lab.host import ScriptHost
from rover_lab.mission import load_builtin_mission
from rover_lab.metrics import MissionAggregator, compute_run_metrics, path_length
from rover_lab.primitives import Drive, Pose, SetPose
from rover_lab.programs import get_scripted_program
from rover_lab.trajectory import build_trajectory
from rover_lab.world import Goal, WorldGeometry


BEACON_PROGRAM = [
    RobotCommand("move_forward", 3.25),
    RobotCommand("turn_left", 90),
    RobotCommand("move_forward", 1.75),
]


def test_pose_table_matches_coordinate_lab() -> None:
    rows = build_pose_table(BEACON_PROGRAM)

    assert [r.command for r in rows] == ["(start)", "move_forward(3.25)", "turn_left(90)", "move_forward(1.75)"]
    assert rows[0].pose_after == "(0.00, 0.00, 0°)"
    assert rows[1].pose_after == "(3.25, 0.00, 0°)"
    assert rows[2].pose_before == "(3.25, 0.00, 0°)"
    assert rows[2].pose_after == "(3.25, 0.00, 90°)"
    assert rows[3].pose_after == "(3.25, 1.75, 90°)"


def test_pose_table_comes_from_the_run_host() -> None:
    host = ScriptHost(WorldGeometry(), linear_speed=0.5, angular_speed_deg=90.0)
    host.run_commands(BEACON_PROGRAM)
    rows = pose_table_from_host(host)

    assert rows == build_pose_table(BEACON_PROGRAM, linear_speed=0.5, angular_speed_deg=90.0)
    assert rows[-1].pose_after == format_pose(host.pose)
    # Configured speeds change timing only: 6.5 s + 1 s + 3.5 s
    assert math.isclose(host.trajectory()[-1].t, 11.0, rel_tol=1e-9)


def test_pose_table_for_sensor_mission_skips_sensor_reads() -> None:
    mission = load_builtin_mission("sensor_stop")
    host = ScriptHost(mission.world.geometry, start_pose=mission.world.start)
    host.run(get_scripted_program("sensor_stop"))
    rows = pose_table_from_host(host)

    assert len(rows) == 1 + len(host.history)
    assert rows[1].command == "set_pose(0, 0, 0)"
    assert all(r.command.startswith("move_forward") for r in rows[2:])
    assert rows[-1].pose_after == format_pose(host.pose)


def test_heading_display_wraps() -> None:
    assert math.isclose(heading_deg(-math.pi / 2), 270.0, rel_tol=1e-9)
    assert math.isclose(heading_deg(5 * math.pi / 2), 90.0, rel_tol=1e-9)
    assert format_pose(Pose(1.0, 2.0, -math.pi / 2)) == "(1.00, 2.00, 270°)"
    assert format_pose(Pose(0.0, 0.0, -1e-15)) == "(0.00, 0.00, 0°)"


def test_rendered_table_has_one_line_per_row() -> None:
    text = render_pose_table(build_pose_table(BEACON_PROGRAM))
    assert len(text.splitlines()) == 2 + 4
    assert "turn_left(90)" in text


def test_path_length_of_beacon_run() -> None:
    traj = build_trajectory([Drive(0.25, 0.0, 13.0), Drive(0.0, math.pi / 4, 2.0), Drive(0.25, 0.0, 7.0)])
    assert math.isclose(path_length(traj), 5.0, rel_tol=1e-9)


def test_path_length_counts_teleport_jump() -> None:
    traj = build_trajectory([SetPose(Pose(3.0, 4.0, 0.0))])
    assert math.isclose(path_length(traj), 5.0, rel_tol=1e-12)
    assert path_length(build_trajectory([])) == 0.0


def test_run_metrics_and_aggregation() -> None:
    traj = build_trajectory([Drive(0.25, 0.0, 4.0)])
    hit = compute_run_metrics(traj, Goal(1.0, 0.0, 0.1), mission_id="m", num_primitives=1)
    miss = compute_run_metrics(traj, Goal(5.0, 0.0, 0.1), mission_id="m", num_primitives=1)

    assert hit.success and not miss.success
    assert math.isclose(hit.duration, 4.0, abs_tol=1e-9)
    assert hit.num_samples == 201
    assert hit.to_dict()["mission_id"] == "m"

    agg = MissionAggregator()
    agg.add(hit)
    agg.add(miss)
    summary = agg.summary()["m"]
    assert summary["num_runs"] == 2.0
    assert summary["success_rate"] == 0.5
    assert agg.mission_ids() == ["m"]
