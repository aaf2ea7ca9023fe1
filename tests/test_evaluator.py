from __future__ import annotations

import pytest

from rover_lab.evaluator import MissionRun, evaluate
from rover_lab.primitives import Drive, Pose, PoseSample
from rover_lab.trajectory import build_trajectory
from rover_lab.world import Goal


def test_final_pose_on_goal_boundary_succeeds() -> None:
    outcome = evaluate([PoseSample(0.0, 0.0, 0.0, 0.0)], Goal(3.0, 4.0, 5.0))
    assert outcome.success
    assert outcome.final_distance == 5.0


def test_final_pose_just_outside_goal_fails() -> None:
    outcome = evaluate([PoseSample(0.0, 0.0, -1e-9, 0.0)], Goal(3.0, 4.0, 5.0))
    assert not outcome.success
    assert outcome.final_distance > 5.0


def test_only_the_final_sample_counts() -> None:
    # Drives straight through the goal and out the other side
    traj = build_trajectory([Drive(0.25, 0.0, 8.0)])
    goal = Goal(1.0, 0.0, 0.2)
    assert any(goal.contains(s.x, s.y) for s in traj)
    assert not evaluate(traj, goal).success


def test_empty_program_can_succeed_at_start() -> None:
    traj = build_trajectory([], Pose(1.0, 1.0, 0.0))
    assert evaluate(traj, Goal(1.1, 1.0, 0.2)).success
    assert not evaluate(traj, Goal(5.0, 5.0, 0.2)).success


def test_evaluate_is_idempotent() -> None:
    traj = build_trajectory([Drive(0.25, 0.0, 4.0)])
    goal = Goal(1.0, 0.0, 0.1)
    assert evaluate(traj, goal) == evaluate(traj, goal)


def test_mission_run_completes_once() -> None:
    traj = build_trajectory([Drive(0.25, 0.0, 4.0)])
    run = MissionRun("demo", Goal(1.0, 0.0, 0.1))
    assert not run.completed

    outcome = run.complete(traj)
    assert outcome.success
    assert run.completed
    with pytest.raises(RuntimeError):
        run.complete(traj)
