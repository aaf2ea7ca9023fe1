from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from rover_lab.config import SimConfig, load_yaml
from rover_lab.debrief import pose_table_from_host, render_pose_table
from rover_lab.evaluator import MissionRun
from rover_lab.host import ScriptHost
from rover_lab.metrics import compute_run_metrics
from rover_lab.mission import list_builtin_missions, load_builtin_mission, load_mission
from rover_lab.programs import get_scripted_program, has_scripted_program
from rover_lab.sensors import LidarSensor
from telemetry.logger import TelemetryLogger


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a mission's command program and report the outcome.")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/sim.yaml",
        help="Path to sim YAML config.",
    )
    parser.add_argument(
        "--mission",
        type=str,
        default=None,
        help=f"Bundled mission id ({', '.join(list_builtin_missions())}).",
    )
    parser.add_argument(
        "--mission-file",
        type=str,
        default=None,
        help="Path to a mission JSON file (overrides --mission).",
    )
    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Write a PNG of the world and path to this path.",
    )
    parser.add_argument(
        "--no-telemetry",
        action="store_true",
        help="Do not append the run to the telemetry log.",
    )
    args = parser.parse_args()

    raw_cfg = load_yaml(args.config)
    cfg = SimConfig.from_dict(raw_cfg)

    if args.mission_file:
        mission = load_mission(args.mission_file)
    else:
        mission_id = args.mission or raw_cfg.get("maps", {}).get("default_mission", "exo1-m1")
        mission = load_builtin_mission(mission_id)

    world = mission.world
    print(f"{mission.title} [{mission.id}]")
    if mission.briefing:
        print(mission.briefing)
    print()

    host = ScriptHost(
        world.geometry,
        start_pose=world.start,
        dt=cfg.dt,
        max_range=cfg.max_range,
        max_calls=cfg.max_calls,
        linear_speed=cfg.linear_speed,
        angular_speed_deg=cfg.angular_speed_deg,
    )
    if has_scripted_program(mission.id):
        primitives = host.run(get_scripted_program(mission.id))
    else:
        primitives = host.run_commands(mission.program)
    trajectory = host.trajectory()

    run = MissionRun(mission.id, world.goal)
    outcome = run.complete(trajectory)
    metrics = compute_run_metrics(trajectory, world.goal, mission_id=mission.id, num_primitives=len(primitives))

    rows = pose_table_from_host(host)
    print(render_pose_table(rows))
    print()

    scan = LidarSensor(cfg.lidar_config()).scan(world.geometry, host.pose)
    print("Final scan [m]: " + " ".join(f"{r:.2f}" for r in scan))
    print(
        f"Outcome: {'SUCCESS' if outcome.success else 'MISSED'} "
        f"(distance to goal {outcome.final_distance:.3f} m, r={world.goal.r:.2f} m, "
        f"path {metrics.path_length:.2f} m in {metrics.duration:.2f} s)"
    )

    if not args.no_telemetry:
        with TelemetryLogger(cfg.telemetry_path) as logger:
            logger.log_run(mission.id, primitives, trajectory, outcome, metrics.to_dict())
        print(f"Telemetry appended to {cfg.telemetry_path}")

    if args.plot:
        import matplotlib

        matplotlib.use("Agg")  # off-screen backend for PNG writing
        from rover_lab.plot import save_run_plot

        save_run_plot(world, trajectory, args.plot, outcome)
        print(f"Plot written to {args.plot}")


if __name__ == "__main__":
    main()
