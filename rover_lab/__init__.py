"""
Top-level package for the rover lab simulator.

Components:
- geometry_utils: ray/circle and ray/box intersection, angle helpers
- world: obstacles, goal region, mission world layout
- sensors: front distance sensor and scanning fan
- primitives: drive / teleport primitives and pose samples
- commands: learner commands to drive primitives
- rover: differential drive kinematics (forward Euler)
- trajectory: primitive list to time-stamped poses
- evaluator: goal success check
- host: the five-call script surface with live pose tracking
- mission: bundled and file-based missions
- programs: closed-loop reference solutions keyed by mission id
- metrics, debrief, plot: post-run summaries
"""

from .primitives import Pose, PoseSample, Drive, SetPose
from .world import CircleObstacle, RectObstacle, WorldGeometry, Goal, WorldConfig
from .sensors import compute_front_distance, compute_scan, LidarConfig, LidarSensor
from .commands import RobotCommand, build_program, translate_command
from .rover import Rover, RoverState
from .trajectory import build_trajectory
from .evaluator import Outcome, evaluate
from .host import ScriptHost, ScriptStepLimitError

__all__ = [
    "Pose",
    "PoseSample",
    "Drive",
    "SetPose",
    "CircleObstacle",
    "RectObstacle",
    "WorldGeometry",
    "Goal",
    "WorldConfig",
    "compute_front_distance",
    "compute_scan",
    "LidarConfig",
    "LidarSensor",
    "RobotCommand",
    "build_program",
    "translate_command",
    "Rover",
    "RoverState",
    "build_trajectory",
    "Outcome",
    "evaluate",
    "ScriptHost",
    "ScriptStepLimitError",
]
