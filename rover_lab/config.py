from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import yaml

from .commands import ANGULAR_SPEED_DEG, LINEAR_SPEED
from .host import DEFAULT_MAX_CALLS
from .rover import DEFAULT_DT
from .sensors import DEFAULT_MAX_RANGE, LidarConfig


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass
class SimConfig:
    dt: float = DEFAULT_DT
    linear_speed: float = LINEAR_SPEED
    angular_speed_deg: float = ANGULAR_SPEED_DEG
    max_range: float = DEFAULT_MAX_RANGE
    num_beams: int = 9
    fov_deg: float = 90.0
    max_calls: int = DEFAULT_MAX_CALLS
    telemetry_path: str = "telemetry_logs/runs.jsonl"

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "SimConfig":
        """Build from the nested sections of ``configs/sim.yaml``.

        Missing sections or keys keep their defaults.
        """
        sim_cfg = cfg.get("sim") or {}
        rover_cfg = cfg.get("rover") or {}
        sensor_cfg = cfg.get("sensor") or {}
        host_cfg = cfg.get("host") or {}
        logging_cfg = cfg.get("logging") or {}
        return cls(
            dt=float(sim_cfg.get("dt", DEFAULT_DT)),
            linear_speed=float(rover_cfg.get("linear_speed", LINEAR_SPEED)),
            angular_speed_deg=float(rover_cfg.get("angular_speed_deg", ANGULAR_SPEED_DEG)),
            max_range=float(sensor_cfg.get("max_range", DEFAULT_MAX_RANGE)),
            num_beams=int(sensor_cfg.get("num_beams", 9)),
            fov_deg=float(sensor_cfg.get("fov_deg", 90.0)),
            max_calls=int(host_cfg.get("max_calls", DEFAULT_MAX_CALLS)),
            telemetry_path=str(logging_cfg.get("telemetry_path", "telemetry_logs/runs.jsonl")),
        )

    @classmethod
    def from_yaml(cls, path: str) -> "SimConfig":
        return cls.from_dict(load_yaml(path))

    def lidar_config(self) -> LidarConfig:
        return LidarConfig(num_beams=self.num_beams, fov_deg=self.fov_deg, max_range=self.max_range)
