from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
import math

from .geometry_utils import ray_aabb_distance, ray_circle_distance, unit_vector
from .primitives import Pose
from .world import CircleObstacle, Obstacle, RectObstacle, WorldGeometry


DEFAULT_MAX_RANGE = 5.0


def compute_front_distance(
    pose: Pose,
    world: WorldGeometry,
    max_range: float = DEFAULT_MAX_RANGE,
) -> float:
    """Distance to the nearest obstacle straight ahead of ``pose``.

    Parameters
    ----------
    pose : Pose
        Sensor origin and heading.
    world : WorldGeometry
        Obstacles to test. Not modified.
    max_range : float
        Sensor range in meters.

    Returns
    -------
    float
        Distance in [0, max_range]; ``max_range`` when nothing is hit.
    """
    return _cast_single_ray(world, pose.x, pose.y, pose.theta, max_range)


def compute_scan(
    pose: Pose,
    world: WorldGeometry,
    num_beams: int,
    fov_deg: float,
    max_range: float = DEFAULT_MAX_RANGE,
) -> List[float]:
    """Fan of ``num_beams`` rays spread evenly over ``fov_deg`` around the heading.

    The fan sweeps from the left edge to the right edge, so the first beam is
    the left-most one. A single beam is the front distance.
    """
    if num_beams < 1:
        raise ValueError(f"num_beams must be >= 1, got {num_beams}")
    if num_beams == 1:
        return [compute_front_distance(pose, world, max_range)]

    fov_rad = math.radians(fov_deg)
    # Center FOV around rover heading
    start_angle = pose.theta + fov_rad / 2.0
    dtheta = -fov_rad / (num_beams - 1)

    ranges: List[float] = []
    for i in range(num_beams):
        ray_angle = start_angle + i * dtheta
        ranges.append(_cast_single_ray(world, pose.x, pose.y, ray_angle, max_range))
    return ranges


@dataclass
class LidarConfig:
    """Configuration for the scanning range sensor."""

    num_beams: int = 9
    fov_deg: float = 90.0
    max_range: float = DEFAULT_MAX_RANGE


class LidarSensor:
    """Config-bound wrapper around :func:`compute_scan`."""

    def __init__(self, config: LidarConfig) -> None:
        self.config = config

    def scan(self, world: WorldGeometry, pose: Pose) -> List[float]:
        return compute_scan(
            pose,
            world,
            num_beams=self.config.num_beams,
            fov_deg=self.config.fov_deg,
            max_range=self.config.max_range,
        )

    def front(self, world: WorldGeometry, pose: Pose) -> float:
        return compute_front_distance(pose, world, self.config.max_range)


# ------------------------------------------------------------------
# Ray casting
# ------------------------------------------------------------------
def _cast_single_ray(
    world: WorldGeometry,
    x: float,
    y: float,
    angle: float,
    max_range: float,
) -> float:
    """Compute distance to nearest obstacle hit, clamped to [0, max_range]."""
    if max_range < 0.0:
        raise ValueError(f"max_range must be non-negative, got {max_range}")
    dx, dy = unit_vector(angle)

    distance = max_range
    for obs in world.obstacles:
        t = _intersect(obs, x, y, dx, dy)
        if t is not None and t < distance:
            distance = t

    return max(0.0, min(distance, max_range))


def _intersect(obs: Obstacle, x: float, y: float, dx: float, dy: float) -> Optional[float]:
    if isinstance(obs, CircleObstacle):
        return ray_circle_distance(x, y, dx, dy, obs.x, obs.y, obs.radius)
    if isinstance(obs, RectObstacle):
        xmin, ymin, xmax, ymax = obs.bounds
        return ray_aabb_distance(x, y, dx, dy, xmin, ymin, xmax, ymax)
    raise TypeError(f"Unsupported obstacle: {obs!r}")
