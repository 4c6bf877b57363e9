"""Geometry helpers shared by the particle field and the orbital display."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .config import FLEET_CFG, GLOBE_CFG, FleetCfg, GlobeCfg
from .model import Satellite


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* between *lo* and *hi*."""

    return max(lo, min(hi, value))


def uniform(rng: random.Random, lo: float, hi: float) -> float:
    """Uniform sample from the half-open interval ``[lo, hi)``."""

    return lo + (hi - lo) * rng.random()


def fleet_size(sat_total: float, cfg: FleetCfg = FLEET_CFG) -> int:
    """Number of blips drawn for a reported satellite total."""

    return int(clamp(math.floor(sat_total / cfg.fleet_divisor), cfg.min_fleet, cfg.max_fleet))


def globe_radius(width: float, height: float, cfg: GlobeCfg = GLOBE_CFG) -> float:
    return cfg.radius_factor * min(width, height)


@dataclass(frozen=True)
class FleetGeometry:
    """Column-wise view of a fleet for vectorised position updates."""

    altitude: np.ndarray
    angular_speed: np.ndarray
    offset_deg: np.ndarray
    phase: np.ndarray
    size: np.ndarray
    color_index: np.ndarray

    @classmethod
    def from_fleet(cls, fleet: Sequence[Satellite]) -> "FleetGeometry":
        return cls(
            altitude=np.array([s.altitude_factor for s in fleet], dtype=float),
            angular_speed=np.array([s.angular_speed for s in fleet], dtype=float),
            offset_deg=np.array([s.offset_deg for s in fleet], dtype=float),
            phase=np.array([s.phase_offset for s in fleet], dtype=float),
            size=np.array([s.size for s in fleet], dtype=float),
            color_index=np.array([s.color_index for s in fleet], dtype=int),
        )

    def __len__(self) -> int:
        return int(self.altitude.shape[0])


def satellite_positions(
    geometry: FleetGeometry,
    angle_deg: float,
    center: tuple[float, float],
    radius: float,
    cfg: GlobeCfg = GLOBE_CFG,
) -> np.ndarray:
    """Screen positions of every blip as an ``(n, 2)`` array.

    The orbit is flattened on the vertical axis to suggest perspective; the
    satellite index is added to its phase (in degrees) so that blips sharing
    the same random parameters still spread out.
    """

    count = len(geometry)
    if count == 0:
        return np.zeros((0, 2), dtype=float)
    cx, cy = center
    orbit_r = radius * (cfg.orbit_base + geometry.altitude * cfg.orbit_altitude_scale)
    theta_deg = (
        angle_deg * geometry.angular_speed * cfg.angular_speed_scale
        + geometry.offset_deg
        + np.arange(count, dtype=float)
    )
    theta = np.radians(theta_deg) + geometry.phase
    positions = np.empty((count, 2), dtype=float)
    positions[:, 0] = cx + np.cos(theta) * orbit_r
    positions[:, 1] = cy + np.sin(theta) * orbit_r * cfg.orbit_flatten
    return positions


def orbit_rings(
    radius: float, angle_deg: float, cfg: GlobeCfg = GLOBE_CFG
) -> list[tuple[float, float, float, float]]:
    """``(rx, ry, rotation_deg, alpha)`` for each decorative orbit ring."""

    rings = []
    for i in range(cfg.ring_count):
        rings.append(
            (
                radius * (1.0 + cfg.ring_rx_step * i),
                radius * (cfg.ring_ry_base + cfg.ring_ry_step * i),
                angle_deg + i * cfg.ring_angle_step_deg,
                cfg.ring_alpha_base + cfg.ring_alpha_step * i,
            )
        )
    return rings


def rotate_point(dx: float, dy: float, angle_rad: float) -> tuple[float, float]:
    cos_a = math.cos(angle_rad)
    sin_a = math.sin(angle_rad)
    return dx * cos_a - dy * sin_a, dx * sin_a + dy * cos_a


__all__ = [
    "FleetGeometry",
    "clamp",
    "fleet_size",
    "globe_radius",
    "orbit_rings",
    "rotate_point",
    "satellite_positions",
    "uniform",
]
