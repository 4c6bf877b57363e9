"""Configuration dataclasses for the canvas visualisation."""
from __future__ import annotations

import math
from dataclasses import dataclass

Stop = tuple[float, tuple[int, int, int, int]]


@dataclass(frozen=True)
class ParticleCfg:
    population: int = 400
    min_size: float = 1.0
    max_size: float = 3.0
    min_speed: float = 0.1
    max_speed: float = 0.4
    min_alpha: float = 0.2
    max_alpha: float = 1.0
    background_color: tuple[int, int, int] = (0, 0, 0)
    particle_color: tuple[int, int, int] = (255, 255, 255)
    scale_by_delta: bool = False
    reference_fps: float = 60.0


@dataclass(frozen=True)
class FleetCfg:
    min_fleet: int = 80
    max_fleet: int = 450
    fleet_divisor: int = 6
    min_size: float = 0.8
    max_size: float = 2.4
    min_altitude: float = 0.15
    max_altitude: float = 0.75
    min_angular_speed: float = 0.2
    max_angular_speed: float = 1.4
    max_offset_deg: float = 360.0
    max_phase: float = 2.0 * math.pi
    fallback_country: str = "Unknown"
    fallback_count: int = 1
    palette: tuple[tuple[int, int, int], ...] = (
        (96, 165, 250),
        (52, 211, 153),
        (244, 114, 182),
        (250, 204, 21),
        (167, 139, 250),
    )


@dataclass(frozen=True)
class GlobeCfg:
    radius_factor: float = 0.38
    rotation_step_deg: float = 0.22
    scale_by_delta: bool = False
    reference_fps: float = 60.0
    background_glow_inner_radius: float = 10.0
    background_glow_stops: tuple[Stop, ...] = (
        (0.0, (10, 20, 40, int(255 * 0.6))),
        (1.0, (0, 0, 0, 0)),
    )
    globe_stops: tuple[Stop, ...] = (
        (0.0, (42, 58, 102, 255)),
        (0.6, (11, 37, 70, 255)),
        (1.0, (4, 16, 37, 255)),
    )
    highlight_offset: float = 0.3
    highlight_radius: float = 0.1
    # (dx, dy, rx, ry) as fractions of the globe radius, tilt in radians
    continents: tuple[tuple[float, float, float, float, float], ...] = (
        (-0.15, -0.05, 0.35, 0.18, -0.5),
        (0.25, 0.05, 0.28, 0.14, 0.4),
    )
    continent_color: tuple[int, int, int] = (255, 255, 255)
    continent_alpha: float = 0.03
    rim_color: tuple[int, int, int] = (255, 255, 255)
    rim_alpha: float = 0.04
    rim_width: int = 2
    ring_count: int = 4
    ring_rx_step: float = 0.12
    ring_ry_base: float = 0.6
    ring_ry_step: float = 0.08
    ring_angle_step_deg: float = 20.0
    ring_alpha_base: float = 0.01
    ring_alpha_step: float = 0.02
    ring_color: tuple[int, int, int] = (255, 255, 255)
    ring_width: int = 1
    orbit_base: float = 0.85
    orbit_altitude_scale: float = 0.6
    orbit_flatten: float = 0.72
    angular_speed_scale: float = 0.02
    blip_alpha: float = 0.95
    halo_alpha: float = 0.12
    halo_scale: float = 3.5
    center_glow_radius_factor: float = 1.2
    center_glow_stops: tuple[Stop, ...] = (
        (0.0, (255, 255, 255, int(255 * 0.02))),
        (1.0, (0, 0, 0, 0)),
    )


@dataclass(frozen=True)
class ViewportCfg:
    width: int = 1280
    height: int = 800
    pixel_ratio: float = 1.0
    min_canvas_pixels: int = 1
    target_fps: int = 60
    max_frame_delta: float = 0.25
    panel_fraction: float = 0.7
    title: str = "Orbit Canvas"
    fps_text_color: tuple[int, int, int] = (234, 241, 255)
    fps_text_alpha: int = int(255 * 0.6)


PARTICLE_CFG = ParticleCfg()
FLEET_CFG = FleetCfg()
GLOBE_CFG = GlobeCfg()
VIEWPORT_CFG = ViewportCfg()


__all__ = [
    "FLEET_CFG",
    "GLOBE_CFG",
    "PARTICLE_CFG",
    "VIEWPORT_CFG",
    "FleetCfg",
    "GlobeCfg",
    "ParticleCfg",
    "Stop",
    "ViewportCfg",
]
