"""Rotating globe with a procedurally generated satellite fleet."""
from __future__ import annotations

import math
import random
from typing import Callable, Iterable, Sequence

import numpy as np

from orbit_canvas.core.config import FLEET_CFG, GLOBE_CFG, FleetCfg, GlobeCfg
from orbit_canvas.core.generator import generate_satellites
from orbit_canvas.core.geometry import (
    FleetGeometry,
    fleet_size,
    globe_radius,
    orbit_rings,
    rotate_point,
    satellite_positions,
)
from orbit_canvas.core.logging_utils import RunLogger
from orbit_canvas.core.model import (
    DistributionLike,
    DistributionSignature,
    GlobeState,
    Satellite,
    coerce_distribution,
    distribution_signature,
)

from .component import CanvasComponent, ComponentState
from .surface import CanvasSurface, DrawContext, SurfaceFactory

FleetGenerator = Callable[..., Sequence[Satellite]]


def draw_background_glow(ctx: DrawContext, width: float, height: float, *, cfg: GlobeCfg) -> None:
    center = (width / 2.0, height / 2.0)
    ctx.fill_radial_gradient(
        center,
        cfg.background_glow_inner_radius,
        center,
        max(width, height),
        cfg.background_glow_stops,
    )


def draw_globe(
    ctx: DrawContext,
    center: tuple[float, float],
    radius: float,
    angle_deg: float,
    *,
    cfg: GlobeCfg,
) -> None:
    if radius <= 0.0:
        return
    highlight = -radius * cfg.highlight_offset
    ctx.fill_gradient_circle(
        center,
        radius,
        (highlight, highlight),
        radius * cfg.highlight_radius,
        cfg.globe_stops,
    )

    angle_rad = math.radians(angle_deg)
    cx, cy = center
    for dx, dy, rx, ry, tilt in cfg.continents:
        ox, oy = rotate_point(dx * radius, dy * radius, angle_rad)
        ctx.fill_ellipse(
            (cx + ox, cy + oy),
            rx * radius,
            ry * radius,
            angle_deg + math.degrees(tilt),
            cfg.continent_color,
            cfg.continent_alpha,
        )

    ctx.stroke_circle(center, radius, cfg.rim_color, cfg.rim_alpha, cfg.rim_width)


def draw_orbit_rings(
    ctx: DrawContext,
    center: tuple[float, float],
    radius: float,
    angle_deg: float,
    *,
    cfg: GlobeCfg,
) -> None:
    for rx, ry, rotation, alpha in orbit_rings(radius, angle_deg, cfg):
        ctx.stroke_ellipse(center, rx, ry, rotation, cfg.ring_color, alpha, cfg.ring_width)


def draw_satellites(
    ctx: DrawContext,
    positions: np.ndarray,
    geometry: FleetGeometry,
    *,
    palette: Sequence[tuple[int, int, int]],
    cfg: GlobeCfg,
) -> None:
    for (x, y), size, color_index in zip(
        positions.tolist(), geometry.size.tolist(), geometry.color_index.tolist()
    ):
        color = palette[color_index % len(palette)]
        ctx.fill_circle((x, y), size, color, cfg.blip_alpha)
        ctx.fill_circle((x, y), size * cfg.halo_scale, color, cfg.halo_alpha)


def draw_center_glow(
    ctx: DrawContext,
    center: tuple[float, float],
    radius: float,
    *,
    cfg: GlobeCfg,
) -> None:
    outer = radius * cfg.center_glow_radius_factor
    if outer <= 0.0:
        return
    ctx.fill_radial_gradient(center, 0.0, center, outer, cfg.center_glow_stops)


class OrbitalDisplay(CanvasComponent):
    """Globe, orbit rings and satellite blips redrawn every frame.

    The fleet is only regenerated when the distribution signature changes, so
    re-feeding the same data each frame never makes the blips jump.
    """

    name = "orbital"

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        generator: FleetGenerator = generate_satellites,
        cfg: GlobeCfg = GLOBE_CFG,
        fleet_cfg: FleetCfg = FLEET_CFG,
        logger: RunLogger | None = None,
        surface_factory: SurfaceFactory | None = None,
    ) -> None:
        super().__init__(logger=logger, surface_factory=surface_factory)
        self._rng = rng or random.Random()
        self._generator = generator
        self._cfg = cfg
        self._fleet_cfg = fleet_cfg
        self.globe = GlobeState()
        self.fleet: tuple[Satellite, ...] = ()
        self._geometry = FleetGeometry.from_fleet(())
        self._signature: DistributionSignature | None = None
        self.positions = np.zeros((0, 2), dtype=float)

    @property
    def signature(self) -> DistributionSignature | None:
        return self._signature

    @property
    def angle(self) -> float:
        return self.globe.angle

    def initialize(self, surface: CanvasSurface) -> None:
        self.surface = surface
        self.globe.reset()
        self._update_globe(*surface.css_size)

    def on_resize(self, width: float, height: float) -> None:
        self._update_globe(width, height)

    def _update_globe(self, width: float, height: float) -> None:
        self.globe.center = (width / 2.0, height / 2.0)
        self.globe.radius = globe_radius(width, height, self._cfg)

    def regenerate_fleet(self, distribution: Iterable[DistributionLike], sat_total: float) -> bool:
        """Replace the fleet if the distribution changed; return whether it did."""

        entries = coerce_distribution(distribution)
        signature = distribution_signature(entries)
        if signature == self._signature:
            return False
        count = fleet_size(sat_total, self._fleet_cfg)
        fleet = tuple(self._generator(entries, count, rng=self._rng, cfg=self._fleet_cfg))
        self.fleet = fleet
        self._geometry = FleetGeometry.from_fleet(fleet)
        self._signature = signature
        if self.state is ComponentState.UNINITIALIZED:
            self.state = ComponentState.SEEDED
        self._log("regenerate", satellites=len(fleet), countries=len(entries))
        return True

    def rotation_step(self, dt: float = 0.0) -> float:
        if self._cfg.scale_by_delta:
            return self._cfg.rotation_step_deg * dt * self._cfg.reference_fps
        return self._cfg.rotation_step_deg

    def on_frame(self, dt: float = 0.0) -> None:
        ctx = self.surface.get_context() if self.surface is not None else None
        if ctx is None:
            return
        cfg = self._cfg
        width, height = self.surface.css_size
        self._update_globe(width, height)
        center = self.globe.center
        radius = self.globe.radius
        angle = self.globe.angle

        ctx.clear()
        draw_background_glow(ctx, width, height, cfg=cfg)
        draw_globe(ctx, center, radius, angle, cfg=cfg)
        draw_orbit_rings(ctx, center, radius, angle, cfg=cfg)
        self.positions = satellite_positions(
            self._geometry, self.globe.unwrapped_angle, center, radius, cfg
        )
        draw_satellites(ctx, self.positions, self._geometry, palette=self._fleet_cfg.palette, cfg=cfg)
        draw_center_glow(ctx, center, radius, cfg=cfg)

        self.globe.advance(self.rotation_step(dt))
        self.frame_count += 1


__all__ = [
    "OrbitalDisplay",
    "draw_background_glow",
    "draw_center_glow",
    "draw_globe",
    "draw_orbit_rings",
    "draw_satellites",
]
