"""Drifting starfield background."""
from __future__ import annotations

import random

from orbit_canvas.core.config import PARTICLE_CFG, ParticleCfg
from orbit_canvas.core.geometry import uniform
from orbit_canvas.core.logging_utils import RunLogger
from orbit_canvas.core.model import Particle

from .component import CanvasComponent, ComponentState
from .surface import CanvasSurface, DrawContext, SurfaceFactory


def generate_particles(
    count: int,
    *,
    size: tuple[float, float],
    rng: random.Random | None = None,
    cfg: ParticleCfg = PARTICLE_CFG,
) -> list[Particle]:
    if count < 0:
        raise ValueError("particle count must be non-negative")
    rng = rng or random.Random()
    width, height = size
    return [
        Particle(
            x=uniform(rng, 0.0, width),
            y=uniform(rng, 0.0, height),
            size=uniform(rng, cfg.min_size, cfg.max_size),
            speed=uniform(rng, cfg.min_speed, cfg.max_speed),
            alpha=uniform(rng, cfg.min_alpha, cfg.max_alpha),
        )
        for _ in range(count)
    ]


def draw_particles(ctx: DrawContext, particles: list[Particle], *, cfg: ParticleCfg) -> None:
    ctx.clear((*cfg.background_color, 255))
    for particle in particles:
        ctx.fill_circle((particle.x, particle.y), particle.size, cfg.particle_color, particle.alpha)


class ParticleField(CanvasComponent):
    """Fixed population of particles drifting upwards and wrapping at the top.

    Particles are never destroyed: one that passes above the top edge is
    moved back to the bottom at a fresh random ``x``.
    """

    name = "particles"

    def __init__(
        self,
        *,
        population: int | None = None,
        rng: random.Random | None = None,
        cfg: ParticleCfg = PARTICLE_CFG,
        logger: RunLogger | None = None,
        surface_factory: SurfaceFactory | None = None,
    ) -> None:
        super().__init__(logger=logger, surface_factory=surface_factory)
        self._cfg = cfg
        self._population = cfg.population if population is None else population
        self._rng = rng or random.Random()
        self.particles: list[Particle] = []
        self.width = 0.0
        self.height = 0.0

    def initialize(self, surface: CanvasSurface, population: int | None = None) -> None:
        if population is not None:
            self._population = population
        self.surface = surface
        self.width, self.height = surface.css_size
        self.particles = generate_particles(
            self._population,
            size=(self.width, self.height),
            rng=self._rng,
            cfg=self._cfg,
        )
        self.state = ComponentState.SEEDED

    def on_resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def step(self, factor: float = 1.0) -> int:
        """Advance every particle; return how many wrapped."""

        wrapped = 0
        for particle in self.particles:
            particle.y -= particle.speed * factor
            if particle.y < 0:
                particle.y = self.height
                particle.x = uniform(self._rng, 0.0, self.width)
                wrapped += 1
        return wrapped

    def on_frame(self, dt: float = 0.0) -> None:
        ctx = self.surface.get_context() if self.surface is not None else None
        if ctx is None:
            return
        draw_particles(ctx, self.particles, cfg=self._cfg)
        factor = dt * self._cfg.reference_fps if self._cfg.scale_by_delta else 1.0
        self.step(factor)
        self.frame_count += 1


__all__ = ["ParticleField", "draw_particles", "generate_particles"]
