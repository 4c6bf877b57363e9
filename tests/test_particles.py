"""Tests for the drifting particle field."""
import random

import pygame
import pytest

from orbit_canvas.core.config import PARTICLE_CFG
from orbit_canvas.render.particles import ParticleField, generate_particles
from orbit_canvas.render.surface import CanvasSurface


def _field(surface, population=50, seed=3):
    field = ParticleField(population=population, rng=random.Random(seed))
    field.initialize(surface)
    return field


class TestGenerateParticles:
    """Initial particle population."""

    def test_population_and_ranges(self, rng):
        particles = generate_particles(400, size=(320, 200), rng=rng)
        assert len(particles) == 400
        for p in particles:
            assert 0.0 <= p.x < 320
            assert 0.0 <= p.y < 200
            assert PARTICLE_CFG.min_size <= p.size < PARTICLE_CFG.max_size
            assert PARTICLE_CFG.min_speed <= p.speed < PARTICLE_CFG.max_speed
            assert PARTICLE_CFG.min_alpha <= p.alpha < PARTICLE_CFG.max_alpha

    def test_negative_population_rejected(self, rng):
        with pytest.raises(ValueError):
            generate_particles(-1, size=(10, 10), rng=rng)


class TestParticleField:
    """Per-frame drift, wrapping and resize handling."""

    def test_default_population(self, surface):
        field = ParticleField(rng=random.Random(0))
        field.initialize(surface)
        assert len(field.particles) == PARTICLE_CFG.population

    def test_drift_without_wrap(self, surface):
        field = _field(surface)
        for p in field.particles:
            p.y = 150.0
        before = [(p.x, p.y, p.speed) for p in field.particles]
        frames = 10
        for _ in range(frames):
            field.on_frame()
        for (x, y, speed), p in zip(before, field.particles):
            assert p.x == x
            assert p.y == pytest.approx(y - frames * speed)

    def test_wrap_resets_to_bottom_with_new_x(self, surface):
        field = _field(surface, population=1)
        particle = field.particles[0]
        particle.y = 0.05
        particle.speed = 0.1
        wrapped = field.step()
        assert wrapped == 1
        assert particle.y == surface.height
        assert 0.0 <= particle.x < surface.width

    def test_no_wrap_at_exactly_zero(self, surface):
        field = _field(surface, population=1)
        particle = field.particles[0]
        particle.y = 0.25
        particle.speed = 0.25
        assert field.step() == 0
        assert particle.y == 0.0

    def test_resize_keeps_positions(self, surface):
        field = _field(surface)
        before = [(p.x, p.y) for p in field.particles]
        field.on_resize(40.0, 30.0)
        assert [(p.x, p.y) for p in field.particles] == before
        assert (field.width, field.height) == (40.0, 30.0)

    def test_wrap_uses_resized_dimensions(self, surface):
        field = _field(surface, population=1)
        field.on_resize(40.0, 30.0)
        particle = field.particles[0]
        particle.y = 0.0
        field.step()
        assert particle.y == 30.0
        assert 0.0 <= particle.x < 40.0

    def test_frame_clears_to_opaque_black(self, surface):
        field = _field(surface, population=0)
        field.on_frame()
        assert tuple(surface.surface.get_at((5, 5))) == (0, 0, 0, 255)

    def test_frame_draws_particles(self, surface):
        field = _field(surface, population=1)
        particle = field.particles[0]
        particle.x, particle.y, particle.size, particle.alpha = 100.0, 100.0, 2.5, 1.0
        field.on_frame()
        assert tuple(surface.surface.get_at((100, 100)))[:3] == (255, 255, 255)

    def test_delta_scaling_when_enabled(self, surface):
        from dataclasses import replace

        cfg = replace(PARTICLE_CFG, scale_by_delta=True, reference_fps=60.0)
        field = ParticleField(population=1, rng=random.Random(1), cfg=cfg)
        field.initialize(surface)
        particle = field.particles[0]
        particle.y, particle.speed = 100.0, 0.2
        field.on_frame(dt=1.0 / 30.0)
        assert particle.y == pytest.approx(100.0 - 0.4)

    def test_unavailable_context_is_inert(self):
        def broken(size):
            raise pygame.error("no video memory")

        surface = CanvasSurface((100, 100), factory=broken)
        assert surface.get_context() is None
        field = _field(surface, population=5)
        before = [(p.x, p.y) for p in field.particles]
        field.on_frame()
        assert [(p.x, p.y) for p in field.particles] == before
        assert field.frame_count == 0


class TestParticleCompositing:
    """Particles blend over the opaque background with their own alpha."""

    def test_half_alpha_particle(self, surface):
        field = _field(surface, population=1)
        particle = field.particles[0]
        particle.x, particle.y, particle.size, particle.alpha = 25.0, 25.0, 2.0, 0.5
        field.on_frame()
        pixel = surface.surface.get_at((25, 25))
        assert pixel.a == 255
        assert pixel.r == pytest.approx(128, abs=3)

    def test_canvas_stays_opaque(self, surface):
        field = _field(surface, population=400)
        field.on_frame()
        alpha = pygame.surfarray.array_alpha(surface.surface)
        assert alpha.min() == 255
        assert alpha.max() == 255

    def test_dim_particle_stays_dim(self, surface):
        field = _field(surface, population=1)
        particle = field.particles[0]
        particle.x, particle.y, particle.size, particle.alpha = 60.0, 60.0, 2.0, 0.2
        field.on_frame()
        assert surface.surface.get_at((60, 60)).r == pytest.approx(51, abs=3)
