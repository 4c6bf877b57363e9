"""Compositing tests for the drawing primitives."""
import pygame
import pytest

from orbit_canvas.core.config import GLOBE_CFG
from orbit_canvas.render import draw
from orbit_canvas.render.surface import CanvasSurface


def _opaque(size=(40, 40), color=(0, 0, 0)):
    surface = pygame.Surface(size, pygame.SRCALPHA)
    surface.fill((*color, 255))
    return surface


class TestFillCircle:
    """Translucent fills blend over what is already on the canvas."""

    def test_half_alpha_over_black(self):
        surface = _opaque()
        draw.fill_circle(surface, (20, 20), 3.0, (255, 255, 255), 0.5)
        pixel = surface.get_at((20, 20))
        assert pixel.a == 255
        assert pixel.r == pytest.approx(128, abs=3)
        assert pixel.r == pixel.g == pixel.b

    def test_outside_the_circle_is_untouched(self):
        surface = _opaque()
        draw.fill_circle(surface, (20, 20), 3.0, (255, 255, 255), 0.5)
        assert tuple(surface.get_at((30, 30))) == (0, 0, 0, 255)

    def test_subpixel_radius_blends_one_pixel(self):
        surface = _opaque()
        draw.fill_circle(surface, (10, 10), 0.3, (255, 255, 255), 0.5)
        assert surface.get_at((10, 10)).r == pytest.approx(128, abs=3)
        assert surface.get_at((10, 10)).a == 255
        assert tuple(surface.get_at((11, 10))) == (0, 0, 0, 255)

    def test_opaque_fill_replaces_colour(self):
        surface = _opaque()
        draw.fill_circle(surface, (20, 20), 3.0, (0, 255, 0), 1.0)
        assert tuple(surface.get_at((20, 20))) == (0, 255, 0, 255)

    def test_stacked_translucent_fills_accumulate(self):
        surface = _opaque()
        draw.fill_circle(surface, (20, 20), 3.0, (255, 255, 255), 0.5)
        once = surface.get_at((20, 20)).r
        draw.fill_circle(surface, (20, 20), 3.0, (255, 255, 255), 0.5)
        assert surface.get_at((20, 20)).r > once

    def test_translucent_over_transparent_canvas(self):
        surface = pygame.Surface((20, 20), pygame.SRCALPHA)
        draw.fill_circle(surface, (10, 10), 2.0, (255, 0, 0), 0.5)
        pixel = surface.get_at((10, 10))
        assert pixel.a == pytest.approx(128, abs=3)


class TestStrokeCircle:
    def test_translucent_rim_keeps_canvas_opaque(self):
        surface = _opaque((60, 60), (20, 40, 80))
        draw.stroke_circle(surface, (30, 30), 20.0, (255, 255, 255), 0.04, 2)
        alpha = pygame.surfarray.array_alpha(surface)
        assert alpha.min() == 255
        assert surface.get_at((50, 30)).r >= 20
        assert tuple(surface.get_at((30, 30))) == (20, 40, 80, 255)


class TestHaloOverGlobe:
    """Satellite blips and halos over the opaque globe gradient."""

    def _globe(self):
        canvas = CanvasSurface((100, 100), 1.0)
        ctx = canvas.get_context()
        ctx.clear()
        ctx.fill_gradient_circle((50, 50), 40.0, (-12.0, -12.0), 4.0, GLOBE_CFG.globe_stops)
        return canvas, ctx

    def test_halo_keeps_globe_alpha(self):
        canvas, ctx = self._globe()
        before = canvas.surface.get_at((50, 60))
        assert before.a == 255
        ctx.fill_circle((50, 60), 2.0 * GLOBE_CFG.halo_scale, (96, 165, 250), GLOBE_CFG.halo_alpha)
        after = canvas.surface.get_at((50, 60))
        assert after.a == 255
        assert after.b > before.b

    def test_blip_nearly_replaces_globe_colour(self):
        canvas, ctx = self._globe()
        ctx.fill_circle((50, 60), 2.0, (250, 204, 21), GLOBE_CFG.blip_alpha)
        pixel = canvas.surface.get_at((50, 60))
        assert pixel.a == 255
        assert 200 < pixel.r < 250
