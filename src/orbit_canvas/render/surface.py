"""Canvas surfaces and the drawing context used by the components."""
from __future__ import annotations

import math
from typing import Callable, Sequence

import pygame

from orbit_canvas.core.config import VIEWPORT_CFG, Stop

from . import draw
from .assets import GradientCache, Point

SurfaceFactory = Callable[[tuple[int, int]], pygame.Surface]


def _default_factory(size: tuple[int, int]) -> pygame.Surface:
    return pygame.Surface(size, pygame.SRCALPHA)


class DrawContext:
    """Draw calls in CSS pixels, scaled to the canvas' device pixels."""

    def __init__(self, surface: pygame.Surface, scale: float, gradients: GradientCache) -> None:
        self._surface = surface
        self._scale = scale
        self._gradients = gradients

    @property
    def surface(self) -> pygame.Surface:
        return self._surface

    @property
    def scale(self) -> float:
        return self._scale

    def _point(self, point: Point) -> Point:
        return point[0] * self._scale, point[1] * self._scale

    def clear(self, color: tuple[int, ...] = (0, 0, 0, 0)) -> None:
        self._surface.fill(color)

    def fill_circle(
        self, center: Point, radius: float, color: tuple[int, int, int], alpha: float = 1.0
    ) -> None:
        draw.fill_circle(self._surface, self._point(center), radius * self._scale, color, alpha)

    def stroke_circle(
        self,
        center: Point,
        radius: float,
        color: tuple[int, int, int],
        alpha: float = 1.0,
        width: float = 1.0,
    ) -> None:
        draw.stroke_circle(
            self._surface,
            self._point(center),
            radius * self._scale,
            color,
            alpha,
            max(1, int(round(width * self._scale))),
        )

    def fill_ellipse(
        self,
        center: Point,
        rx: float,
        ry: float,
        rotation_deg: float,
        color: tuple[int, int, int],
        alpha: float = 1.0,
    ) -> None:
        draw.draw_rotated_ellipse(
            self._surface,
            self._point(center),
            rx * self._scale,
            ry * self._scale,
            rotation_deg,
            color,
            alpha,
        )

    def stroke_ellipse(
        self,
        center: Point,
        rx: float,
        ry: float,
        rotation_deg: float,
        color: tuple[int, int, int],
        alpha: float = 1.0,
        width: float = 1.0,
    ) -> None:
        draw.draw_rotated_ellipse(
            self._surface,
            self._point(center),
            rx * self._scale,
            ry * self._scale,
            rotation_deg,
            color,
            alpha,
            width=max(1, int(round(width * self._scale))),
        )

    def fill_radial_gradient(
        self,
        inner_center: Point,
        inner_radius: float,
        outer_center: Point,
        outer_radius: float,
        stops: Sequence[Stop],
    ) -> None:
        """Cover the whole canvas with a radial gradient."""

        size = self._surface.get_size()
        sprite = self._gradients.radial(
            size,
            self._point(inner_center),
            inner_radius * self._scale,
            self._point(outer_center),
            outer_radius * self._scale,
            stops,
        )
        self._surface.blit(sprite, (0, 0))

    def fill_gradient_circle(
        self,
        center: Point,
        radius: float,
        focus_offset: Point,
        focus_radius: float,
        stops: Sequence[Stop],
    ) -> None:
        """Fill a circle with a gradient whose inner circle sits at ``center + focus_offset``."""

        diameter = int(round(radius * self._scale * 2.0))
        if diameter < 1:
            return
        half = diameter / 2.0
        sprite = self._gradients.radial(
            (diameter, diameter),
            (half + focus_offset[0] * self._scale, half + focus_offset[1] * self._scale),
            focus_radius * self._scale,
            (half, half),
            half,
            stops,
            circular=True,
        )
        draw.blit_centered(self._surface, sprite, self._point(center))


class CanvasSurface:
    """Pixel buffer owned by exactly one component.

    The buffer is ``css size * pixel_ratio`` device pixels, each dimension
    clamped to ``min_pixels``. Resizing recreates (and so clears) the buffer.
    If the buffer cannot be created the surface has no drawing context.
    """

    def __init__(
        self,
        css_size: tuple[float, float] = (1.0, 1.0),
        pixel_ratio: float = 1.0,
        *,
        min_pixels: int = VIEWPORT_CFG.min_canvas_pixels,
        factory: SurfaceFactory | None = None,
    ) -> None:
        self._factory = factory or _default_factory
        self._min_pixels = max(1, min_pixels)
        self._surface: pygame.Surface | None = None
        self._gradients = GradientCache()
        self._released = False
        self.width = 1.0
        self.height = 1.0
        self.pixel_ratio = 1.0
        self.pixel_size = (self._min_pixels, self._min_pixels)
        self.resize(css_size, pixel_ratio)

    @property
    def surface(self) -> pygame.Surface | None:
        return self._surface

    @property
    def released(self) -> bool:
        return self._released

    @property
    def css_size(self) -> tuple[float, float]:
        return self.width, self.height

    def resize(self, css_size: tuple[float, float], pixel_ratio: float | None = None) -> None:
        if self._released:
            return
        if pixel_ratio is not None:
            self.pixel_ratio = pixel_ratio if pixel_ratio > 0 and math.isfinite(pixel_ratio) else 1.0
        ratio = self.pixel_ratio
        css_w, css_h = css_size
        pixel_w = self._pixels(css_w, ratio)
        pixel_h = self._pixels(css_h, ratio)
        self.pixel_size = (pixel_w, pixel_h)
        self.width = pixel_w / ratio
        self.height = pixel_h / ratio
        self._gradients.clear()
        try:
            self._surface = self._factory(self.pixel_size)
        except pygame.error:
            self._surface = None

    def _pixels(self, css: float, ratio: float) -> int:
        if not math.isfinite(css):
            return self._min_pixels
        return max(self._min_pixels, int(round(css * ratio)))

    def get_context(self) -> DrawContext | None:
        if self._surface is None or self._released:
            return None
        return DrawContext(self._surface, self.pixel_ratio, self._gradients)

    def release(self) -> None:
        self._surface = None
        self._gradients.clear()
        self._released = True


__all__ = ["CanvasSurface", "DrawContext", "SurfaceFactory"]
