from __future__ import annotations

from collections import OrderedDict
from typing import Sequence

import numpy as np
import pygame

from orbit_canvas.core.config import Stop


Color = tuple[int, int, int] | tuple[int, int, int, int]
Point = tuple[float, float]


def _gradient_parameter(
    xs: np.ndarray,
    ys: np.ndarray,
    inner_center: Point,
    inner_radius: float,
    outer_center: Point,
    outer_radius: float,
) -> tuple[np.ndarray, np.ndarray]:
    """Per-pixel position along a two-circle radial gradient.

    Solves ``|p - c(t)| = r(t)`` for the largest ``t`` with ``r(t) >= 0``,
    where the circle interpolates from the inner to the outer one. Returns the
    clipped parameter and a mask of the pixels the gradient covers.
    """

    cdx = outer_center[0] - inner_center[0]
    cdy = outer_center[1] - inner_center[1]
    dr = outer_radius - inner_radius
    pdx = xs - inner_center[0]
    pdy = ys - inner_center[1]

    a = cdx * cdx + cdy * cdy - dr * dr
    b = pdx * cdx + pdy * cdy + inner_radius * dr
    c = pdx * pdx + pdy * pdy - inner_radius * inner_radius

    with np.errstate(divide="ignore", invalid="ignore"):
        if abs(a) < 1e-9:
            t = np.where(b != 0.0, c / (2.0 * b), np.nan)
            covered = np.isfinite(t) & (inner_radius + t * dr >= 0.0)
        else:
            disc = b * b - a * c
            root = np.sqrt(np.maximum(disc, 0.0))
            first = (b + root) / a
            second = (b - root) / a
            t_hi = np.maximum(first, second)
            t_lo = np.minimum(first, second)
            t = np.where(inner_radius + t_hi * dr >= 0.0, t_hi, t_lo)
            covered = (disc >= 0.0) & (inner_radius + t * dr >= 0.0)
    t = np.clip(np.where(covered, t, 0.0), 0.0, 1.0)
    return t, covered


def render_radial_gradient(
    size: tuple[int, int],
    inner_center: Point,
    inner_radius: float,
    outer_center: Point,
    outer_radius: float,
    stops: Sequence[Stop],
) -> pygame.Surface:
    """Rasterise a radial gradient into a new per-pixel-alpha surface."""

    width, height = size
    if width <= 0 or height <= 0:
        raise ValueError("Gradient size must be positive")
    if not stops:
        raise ValueError("Gradient needs at least one colour stop")

    xs, ys = np.meshgrid(
        np.arange(width, dtype=float) + 0.5,
        np.arange(height, dtype=float) + 0.5,
        indexing="ij",
    )
    t, covered = _gradient_parameter(
        xs, ys, inner_center, inner_radius, outer_center, outer_radius
    )
    offsets = np.array([offset for offset, _ in stops], dtype=float)
    colors = np.array([color for _, color in stops], dtype=float)

    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    rgb = pygame.surfarray.pixels3d(surface)
    for channel in range(3):
        rgb[..., channel] = np.interp(t, offsets, colors[:, channel]).astype(np.uint8)
    del rgb
    alpha = pygame.surfarray.pixels_alpha(surface)
    alpha[...] = np.where(covered, np.interp(t, offsets, colors[:, 3]), 0.0).astype(np.uint8)
    del alpha
    return surface


def apply_circular_mask(surface: pygame.Surface, diameter: int) -> pygame.Surface:
    """Clip *surface* to the circle inscribed in its ``diameter`` square."""

    radius = diameter / 2.0
    mask = pygame.Surface((diameter, diameter), pygame.SRCALPHA)
    mask.fill((0, 0, 0, 0))
    pygame.draw.circle(mask, (255, 255, 255, 255), (int(radius), int(radius)), int(radius))
    surface.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MULT)
    return surface


def _point_key(point: Point) -> tuple[float, float]:
    return round(point[0], 1), round(point[1], 1)


class GradientCache:
    """LRU cache for rasterised gradients, one per canvas."""

    def __init__(self, max_size: int = 16) -> None:
        self._max_size = max(1, max_size)
        self._surfaces: OrderedDict[tuple, pygame.Surface] = OrderedDict()

    def __len__(self) -> int:
        return len(self._surfaces)

    def clear(self) -> None:
        self._surfaces.clear()

    def radial(
        self,
        size: tuple[int, int],
        inner_center: Point,
        inner_radius: float,
        outer_center: Point,
        outer_radius: float,
        stops: Sequence[Stop],
        *,
        circular: bool = False,
    ) -> pygame.Surface:
        key = (
            size,
            _point_key(inner_center),
            round(inner_radius, 1),
            _point_key(outer_center),
            round(outer_radius, 1),
            tuple(stops),
            circular,
        )
        cached = self._surfaces.get(key)
        if cached is not None:
            self._surfaces.move_to_end(key)
            return cached
        rendered = render_radial_gradient(
            size, inner_center, inner_radius, outer_center, outer_radius, stops
        )
        if circular:
            rendered = apply_circular_mask(rendered, min(size))
        self._surfaces[key] = rendered
        if len(self._surfaces) > self._max_size:
            self._surfaces.popitem(last=False)
        return rendered


__all__ = [
    "Color",
    "GradientCache",
    "Point",
    "apply_circular_mask",
    "render_radial_gradient",
]
