from __future__ import annotations

import math
from collections import OrderedDict

import pygame
from pygame import gfxdraw

from .assets import Point

# gfxdraw takes 16-bit signed coordinates
_COORD_LIMIT = 32_000
_CIRCLE_SPRITE_CACHE_MAX = 256
# translucent circles are blitted, gfxdraw overwrites the destination alpha
_CIRCLE_SPRITE_CACHE: OrderedDict[tuple[int, tuple[int, int, int], int, int], pygame.Surface] = OrderedDict()


def _alpha_byte(alpha: float) -> int:
    return int(round(max(0.0, min(1.0, alpha)) * 255))


def _in_range(*values: float) -> bool:
    return all(math.isfinite(v) and -_COORD_LIMIT < v < _COORD_LIMIT for v in values)


def _circle_sprite(radius: int, color: tuple[int, int, int], alpha: int, width: int) -> pygame.Surface:
    """Translucent circle on a ``(2r+1)`` square sprite; ``width == 0`` fills it."""

    key = (radius, tuple(color), alpha, width)
    cached = _CIRCLE_SPRITE_CACHE.get(key)
    if cached is not None:
        _CIRCLE_SPRITE_CACHE.move_to_end(key)
        return cached
    side = radius * 2 + 1
    sprite = pygame.Surface((side, side), pygame.SRCALPHA)
    if radius == 0:
        sprite.fill((*color, alpha))
    else:
        pygame.draw.circle(sprite, (*color, alpha), (radius, radius), radius, width)
    _CIRCLE_SPRITE_CACHE[key] = sprite
    if len(_CIRCLE_SPRITE_CACHE) > _CIRCLE_SPRITE_CACHE_MAX:
        _CIRCLE_SPRITE_CACHE.popitem(last=False)
    return sprite


def fill_circle(
    surface: pygame.Surface,
    center: Point,
    radius: float,
    color: tuple[int, int, int],
    alpha: float = 1.0,
) -> None:
    a = _alpha_byte(alpha)
    if a <= 0 or not _in_range(center[0], center[1], radius):
        return
    x = int(round(center[0]))
    y = int(round(center[1]))
    r = 0 if radius < 0.5 else int(round(radius))
    if a < 255:
        surface.blit(_circle_sprite(r, color, a, 0), (x - r, y - r))
    elif r == 0:
        gfxdraw.pixel(surface, x, y, (*color, a))
    else:
        gfxdraw.filled_circle(surface, x, y, r, (*color, a))


def stroke_circle(
    surface: pygame.Surface,
    center: Point,
    radius: float,
    color: tuple[int, int, int],
    alpha: float = 1.0,
    width: int = 1,
) -> None:
    a = _alpha_byte(alpha)
    if a <= 0 or radius < 0.5 or not _in_range(center[0], center[1], radius):
        return
    x = int(round(center[0]))
    y = int(round(center[1]))
    r = int(round(radius))
    if a < 255:
        sprite = _circle_sprite(r, color, a, max(1, min(width, r)))
        surface.blit(sprite, (x - r, y - r))
        return
    for k in range(max(1, width)):
        if r - k < 1:
            break
        gfxdraw.aacircle(surface, x, y, r - k, (*color, a))


def _ellipse_sprite(
    rx: float,
    ry: float,
    color: tuple[int, int, int],
    alpha: float,
    width: int,
) -> pygame.Surface:
    sprite_w = int(math.ceil(rx * 2.0)) + 2
    sprite_h = int(math.ceil(ry * 2.0)) + 2
    sprite = pygame.Surface((sprite_w, sprite_h), pygame.SRCALPHA)
    pygame.draw.ellipse(
        sprite,
        (*color, _alpha_byte(alpha)),
        pygame.Rect(1, 1, sprite_w - 2, sprite_h - 2),
        width,
    )
    return sprite


def draw_rotated_ellipse(
    surface: pygame.Surface,
    center: Point,
    rx: float,
    ry: float,
    rotation_deg: float,
    color: tuple[int, int, int],
    alpha: float = 1.0,
    *,
    width: int = 0,
) -> None:
    """Draw a filled (``width == 0``) or outlined ellipse rotated clockwise."""

    if _alpha_byte(alpha) <= 0 or rx < 0.5 or ry < 0.5:
        return
    if not _in_range(center[0], center[1], rx, ry):
        return
    sprite = _ellipse_sprite(rx, ry, color, alpha, width)
    rotation = rotation_deg % 360.0
    if rotation:
        # pygame rotates counter-clockwise; screen y points down
        sprite = pygame.transform.rotate(sprite, -rotation)
    rect = sprite.get_rect(center=(int(round(center[0])), int(round(center[1]))))
    surface.blit(sprite, rect)


def blit_centered(surface: pygame.Surface, sprite: pygame.Surface, center: Point) -> None:
    if not _in_range(center[0], center[1]):
        return
    rect = sprite.get_rect(center=(int(round(center[0])), int(round(center[1]))))
    surface.blit(sprite, rect)


__all__ = [
    "blit_centered",
    "draw_rotated_ellipse",
    "fill_circle",
    "stroke_circle",
]
