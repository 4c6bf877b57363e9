"""Host containers and the binding that keeps a canvas sized to one."""
from __future__ import annotations

from typing import Callable

import pygame

from orbit_canvas.core.logging_utils import RunLogger

from .surface import CanvasSurface

ResizeListener = Callable[[], None]
ResizeCallback = Callable[[float, float], None]
Rect = tuple[float, float, float, float]
Layout = Callable[[tuple[float, float]], Rect]


class HostViewport:
    """Layout container a canvas is mounted in.

    Holds the CSS size and device pixel ratio and notifies resize listeners
    whenever either changes.
    """

    def __init__(self, size: tuple[float, float], pixel_ratio: float = 1.0) -> None:
        self._size = (float(size[0]), float(size[1]))
        self._pixel_ratio = pixel_ratio
        self._listeners: list[ResizeListener] = []

    @property
    def size(self) -> tuple[float, float]:
        return self._size

    @property
    def pixel_ratio(self) -> float:
        return self._pixel_ratio

    @property
    def rect(self) -> Rect:
        return (0.0, 0.0, *self._size)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_resize_listener(self, listener: ResizeListener) -> None:
        self._listeners.append(listener)

    def remove_resize_listener(self, listener: ResizeListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def resize(self, size: tuple[float, float], pixel_ratio: float | None = None) -> None:
        new_size = (float(size[0]), float(size[1]))
        new_ratio = self._pixel_ratio if pixel_ratio is None else pixel_ratio
        if new_size == self._size and new_ratio == self._pixel_ratio:
            return
        self._size = new_size
        self._pixel_ratio = new_ratio
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Apply a pygame window size change; return ``True`` if it was one.

        Only ``WINDOWSIZECHANGED`` is handled. pygame 2 posts it for user drags
        and programmatic resizes alike; the legacy ``VIDEORESIZE`` sent with a
        drag is ignored.
        """

        if event.type == pygame.WINDOWSIZECHANGED:
            self.resize((event.x, event.y))
            return True
        return False

    def child(self, layout: Layout) -> "ContainerViewport":
        return ContainerViewport(self, layout)


class ContainerViewport(HostViewport):
    """Nested container whose rectangle is laid out from its parent's size."""

    def __init__(self, parent: HostViewport, layout: Layout) -> None:
        self._parent = parent
        self._layout = layout
        self._rect = layout(parent.size)
        super().__init__(self._rect[2:], parent.pixel_ratio)
        parent.add_resize_listener(self._on_parent_resize)

    @property
    def rect(self) -> Rect:
        parent_x, parent_y, _, _ = self._parent.rect
        x, y, w, h = self._rect
        return (parent_x + x, parent_y + y, w, h)

    def _on_parent_resize(self) -> None:
        self._rect = self._layout(self._parent.size)
        self.resize(self._rect[2:], self._parent.pixel_ratio)

    def detach(self) -> None:
        self._parent.remove_resize_listener(self._on_parent_resize)


class ViewportBinding:
    """Keeps a canvas sized to its host container until unbound."""

    def __init__(self, viewport: HostViewport, *, logger: RunLogger | None = None) -> None:
        self._viewport = viewport
        self._logger = logger
        self._surface: CanvasSurface | None = None
        self._on_resize: ResizeCallback | None = None
        self._bound = False

    @property
    def bound(self) -> bool:
        return self._bound

    def bind(self, surface: CanvasSurface, on_resize: ResizeCallback | None = None) -> None:
        if self._bound:
            raise RuntimeError("viewport binding is already active")
        self._surface = surface
        self._on_resize = on_resize
        self._viewport.add_resize_listener(self._handle_resize)
        self._bound = True
        self._handle_resize()

    def unbind(self) -> None:
        if not self._bound:
            return
        self._viewport.remove_resize_listener(self._handle_resize)
        self._bound = False
        self._surface = None
        self._on_resize = None

    def _handle_resize(self) -> None:
        surface = self._surface
        if surface is None:
            return
        surface.resize(self._viewport.size, self._viewport.pixel_ratio)
        if self._logger is not None:
            self._logger.event(
                "resize",
                "viewport",
                width=surface.width,
                height=surface.height,
                pixel_ratio=surface.pixel_ratio,
            )
        if self._on_resize is not None:
            self._on_resize(surface.width, surface.height)


__all__ = [
    "ContainerViewport",
    "HostViewport",
    "Layout",
    "Rect",
    "ResizeCallback",
    "ViewportBinding",
]
