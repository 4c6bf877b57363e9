from __future__ import annotations

from enum import Enum

from orbit_canvas.core.config import VIEWPORT_CFG
from orbit_canvas.core.logging_utils import RunLogger
from orbit_canvas.core.timekeeping import FrameHost, FrameScheduler

from .surface import CanvasSurface, SurfaceFactory
from .viewport import HostViewport, ViewportBinding


class ComponentState(Enum):
    UNINITIALIZED = "uninitialized"
    SEEDED = "seeded"
    RENDERING = "rendering"
    TORN_DOWN = "torn_down"


class CanvasComponent:
    """A canvas together with its viewport binding and frame loop.

    :meth:`mount` creates the canvas, binds it to the host container and starts
    the repaint loop; :meth:`teardown` undoes all three in one call.
    Subclasses implement :meth:`initialize`, :meth:`on_frame` and
    :meth:`on_resize`.
    """

    name = "canvas"

    def __init__(
        self,
        *,
        logger: RunLogger | None = None,
        surface_factory: SurfaceFactory | None = None,
    ) -> None:
        self._logger = logger
        self._surface_factory = surface_factory
        self.surface: CanvasSurface | None = None
        self.state = ComponentState.UNINITIALIZED
        self.frame_count = 0
        self._binding: ViewportBinding | None = None
        self._scheduler: FrameScheduler | None = None

    @property
    def scheduler(self) -> FrameScheduler | None:
        return self._scheduler

    @property
    def mounted(self) -> bool:
        return self.state is ComponentState.RENDERING

    def initialize(self, surface: CanvasSurface) -> None:
        raise NotImplementedError

    def on_frame(self, dt: float = 0.0) -> None:
        raise NotImplementedError

    def on_resize(self, width: float, height: float) -> None:
        raise NotImplementedError

    def mount(self, viewport: HostViewport, host: FrameHost) -> None:
        if self.state is ComponentState.TORN_DOWN:
            raise RuntimeError(f"{self.name} has been torn down")
        if self.state is ComponentState.RENDERING:
            raise RuntimeError(f"{self.name} is already mounted")
        surface = CanvasSurface(
            viewport.size,
            viewport.pixel_ratio,
            factory=self._surface_factory,
        )
        self.initialize(surface)
        self._binding = ViewportBinding(viewport, logger=self._logger)
        self._binding.bind(surface, self._handle_resize)
        self._scheduler = FrameScheduler(host, max_delta=VIEWPORT_CFG.max_frame_delta)
        self._scheduler.start(self.on_frame)
        self.state = ComponentState.RENDERING
        self._log("mount", width=surface.width, height=surface.height)

    def _handle_resize(self, width: float, height: float) -> None:
        self.on_resize(width, height)
        if self._scheduler is not None:
            self._scheduler.rearm()

    def render_frame(self, dt: float = 0.0) -> None:
        """Draw one frame outside of the scheduled loop."""

        if self.state is ComponentState.TORN_DOWN:
            return
        self.on_frame(dt)

    def teardown(self) -> None:
        if self.state is ComponentState.TORN_DOWN:
            return
        if self._scheduler is not None:
            self._scheduler.stop()
            self._scheduler = None
        if self._binding is not None:
            self._binding.unbind()
            self._binding = None
        if self.surface is not None:
            self.surface.release()
        self.state = ComponentState.TORN_DOWN
        self._log("teardown", frames=self.frame_count)

    def _log(self, event_type: str, **details: object) -> None:
        if self._logger is not None and not self._logger.closed:
            self._logger.event(event_type, self.name, **details)


__all__ = ["CanvasComponent", "ComponentState"]
