"""Frame timing and the continuous repaint loop."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from .geometry import clamp

FrameCallback = Callable[[float], None]


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return dt


class FrameHost:
    """Display-synchronised frame queue.

    Callbacks requested with :meth:`request_frame` run once, on the next call
    to :meth:`dispatch`. Anything requested while a dispatch is in progress
    waits for the following one, so a callback that re-arms itself runs at
    most once per display frame.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._pending: dict[int, FrameCallback] = {}
        self._in_flight: dict[int, FrameCallback] = {}
        self._next_handle = 1
        self.frame_count = 0

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)
        self._in_flight.pop(handle, None)

    def dispatch(self, timestamp: float | None = None) -> int:
        """Run every callback pending at the start of the call.

        If a callback raises, the exception propagates and the callbacks that
        had not run yet stay pending.
        """

        if timestamp is None:
            timestamp = self._clock()
        self._in_flight = self._pending
        self._pending = {}
        ran = 0
        try:
            while self._in_flight:
                handle = next(iter(self._in_flight))
                callback = self._in_flight.pop(handle)
                callback(timestamp)
                ran += 1
        finally:
            # callbacks skipped by an exception keep their turn for the next dispatch
            if self._in_flight:
                self._pending = {**self._in_flight, **self._pending}
            self._in_flight = {}
        self.frame_count += 1
        return ran


class FrameScheduler:
    """Continuous repaint loop on top of a :class:`FrameHost`.

    ``start(callback)`` arms the loop; after each invocation the scheduler
    re-arms itself until :meth:`stop` is called. The callback receives the
    seconds elapsed since the previous frame, clamped to ``max_delta`` and
    ``0.0`` on the first frame.
    """

    def __init__(self, host: FrameHost, *, max_delta: float = 0.25) -> None:
        self._host = host
        self._max_delta = max_delta
        self._callback: FrameCallback | None = None
        self._handle: int | None = None
        self._last_timestamp: float | None = None
        self.frames = 0

    @property
    def running(self) -> bool:
        return self._callback is not None

    @property
    def handle(self) -> int | None:
        return self._handle

    def start(self, callback: FrameCallback) -> None:
        if self._callback is not None:
            raise RuntimeError("frame scheduler is already running")
        self._callback = callback
        self._last_timestamp = None
        self._arm()

    def stop(self) -> None:
        if self._handle is not None:
            self._host.cancel_frame(self._handle)
            self._handle = None
        self._callback = None
        self._last_timestamp = None

    def rearm(self) -> None:
        """Replace the pending request so the next paint sees fresh state."""

        if self._callback is None:
            return
        if self._handle is not None:
            self._host.cancel_frame(self._handle)
            self._handle = None
        self._arm()

    def _arm(self) -> None:
        self._handle = self._host.request_frame(self._on_frame)

    def _on_frame(self, timestamp: float) -> None:
        self._handle = None
        callback = self._callback
        if callback is None:
            return
        if self._last_timestamp is None:
            dt = 0.0
        else:
            dt = clamp(timestamp - self._last_timestamp, 0.0, self._max_delta)
        self._last_timestamp = timestamp
        self.frames += 1
        try:
            callback(dt)
        except Exception:
            # a failing frame stops the loop
            if self._callback is callback:
                self.stop()
            raise
        # the callback may have stopped or restarted the loop
        if self._callback is callback and self._handle is None:
            self._arm()


__all__ = ["FrameCallback", "FrameHost", "FrameScheduler", "FrameTimer"]
