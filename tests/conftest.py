"""Shared fixtures for the canvas tests."""
import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from orbit_canvas.core.timekeeping import FrameHost
from orbit_canvas.render.surface import CanvasSurface
from orbit_canvas.render.viewport import HostViewport


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def surface():
    return CanvasSurface((320, 200), 1.0)


@pytest.fixture
def viewport():
    return HostViewport((320, 200), 1.0)


@pytest.fixture
def host():
    return FrameHost(clock=lambda: 0.0)


@pytest.fixture
def distribution():
    return [("USA", 3200), ("China", 1100)]
