"""Particle starfield and rotating orbital display rendered with pygame."""

__version__ = "1.0.0"
