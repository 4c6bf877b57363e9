"""Rendering components for the canvas visualisation."""

from .assets import GradientCache, apply_circular_mask, render_radial_gradient
from .component import CanvasComponent, ComponentState
from .orbital import OrbitalDisplay
from .particles import ParticleField, generate_particles
from .surface import CanvasSurface, DrawContext
from .viewport import ContainerViewport, HostViewport, ViewportBinding

__all__ = [
    "CanvasComponent",
    "CanvasSurface",
    "ComponentState",
    "ContainerViewport",
    "DrawContext",
    "GradientCache",
    "HostViewport",
    "OrbitalDisplay",
    "ParticleField",
    "ViewportBinding",
    "apply_circular_mask",
    "generate_particles",
    "render_radial_gradient",
]
