"""Rendering components for the boids viewer."""

from .grid import Grid
from .text import TextRenderer
from .flock_renderer import FlockRenderer

__all__ = ["Grid", "TextRenderer", "FlockRenderer"]
