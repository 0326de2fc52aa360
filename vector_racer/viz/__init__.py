"""Visualization layer: themes, text rendering and image rendering."""

from vector_racer.viz.render import Shape, build_shapes, render_track
from vector_racer.viz.text import grid_to_text
from vector_racer.viz.theme import DEFAULT_THEME, REGISTERED_THEMES, Theme, get_theme

__all__ = [
    "DEFAULT_THEME",
    "REGISTERED_THEMES",
    "Shape",
    "Theme",
    "build_shapes",
    "get_theme",
    "grid_to_text",
    "render_track",
]
