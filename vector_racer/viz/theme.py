"""Color theme presets for track renderers.

Themes are frozen dataclasses grouping every styling token, so renderers
take a ``Theme`` instead of referencing module-level constants.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Complete collection of track style tokens."""

    wall_color: str = "#404040"
    trace_color: str = "#C0C0C0"
    finish_color: str = "#FFAFAF"
    coin_color: str = "#F4B400"
    player_colors: tuple[str, ...] = ("#DB4437", "#0F9D58", "#4285F4", "#808080")
    background_color: str = "#FFFFFF"
    marker_fraction: float = 0.8
    """Share of a cell covered by a marker; the rest is padding."""


# ---------------------------------------------------------------------------
# Built-in presets
# ---------------------------------------------------------------------------

DEFAULT_THEME = Theme()

DARK_THEME = Theme(
    wall_color="#B0B0B0",
    trace_color="#3A3A3A",
    finish_color="#8E3B46",
    coin_color="#FFD54F",
    player_colors=("#FF6F61", "#66BB6A", "#64B5F6", "#E0E0E0"),
    background_color="#121212",
)

REGISTERED_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "dark": DARK_THEME,
}


def get_theme(name: str) -> Theme:
    """Look up a theme by name (case-insensitive)."""
    key = name.lower()
    if key not in REGISTERED_THEMES:
        valid = ", ".join(sorted(REGISTERED_THEMES))
        raise ValueError(f"Unknown theme {name!r}; available: {valid}")
    return REGISTERED_THEMES[key]
