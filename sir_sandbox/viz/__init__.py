"""Visualization layer: themes, the live matplotlib renderer, and the CLI."""

from sir_sandbox.viz.cli import main
from sir_sandbox.viz.render import RenderAdapter, halo_radius, marker_area
from sir_sandbox.viz.theme import (
    DEFAULT_THEME,
    PAPER_THEME,
    REGISTERED_THEMES,
    Theme,
    get_theme,
)

__all__ = [
    "DEFAULT_THEME",
    "PAPER_THEME",
    "REGISTERED_THEMES",
    "RenderAdapter",
    "Theme",
    "get_theme",
    "halo_radius",
    "main",
    "marker_area",
]
