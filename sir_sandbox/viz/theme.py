"""Visualization theme presets for the live renderer.

Themes are frozen dataclasses that group all styling constants together,
so a palette can be swapped via the ``--theme`` CLI argument or
programmatically.
"""

from __future__ import annotations

from dataclasses import dataclass

from sir_sandbox.domain.health import HealthState


@dataclass(frozen=True)
class Theme:
    """Complete collection of visualization style tokens."""

    # Susceptible, Infected, Removed
    state_colors: tuple[str, str, str] = ("#4287F5", "#EB4034", "#505050")
    background_color: str = "#000000"
    halo_color: str = "#FFFFFF"
    halo_alpha: float = 20 / 255
    text_color: str = "#FFFFFF"
    banner_color: str = "#00FF00"
    font_family: str = "monospace"
    font_size: int = 9

    def color_for(self, state: HealthState) -> str:
        return self.state_colors[state.value]


# ---------------------------------------------------------------------------
# Built-in presets
# ---------------------------------------------------------------------------

DEFAULT_THEME = Theme()

PAPER_THEME = Theme(
    state_colors=("#1f77b4", "#d62728", "#7f7f7f"),
    background_color="#FFFFFF",
    halo_color="#d62728",
    halo_alpha=0.08,
    text_color="#000000",
    banner_color="#2ca02c",
)

REGISTERED_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "paper": PAPER_THEME,
}


def get_theme(name: str) -> Theme:
    """Look up a theme by name (case-insensitive)."""
    key = name.lower()
    if key not in REGISTERED_THEMES:
        valid = ", ".join(sorted(REGISTERED_THEMES))
        raise ValueError(f"Unknown theme {name!r}; available: {valid}")
    return REGISTERED_THEMES[key]
