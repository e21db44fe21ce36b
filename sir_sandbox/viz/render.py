"""Matplotlib-based live renderer for a running population.

The adapter only reads driver and population state. Window events are
forwarded to the driver as key names; everything else stays in the core.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import numpy as np
from matplotlib import animation
from matplotlib.collections import PolyCollection
from matplotlib.colors import to_rgba, to_rgba_array

from sir_sandbox.config.constants import AGENT_RADIUS, HALO_INSET
from sir_sandbox.domain.health import HealthState
from sir_sandbox.simulation.driver import Driver
from sir_sandbox.simulation.stats import chart_bars
from sir_sandbox.viz.theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)

_DPI = 100


def halo_radius(infection_radius: float) -> float:
    """Outer radius of the contagion halo: agent disc plus a ring of ``radius - inset``."""
    return AGENT_RADIUS + max(0.0, infection_radius - HALO_INSET)


def marker_area(radius: float, world_size: float, window_px: int, dpi: int = _DPI) -> float:
    """Scatter marker area (points^2) of a disc ``radius`` world units wide on screen."""
    diameter_px = 2 * radius * window_px / world_size
    diameter_pt = diameter_px * 72 / dpi
    return diameter_pt**2


def _bar_verts(driver: Driver) -> list[np.ndarray]:
    population = driver.population
    verts = []
    for bar in chart_bars(population.history, population.count, population.world_size):
        x0, y0 = bar.x, bar.y
        x1, y1 = bar.x + bar.width, bar.y + bar.height
        verts.append(np.array([(x0, y0), (x1, y0), (x1, y1), (x0, y1)]))
    return verts


class RenderAdapter:
    """Draws agents, infection halos, the text overlay and the history chart."""

    def __init__(self, driver: Driver, theme: Theme = DEFAULT_THEME) -> None:
        self.driver = driver
        self.theme = theme
        population = driver.population
        display = driver.display
        half = population.world_size / 2

        size_in = display.window_px / _DPI
        self.fig, self.ax = plt.subplots(figsize=(size_in, size_in), dpi=_DPI)
        self.fig.subplots_adjust(left=0, right=1, bottom=0, top=1)
        self.fig.patch.set_facecolor(theme.background_color)
        self.ax.set_facecolor(theme.background_color)
        self.ax.set_xlim(-half, half)
        # Screen convention: y grows downward, so the overlay sits top-left.
        self.ax.set_ylim(half, -half)
        self.ax.set_aspect("equal")
        self.ax.set_axis_off()

        self._state_rgba = to_rgba_array(theme.state_colors)
        self._bar_rgba = {state: to_rgba(theme.color_for(state)) for state in HealthState}

        self.chart = PolyCollection([], linewidths=0, zorder=1)
        self.ax.add_collection(self.chart)
        self._chart_samples = 0

        halo_size = marker_area(
            halo_radius(population.config.infection_radius),
            population.world_size,
            display.window_px,
        )
        self.halos = self.ax.scatter(
            [],
            [],
            s=halo_size,
            color=to_rgba(theme.halo_color, theme.halo_alpha),
            linewidths=0,
            zorder=2,
        )
        agent_size = marker_area(AGENT_RADIUS, population.world_size, display.window_px)
        self.agents = self.ax.scatter(
            np.zeros(population.count),
            np.zeros(population.count),
            s=agent_size,
            linewidths=0,
            zorder=3,
        )
        self.text = self.ax.text(
            -half,
            -half,
            "",
            color=theme.text_color,
            family=theme.font_family,
            fontsize=theme.font_size,
            va="top",
            ha="left",
            zorder=4,
        )

        self._anim: animation.FuncAnimation | None = None
        self.fig.canvas.mpl_connect("key_press_event", self._on_key)
        self.fig.canvas.mpl_connect("close_event", self._on_close)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self) -> tuple[Any, ...]:
        """Push the current population state into the artists."""
        snapshot = self.driver.population.snapshot()
        self.agents.set_offsets(snapshot.positions)
        self.agents.set_facecolor(self._state_rgba[snapshot.states])

        infected = snapshot.states == HealthState.INFECTED.value
        self.halos.set_offsets(snapshot.positions[infected].reshape(-1, 2))

        if self.driver.display.record_history:
            samples = len(self.driver.population.history)
            if samples != self._chart_samples:
                self._chart_samples = samples
                self.chart.set_verts(_bar_verts(self.driver))
                self.chart.set_facecolor(
                    [self._bar_rgba[state] for state in self._bar_states(samples)]
                )

        self.text.set_text(self.driver.overlay_text())
        self.text.set_color(
            self.theme.banner_color if self.driver.show_banner else self.theme.text_color
        )
        return (self.chart, self.halos, self.agents, self.text)

    @staticmethod
    def _bar_states(samples: int) -> list[HealthState]:
        return [state for _ in range(samples) for state in HealthState]

    def _update(self, _frame: int) -> tuple[Any, ...]:
        self.driver.step()
        artists = self.draw()
        if self._anim is not None:
            self._anim.event_source.interval = self.driver.frame_interval_ms
        return artists

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _on_key(self, event: Any) -> None:
        self.driver.handle_key(event.key)
        if not self.driver.running:
            plt.close(self.fig)

    def _on_close(self, _event: Any) -> None:
        self.driver.close()
        if self._anim is not None:
            self._anim.event_source.stop()

    # ------------------------------------------------------------------
    # Loops
    # ------------------------------------------------------------------

    def animate(self, frames: int | None = None) -> animation.FuncAnimation:
        """Build the frame loop; ``frames=None`` runs until the window closes."""
        self._anim = animation.FuncAnimation(
            self.fig,
            self._update,
            frames=frames,
            init_func=self.draw,
            interval=self.driver.frame_interval_ms,
            blit=False,
            cache_frame_data=False,
        )
        return self._anim

    def show(self) -> None:
        self.animate()
        logger.info("opening window; Esc closes, '.'/',' change the speed limit")
        plt.show()

    def save(self, output_path: Path, frames: int, fps: int | None = None) -> Path:
        """Render ``frames`` frames into a GIF (Pillow) or video (FFmpeg) file."""
        if frames < 1:
            raise ValueError("frames must be >= 1")
        fps = fps or self.driver.speed_limit
        output_path = Path(output_path).resolve()
        anim = self.animate(frames)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        writer: animation.PillowWriter | animation.FFMpegWriter
        if output_path.suffix.lower() == ".gif":
            writer = animation.PillowWriter(fps=fps)
        else:
            writer = animation.FFMpegWriter(fps=fps)
        anim.save(output_path, writer=writer)
        logger.info("saved %d frames to %s", frames, output_path)
        return output_path

    def close(self) -> None:
        plt.close(self.fig)
