"""Configuration dataclasses for simulation and display.

Both dataclasses are frozen and validate themselves on construction, so an
invalid setup fails before the first tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sir_sandbox.config.constants import (
    INFECTION_CHANCE,
    INFECTION_DURATION,
    INFECTION_RADIUS,
    POPULATION_COUNT,
    SPEED,
    SPEED_LIMIT,
    SPEED_LIMIT_STEP,
    STATS_INTERVAL,
    WINDOW_PX,
    WORLD_SIZE,
)

__all__ = [
    "DisplayConfig",
    "NeighborIndex",
    "SimulationConfig",
    "UpdateMode",
]


class UpdateMode(Enum):
    """Agent update semantics for one simulation tick."""

    SEQUENTIAL = "sequential"
    SYNCHRONOUS = "synchronous"


class NeighborIndex(Enum):
    """Candidate lookup used by the infection sweep."""

    ALL_PAIRS = "all_pairs"
    GRID = "grid"


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationConfig:
    """Process-wide simulation parameters, read-only while running."""

    population_count: int = POPULATION_COUNT
    world_size: float = WORLD_SIZE
    speed: float = SPEED
    infection_radius: float = INFECTION_RADIUS
    infection_chance: float = INFECTION_CHANCE
    infection_duration: float = INFECTION_DURATION
    update_mode: UpdateMode = UpdateMode.SEQUENTIAL
    neighbor_index: NeighborIndex = NeighborIndex.ALL_PAIRS
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.population_count < 1:
            raise ValueError("population_count must be >= 1")
        if self.world_size <= 0:
            raise ValueError("world_size must be > 0")
        if self.speed < 0:
            raise ValueError("speed must be >= 0")
        if self.infection_radius <= 0:
            raise ValueError("infection_radius must be > 0")
        if not 0.0 <= self.infection_chance <= 1.0:
            raise ValueError("infection_chance must be in [0.0, 1.0]")
        if self.infection_duration < 0:
            raise ValueError("infection_duration must be >= 0")

    @property
    def half_size(self) -> float:
        return self.world_size / 2


@dataclass(frozen=True)
class DisplayConfig:
    """Render-loop knobs; the history, hotkeys and banner are optional extras."""

    window_px: int = WINDOW_PX
    speed_limit: int = SPEED_LIMIT
    speed_limit_step: int = SPEED_LIMIT_STEP
    record_history: bool = True
    stats_interval: float = STATS_INTERVAL
    hotkeys: bool = True
    show_eradicated_banner: bool = True
    theme: str = "default"

    def __post_init__(self) -> None:
        if self.window_px < 1:
            raise ValueError("window_px must be >= 1")
        if self.speed_limit < 1:
            raise ValueError("speed_limit must be >= 1")
        if self.speed_limit_step < 1:
            raise ValueError("speed_limit_step must be >= 1")
        if self.stats_interval <= 0:
            raise ValueError("stats_interval must be > 0")

    @classmethod
    def minimal(cls) -> DisplayConfig:
        """Plain variant: no history chart and no speed-limit hotkeys."""
        return cls(record_history=False, hotkeys=False)
