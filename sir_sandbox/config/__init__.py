"""Configuration layer: constants and typed config dataclasses."""

from sir_sandbox.config.constants import (
    AGENT_RADIUS,
    CHART_SCALE,
    HALO_INSET,
    HEADING_RANGE,
    INFECTION_CHANCE,
    INFECTION_DURATION,
    INFECTION_RADIUS,
    JITTER_RANGE,
    POPULATION_COUNT,
    SPEED,
    SPEED_LIMIT,
    SPEED_LIMIT_STEP,
    STATS_INTERVAL,
    WINDOW_PX,
    WORLD_SIZE,
)
from sir_sandbox.config.types import (
    DisplayConfig,
    NeighborIndex,
    SimulationConfig,
    UpdateMode,
)

__all__ = [
    "AGENT_RADIUS",
    "CHART_SCALE",
    "DisplayConfig",
    "HALO_INSET",
    "HEADING_RANGE",
    "INFECTION_CHANCE",
    "INFECTION_DURATION",
    "INFECTION_RADIUS",
    "JITTER_RANGE",
    "NeighborIndex",
    "POPULATION_COUNT",
    "SPEED",
    "SPEED_LIMIT",
    "SPEED_LIMIT_STEP",
    "STATS_INTERVAL",
    "SimulationConfig",
    "UpdateMode",
    "WINDOW_PX",
    "WORLD_SIZE",
]
