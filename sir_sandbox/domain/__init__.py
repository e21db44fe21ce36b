"""Domain layer: agents, health states, the population arena and its neighbour index."""

from sir_sandbox.domain.agent import Agent
from sir_sandbox.domain.health import (
    HEALTH_STATES,
    HealthState,
    Tally,
    Transition,
    apply_transition,
    empty_tally,
)
from sir_sandbox.domain.population import Population, PopulationSnapshot
from sir_sandbox.domain.random_source import RandomSource
from sir_sandbox.domain.spatial import SpatialGrid

__all__ = [
    "Agent",
    "HEALTH_STATES",
    "HealthState",
    "Population",
    "PopulationSnapshot",
    "RandomSource",
    "SpatialGrid",
    "Tally",
    "Transition",
    "apply_transition",
    "empty_tally",
]
