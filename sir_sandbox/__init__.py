"""Real-time agent-based SIR epidemic sandbox."""

from sir_sandbox.config.types import DisplayConfig, NeighborIndex, SimulationConfig, UpdateMode
from sir_sandbox.domain import Agent, HealthState, Population, RandomSource, Transition
from sir_sandbox.simulation import Driver, StatsRecorder

__all__ = [
    "Agent",
    "DisplayConfig",
    "Driver",
    "HealthState",
    "NeighborIndex",
    "Population",
    "RandomSource",
    "SimulationConfig",
    "StatsRecorder",
    "Transition",
    "UpdateMode",
]
