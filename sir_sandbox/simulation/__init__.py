"""Simulation loop: frame driver and history sampling."""

from sir_sandbox.simulation.driver import Driver, FixedStepClock, FrameStats, tick_rate
from sir_sandbox.simulation.stats import (
    ChartBar,
    StatsRecorder,
    chart_bars,
    history_proportions,
)

__all__ = [
    "ChartBar",
    "Driver",
    "FixedStepClock",
    "FrameStats",
    "StatsRecorder",
    "chart_bars",
    "history_proportions",
    "tick_rate",
]
