"""Centralized domain constants for the SIR sandbox.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

POPULATION_COUNT = 2_500
"""Default number of agents in the world."""

WORLD_SIZE = 8_000.0
"""Default side length of the square world, centred on the origin."""

SPEED = 4.0
"""Distance an agent travels per tick."""

INFECTION_RADIUS = 80.0
"""Contact distance below which an infection trial can succeed."""

INFECTION_CHANCE = 0.01
"""Probability that a single proximity-qualified trial transmits."""

INFECTION_DURATION = 5.0
"""Seconds of wall-clock time an agent stays infected before removal."""

HEADING_RANGE: tuple[float, float] = (-1_000.0, 1_000.0)
"""Uniform range for an agent's initial heading."""

JITTER_RANGE: tuple[float, float] = (-0.2, 0.2)
"""Uniform range added to the heading every tick."""

STATS_INTERVAL = 0.25
"""Seconds of wall-clock time between two history samples."""

SPEED_LIMIT = 60
"""Initial target frame rate of the render loop."""

SPEED_LIMIT_STEP = 20
"""Frame-rate change applied by one speed-limit hotkey press."""

WINDOW_PX = 1_000
"""Side length of the render window in pixels."""

CHART_SCALE: tuple[float, float] = (10.0, 3_000.0)
"""History chart scale: world units per sample, world units per full population."""

HALO_INSET = 20.0
"""Infection halo ring thickness is ``infection_radius - HALO_INSET`` around the agent disc."""

AGENT_RADIUS = 20.0
"""Drawn radius of an agent, in world units."""
