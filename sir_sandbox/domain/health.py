"""Health states and the transition events agents report to their population."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HealthState(Enum):
    """Compartment of one agent; the only legal path is S -> I -> R."""

    SUSCEPTIBLE = 0
    INFECTED = 1
    REMOVED = 2


HEALTH_STATES: tuple[HealthState, ...] = tuple(HealthState)
"""States in palette/chart order."""

Tally = dict[HealthState, int]
"""Per-state agent counts."""


def empty_tally() -> Tally:
    return {state: 0 for state in HEALTH_STATES}


@dataclass(frozen=True)
class Transition:
    """A state change that already happened to the agent at ``agent_index``."""

    agent_index: int
    old_state: HealthState
    new_state: HealthState


def apply_transition(tally: Tally, transition: Transition) -> None:
    """Move one count between buckets; a no-op when the state did not change."""
    if transition.old_state is transition.new_state:
        return
    tally[transition.old_state] -= 1
    tally[transition.new_state] += 1
