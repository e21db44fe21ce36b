"""Point agent that roams the world, spreads infection and recovers.

An agent never touches the population tally. Every state change it makes is
returned as a ``Transition`` so the owning population can book it.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from sir_sandbox.config.types import SimulationConfig
from sir_sandbox.domain.health import HealthState, Transition
from sir_sandbox.domain.random_source import RandomSource


def _clamp(value: float, bound: float) -> float:
    return min(max(value, -bound), bound)


@dataclass
class Agent:
    """One simulated individual, addressed by its index in the population."""

    index: int
    x: float
    y: float
    heading: float
    speed: float
    state: HealthState = HealthState.SUSCEPTIBLE
    infected_at: float | None = None

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def set_position(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    # ------------------------------------------------------------------
    # State changes
    # ------------------------------------------------------------------

    def _phase(self, state: HealthState) -> Transition | None:
        old = self.state
        if old is state:
            return None
        self.state = state
        return Transition(agent_index=self.index, old_state=old, new_state=state)

    def infect(self, now: float) -> Transition | None:
        """Force the agent into Infected and restart its recovery clock.

        Returns ``None`` when the agent already was infected, so calling it
        twice never books the same change twice.
        """
        transition = self._phase(HealthState.INFECTED)
        self.infected_at = now
        return transition

    def recover(self, now: float, duration: float) -> Transition | None:
        """Move to Removed once strictly more than ``duration`` seconds passed."""
        if self.state is not HealthState.INFECTED or self.infected_at is None:
            return None
        if now - self.infected_at > duration:
            return self._phase(HealthState.REMOVED)
        return None

    # ------------------------------------------------------------------
    # Motion and contact
    # ------------------------------------------------------------------

    def move(self, half_size: float, rng: RandomSource) -> None:
        """Jitter the heading, step forward, and clamp into the world."""
        self.heading += rng.jitter()
        self.x = _clamp(self.x + math.sin(self.heading) * self.speed, half_size)
        self.y = _clamp(self.y + math.cos(self.heading) * self.speed, half_size)

    def distance_to(self, other: Agent) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def in_radius(self, other: Agent, radius: float) -> bool:
        """Strict contact test: an agent exactly ``radius`` away is out of reach."""
        return self.distance_to(other) < radius

    def _candidates(
        self, neighbors: Sequence[Agent], candidates: Iterable[int] | None
    ) -> Iterable[Agent]:
        if candidates is None:
            return neighbors
        return (neighbors[i] for i in candidates)

    def infect_neighbors(
        self,
        neighbors: Sequence[Agent],
        now: float,
        rng: RandomSource,
        config: SimulationConfig,
        candidates: Iterable[int] | None = None,
    ) -> list[Transition]:
        """Run one infection trial per susceptible neighbour, in list order.

        Victims are infected immediately, so later agents in the same pass see
        them as infected. The trial is drawn before the distance test.
        """
        if self.state is not HealthState.INFECTED:
            return []
        transitions: list[Transition] = []
        for victim in self._candidates(neighbors, candidates):
            if victim.state is not HealthState.SUSCEPTIBLE:
                continue
            if rng.trial() < config.infection_chance and self.in_radius(
                victim, config.infection_radius
            ):
                transition = victim.infect(now)
                if transition is not None:
                    transitions.append(transition)
        return transitions

    def exposures(
        self,
        neighbors: Sequence[Agent],
        states: Sequence[HealthState],
        rng: RandomSource,
        config: SimulationConfig,
        candidates: Iterable[int] | None = None,
    ) -> list[int]:
        """Like ``infect_neighbors`` but reads frozen ``states`` and mutates nothing.

        Returns the indices of agents that should become infected once the
        whole pass is over.
        """
        if states[self.index] is not HealthState.INFECTED:
            return []
        exposed: list[int] = []
        for victim in self._candidates(neighbors, candidates):
            if states[victim.index] is not HealthState.SUSCEPTIBLE:
                continue
            if rng.trial() < config.infection_chance and self.in_radius(
                victim, config.infection_radius
            ):
                exposed.append(victim.index)
        return exposed

    def tick(
        self,
        neighbors: Sequence[Agent],
        half_size: float,
        now: float,
        rng: RandomSource,
        config: SimulationConfig,
        candidates: Iterable[int] | None = None,
    ) -> list[Transition]:
        """Move, infect susceptible neighbours, then maybe recover."""
        self.move(half_size, rng)
        transitions = self.infect_neighbors(neighbors, now, rng, config, candidates)
        recovered = self.recover(now, config.infection_duration)
        if recovered is not None:
            transitions.append(recovered)
        return transitions
