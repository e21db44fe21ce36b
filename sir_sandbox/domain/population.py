"""Fixed-size population: the agent arena, the state tally and its history.

Sequential mode (default): agents tick one at a time in list order and every
transition is booked right away, so an agent infected earlier in the pass
already spreads the infection later in the same pass.
Synchronous mode: infection decisions read the states frozen at the start of
the tick and are applied after the whole pass.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace

import numpy as np

from sir_sandbox.config.types import NeighborIndex, SimulationConfig, UpdateMode
from sir_sandbox.domain.agent import Agent
from sir_sandbox.domain.health import (
    HEALTH_STATES,
    HealthState,
    Tally,
    Transition,
    apply_transition,
    empty_tally,
)
from sir_sandbox.domain.random_source import RandomSource
from sir_sandbox.domain.spatial import SpatialGrid

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class PopulationSnapshot:
    """Renderable copy of the population at one frame."""

    positions: np.ndarray  # (n, 2) float
    states: np.ndarray  # (n,) int, HealthState values
    tally: Tally


class Population:
    """Owns every agent; agents are never added or removed after construction."""

    def __init__(
        self,
        count: int,
        world_size: float,
        config: SimulationConfig | None = None,
        rng: RandomSource | None = None,
        clock: Clock = time.perf_counter,
    ) -> None:
        if count < 1:
            raise ValueError("count must be >= 1")
        if world_size <= 0:
            raise ValueError("world_size must be > 0")
        base = config or SimulationConfig()
        self._config = replace(base, population_count=count, world_size=world_size)
        self._rng = rng or RandomSource(self._config.seed)
        self._clock = clock

        half = world_size / 2
        self._agents: list[Agent] = []
        for index in range(count):
            x = self._rng.uniform(-half, half)
            y = self._rng.uniform(-half, half)
            self._agents.append(
                Agent(
                    index=index,
                    x=x,
                    y=y,
                    heading=self._rng.heading(),
                    speed=self._config.speed,
                )
            )

        self._tally: Tally = empty_tally()
        self._tally[HealthState.SUSCEPTIBLE] = count
        self._history: list[Tally] = []
        self._grid = (
            SpatialGrid.for_contact(self._config.infection_radius, self._config.speed)
            if self._config.neighbor_index is NeighborIndex.GRID
            else None
        )
        self._eradicated = False

        # Patient zero
        self.infect(0)
        self._agents[0].set_position(0.0, 0.0)
        logger.info(
            "created population of %d agents in a %.0f-unit world (%s, %s)",
            count,
            world_size,
            self._config.update_mode.value,
            self._config.neighbor_index.value,
        )

    @classmethod
    def from_config(
        cls,
        config: SimulationConfig,
        rng: RandomSource | None = None,
        clock: Clock = time.perf_counter,
    ) -> Population:
        return cls(config.population_count, config.world_size, config, rng=rng, clock=clock)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self._agents)

    @property
    def clock(self) -> Clock:
        """Time source shared with anything that paces this population."""
        return self._clock

    @property
    def world_size(self) -> float:
        return self._config.world_size

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def agents(self) -> list[Agent]:
        return self._agents

    @property
    def tally(self) -> Tally:
        """Live counts; mutated in place as agents change state."""
        return self._tally

    @property
    def history(self) -> list[Tally]:
        return self._history

    @property
    def is_eradicated(self) -> bool:
        return self._tally[HealthState.INFECTED] == 0

    def __len__(self) -> int:
        return len(self._agents)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _book(self, transition: Transition | None) -> None:
        if transition is not None:
            apply_transition(self._tally, transition)

    def infect(self, index: int, now: float | None = None) -> Transition | None:
        """Force-infect one agent and keep the tally consistent."""
        transition = self._agents[index].infect(self._clock() if now is None else now)
        self._book(transition)
        return transition

    def tick(self, world_size: float | None = None, now: float | None = None) -> list[Transition]:
        """Advance every agent by one tick and return the booked transitions."""
        size = self._config.world_size if world_size is None else world_size
        half = size / 2
        now = self._clock() if now is None else now
        if self._grid is not None:
            self._grid.build(self._agents)

        if self._config.update_mode is UpdateMode.SYNCHRONOUS:
            transitions = self._tick_synchronous(half, now)
        else:
            transitions = self._tick_sequential(half, now)

        if self.is_eradicated and not self._eradicated:
            self._eradicated = True
            logger.info("infection eradicated: %s", self.format_tally())
        return transitions

    def _candidates(self, index: int) -> list[int] | None:
        return self._grid.candidates(index) if self._grid is not None else None

    def _tick_sequential(self, half: float, now: float) -> list[Transition]:
        booked: list[Transition] = []
        for agent in self._agents:
            for transition in agent.tick(
                self._agents, half, now, self._rng, self._config, self._candidates(agent.index)
            ):
                self._book(transition)
                booked.append(transition)
        return booked

    def _tick_synchronous(self, half: float, now: float) -> list[Transition]:
        frozen = [agent.state for agent in self._agents]
        exposed: dict[int, None] = {}
        booked: list[Transition] = []
        for agent in self._agents:
            agent.move(half, self._rng)
            for index in agent.exposures(
                self._agents, frozen, self._rng, self._config, self._candidates(agent.index)
            ):
                exposed[index] = None
            recovered = agent.recover(now, self._config.infection_duration)
            if recovered is not None:
                self._book(recovered)
                booked.append(recovered)
        for index in exposed:
            transition = self.infect(index, now)
            if transition is not None:
                booked.append(transition)
        return booked

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def record_stats(self) -> None:
        """Append a copy of the current tally to the history."""
        self._history.append(dict(self._tally))

    def format_tally(self) -> str:
        return ", ".join(f"{state.name.lower()}={self._tally[state]}" for state in HEALTH_STATES)

    def snapshot(self) -> PopulationSnapshot:
        positions = np.array([agent.position for agent in self._agents], dtype=float)
        states = np.array([agent.state.value for agent in self._agents], dtype=int)
        return PopulationSnapshot(positions=positions, states=states, tally=dict(self._tally))
