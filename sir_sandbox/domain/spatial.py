"""Uniform-grid neighbour index for the infection sweep.

Agents are bucketed by their position at the start of a tick. With a cell
side of ``infection_radius + 2 * speed`` every pair that can be in contact
at any point of the pass lies in the same or an adjacent cell, even though
both agents move before they are tested. Candidate lists are sorted by
index so earlier agents keep precedence, as with the all-pairs scan.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from sir_sandbox.domain.agent import Agent

Cell = tuple[int, int]


class SpatialGrid:
    """Buckets of agent indices keyed by integer cell coordinates."""

    def __init__(self, cell_size: float) -> None:
        if cell_size <= 0:
            raise ValueError("cell_size must be > 0")
        self.cell_size = cell_size
        self._cells: dict[Cell, list[int]] = {}
        self._cell_of: list[Cell] = []

    @classmethod
    def for_contact(cls, infection_radius: float, speed: float) -> SpatialGrid:
        return cls(infection_radius + 2 * speed)

    def cell(self, x: float, y: float) -> Cell:
        return (math.floor(x / self.cell_size), math.floor(y / self.cell_size))

    def build(self, agents: Sequence[Agent]) -> None:
        """Re-bucket every agent from its current position."""
        self._cells = {}
        self._cell_of = []
        for agent in agents:
            key = self.cell(agent.x, agent.y)
            self._cell_of.append(key)
            self._cells.setdefault(key, []).append(agent.index)

    def candidates(self, index: int) -> list[int]:
        """Indices in the 3x3 block of cells around ``index``, ascending."""
        cx, cy = self._cell_of[index]
        found: list[int] = []
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                found.extend(self._cells.get((cx + dx, cy + dy), ()))
        found.sort()
        return found

    def __len__(self) -> int:
        return len(self._cell_of)
