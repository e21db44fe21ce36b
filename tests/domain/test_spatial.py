"""Tests for sir_sandbox.domain.spatial module."""

from __future__ import annotations

from random import Random

import pytest

from sir_sandbox.domain.agent import Agent
from sir_sandbox.domain.spatial import SpatialGrid


def _scatter(n: int, half: float, seed: int) -> list[Agent]:
    rng = Random(seed)
    return [
        Agent(
            index=i,
            x=rng.uniform(-half, half),
            y=rng.uniform(-half, half),
            heading=0.0,
            speed=0.0,
        )
        for i in range(n)
    ]


class TestSpatialGrid:
    def test_rejects_non_positive_cell_size(self) -> None:
        with pytest.raises(ValueError):
            SpatialGrid(0.0)

    def test_cell_size_covers_radius_plus_motion(self) -> None:
        grid = SpatialGrid.for_contact(infection_radius=80.0, speed=4.0)
        assert grid.cell_size == 88.0

    def test_negative_coordinates_floor(self) -> None:
        grid = SpatialGrid(10.0)
        assert grid.cell(-0.1, 0.0) == (-1, 0)
        assert grid.cell(9.99, -10.0) == (0, -1)

    def test_candidates_are_sorted_and_include_self(self) -> None:
        agents = _scatter(50, 30.0, seed=1)
        grid = SpatialGrid(10.0)
        grid.build(agents)
        assert len(grid) == 50
        for agent in agents:
            found = grid.candidates(agent.index)
            assert found == sorted(found)
            assert agent.index in found

    def test_candidates_cover_every_pair_in_reach(self) -> None:
        radius, speed = 6.0, 1.5
        agents = _scatter(120, 40.0, seed=2)
        grid = SpatialGrid.for_contact(radius, speed)
        grid.build(agents)
        reach = radius + 2 * speed
        for a in agents:
            found = set(grid.candidates(a.index))
            for b in agents:
                if a.distance_to(b) < reach:
                    assert b.index in found

    def test_rebuild_replaces_buckets(self) -> None:
        agents = _scatter(5, 10.0, seed=3)
        grid = SpatialGrid(1.0)
        grid.build(agents)
        for agent in agents:
            agent.set_position(100.0, 100.0)
        grid.build(agents)
        assert grid.candidates(0) == [0, 1, 2, 3, 4]
