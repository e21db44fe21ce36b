"""Tests for the frame driver: pacing, input signals, and the text overlay."""

from __future__ import annotations

import math

import pytest

from sir_sandbox.config.types import DisplayConfig, SimulationConfig
from sir_sandbox.domain.health import HealthState
from sir_sandbox.domain.population import Population
from sir_sandbox.simulation.driver import Driver, FixedStepClock, tick_rate


def _driver(
    display: DisplayConfig | None = None, dt: float = 0.01, **overrides
) -> Driver:
    config = SimulationConfig(
        population_count=overrides.pop("count", 20),
        world_size=100.0,
        seed=1,
        **overrides,
    )
    clock = FixedStepClock(dt)
    population = Population.from_config(config, clock=clock)
    return Driver(population, display)


class TestTickRate:
    def test_inverse_of_frame_time(self) -> None:
        assert tick_rate(0.02) == pytest.approx(50.0)

    @pytest.mark.parametrize("frame_time", [0.0, -0.1])
    def test_degenerate_frame_time_is_unavailable(self, frame_time: float) -> None:
        assert tick_rate(frame_time) is None


class TestFixedStepClock:
    def test_advances_on_every_read(self) -> None:
        clock = FixedStepClock(0.5, start=1.0)
        assert clock() == 1.5
        assert clock() == 2.0
        assert clock.now == 2.0

    def test_rejects_non_positive_step(self) -> None:
        with pytest.raises(ValueError):
            FixedStepClock(0.0)


class TestDriverStep:
    def test_step_advances_epoch_and_reports_timing(self) -> None:
        driver = _driver(dt=0.02)
        stats = driver.step()
        assert stats.epoch == 0
        assert stats.frame_time == pytest.approx(0.02)
        assert stats.tick_rate == pytest.approx(50.0)
        assert driver.epoch == 1
        assert driver.last_frame is stats

    def test_zero_frame_time_does_not_raise(self) -> None:
        driver = _driver()
        assert driver.step(now=5.0).frame_time > 0
        stats = driver.step(now=5.0)
        assert stats.frame_time == 0.0
        assert stats.tick_rate is None
        assert driver.overlay_text(stats).startswith("n/a tps")

    def test_history_cadence(self) -> None:
        driver = _driver(DisplayConfig(stats_interval=0.25), dt=0.01)
        driver.run(1_000)  # 10 seconds of frames
        expected = math.floor(10.0 / 0.25)
        assert abs(len(driver.population.history) - expected) <= 1
        assert driver.recorder is not None
        assert driver.recorder.samples == len(driver.population.history)

    def test_minimal_variant_keeps_no_history(self) -> None:
        driver = _driver(DisplayConfig.minimal())
        driver.run(200)
        assert driver.recorder is None
        assert driver.population.history == []

    def test_tally_conserved_across_frames(self) -> None:
        driver = _driver(count=40, infection_chance=0.5, infection_radius=20.0)
        for _ in range(150):
            driver.step()
            assert sum(driver.population.tally.values()) == 40

    def test_run_stops_once_closed(self) -> None:
        driver = _driver()
        driver.run(3)
        driver.close()
        assert driver.run(10) is None
        assert driver.epoch == 3

    def test_run_rejects_negative_frames(self) -> None:
        with pytest.raises(ValueError):
            _driver().run(-1)

    def test_recovery_uses_population_clock(self) -> None:
        clock = FixedStepClock(1.0)
        config = SimulationConfig(population_count=1, world_size=100.0, infection_duration=2.0)
        population = Population.from_config(config, clock=clock)
        driver = Driver(population)
        driver.run(3)
        assert population.agents[0].state is HealthState.REMOVED
        assert population.is_eradicated


class TestDriverInput:
    def test_escape_closes(self) -> None:
        driver = _driver()
        driver.handle_key("escape")
        assert not driver.running

    def test_speed_limit_hotkeys(self) -> None:
        driver = _driver()
        driver.handle_key(".")
        assert driver.speed_limit == 80
        driver.handle_key(",")
        driver.handle_key(",")
        assert driver.speed_limit == 40

    def test_speed_limit_never_drops_below_one(self) -> None:
        driver = _driver(DisplayConfig(speed_limit=30))
        for _ in range(5):
            driver.handle_key(",")
        assert driver.speed_limit == 1
        assert driver.frame_interval_ms == 1000

    def test_hotkeys_disabled(self) -> None:
        driver = _driver(DisplayConfig(hotkeys=False))
        driver.handle_key(".")
        assert driver.speed_limit == 60
        assert driver.running

    def test_unknown_and_missing_keys_are_ignored(self) -> None:
        driver = _driver()
        driver.handle_key(None)
        driver.handle_key("q")
        assert driver.running
        assert driver.speed_limit == 60

    def test_frame_interval_tracks_speed_limit(self) -> None:
        driver = _driver()
        assert driver.frame_interval_ms == 16
        driver.adjust_speed_limit(40)
        assert driver.frame_interval_ms == 10


class TestOverlay:
    def test_overlay_lists_counts(self) -> None:
        driver = _driver(count=10)
        stats = driver.step()
        text = driver.overlay_text(stats)
        lines = text.splitlines()
        assert lines[0].endswith("mspt")
        assert lines[1] == "epoch 0"
        assert lines[2] == "speed limit 60"
        tally = driver.population.tally
        assert f"susceptible: {tally[HealthState.SUSCEPTIBLE]}" in lines
        assert f"infected: {tally[HealthState.INFECTED]}" in lines
        assert f"removed: {tally[HealthState.REMOVED]}" in lines
        assert "ERRADICATED" not in text

    def test_banner_once_eradicated(self) -> None:
        driver = _driver(count=1, infection_duration=0.0)
        driver.step()
        assert driver.population.is_eradicated
        assert driver.show_banner
        assert driver.overlay_text().splitlines()[-1] == "ERRADICATED"

    def test_banner_can_be_disabled(self) -> None:
        driver = _driver(
            DisplayConfig(show_eradicated_banner=False), count=1, infection_duration=0.0
        )
        driver.step()
        assert not driver.show_banner
        assert "ERRADICATED" not in driver.overlay_text()

    def test_minimal_overlay_hides_speed_limit(self) -> None:
        driver = _driver(DisplayConfig.minimal())
        driver.step()
        assert "speed limit" not in driver.overlay_text()
