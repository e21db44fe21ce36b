from sir_sandbox.config.constants import (
    AGENT_RADIUS,
    CHART_SCALE,
    HALO_INSET,
    HEADING_RANGE,
    INFECTION_CHANCE,
    INFECTION_DURATION,
    INFECTION_RADIUS,
    JITTER_RANGE,
    POPULATION_COUNT,
    SPEED,
    SPEED_LIMIT,
    SPEED_LIMIT_STEP,
    STATS_INTERVAL,
    WORLD_SIZE,
)


def test_population_and_world_are_positive() -> None:
    assert isinstance(POPULATION_COUNT, int) and POPULATION_COUNT > 0
    assert WORLD_SIZE > 0


def test_infection_chance_is_probability() -> None:
    assert 0.0 <= INFECTION_CHANCE <= 1.0


def test_infection_parameters_are_positive() -> None:
    assert INFECTION_RADIUS > 0
    assert INFECTION_DURATION > 0
    assert SPEED > 0


def test_ranges_are_ordered() -> None:
    assert HEADING_RANGE[0] < HEADING_RANGE[1]
    assert JITTER_RANGE[0] < JITTER_RANGE[1]
    assert JITTER_RANGE == (-0.2, 0.2)


def test_halo_fits_inside_infection_radius() -> None:
    assert HALO_INSET == AGENT_RADIUS
    assert INFECTION_RADIUS > HALO_INSET


def test_render_loop_defaults() -> None:
    assert SPEED_LIMIT == 60
    assert SPEED_LIMIT_STEP == 20
    assert STATS_INTERVAL == 0.25
    assert CHART_SCALE == (10.0, 3_000.0)
