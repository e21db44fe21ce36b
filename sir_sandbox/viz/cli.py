from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

import matplotlib

from sir_sandbox.config.constants import (
    INFECTION_CHANCE,
    INFECTION_DURATION,
    INFECTION_RADIUS,
    POPULATION_COUNT,
    SPEED,
    SPEED_LIMIT,
    STATS_INTERVAL,
    WINDOW_PX,
    WORLD_SIZE,
)
from sir_sandbox.config.types import DisplayConfig, NeighborIndex, SimulationConfig, UpdateMode
from sir_sandbox.domain.population import Population
from sir_sandbox.simulation.driver import Driver, FixedStepClock
from sir_sandbox.viz.theme import REGISTERED_THEMES, get_theme

logger = logging.getLogger(__name__)


def _add_simulation_args(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("simulation")
    g.add_argument("--count", type=int, default=POPULATION_COUNT)
    g.add_argument("--world-size", type=float, default=WORLD_SIZE)
    g.add_argument("--speed", type=float, default=SPEED)
    g.add_argument("--infection-radius", type=float, default=INFECTION_RADIUS)
    g.add_argument("--infection-chance", type=float, default=INFECTION_CHANCE)
    g.add_argument(
        "--infection-duration",
        type=float,
        default=INFECTION_DURATION,
        help="Seconds an agent stays infected",
    )
    g.add_argument(
        "--update-mode",
        choices=[mode.value for mode in UpdateMode],
        default=UpdateMode.SEQUENTIAL.value,
    )
    g.add_argument(
        "--neighbor-index",
        choices=[index.value for index in NeighborIndex],
        default=NeighborIndex.ALL_PAIRS.value,
    )
    g.add_argument("--seed", type=int, default=None)


def _add_display_args(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("display")
    g.add_argument("--window-px", type=int, default=WINDOW_PX)
    g.add_argument("--speed-limit", type=int, default=SPEED_LIMIT, help="Target frames per second")
    g.add_argument("--stats-interval", type=float, default=STATS_INTERVAL)
    g.add_argument("--no-history", action="store_true", help="Do not record or draw the chart")
    g.add_argument("--no-hotkeys", action="store_true", help="Disable '.'/',' speed-limit keys")
    g.add_argument("--no-banner", action="store_true", help="Hide the eradication banner")
    g.add_argument("--theme", choices=sorted(REGISTERED_THEMES), default="default")


def _build_run_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("run", help="Open a window and run the simulation live")
    p.set_defaults(func=_handle_run)
    _add_simulation_args(p)
    _add_display_args(p)


def _build_headless_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("headless", help="Run a fixed number of frames without rendering")
    p.set_defaults(func=_handle_headless)
    _add_simulation_args(p)
    _add_display_args(p)
    p.add_argument("--frames", type=int, default=600)


def _build_record_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("record", help="Render a fixed number of frames to a GIF or video")
    p.set_defaults(func=_handle_record)
    _add_simulation_args(p)
    _add_display_args(p)
    p.add_argument("--frames", type=int, default=300)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--fps", type=int, default=None)


def build_configs(args: argparse.Namespace) -> tuple[SimulationConfig, DisplayConfig]:
    """Map parsed flags onto the config dataclasses; raises ``ValueError`` if invalid."""
    simulation = SimulationConfig(
        population_count=args.count,
        world_size=args.world_size,
        speed=args.speed,
        infection_radius=args.infection_radius,
        infection_chance=args.infection_chance,
        infection_duration=args.infection_duration,
        update_mode=UpdateMode(args.update_mode),
        neighbor_index=NeighborIndex(args.neighbor_index),
        seed=args.seed,
    )
    display = DisplayConfig(
        window_px=args.window_px,
        speed_limit=args.speed_limit,
        record_history=not args.no_history,
        stats_interval=args.stats_interval,
        hotkeys=not args.no_hotkeys,
        show_eradicated_banner=not args.no_banner,
        theme=args.theme,
    )
    return simulation, display


def _fixed_step_driver(
    simulation: SimulationConfig, display: DisplayConfig, fps: int
) -> Driver:
    clock = FixedStepClock(1.0 / fps)
    population = Population.from_config(simulation, clock=clock)
    return Driver(population, display)


def _handle_run(
    args: argparse.Namespace, simulation: SimulationConfig, display: DisplayConfig
) -> None:
    from sir_sandbox.viz.render import RenderAdapter

    population = Population.from_config(simulation)
    driver = Driver(population, display)
    RenderAdapter(driver, theme=get_theme(display.theme)).show()
    print(f"stopped after {driver.epoch} frames: {population.format_tally()}")


def _handle_headless(
    args: argparse.Namespace, simulation: SimulationConfig, display: DisplayConfig
) -> None:
    if args.frames < 0:
        raise ValueError("frames must be >= 0")
    driver = _fixed_step_driver(simulation, display, display.speed_limit)
    driver.run(args.frames)
    population = driver.population
    print(
        f"{driver.epoch} frames, {len(population.history)} samples: {population.format_tally()}"
    )


def _handle_record(
    args: argparse.Namespace, simulation: SimulationConfig, display: DisplayConfig
) -> None:
    matplotlib.use("Agg")
    from sir_sandbox.viz.render import RenderAdapter

    fps = args.fps or display.speed_limit
    if fps < 1:
        raise ValueError("fps must be >= 1")
    driver = _fixed_step_driver(simulation, display, fps)
    adapter = RenderAdapter(driver, theme=get_theme(display.theme))
    try:
        output = adapter.save(args.output, frames=args.frames, fps=fps)
    finally:
        adapter.close()
    print(f"wrote {output}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sir-sandbox", description="Agent-based SIR epidemic sandbox"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)
    _build_run_parser(sub)
    _build_headless_parser(sub)
    _build_record_parser(sub)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        simulation, display = build_configs(args)
    except ValueError as exc:
        parser.error(str(exc))
    try:
        args.func(args, simulation, display)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
