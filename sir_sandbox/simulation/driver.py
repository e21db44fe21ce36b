"""Frame loop logic shared by the interactive renderer and headless runs.

The driver knows nothing about the graphics backend: it advances the
population once per frame, paces history samples, and turns input signals
into state changes (close, speed limit).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sir_sandbox.config.types import DisplayConfig
from sir_sandbox.domain.health import HealthState
from sir_sandbox.domain.population import Population
from sir_sandbox.simulation.stats import StatsRecorder

logger = logging.getLogger(__name__)

CLOSE_KEYS = frozenset({"escape"})
FASTER_KEY = "."
SLOWER_KEY = ","


def tick_rate(frame_time: float) -> float | None:
    """Instantaneous ticks per second, or ``None`` when the frame took no time."""
    if frame_time <= 0:
        return None
    return 1.0 / frame_time


class FixedStepClock:
    """Simulated clock that advances by ``step`` seconds on every read.

    Used for headless runs and recorded animations, where frames are not
    paced by a window and wall-clock recovery would depend on machine speed.
    """

    def __init__(self, step: float, start: float = 0.0) -> None:
        if step <= 0:
            raise ValueError("step must be > 0")
        self.step = step
        self.now = start

    def __call__(self) -> float:
        self.now += self.step
        return self.now


@dataclass(frozen=True)
class FrameStats:
    """Timing of one completed frame."""

    epoch: int
    frame_time: float
    tick_rate: float | None
    recorded: bool


class Driver:
    """Advances a population one tick per frame."""

    def __init__(
        self,
        population: Population,
        display: DisplayConfig | None = None,
    ) -> None:
        self.population = population
        self.display = display or DisplayConfig()
        # Infection timestamps and tick times must come from one clock.
        clock = population.clock
        self._clock = clock
        start = clock()
        self._last_frame = start
        self.recorder = (
            StatsRecorder(self.display.stats_interval, clock=clock, start=start)
            if self.display.record_history
            else None
        )
        self.speed_limit = self.display.speed_limit
        self.epoch = 0
        self.running = True
        self.last_frame: FrameStats | None = None

    def step(self, now: float | None = None) -> FrameStats:
        """Run one frame: tick the population and maybe sample the history."""
        now = self._clock() if now is None else now
        frame_time = now - self._last_frame
        self._last_frame = now
        self.population.tick(now=now)
        recorded = (
            self.recorder.maybe_record(self.population, now) if self.recorder is not None else False
        )
        stats = FrameStats(
            epoch=self.epoch,
            frame_time=frame_time,
            tick_rate=tick_rate(frame_time),
            recorded=recorded,
        )
        self.last_frame = stats
        self.epoch += 1
        return stats

    def run(self, frames: int) -> FrameStats | None:
        """Step ``frames`` times without rendering, stopping early once closed."""
        if frames < 0:
            raise ValueError("frames must be >= 0")
        stats = None
        for _ in range(frames):
            if not self.running:
                break
            stats = self.step()
        return stats

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def close(self) -> None:
        self.running = False

    def adjust_speed_limit(self, delta: int) -> int:
        self.speed_limit = max(1, self.speed_limit + delta)
        logger.debug("speed limit set to %d", self.speed_limit)
        return self.speed_limit

    def handle_key(self, key: str | None) -> None:
        """Translate a key name from the backend into a driver signal."""
        if key is None:
            return
        if key.lower() in CLOSE_KEYS:
            self.close()
        elif self.display.hotkeys and key == FASTER_KEY:
            self.adjust_speed_limit(self.display.speed_limit_step)
        elif self.display.hotkeys and key == SLOWER_KEY:
            self.adjust_speed_limit(-self.display.speed_limit_step)

    @property
    def frame_interval_ms(self) -> int:
        """Delay between frames for the current speed limit."""
        return max(1, int(1000 / self.speed_limit))

    # ------------------------------------------------------------------
    # Overlay
    # ------------------------------------------------------------------

    def overlay_text(self, stats: FrameStats | None = None) -> str:
        stats = stats or self.last_frame
        tally = self.population.tally
        lines = []
        if stats is None or stats.tick_rate is None:
            lines.append("n/a tps")
        else:
            lines.append(f"{stats.tick_rate:.4f} tps {stats.frame_time * 1000:.4f} mspt")
        lines.append(f"epoch {stats.epoch if stats is not None else self.epoch}")
        if self.display.hotkeys:
            lines.append(f"speed limit {self.speed_limit}")
        lines.append(f"susceptible: {tally[HealthState.SUSCEPTIBLE]}")
        lines.append(f"infected: {tally[HealthState.INFECTED]}")
        lines.append(f"removed: {tally[HealthState.REMOVED]}")
        if self.show_banner:
            lines.append("ERRADICATED")
        return "\n".join(lines)

    @property
    def show_banner(self) -> bool:
        return self.display.show_eradicated_banner and self.population.is_eradicated
