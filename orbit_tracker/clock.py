"""
Simulation clock and realtime ticker.

There is exactly one authoritative instant. In realtime mode each tick moves
it to the wall clock; a scrub (time slider) holds it at the requested instant
until realtime is resumed. Every refresh pass receives the instant explicitly.
"""

import asyncio
import enum
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from orbit_tracker.config import TICK_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


class ClockMode(enum.Enum):
    REALTIME = "realtime"
    SCRUBBED = "scrubbed"


class SimulationClock:
    """
    Holder of the current simulation instant.

    Args:
        start: Initial instant (default: now)
        scrub_range: Optional (earliest, latest) window for scrubbing
        wall_clock: Source of realtime instants
    """

    def __init__(self, start: Optional[datetime] = None,
                 scrub_range: Optional[Tuple[datetime, datetime]] = None,
                 wall_clock: Callable[[], datetime] = utc_now):
        self._wall_clock = wall_clock
        self._now = _as_utc(start) if start is not None else wall_clock()
        self.mode = ClockMode.REALTIME
        self.scrub_range: Optional[Tuple[datetime, datetime]] = None
        if scrub_range is not None:
            self.set_scrub_range(*scrub_range)

    @property
    def now(self) -> datetime:
        return self._now

    def set_scrub_range(self, earliest: datetime, latest: datetime) -> None:
        earliest, latest = _as_utc(earliest), _as_utc(latest)
        if latest < earliest:
            raise ValueError("scrub range end precedes its start")
        self.scrub_range = (earliest, latest)

    def advance(self, instant: Optional[datetime] = None) -> datetime:
        """
        Realtime tick. Moves to instant (default: wall clock) unless scrubbed.

        Returns:
            The authoritative instant after the tick
        """
        if self.mode is ClockMode.REALTIME:
            self._now = _as_utc(instant) if instant is not None else self._wall_clock()
        return self._now

    def scrub(self, instant: datetime) -> datetime:
        """Hold the clock at instant, clamped to the scrub range."""
        instant = _as_utc(instant)
        if self.scrub_range is not None:
            earliest, latest = self.scrub_range
            instant = min(max(instant, earliest), latest)
        self.mode = ClockMode.SCRUBBED
        self._now = instant
        return instant

    def resume_realtime(self) -> datetime:
        self.mode = ClockMode.REALTIME
        self._now = self._wall_clock()
        return self._now


class RealtimeTicker:
    """
    Calls on_tick once per interval with the advanced clock instant.

    Each callback runs to completion before the next sleep starts, so ticks
    never overlap. Errors raised by the callback are logged and the ticker
    keeps going.
    """

    def __init__(self, clock: SimulationClock, on_tick: Callable[[datetime], object],
                 interval: float = TICK_INTERVAL_SECONDS):
        self.clock = clock
        self.on_tick = on_tick
        self.interval = interval
        self.ticks = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the tick loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while True:
            instant = self.clock.advance()
            try:
                self.on_tick(instant)
            except Exception as e:
                logger.error(f"Tick at {instant.isoformat()} failed: {e}")
            self.ticks += 1
            await asyncio.sleep(self.interval)
