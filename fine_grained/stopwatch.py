"""A stopwatch with lap functionality and nanosecond resolution.

Measured times are stored and returned as integer nanoseconds taken from a
monotonic clock, so durations never go negative and are immune to wall-clock
adjustments.

Typical use::

    sw = Stopwatch.start_new()
    for item in work:
        process(item)
        sw.lap()
    sw.stop()
    print(sw.laps, sw)

Misuse never raises: ``lap()`` on a stopwatch that is not running returns
``0`` and records nothing, ``stop()`` on a stopped stopwatch returns the
previous total, and ``start()`` on a running one is ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import TracebackType
from typing import Callable, List, Optional, Tuple, Type

from .clock import now_monotonic_ns, ns_to_ms
from .report import StopwatchReport

logger = logging.getLogger(__name__)


class ClockError(RuntimeError):
    """Raised when the time source runs backwards."""


@dataclass(eq=False, repr=False)
class Stopwatch:
    clock: Callable[[], int] = field(default_factory=lambda: now_monotonic_ns)
    start_time: Optional[int] = field(default=None, init=False)
    _laps: List[int] = field(default_factory=list, init=False)
    _lap_start: int = field(default=0, init=False)
    _banked: int = field(default=0, init=False)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def new(cls, clock: Optional[Callable[[], int]] = None) -> "Stopwatch":
        """Idle stopwatch: nothing recorded, not running."""
        return cls() if clock is None else cls(clock=clock)

    @classmethod
    def start_new(cls, clock: Optional[Callable[[], int]] = None) -> "Stopwatch":
        sw = cls.new(clock)
        sw.start()
        return sw

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Start timing. Laps and time banked by an earlier session are kept."""
        if self.is_running:
            logger.debug("start() ignored: stopwatch already running")
            return
        now = self.clock()
        self.start_time = now
        self._lap_start = now

    def lap(self) -> int:
        """Close the current lap, record it, and return its duration in ns."""
        if not self.is_running:
            logger.debug("lap() ignored: stopwatch not running")
            return 0
        now = self.clock()
        d = self._delta(self._lap_start, now)
        self._laps.append(d)
        self._lap_start = now
        return d

    def stop(self) -> int:
        """Stop timing and return the total elapsed time in ns."""
        if not self.is_running:
            logger.debug("stop() ignored: stopwatch not running")
            return self._banked
        now = self.clock()
        self._banked += self._delta(self.start_time, now)
        self.start_time = None
        return self._banked

    def reset(self) -> None:
        """Forget all measurements and leave the stopwatch idle."""
        self._laps = []
        self.start_time = None
        self._lap_start = 0
        self._banked = 0

    def restart(self) -> None:
        self.reset()
        self.start()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.start_time is not None

    @property
    def laps(self) -> Tuple[int, ...]:
        return tuple(self._laps)

    @property
    def number_of_laps(self) -> int:
        return len(self._laps)

    @property
    def total_time(self) -> int:
        """Banked time plus, while running, the time since the current start."""
        if not self.is_running:
            return self._banked
        return self._banked + self._delta(self.start_time, self.clock())

    @property
    def elapsed_ms(self) -> float:
        return ns_to_ms(self.total_time)

    def report(self) -> StopwatchReport:
        return StopwatchReport(laps_ns=list(self._laps), total_ns=self.total_time, running=self.is_running)

    def _delta(self, since: int, now: int) -> int:
        if now < since:
            raise ClockError(f"clock went backwards: {now} < {since}")
        return now - since

    def __str__(self) -> str:
        return str(self.total_time)

    def __repr__(self) -> str:
        return f"Stopwatch(running={self.is_running}, laps={self.laps!r}, total_time={self.total_time})"

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------
    def __enter__(self) -> "Stopwatch":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> bool:
        self.stop()
        return False


__all__ = ["ClockError", "Stopwatch"]
