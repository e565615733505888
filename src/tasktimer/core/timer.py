"""Pausable stopwatch for a single sitting.

The timer is a value-type state (TimerState) plus pure transition functions
that take the current monotonic time. Timer wraps a state and a clock so the
interactive loop can call pause/resume/finalize without passing timestamps,
while tests inject a fake clock.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class TimerStatus(Enum):
    """Whether the timer is currently accumulating time."""

    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(frozen=True)
class TimerState:
    """Snapshot of a timer.

    Attributes:
        total_duration: Seconds from closed running intervals only.
        status: RUNNING or STOPPED.
        start_time: Monotonic start of the open interval (only meaningful
            while running).
    """

    total_duration: float
    status: TimerStatus
    start_time: float


def _interval(state: TimerState, now: float) -> float:
    return max(0.0, now - state.start_time)


def started(now: float) -> TimerState:
    """Return a fresh running state with nothing accumulated."""
    return TimerState(total_duration=0.0, status=TimerStatus.RUNNING, start_time=now)


def elapsed(state: TimerState, now: float) -> float:
    """Return accumulated seconds including the open interval, if any."""
    if state.status is TimerStatus.RUNNING:
        return state.total_duration + _interval(state, now)
    return state.total_duration


def paused(state: TimerState, now: float) -> TimerState:
    """Fold the open interval into the total and stop.

    Pausing a stopped timer returns it unchanged.
    """
    if state.status is TimerStatus.STOPPED:
        return state
    return replace(
        state,
        total_duration=state.total_duration + _interval(state, now),
        status=TimerStatus.STOPPED,
    )


def resumed(state: TimerState, now: float) -> TimerState:
    """Open a new interval at now. Resuming a running timer is a no-op."""
    if state.status is TimerStatus.RUNNING:
        return state
    return replace(state, status=TimerStatus.RUNNING, start_time=now)


def finalized(state: TimerState, now: float) -> TimerState:
    """Close any open interval so total_duration is the final value."""
    return paused(state, now)


class Timer:
    """Stopwatch driven by a monotonic clock."""

    def __init__(self, state: TimerState, clock: Clock = time.monotonic) -> None:
        self._state = state
        self._clock = clock

    @classmethod
    def start(cls, clock: Clock = time.monotonic) -> "Timer":
        """Create a timer that is already running."""
        return cls(started(clock()), clock)

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def status(self) -> TimerStatus:
        return self._state.status

    @property
    def is_running(self) -> bool:
        return self._state.status is TimerStatus.RUNNING

    def elapsed(self) -> float:
        """Live elapsed seconds. Does not mutate the timer."""
        return elapsed(self._state, self._clock())

    def pause(self) -> None:
        self._state = paused(self._state, self._clock())
        logger.debug("Timer paused at %.1fs", self._state.total_duration)

    def resume(self) -> None:
        self._state = resumed(self._state, self._clock())
        logger.debug("Timer resumed at %.1fs", self._state.total_duration)

    def toggle(self) -> None:
        """Pause a running timer or resume a stopped one."""
        if self.is_running:
            self.pause()
        else:
            self.resume()

    def finalize(self) -> float:
        """Close the open interval and return the final duration in seconds."""
        self._state = finalized(self._state, self._clock())
        logger.info("Timer finalized at %.1fs", self._state.total_duration)
        return self._state.total_duration


def format_elapsed(seconds: float) -> str:
    """Format seconds as MM:SS. Minutes keep counting past 59."""
    whole = int(max(0.0, seconds))
    minutes, secs = divmod(whole, 60)
    return f"{minutes:02}:{secs:02}"


def format_minutes(seconds: float) -> str:
    """Format seconds as fractional minutes, e.g. 120 -> "2.00 minutes"."""
    return f"{seconds / 60:.2f} minutes"
