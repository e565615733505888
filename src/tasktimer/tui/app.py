"""Main Textual app for the tasktimer TUI."""

import logging
import time

from textual.app import App, ComposeResult

from tasktimer.core.timer import Clock, Timer
from tasktimer.tui.widgets.timer_display import TimerDisplay

logger = logging.getLogger(__name__)

# Upper bound on how stale the display can get between redraws
POLL_INTERVAL = 0.25


class TimerApp(App[float]):
    """Full-screen stopwatch for one sitting on one task.

    Runs until the user quits; App.run() then returns the final duration in
    seconds. Paused time is not counted.
    """

    TITLE = "tasktimer"
    BINDINGS = [
        ("p", "toggle_pause", "Pause/Resume"),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self, issue_number: int, issue_title: str, clock: Clock = time.monotonic
    ) -> None:
        super().__init__()
        self.issue_number = issue_number
        self.issue_title = issue_title
        self.timer = Timer.start(clock)

    @property
    def heading(self) -> str:
        return f"Working on Task #{self.issue_number}: {self.issue_title}"

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield TimerDisplay(self.heading)

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self.refresh_timer()
        self.set_interval(POLL_INTERVAL, self.refresh_timer)

    def refresh_timer(self) -> None:
        """Redraw the elapsed time from the timer's live value."""
        self.query_one(TimerDisplay).show(self.timer.elapsed(), self.timer.status)

    def action_toggle_pause(self) -> None:
        """Pause a running timer or resume a paused one."""
        self.timer.toggle()
        logger.info("Task #%s timer now %s", self.issue_number, self.timer.status.value)
        self.refresh_timer()

    async def action_quit(self) -> None:
        """Stop the timer and exit with the final duration."""
        self.exit(self.timer.finalize())


class SittingError(Exception):
    """Raised when the TUI exits without producing a duration."""

    pass


def run_sitting(issue_number: int, issue_title: str) -> float:
    """Run the timer TUI for one sitting.

    Textual restores the terminal on every exit path, including crashes.

    Returns:
        Seconds worked, excluding paused time.

    Raises:
        SittingError: If the app failed before the user quit.
    """
    app = TimerApp(issue_number, issue_title)
    duration = app.run()
    if duration is None or app.return_code:
        raise SittingError(
            f"Timer for task #{issue_number} stopped unexpectedly; no session was recorded"
        )
    return duration
