"""Elapsed time widget for the tasktimer TUI."""

from rich.markup import escape
from rich.text import Text
from textual.widgets import Static

from tasktimer.core.timer import TimerStatus, format_elapsed
from tasktimer.tui.presentation import presentation_for

PAUSE_KEY = "P"
QUIT_KEY = "Q"


def hint_markup(status: TimerStatus) -> str:
    """Key hint line for the bottom border, e.g. "Pause <P>  Quit <Q>"."""
    label = presentation_for(status).action_label
    return f"{label} [b blue]<{PAUSE_KEY}>[/]  Quit [b blue]<{QUIT_KEY}>[/]"


class TimerDisplay(Static):
    """Bordered box showing the task heading, elapsed time, and key hints."""

    DEFAULT_CSS = """
    TimerDisplay {
        width: 100%;
        height: 100%;
        border: thick $accent;
        border-title-align: center;
        border-subtitle-align: center;
        content-align: center middle;
    }
    """

    def __init__(self, heading: str) -> None:
        super().__init__()
        self.heading = heading
        self.elapsed_seconds = 0.0
        self.elapsed_text = format_elapsed(0)
        self.status = TimerStatus.RUNNING

    def on_mount(self) -> None:
        self.border_title = f"[b]{escape(self.heading)}[/]"

    def show(self, seconds: float, status: TimerStatus) -> None:
        """Redraw with a new elapsed value and status."""
        self.elapsed_seconds = seconds
        self.elapsed_text = format_elapsed(seconds)
        self.status = status
        color = presentation_for(status).color
        self.update(Text(self.elapsed_text, style=f"bold {color}"))
        self.border_subtitle = hint_markup(status)
