"""How each timer status is shown."""

from dataclasses import dataclass

from tasktimer.core.timer import TimerStatus


@dataclass(frozen=True)
class Presentation:
    """Display hints for a timer status.

    Attributes:
        color: Color of the elapsed time.
        action_label: What the pause/resume key will do next.
    """

    color: str
    action_label: str


_PRESENTATIONS = {
    TimerStatus.RUNNING: Presentation(color="green", action_label="Pause"),
    TimerStatus.STOPPED: Presentation(color="red", action_label="Resume"),
}


def presentation_for(status: TimerStatus) -> Presentation:
    """Return the display hints for a timer status."""
    return _PRESENTATIONS[status]
