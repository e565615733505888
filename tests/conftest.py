"""Shared pytest fixtures for tasktimer tests."""

import logging

import pytest


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """A fake monotonic clock starting at an arbitrary nonzero time."""
    return FakeClock()


@pytest.fixture
def tasktimer_home(tmp_path, monkeypatch):
    """Point the per-user tasktimer directory at tmp_path.

    This ensures tests don't read or write the real ~/.tasktimer/ directory.
    """
    monkeypatch.setenv("TASKTIMER_HOME", str(tmp_path))
    monkeypatch.delenv("TASKTIMER_LOG_LEVEL", raising=False)
    yield tmp_path
    # setup_logging() attaches a file handler under tmp_path; drop it
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
