"""Session store for tasktimer.

All history lives in a single JSON file (~/.tasktimer/data_store.json):

    {
      "tasks": {
        "42": {
          "title": "Write the parser",
          "sessions": [{"duration_seconds": 90.0}, {"duration_seconds": 30.0}]
        }
      }
    }

Task keys are issue numbers. Sessions are append-only.
"""

import logging
import os
import stat
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

import orjson

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the store cannot be read, parsed, or written."""

    pass


@dataclass(frozen=True)
class Session:
    """One committed sitting.

    Attributes:
        duration: Seconds worked, excluding paused time.
    """

    duration: float


@dataclass
class Task:
    """A tracked issue and its session history.

    Attributes:
        title: Issue title captured the first time the task was worked on.
        sessions: Completed sessions in the order they were recorded.
    """

    title: str
    sessions: list[Session] = field(default_factory=list)

    def time_spent(self) -> float:
        """Total seconds across all sessions."""
        return sum(session.duration for session in self.sessions)


@dataclass
class SessionStore:
    """Mapping from issue number to Task."""

    tasks: dict[int, Task] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "SessionStore":
        """Load the store from path.

        A missing file is an empty store.

        Raises:
            StoreError: If the file exists but cannot be read or parsed.
        """
        if not path.exists():
            logger.info("No data store at %s, starting empty", path)
            return cls()
        try:
            content = path.read_bytes()
        except OSError as e:
            raise StoreError(f"Failed to read data store {path}: {e}") from e
        try:
            data = orjson.loads(content)
        except orjson.JSONDecodeError as e:
            raise StoreError(f"Data store {path} is not valid JSON: {e}") from e
        try:
            store = cls.from_dict(data)
        except StoreError as e:
            raise StoreError(f"Data store {path} is malformed: {e}") from e
        logger.info("Loaded %d task(s) from %s", len(store.tasks), path)
        return store

    @classmethod
    def from_dict(cls, data: object) -> "SessionStore":
        """Build a store from its JSON shape.

        Raises:
            StoreError: If the shape does not match.
        """
        if not isinstance(data, dict) or not isinstance(data.get("tasks"), dict):
            raise StoreError('expected an object with a "tasks" object')

        tasks: dict[int, Task] = {}
        for key, raw_task in data["tasks"].items():
            try:
                task_id = int(key)
            except ValueError:
                raise StoreError(f"task id {key!r} is not an integer") from None
            # "042" and "42" would otherwise collapse into one task
            if str(task_id) != key:
                raise StoreError(f"task id {key!r} is not in canonical form")
            if not isinstance(raw_task, dict):
                raise StoreError(f"task {key} is not an object")
            title = raw_task.get("title")
            raw_sessions = raw_task.get("sessions")
            if not isinstance(title, str):
                raise StoreError(f"task {key} has no title")
            if not isinstance(raw_sessions, list):
                raise StoreError(f"task {key} has no sessions list")
            tasks[task_id] = Task(
                title=title,
                sessions=[_parse_session(key, raw) for raw in raw_sessions],
            )
        return cls(tasks=tasks)

    def to_dict(self) -> dict:
        """Return the JSON shape of the store."""
        return {
            "tasks": {
                str(task_id): {
                    "title": task.title,
                    "sessions": [
                        {"duration_seconds": session.duration}
                        for session in task.sessions
                    ],
                }
                for task_id, task in self.tasks.items()
            }
        }

    def record_session(self, task_id: int, title_if_new: str, duration: float) -> Task:
        """Append a session to a task, creating the task if needed.

        Args:
            task_id: Issue number.
            title_if_new: Title used only when the task does not exist yet.
            duration: Seconds worked in the sitting.

        Returns:
            The task the session was appended to.
        """
        if duration < 0:
            raise ValueError(f"Session duration must be >= 0, got {duration}")
        task = self.tasks.get(task_id)
        if task is None:
            task = Task(title=title_if_new)
            self.tasks[task_id] = task
        task.sessions.append(Session(duration=float(duration)))
        logger.info("Recorded %.1fs session on task #%s", duration, task_id)
        return task

    def time_on_task(self, task_id: int) -> float:
        """Total seconds recorded for a task, 0.0 if it has never been worked on."""
        task = self.tasks.get(task_id)
        if task is None:
            return 0.0
        return task.time_spent()

    def persist(self, path: Path) -> None:
        """Write the store to path atomically.

        The content goes to a temporary file in the same directory, which then
        replaces the destination. On failure the previous file is untouched.

        Raises:
            StoreError: If any part of the write fails.
        """
        content = orjson.dumps(self.to_dict(), option=orjson.OPT_INDENT_2)
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            if path.exists():
                os.chmod(tmp_name, stat.S_IMODE(path.stat().st_mode))
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StoreError(f"Failed to write data store {path}: {e}") from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        logger.info("Persisted %d task(s) to %s", len(self.tasks), path)


def _parse_session(task_key: str, raw: object) -> Session:
    if not isinstance(raw, dict):
        raise StoreError(f"task {task_key} has a session that is not an object")
    duration = raw.get("duration_seconds")
    # bool is an int subclass
    if isinstance(duration, bool) or not isinstance(duration, (int, float)):
        raise StoreError(f"task {task_key} has a session without duration_seconds")
    if duration < 0:
        raise StoreError(f"task {task_key} has a negative session duration")
    return Session(duration=float(duration))
