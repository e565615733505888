"""tasktimer configuration management.

Everything lives under ~/.tasktimer/ (override with TASKTIMER_HOME):
- config.json: {"repository": "owner/name"}, captured on first run
- data_store.json: session history (see tasktimer.core.store)
- tasktimer.log: log output
"""

import os
from collections.abc import Callable
from pathlib import Path

import click
import orjson

HOME_ENV = "TASKTIMER_HOME"

REPOSITORY_PROMPT = "Enter the GitHub repository to track (ex. owner/name)"


class ConfigError(Exception):
    """Raised when the config file exists but cannot be used."""

    pass


def get_tasktimer_dir() -> Path:
    """Get the per-user tasktimer directory.

    Returns ~/.tasktimer unless TASKTIMER_HOME is set.
    """
    if env_home := os.environ.get(HOME_ENV):
        return Path(env_home)
    return Path.home() / ".tasktimer"


def get_config_path() -> Path:
    """Get the path to tasktimer's config file."""
    return get_tasktimer_dir() / "config.json"


def get_data_store_path() -> Path:
    """Get the path to the session store."""
    return get_tasktimer_dir() / "data_store.json"


def get_log_path() -> Path:
    """Get the path to the log file."""
    return get_tasktimer_dir() / "tasktimer.log"


def read_config() -> dict:
    """Read tasktimer config, returning empty dict if not found.

    Raises:
        ConfigError: If the file exists but is unreadable or not a JSON object.
    """
    config_path = get_config_path()
    if not config_path.exists():
        return {}
    try:
        content = config_path.read_bytes()
        config = orjson.loads(content) if content else {}
    except (orjson.JSONDecodeError, OSError) as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e
    if not isinstance(config, dict):
        raise ConfigError(f"Config {config_path} must contain a JSON object")
    return config


def write_config(config: dict) -> None:
    """Write tasktimer config."""
    config_path = get_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_bytes(orjson.dumps(config, option=orjson.OPT_INDENT_2))
    except OSError as e:
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e


def load_repository_id(prompt: Callable[[str], str] = click.prompt) -> str:
    """Get the repository to pull issues from.

    On first run (no config file, or no repository in it) the user is asked
    for one and the answer is saved.

    Args:
        prompt: Asks the user for a value given a message.

    Returns:
        Repository identifier, e.g. "owner/name".
    """
    config = read_config()
    repository = config.get("repository")
    if repository is not None:
        if not isinstance(repository, str) or not repository.strip():
            raise ConfigError(
                f"Config {get_config_path()} has an invalid repository: {repository!r}"
            )
        return repository

    repository = prompt(REPOSITORY_PROMPT).strip()
    if not repository:
        raise ConfigError("No repository entered; nothing was saved")
    config["repository"] = repository
    write_config(config)
    return repository
