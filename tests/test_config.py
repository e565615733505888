"""Tests for tasktimer configuration."""

from pathlib import Path

import orjson
import pytest

from tasktimer.core.config import (
    ConfigError,
    get_config_path,
    get_data_store_path,
    get_tasktimer_dir,
    load_repository_id,
    read_config,
    write_config,
)


def _no_prompt(message):
    raise AssertionError("prompt should not be shown when config exists")


def test_default_dir_under_home(monkeypatch, tmp_path):
    """Test the default directory is ~/.tasktimer."""
    monkeypatch.delenv("TASKTIMER_HOME", raising=False)
    monkeypatch.setattr(Path, "home", lambda: tmp_path)

    assert get_tasktimer_dir() == tmp_path / ".tasktimer"


def test_env_override(tasktimer_home):
    """Test TASKTIMER_HOME relocates config and data store."""
    assert get_config_path() == tasktimer_home / "config.json"
    assert get_data_store_path() == tasktimer_home / "data_store.json"


def test_read_config_missing(tasktimer_home):
    """Test a missing config reads as empty."""
    assert read_config() == {}


def test_write_then_read(tasktimer_home):
    """Test config is written as JSON and read back."""
    write_config({"repository": "octo/widgets"})

    assert read_config() == {"repository": "octo/widgets"}
    assert orjson.loads(get_config_path().read_bytes()) == {"repository": "octo/widgets"}


def test_read_config_malformed(tasktimer_home):
    """Test unparsable config is an error."""
    get_config_path().write_text("repository = 'toml?'")

    with pytest.raises(ConfigError, match="Failed to read config"):
        read_config()


def test_read_config_not_object(tasktimer_home):
    """Test a JSON value that is not an object is an error."""
    get_config_path().write_text('["octo/widgets"]')

    with pytest.raises(ConfigError, match="JSON object"):
        read_config()


def test_load_repository_id_first_run(tasktimer_home):
    """Test first run prompts and saves the answer."""
    prompts = []

    def prompt(message):
        prompts.append(message)
        return "  octo/widgets \n"

    assert load_repository_id(prompt=prompt) == "octo/widgets"
    assert len(prompts) == 1
    assert read_config() == {"repository": "octo/widgets"}


def test_load_repository_id_existing(tasktimer_home):
    """Test a stored repository is returned without prompting."""
    write_config({"repository": "octo/widgets"})

    assert load_repository_id(prompt=_no_prompt) == "octo/widgets"


def test_load_repository_id_keeps_other_keys(tasktimer_home):
    """Test first-run capture preserves unrelated config keys."""
    write_config({"other": 1})

    load_repository_id(prompt=lambda message: "octo/widgets")

    assert read_config() == {"other": 1, "repository": "octo/widgets"}


def test_load_repository_id_invalid_value(tasktimer_home):
    """Test a non-string repository is an error."""
    write_config({"repository": 42})

    with pytest.raises(ConfigError, match="invalid repository"):
        load_repository_id(prompt=_no_prompt)


def test_load_repository_id_blank_answer(tasktimer_home):
    """Test a blank answer is refused and not saved."""
    with pytest.raises(ConfigError, match="No repository entered"):
        load_repository_id(prompt=lambda message: "   ")

    assert not get_config_path().exists()
