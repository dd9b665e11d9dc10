import logging

import pytest

from recalc.config import Settings, load_settings
from recalc.errors import ConfigError


def test_defaults():
    settings = load_settings(env={})
    assert settings.precision is None
    assert settings.log_level == "WARNING"
    assert settings.log_level_number == logging.WARNING
    assert settings.prompt == "> "
    assert settings.history_file.endswith(".recalc_history")


def test_values_from_environment(tmp_path):
    env = {
        "RECALC_PRECISION": "3",
        "RECALC_LOG_LEVEL": "debug",
        "RECALC_HISTORY_FILE": str(tmp_path / "hist"),
        "RECALC_PROMPT": "calc> ",
    }
    settings = load_settings(env=env)
    assert settings.precision == 3
    assert settings.log_level == "DEBUG"
    assert settings.history_file == str(tmp_path / "hist")
    assert settings.prompt == "calc> "


def test_overrides_win_and_none_is_ignored():
    settings = load_settings(env={"RECALC_PRECISION": "3"}, precision=5, log_level=None)
    assert settings.precision == 5
    assert settings.log_level == "WARNING"


def test_empty_environment_value_is_ignored():
    assert load_settings(env={"RECALC_PRECISION": ""}).precision is None


def test_history_file_expands_user(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert Settings(history_file="~/h").history_file == str(tmp_path / "h")


@pytest.mark.parametrize("env", [
    {"RECALC_PRECISION": "-1"},
    {"RECALC_PRECISION": "two"},
    {"RECALC_LOG_LEVEL": "LOUD"},
    {"RECALC_HISTORY_FILE": "   "},
])
def test_invalid_settings_raise_config_error(env):
    with pytest.raises(ConfigError):
        load_settings(env=env)


def test_process_environment_is_read(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("RECALC_PRECISION", "7")
    assert load_settings().precision == 7


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    # Recorded so teardown removes what load_dotenv sets.
    monkeypatch.setenv("RECALC_PROMPT", "unset")
    monkeypatch.delenv("RECALC_PROMPT")
    (tmp_path / ".env").write_text("RECALC_PROMPT=>> \n")
    assert load_settings().prompt == ">>"


def test_default_history_file_is_expanded(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    settings = load_settings(env={})
    assert not settings.history_file.startswith("~")
    assert settings.history_file == str(tmp_path / ".recalc_history")
