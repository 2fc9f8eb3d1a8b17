"""Tests for configuration loading."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from core.config import AppConfig, load_config


@pytest.fixture
def home(tmp_path, monkeypatch) -> Path:
    home = tmp_path / "home"
    monkeypatch.setenv("MINICRON_HOME", str(home))
    return home


def test_defaults_without_files(home):
    config = load_config()
    assert config.home_path == home
    assert home.is_dir()
    assert config.jobs_path == home / "crontab"
    assert config.scheduler.dispatch == "background"
    assert config.scheduler.timezone is None
    assert config.logging.level == "INFO"


def test_yaml_values(home, tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "scheduler:\n"
        "  jobs_file: /etc/minicron/jobs\n"
        "  timezone: Europe/Moscow\n"
        "  dispatch: inline\n"
        "launcher:\n"
        "  working_dir: /tmp\n"
        "  env:\n"
        "    LANG: C\n"
        "logging:\n"
        "  level: debug\n"
    )
    config = load_config(config_path=config_file)
    assert config.jobs_path == Path("/etc/minicron/jobs")
    assert config.scheduler.timezone == "Europe/Moscow"
    assert config.scheduler.dispatch == "inline"
    assert config.launcher.working_dir == "/tmp"
    assert config.launcher.env == {"LANG": "C"}
    assert config.logging.level == "DEBUG"


def test_env_file_and_references(home, tmp_path):
    home.mkdir(parents=True)
    (home / ".env").write_text("MINICRON_TEST_JOBS_DIR=/srv/jobs\n")
    (home / "config.yaml").write_text("scheduler:\n  jobs_file: ${MINICRON_TEST_JOBS_DIR}/crontab\n")
    try:
        config = load_config()
    finally:
        os.environ.pop("MINICRON_TEST_JOBS_DIR", None)
    assert config.jobs_path == Path("/srv/jobs/crontab")


def test_unresolved_reference_is_left_alone(home, tmp_path, monkeypatch):
    monkeypatch.delenv("MINICRON_NOT_SET", raising=False)
    config_file = tmp_path / "config.yaml"
    config_file.write_text("launcher:\n  working_dir: ${MINICRON_NOT_SET}\n")
    assert load_config(config_path=config_file).launcher.working_dir == "${MINICRON_NOT_SET}"


def test_invalid_dispatch_mode(home, tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("scheduler:\n  dispatch: sometimes\n")
    with pytest.raises(ValidationError):
        load_config(config_path=config_file)


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        AppConfig(logging={"level": "LOUD"})
