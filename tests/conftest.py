"""Shared fixtures for the minicron test suite."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable

import pytest

from core.models.runs import LaunchRequest, LaunchResult


@pytest.fixture
def write_jobs(tmp_path: Path) -> Callable[..., Path]:
    """Write job lines to a temporary crontab and return its path."""

    def _write(*lines: str, name: str = "crontab") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sunday_evening() -> datetime:
    """2022-11-27 (Sunday) 19:01:00 local time."""
    return datetime(2022, 11, 27, 19, 1, 0).astimezone()


class RecordingLauncher:
    """Stands in for ProcessLauncher and remembers what it was asked to run."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.launched: list[LaunchRequest] = []
        self.ran: list[LaunchRequest] = []
        self._fail_on = fail_on or set()

    def launch(self, request: LaunchRequest) -> None:
        self.launched.append(request)

    async def run(self, request: LaunchRequest) -> LaunchResult:
        self.ran.append(request)
        if request.command in self._fail_on:
            raise RuntimeError(f"boom: {request.command}")
        return LaunchResult(request_id=request.id, command=request.command, args=request.args, exit_code=0)


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def failing_launcher() -> RecordingLauncher:
    """A recording launcher whose run() raises for the command "bad"."""
    return RecordingLauncher(fail_on={"bad"})
