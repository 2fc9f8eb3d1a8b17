"""Tests for the process launcher, using real child processes."""

from __future__ import annotations

import asyncio
import os
import sys

import pytest

from core.models.runs import LaunchRequest
from scheduler.launcher import ProcessLauncher


def _python(code: str) -> LaunchRequest:
    return LaunchRequest(command=sys.executable, args=["-c", code])


@pytest.mark.asyncio
async def test_captures_output_and_exit_code():
    result = await ProcessLauncher().run(
        _python("import sys; print('hello'); print('oops', file=sys.stderr)")
    )
    assert result.status == "success"
    assert result.exit_code == 0
    assert result.stdout == "hello"
    assert result.stderr == "oops"
    assert result.finished_at is not None
    assert result.elapsed_seconds >= 0


@pytest.mark.asyncio
async def test_nonzero_exit_is_failed():
    result = await ProcessLauncher().run(_python("raise SystemExit(3)"))
    assert result.status == "failed"
    assert result.exit_code == 3


@pytest.mark.asyncio
async def test_arguments_are_passed_verbatim():
    request = LaunchRequest(
        command=sys.executable,
        args=["-c", "import sys; print('|'.join(sys.argv[1:]))", "a b", "$HOME", "*"],
    )
    result = await ProcessLauncher().run(request)
    assert result.stdout == "a b|$HOME|*"


@pytest.mark.asyncio
async def test_missing_executable_is_reported_not_raised():
    result = await ProcessLauncher().run(LaunchRequest(command="definitely-not-a-real-binary-xyz"))
    assert result.status == "error"
    assert result.exit_code is None
    assert result.error


@pytest.mark.asyncio
async def test_extra_env_and_working_dir(tmp_path):
    launcher = ProcessLauncher(working_dir=str(tmp_path), env={"MINICRON_TEST_VAR": "42"})
    result = await launcher.run(
        _python("import os; print(os.getcwd()); print(os.environ['MINICRON_TEST_VAR'])")
    )
    cwd, value = result.stdout.splitlines()
    assert cwd == str(tmp_path.resolve())
    assert value == "42"


@pytest.mark.asyncio
async def test_launch_does_not_wait():
    launcher = ProcessLauncher()
    task = launcher.launch(_python("import time; time.sleep(0.3); print('done')"))
    assert not task.done()
    assert launcher.running == 1

    results = await launcher.drain()
    assert [r.stdout for r in results] == ["done"]
    assert launcher.running == 0


@pytest.mark.asyncio
async def test_drain_with_nothing_running():
    assert await ProcessLauncher().drain() == []


@pytest.mark.asyncio
async def test_shutdown_kills_running_jobs(tmp_path):
    pid_file = tmp_path / "pid"
    launcher = ProcessLauncher()
    task = launcher.launch(
        _python(f"import os, time; open({str(pid_file)!r}, 'w').write(str(os.getpid())); time.sleep(30)")
    )
    for _ in range(100):
        if pid_file.exists() and pid_file.read_text():
            break
        await asyncio.sleep(0.05)
    pid = int(pid_file.read_text())

    await asyncio.wait_for(launcher.shutdown(), timeout=5)

    assert task.cancelled()
    assert launcher.running == 0
    with pytest.raises(ProcessLookupError):
        os.kill(pid, 0)
