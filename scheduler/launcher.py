"""Process launcher -- runs matched commands as child processes.

Commands are executed directly (no shell): the first token is the executable,
the rest are its arguments. launch() is fire-and-forget, so a slow or hung job
never holds up the scheduler; run() waits for the exit status and captured
output. A job whose task is cancelled has its process killed.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
from datetime import datetime, timezone

from core.models.runs import LaunchRequest, LaunchResult

logger = logging.getLogger(__name__)


class ProcessLauncher:
    """Starts child processes and logs how they ended.

    Usage:
        launcher = ProcessLauncher()
        launcher.launch(LaunchRequest(command="echo", args=["hi"]))  # background
        result = await launcher.run(request)                          # wait
    """

    def __init__(
        self,
        working_dir: str | None = None,
        env: dict[str, str] | None = None,
        capture_output: bool = True,
    ) -> None:
        self._working_dir = working_dir
        self._env = env or {}
        self._capture_output = capture_output
        self._tasks: set[asyncio.Task] = set()

    @property
    def running(self) -> int:
        """Number of launched jobs that have not finished yet."""
        return len(self._tasks)

    def launch(self, request: LaunchRequest) -> asyncio.Task:
        """Start a job in the background and return immediately.

        The returned task resolves to the job's LaunchResult. A reference is
        held until it finishes so the event loop does not drop it.
        """
        task = asyncio.create_task(self.run(request), name=f"job-{request.id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(_report_crash)
        return task

    async def drain(self) -> list[LaunchResult]:
        """Wait for every background job that is still running."""
        if not self._tasks:
            return []
        outcomes = await asyncio.gather(*self._tasks, return_exceptions=True)
        return [o for o in outcomes if isinstance(o, LaunchResult)]

    async def shutdown(self) -> None:
        """Cancel every background job that is still running and kill its process."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def run(self, request: LaunchRequest) -> LaunchResult:
        """Run a job to completion and report its outcome.

        Spawn failures (missing executable, permissions) are reported as a
        result with status "error" rather than raised.
        """
        prefix = f"[{request.command}:{request.id}]"
        result = LaunchResult(
            request_id=request.id,
            command=request.command,
            args=list(request.args),
        )
        logger.info("%s Executing: %s", prefix, shlex.join(request.argv))

        pipe = asyncio.subprocess.PIPE if self._capture_output else None
        try:
            process = await asyncio.create_subprocess_exec(
                *request.argv,
                stdout=pipe,
                stderr=pipe,
                cwd=self._working_dir,
                env=self._child_env(),
            )
        except OSError as exc:
            logger.error("%s Failed to start: %s", prefix, exc)
            result.status = "error"
            result.error = str(exc)
            result.finished_at = datetime.now(timezone.utc)
            return result

        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            if process.returncode is None:
                logger.warning("%s Cancelled, killing pid %d", prefix, process.pid)
                process.kill()
                await process.wait()
            raise

        result.exit_code = process.returncode
        result.status = "success" if process.returncode == 0 else "failed"
        result.stdout = _decode(stdout)
        result.stderr = _decode(stderr)
        result.finished_at = datetime.now(timezone.utc)

        log = logger.info if result.status == "success" else logger.warning
        log("%s Exited with status %s", prefix, result.exit_code)
        if result.stdout:
            logger.info("%s stdout: %s", prefix, result.stdout)
        if result.stderr:
            logger.info("%s stderr: %s", prefix, result.stderr)

        return result

    def _child_env(self) -> dict[str, str] | None:
        if not self._env:
            return None
        return {**os.environ, **self._env}


def _report_crash(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Background job %s crashed", task.get_name(), exc_info=exc)


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace").strip()
