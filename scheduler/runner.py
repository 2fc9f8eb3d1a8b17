"""Scheduler runner -- asyncio loop that checks the job list once a minute.

Every minute:
1. Reads the job list (no caching between ticks)
2. Parses each line into an Expression, skipping malformed lines
3. Matches each Expression against "now", captured once per pass
4. Hands matching commands to the process launcher
5. Sleeps until the start of the next minute
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, tzinfo
from typing import Literal

from core.errors import CronError
from core.models.runs import LaunchRequest
from scheduler.clock import local_now, next_boundary, seconds_until, sleep_until
from scheduler.cron import cron_matches
from scheduler.expression import parse_expression
from scheduler.jobs import JobList
from scheduler.launcher import ProcessLauncher

logger = logging.getLogger(__name__)

DispatchMode = Literal["background", "inline"]


class Scheduler:
    """Minute-aligned scheduler over a job list.

    Usage:
        scheduler = Scheduler(jobs=JobList("~/.minicron/crontab"), launcher=ProcessLauncher())
        await scheduler.start()  # runs until stopped
    """

    def __init__(
        self,
        jobs: JobList,
        launcher: ProcessLauncher,
        tz: tzinfo | None = None,
        dispatch: DispatchMode = "background",
    ) -> None:
        self._jobs = jobs
        self._launcher = launcher
        self._tz = tz
        self._dispatch_mode = dispatch
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the scheduler loop in the background."""
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("Scheduler started (jobs from %s, dispatch=%s)", self._jobs.path, self._dispatch_mode)

    async def stop(self) -> None:
        """Stop the scheduler loop. Jobs already launched keep running."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Scheduler stopped")

    async def wait(self) -> None:
        """Block until the loop task ends."""
        if self._task:
            await self._task

    async def _loop(self) -> None:
        """Main scheduler loop: tick right away, then once per minute.

        A tick never runs earlier than the boundary it waited for, even when
        the wall clock lags the event loop's timer and the wake-up lands a
        little before the minute.
        """
        tick = local_now(self._tz)
        while self._running:
            try:
                await self.run_once(tick)
            except Exception:
                logger.exception("Error in scheduler loop")

            now = local_now(self._tz)
            boundary = next_boundary(max(now, tick))
            logger.debug("Wait %.3fs until %s", seconds_until(boundary, now), boundary.isoformat())
            await sleep_until(boundary, self._tz)
            tick = max(local_now(self._tz), boundary)

    async def run_once(self, now: datetime | None = None) -> list[LaunchRequest]:
        """Run one pass over the job list and dispatch every match.

        Returns the requests that were dispatched.
        """
        if now is None:
            now = local_now(self._tz)
        logger.info("Tick at %s", now.isoformat(timespec="seconds"))

        try:
            entries = self._jobs.read()
        except OSError as exc:
            logger.error("Cannot read job list %s, retrying next tick: %s", self._jobs.path, exc)
            return []

        dispatched: list[LaunchRequest] = []

        for number, line in entries:
            try:
                expression = parse_expression(line)
            except CronError as exc:
                logger.warning("Skipping line %d of %s: %s", number, self._jobs.path, exc)
                continue

            if not cron_matches(expression, now):
                continue

            request = LaunchRequest(
                command=expression.command,
                args=list(expression.args),
                source_line=line,
                scheduled_for=now,
            )
            await self._dispatch(request)
            dispatched.append(request)

        return dispatched

    async def _dispatch(self, request: LaunchRequest) -> None:
        """Hand a request to the launcher; never raises."""
        logger.info("Dispatching %s (line: %s)", request.command, request.source_line)

        if self._dispatch_mode == "background":
            self._launcher.launch(request)
            return

        try:
            await self._launcher.run(request)
        except Exception:
            logger.exception("Job %s failed", request.command)
