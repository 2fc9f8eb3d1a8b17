"""Minute-boundary clock.

The scheduler wakes at the top of every minute. next_boundary() is a pure
function of "now"; sleep_until() is the only suspension point of the loop.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo


def local_now(tz: tzinfo | None = None) -> datetime:
    """Current time as an aware datetime, in ``tz`` or the system local zone."""
    if tz is None:
        return datetime.now().astimezone()
    return datetime.now(tz)


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Look up an IANA zone name; None keeps the system local zone."""
    if not name:
        return None
    return ZoneInfo(name)


def next_boundary(now: datetime) -> datetime:
    """The start of the minute after ``now``.

    12:00:37.250 -> 12:01:00.000
    """
    return (now.replace(microsecond=0) + timedelta(minutes=1)).replace(second=0)


def seconds_until(instant: datetime, now: datetime) -> float:
    """Non-negative number of seconds from ``now`` to ``instant``."""
    return max(0.0, (instant - now).total_seconds())


async def sleep_until(instant: datetime, tz: tzinfo | None = None) -> None:
    """Suspend until the wall clock reaches ``instant``."""
    delay = seconds_until(instant, local_now(tz))
    if delay > 0:
        await asyncio.sleep(delay)
