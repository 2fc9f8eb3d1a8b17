"""Cron matching -- decide whether a timestamp satisfies an expression.

Fields combine with AND; comma-separated alternatives inside a field combine
with OR. Steps count from the field's natural origin (0 for minute and hour,
1 for day, month and weekday); a step on a range counts from its start.

Examples:
    "0 16 * * 1-5"    -> weekdays at 4pm
    "0 9 * * 0"       -> Sundays at 9am
    "*/5 * * * *"     -> every 5 minutes
    "0 9,17 * * *"    -> 9am and 5pm daily
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from core.models.expression import Expression
from core.models.patterns import FIELD_DOMAINS, CronField, FieldDomain, Pattern, Range, Single, Wildcard
from scheduler.expression import parse_schedule


def pattern_matches(pattern: Pattern, value: int, domain: FieldDomain) -> bool:
    """Check one alternative against one unit of time."""
    if isinstance(pattern, Wildcard):
        if pattern.step is None:
            return True
        return (value - domain.origin) % pattern.step == 0

    if isinstance(pattern, Range):
        if not pattern.start <= value <= pattern.end:
            return False
        if pattern.step is None:
            return True
        return (value - pattern.start) % pattern.step == 0

    if isinstance(pattern, Single):
        return value == pattern.value

    raise TypeError(f"Unknown pattern type: {type(pattern).__name__}")


def field_matches(field: CronField, value: int, domain: FieldDomain) -> bool:
    """True if any alternative of the field matches."""
    return any(pattern_matches(p, value, domain) for p in field.patterns)


def time_units(dt: datetime) -> tuple[int, int, int, int, int]:
    """Minute, hour, day, month and ISO weekday (Monday=1) of a datetime."""
    return (dt.minute, dt.hour, dt.day, dt.month, dt.isoweekday())


def schedule_matches(fields: Sequence[CronField], dt: datetime) -> bool:
    """Check the five time fields against a datetime."""
    return all(
        field_matches(field, value, domain)
        for field, value, domain in zip(fields, time_units(dt), FIELD_DOMAINS)
    )


def cron_matches(expression: Expression | str, dt: datetime) -> bool:
    """Check if a datetime matches a cron expression.

    Args:
        expression: a parsed Expression, or a 5-field schedule string
            (minute hour dom month dow)
        dt: datetime to check against, already in the scheduler's time zone

    Returns:
        True if the datetime matches all five fields.
    """
    if isinstance(expression, str):
        return schedule_matches(parse_schedule(expression), dt)

    return schedule_matches(expression.fields, dt)
