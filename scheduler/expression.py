"""Job line parsing.

    <minute> <hour> <day-of-month> <month> <day-of-week> <command> [args...]

The first five whitespace-separated tokens are time fields; the next one is
the executable and everything after it is passed through as arguments.
"""

from __future__ import annotations

from core.errors import LineShapeError
from core.models.expression import Expression
from core.models.patterns import DAY, HOUR, MINUTE, MONTH, CronField
from scheduler.grammar import parse_field
from scheduler.weekday import parse_weekday_field

SCHEDULE_FIELDS = 5


def _parse_time_fields(parts: list[str]) -> dict[str, CronField]:
    minute, hour, day, month, weekday = parts[:SCHEDULE_FIELDS]
    return {
        "minute": parse_field(minute, MINUTE),
        "hour": parse_field(hour, HOUR),
        "day": parse_field(day, DAY),
        "month": parse_field(month, MONTH),
        "weekday": parse_weekday_field(weekday),
    }


def parse_expression(line: str) -> Expression:
    """Parse a full job line into an Expression.

    Raises:
        LineShapeError: fewer than six tokens.
        GrammarError: a time field is malformed or out of range.
    """
    parts = line.split()
    if len(parts) <= SCHEDULE_FIELDS:
        raise LineShapeError(line, len(parts))

    command, *args = parts[SCHEDULE_FIELDS:]
    return Expression(**_parse_time_fields(parts), command=command, args=tuple(args))


def parse_schedule(text: str) -> tuple[CronField, ...]:
    """Parse exactly five time fields (no command), e.g. ``"*/5 9-17 * * mon-fri"``."""
    parts = text.split()
    if len(parts) != SCHEDULE_FIELDS:
        raise LineShapeError(text, len(parts), expected="exactly 5 fields")

    fields = _parse_time_fields(parts)
    return (fields["minute"], fields["hour"], fields["day"], fields["month"], fields["weekday"])
