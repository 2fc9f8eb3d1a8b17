"""Day-of-week normalization.

Raw day-of-week tokens are numbers 0-7 (0 and 7 are both Sunday) or weekday
names. Everything is folded onto the ISO numbering used for matching:
Monday=1 .. Sunday=7.
"""

from __future__ import annotations

from core.errors import GrammarError, WeekdayResolutionError
from core.models.patterns import CronField, Range, Single, Wildcard
from scheduler.grammar import RawPattern, RawRange, RawWildcard, is_number, to_int, tokenize_field

WEEKDAY_NAMES: dict[str, int] = {
    "mon": 1, "monday": 1,
    "tue": 2, "tues": 2, "tuesday": 2,
    "wed": 3, "wednesday": 3,
    "thu": 4, "thur": 4, "thurs": 4, "thursday": 4,
    "fri": 5, "friday": 5,
    "sat": 6, "saturday": 6,
    "sun": 7, "sunday": 7,
}


def weekday_number(token: str, field: str | None = None) -> int:
    """Resolve a single day-of-week token to its canonical 1-7 value."""
    if is_number(token):
        n = to_int(token, field or token, "weekday value")
        if n > 7:
            raise GrammarError(field or token, reason=f"weekday value {n} out of range 0-7")
        return 7 if n == 0 else n

    try:
        return WEEKDAY_NAMES[token.lower()]
    except KeyError:
        raise WeekdayResolutionError(token) from None


def normalize_weekdays(raw: list[RawPattern], field: str) -> CronField:
    """Turn raw day-of-week nodes into canonical Patterns.

    Ranges whose ends come out reversed (``5-1``, ``sun-mon``) are swapped.
    """
    patterns = []

    for node in raw:
        if isinstance(node, RawWildcard):
            patterns.append(Wildcard(step=node.step))
        elif isinstance(node, RawRange):
            start = weekday_number(node.start, field)
            end = weekday_number(node.end, field)
            if end < start:
                start, end = end, start
            patterns.append(Range(start=start, end=end, step=node.step))
        else:
            patterns.append(Single(value=weekday_number(node.value, field), step=node.step))

    return CronField(patterns=tuple(patterns))


def parse_weekday_field(field: str) -> CronField:
    """Parse a day-of-week field, accepting numbers and names."""
    return normalize_weekdays(tokenize_field(field), field)
