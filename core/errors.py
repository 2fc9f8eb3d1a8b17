"""Error taxonomy for schedule parsing.

Every error is a ValueError so callers that only care about "bad input"
can catch the builtin.
"""

from __future__ import annotations


class CronError(ValueError):
    """Base class for anything wrong with a schedule line."""


class GrammarError(CronError):
    """A field token matches no known shape, or a value is out of domain."""

    def __init__(self, field: str, reason: str = "invalid field") -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{reason}: {field!r}")


class WeekdayResolutionError(GrammarError):
    """A non-numeric day-of-week token is not a known weekday name."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(token, reason="unknown weekday name")


class LineShapeError(CronError):
    """A job line is missing one of the five fields or the command."""

    def __init__(self, line: str, found: int, expected: str = "5 fields and a command") -> None:
        self.line = line
        self.found = found
        super().__init__(f"Invalid job line (need {expected}, got {found} token(s)): {line!r}")
