"""Field grammar -- lexical parsing of one schedule field.

Each comma-separated token is tried against three shapes, in order:

    *        */step
    a-b      a-b/step
    a        a/step

Tokenizing is domain-agnostic: ``a`` and ``b`` are kept as raw strings so
the day-of-week field can resolve names later. Numeric fields go through
resolve_numeric() straight away.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Union

from core.errors import GrammarError
from core.models.patterns import CronField, FieldDomain, Range, Single, Wildcard

_WILDCARD_RE = re.compile(r"^\*(?:/([0-9]+))?$")
_RANGE_RE = re.compile(r"^([^-/*\s]+)-([^-/*\s]+)(?:/([0-9]+))?$")
_SINGLE_RE = re.compile(r"^([^-/*\s]+)(?:/([0-9]+))?$")

# No field value or step needs more digits than this
MAX_DIGITS = 9


class RawWildcard(NamedTuple):
    step: int | None


class RawRange(NamedTuple):
    start: str
    end: str
    step: int | None


class RawSingle(NamedTuple):
    value: str
    step: int | None


RawPattern = Union[RawWildcard, RawRange, RawSingle]


def to_int(text: str, field: str, what: str) -> int:
    """Convert an ASCII digit string, rejecting overlong ones as a GrammarError."""
    if len(text) > MAX_DIGITS:
        raise GrammarError(field, reason=f"{what} {text[:MAX_DIGITS]}... is too large")
    return int(text)


def _step(text: str | None, field: str) -> int | None:
    if text is None:
        return None
    step = to_int(text, field, "step")
    if step < 1:
        raise GrammarError(field, reason=f"step must be positive, got {step}")
    return step


def tokenize_field(field: str) -> list[RawPattern]:
    """Split a field on commas and classify every token.

    Raises GrammarError carrying the whole field text if any token matches
    none of the shapes.
    """
    patterns: list[RawPattern] = []

    for token in field.split(","):
        wildcard = _WILDCARD_RE.match(token)
        if wildcard:
            patterns.append(RawWildcard(_step(wildcard.group(1), field)))
            continue

        rng = _RANGE_RE.match(token)
        if rng:
            patterns.append(RawRange(rng.group(1), rng.group(2), _step(rng.group(3), field)))
            continue

        single = _SINGLE_RE.match(token)
        if single:
            patterns.append(RawSingle(single.group(1), _step(single.group(2), field)))
            continue

        raise GrammarError(field, reason=f"invalid token {token!r} in field")

    return patterns


def is_number(token: str) -> bool:
    """True for an unsigned ASCII decimal integer."""
    return token.isascii() and token.isdigit()


def _number(token: str, domain: FieldDomain, field: str) -> int:
    if not is_number(token):
        raise GrammarError(field, reason=f"{domain.name} value {token!r} is not a number")
    value = to_int(token, field, f"{domain.name} value")
    if value not in domain:
        raise GrammarError(
            field,
            reason=f"{domain.name} value {value} out of range {domain.low}-{domain.high}",
        )
    return value


def resolve_numeric(raw: list[RawPattern], domain: FieldDomain, field: str) -> CronField:
    """Convert raw tokens of a numeric field into Patterns, checking the domain."""
    patterns = []

    for node in raw:
        if isinstance(node, RawWildcard):
            patterns.append(Wildcard(step=node.step))
        elif isinstance(node, RawRange):
            start = _number(node.start, domain, field)
            end = _number(node.end, domain, field)
            if end < start:
                start, end = end, start
            patterns.append(Range(start=start, end=end, step=node.step))
        else:
            patterns.append(Single(value=_number(node.value, domain, field), step=node.step))

    return CronField(patterns=tuple(patterns))


def parse_field(field: str, domain: FieldDomain) -> CronField:
    """Parse a minute, hour, day-of-month or month field."""
    return resolve_numeric(tokenize_field(field), domain, field)
