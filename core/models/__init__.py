"""Pydantic data models shared across all components."""

from core.models.expression import Expression
from core.models.patterns import (
    DAY,
    FIELD_DOMAINS,
    HOUR,
    MINUTE,
    MONTH,
    WEEKDAY,
    CronField,
    FieldDomain,
    Pattern,
    Range,
    Single,
    Wildcard,
)
from core.models.runs import LaunchRequest, LaunchResult

__all__ = [
    "Expression",
    "CronField",
    "FieldDomain",
    "Pattern",
    "Wildcard",
    "Range",
    "Single",
    "MINUTE",
    "HOUR",
    "DAY",
    "MONTH",
    "WEEKDAY",
    "FIELD_DOMAINS",
    "LaunchRequest",
    "LaunchResult",
]
