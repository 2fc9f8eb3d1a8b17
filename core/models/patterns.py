"""Pattern models -- the parsed shape of one schedule field.

A field such as ``1-5/2,30`` becomes a CronField holding one Pattern per
comma-separated alternative. Patterns are a closed union discriminated on
``kind``; matching lives in scheduler.cron, not on the models.
"""

from __future__ import annotations

from typing import Annotated, Literal, NamedTuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FieldDomain(NamedTuple):
    """Allowed values of one field and the origin strides are counted from."""

    name: str
    low: int
    high: int
    origin: int

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.low <= value <= self.high


MINUTE = FieldDomain("minute", 0, 59, 0)
HOUR = FieldDomain("hour", 0, 23, 0)
DAY = FieldDomain("day", 1, 31, 1)
MONTH = FieldDomain("month", 1, 12, 1)
WEEKDAY = FieldDomain("weekday", 1, 7, 1)  # canonical, Monday=1 .. Sunday=7

FIELD_DOMAINS: tuple[FieldDomain, ...] = (MINUTE, HOUR, DAY, MONTH, WEEKDAY)


def _render_step(step: int | None) -> str:
    return "" if step is None else f"/{step}"


class Wildcard(BaseModel):
    """``*`` or ``*/step``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["wildcard"] = "wildcard"
    step: int | None = Field(default=None, ge=1)

    def render(self) -> str:
        return "*" + _render_step(self.step)


class Range(BaseModel):
    """``start-end`` or ``start-end/step``, always stored with start <= end."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["range"] = "range"
    start: int
    end: int
    step: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def check_order(self) -> Range:
        if self.start > self.end:
            raise ValueError(f"range start {self.start} is after end {self.end}")
        return self

    def render(self) -> str:
        return f"{self.start}-{self.end}" + _render_step(self.step)


class Single(BaseModel):
    """``value`` or ``value/step``; the step is kept but never affects matching."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["single"] = "single"
    value: int
    step: int | None = Field(default=None, ge=1)

    def render(self) -> str:
        return str(self.value) + _render_step(self.step)


Pattern = Annotated[Union[Wildcard, Range, Single], Field(discriminator="kind")]


class CronField(BaseModel):
    """One of the five time columns: an ordered, non-empty list of alternatives."""

    model_config = ConfigDict(frozen=True)

    patterns: tuple[Pattern, ...] = Field(min_length=1)

    def render(self) -> str:
        return ",".join(p.render() for p in self.patterns)

    def __str__(self) -> str:
        return self.render()
