"""Expression model -- five parsed time fields plus the command to run."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from core.models.patterns import CronField


class Expression(BaseModel):
    """A fully parsed job line.

    Built fresh from its source line on every tick and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    minute: CronField
    hour: CronField
    day: CronField
    month: CronField
    weekday: CronField  # canonical 1-7, Monday=1

    command: str = Field(min_length=1)
    args: tuple[str, ...] = ()

    @property
    def fields(self) -> tuple[CronField, CronField, CronField, CronField, CronField]:
        """The five time fields in line order."""
        return (self.minute, self.hour, self.day, self.month, self.weekday)

    def schedule_text(self) -> str:
        """Canonical text of the five time fields."""
        return " ".join(f.render() for f in self.fields)

    def render(self) -> str:
        """Canonical text of the whole line, suitable for parsing again."""
        return " ".join([self.schedule_text(), self.command, *self.args])
