"""Launch models -- what the scheduler asks for and what the launcher reports."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field


class LaunchRequest(BaseModel):
    """A matched job, ready to hand to the process launcher."""

    id: str = Field(default_factory=lambda: f"run_{uuid4().hex[:8]}")
    command: str
    args: list[str] = Field(default_factory=list)

    # Where it came from
    source_line: str = ""
    scheduled_for: datetime | None = None

    @property
    def argv(self) -> list[str]:
        return [self.command, *self.args]


class LaunchResult(BaseModel):
    """Outcome of one launched process."""

    request_id: str
    command: str
    args: list[str] = Field(default_factory=list)

    status: Literal["success", "failed", "error"] = "success"
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None  # set when the process could not be started

    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: datetime | None = None

    @property
    def elapsed_seconds(self) -> float | None:
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()
