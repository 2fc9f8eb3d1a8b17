"""Job list -- the file of schedule lines, re-read on every tick."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class JobList:
    """Line source backed by a text file.

    Nothing is cached: read() opens the file each time so edits are picked
    up on the next tick. Blank lines and ``#`` comments are dropped; every
    other line is returned as-is, with its 1-based line number.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> list[tuple[int, str]]:
        """Return ``(line_number, line)`` pairs for every job line.

        Lines that are not valid UTF-8 are logged and skipped. Raises OSError
        if the file cannot be read.
        """
        entries: list[tuple[int, str]] = []
        with open(self._path, "rb") as f:
            for number, raw in enumerate(f, start=1):
                try:
                    line = raw.decode("utf-8").strip()
                except UnicodeDecodeError as exc:
                    logger.warning("Skipping line %d of %s: not valid UTF-8 (%s)", number, self._path, exc)
                    continue
                if not line or line.startswith("#"):
                    continue
                entries.append((number, line))

        logger.debug("Read %d job line(s) from %s", len(entries), self._path)
        return entries

    def __repr__(self) -> str:
        return f"JobList(path={self._path})"
