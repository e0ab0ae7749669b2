"""Score records, the in-memory score history and the plain-text score log."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, List


LOGGER = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class ScoreStoreError(RuntimeError):
    """Raised when the score log cannot be read or written."""


@dataclass(frozen=True, slots=True)
class ScoreRecord:
    """Summary of one finished exam."""

    label: str
    score: int
    timestamp: datetime

    def format(self) -> str:
        return (
            f"{self.label} | score: {self.score} | "
            f"date: {self.timestamp.strftime(TIMESTAMP_FORMAT)}"
        )


class ScoreStore:
    """Append-only text file, one formatted record per line."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read_lines(self) -> List[str]:
        """
        Read stored records.

        Returns:
            Non-blank lines in file order; empty if the file does not exist

        Raises:
            ScoreStoreError: If the file exists but cannot be read
        """
        if not self.path.exists():
            return []
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ScoreStoreError(f"Could not read {self.path}: {exc}") from exc
        return [line for line in text.splitlines() if line.strip()]

    def append_lines(self, lines: Iterable[str]) -> None:
        """
        Append records to the log.

        Raises:
            ScoreStoreError: If the file cannot be written
        """
        try:
            with self.path.open("a", encoding="utf-8") as handle:
                for line in lines:
                    handle.write(line + "\n")
        except OSError as exc:
            raise ScoreStoreError(f"Could not write {self.path}: {exc}") from exc


@dataclass
class ScoreHistory:
    """Ordered score lines: those already stored, then those not yet saved."""

    stored: List[str] = field(default_factory=list)
    pending: List[str] = field(default_factory=list)

    def add(self, record: ScoreRecord) -> None:
        self.pending.append(record.format())

    def lines(self) -> List[str]:
        return self.stored + self.pending

    def load(self, store: ScoreStore) -> None:
        """Replace the stored lines with the contents of the log."""
        self.stored = store.read_lines()
        LOGGER.info("Loaded %d past scores from %s", len(self.stored), store.path)

    def flush(self, store: ScoreStore) -> int:
        """
        Append pending lines to the log.

        Pending lines stay in memory if the write fails.

        Returns:
            Number of lines written

        Raises:
            ScoreStoreError: If the log cannot be written
        """
        if not self.pending:
            return 0
        store.append_lines(self.pending)
        written = len(self.pending)
        self.stored.extend(self.pending)
        self.pending = []
        LOGGER.info("Saved %d scores to %s", written, store.path)
        return written
