"""Domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class Classification(str, Enum):
    """Decision taken for a single trash record."""

    FRESH = "fresh"
    WARN = "warn"
    EXPIRE = "expire"


@dataclass(frozen=True)
class TrashRecord:
    """One trashed item, read from its ``.trashinfo`` descriptor."""

    metadata_path: Path
    payload_path: Path
    original_path: str  # Verbatim Path= value, not percent-decoded
    deletion_timestamp: datetime  # Local time, timezone-aware


@dataclass
class RecordOutcome:
    """What happened to one record during a run."""

    record: TrashRecord
    classification: Classification
    age_days: int
    days_left: int | None = None
    error: str | None = None
    partial: bool = False  # Payload removed, descriptor left behind

    @property
    def erased(self) -> bool:
        return self.classification is Classification.EXPIRE and self.error is None


@dataclass
class RunReport:
    """Aggregated result of one pass over the trash info directory."""

    erased: int = 0
    warned: int = 0
    fresh: int = 0
    errors: int = 0
    skipped: int = 0
    outcomes: list[RecordOutcome] = field(default_factory=list)
    parse_failures: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.errors == 0
