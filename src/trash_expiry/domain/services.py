"""Domain services - orchestrate business logic."""

import logging
import os
from datetime import datetime
from pathlib import Path

from ..config import DESCRIPTOR_EXTENSION, PolicyConfig
from ..ports.metadata import MetadataPort
from ..ports.storage import StoragePort
from .errors import (
    DeleteError,
    DescriptorRemovalFailed,
    ParseError,
    TrashDirectoryError,
)
from .models import Classification, RecordOutcome, RunReport, TrashRecord

logger = logging.getLogger(__name__)


def _as_local(value: datetime) -> datetime:
    """Treat naive datetimes as local time."""
    if value.tzinfo is None:
        return value.astimezone()
    return value


def age_in_days(deleted: datetime, now: datetime) -> int:
    """Whole 24-hour periods elapsed between deletion and now.

    Fractional days are dropped (floor), so an item deleted 59 days and
    23 hours ago is 59 days old.
    """
    return (_as_local(now) - _as_local(deleted)).days


def classify(age_days: int, config: PolicyConfig) -> Classification:
    """Expire wins over warn, even when warn_after_days > delete_after_days."""
    if age_days >= config.delete_after_days:
        return Classification.EXPIRE
    if age_days >= config.warn_after_days:
        return Classification.WARN
    return Classification.FRESH


def list_entries(trash_info_dir: Path) -> list[os.DirEntry]:
    """List the info directory, sorted by name."""
    try:
        with os.scandir(trash_info_dir) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise TrashDirectoryError(trash_info_dir, str(e)) from e


class ExpiryService:
    """Expires old items from a trash directory in a single pass."""

    def __init__(
        self,
        metadata: MetadataPort,
        storage: StoragePort,
        extension: str = DESCRIPTOR_EXTENSION,
    ) -> None:
        self.metadata = metadata
        self.storage = storage
        self.suffix = f".{extension}"

    def run(
        self, trash_info_dir: Path, now: datetime, config: PolicyConfig
    ) -> RunReport:
        """Evaluate every descriptor in ``trash_info_dir`` once.

        Per-entry failures are counted; only a directory that cannot be
        listed at all raises (``TrashDirectoryError``). Outcomes are logged at
        debug level and reported to the user from the returned report.

        There is no lock: two overlapping runs may race on the same
        descriptor/payload pair.
        """
        report = RunReport()
        logger.debug(
            f"Scanning {trash_info_dir} (warn after {config.warn_after_days} "
            f"days, delete after {config.delete_after_days} days)"
        )

        for entry in list_entries(trash_info_dir):
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir()
            except OSError as e:
                logger.warning(f"Error getting path {path}: {e}")
                report.skipped += 1
                continue

            if is_dir or path.suffix != self.suffix:
                logger.info(f"Not a '{self.suffix}' file: {path}")
                report.skipped += 1
                continue

            self._process(path, now, config, report)

        logger.debug(
            f"Expiry complete: {report.erased} erased, {report.warned} warned, "
            f"{report.fresh} fresh, {report.errors} errors"
        )
        return report

    def _process(
        self, path: Path, now: datetime, config: PolicyConfig, report: RunReport
    ) -> None:
        try:
            record = self.metadata.parse(path)
        except ParseError as e:
            logger.debug(f"Error reading trash info {path}: {e.reason}")
            report.errors += 1
            report.parse_failures.append(str(e))
            return

        age_days = age_in_days(record.deletion_timestamp, now)
        classification = classify(age_days, config)

        if classification is Classification.EXPIRE:
            report.outcomes.append(self._expire(record, age_days, report))
        elif classification is Classification.WARN:
            days_left = config.delete_after_days - age_days
            logger.debug(
                f"{record.original_path} deleted {age_days} days ago, "
                f"will be erased in {days_left} days"
            )
            report.warned += 1
            report.outcomes.append(
                RecordOutcome(record, classification, age_days, days_left=days_left)
            )
        else:
            logger.debug(f"{record.original_path} deleted {age_days} days ago")
            report.fresh += 1
            report.outcomes.append(RecordOutcome(record, classification, age_days))

    def _expire(
        self, record: TrashRecord, age_days: int, report: RunReport
    ) -> RecordOutcome:
        outcome = RecordOutcome(record, Classification.EXPIRE, age_days)
        try:
            self.storage.delete(record)
        except DeleteError as e:
            outcome.error = e.reason
            outcome.partial = isinstance(e, DescriptorRemovalFailed)
            report.errors += 1
            logger.debug(f"Error erasing {record.original_path}: {e.reason}")
            return outcome

        report.erased += 1
        logger.debug(f"Erased {record.original_path} (deleted {age_days} days ago)")
        return outcome
