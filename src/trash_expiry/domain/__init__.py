"""Domain layer - core business logic."""

from .models import Classification, RecordOutcome, RunReport, TrashRecord

__all__ = ["Classification", "RecordOutcome", "RunReport", "TrashRecord"]
