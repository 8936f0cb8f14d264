"""Expire old items from the trash based on retention policy."""

from datetime import datetime
from pathlib import Path

from .adapters.metadata import TrashInfoAdapter
from .adapters.storage import FilesystemAdapter
from .config import PolicyConfig
from .domain.models import RunReport
from .domain.services import ExpiryService


def create_expiry_service() -> ExpiryService:
    """Create an ExpiryService wired to the local filesystem."""
    return ExpiryService(metadata=TrashInfoAdapter(), storage=FilesystemAdapter())


def run_expiry(
    trash_info_dir: Path, now: datetime, config: PolicyConfig
) -> RunReport:
    """Run one expiry pass over ``trash_info_dir``."""
    return create_expiry_service().run(trash_info_dir, now, config)
