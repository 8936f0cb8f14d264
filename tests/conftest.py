"""Shared test fixtures."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from trash_expiry.adapters.metadata import TrashInfoAdapter
from trash_expiry.config import PolicyConfig
from trash_expiry.domain.models import TrashRecord
from trash_expiry.ports.metadata import MetadataPort
from trash_expiry.ports.storage import StoragePort

TRASHINFO_TEMPLATE = "[Trash Info]\nPath={path}\nDeletionDate={date}\n"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the user's real environment out of config resolution."""
    for name in (
        "TRASH_EXPIRY_DELETE_AFTER_DAYS",
        "TRASH_EXPIRY_WARN_AFTER_DAYS",
        "TRASH_EXPIRY_TRASH",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_CONFIG_DIRS", str(tmp_path / "xdg-system"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))


@pytest.fixture
def trash_root(tmp_path: Path) -> Path:
    """Empty trash directory with info/ and files/."""
    root = tmp_path / "Trash"
    (root / "info").mkdir(parents=True)
    (root / "files").mkdir()
    return root


@pytest.fixture
def make_item(trash_root: Path) -> Callable[..., Path]:
    """Create a trashed file (or directory) and its descriptor.

    Returns the descriptor path.
    """

    def _make(
        name: str,
        deleted: str = "2024-01-01T00:00:00",
        original: str | None = None,
        is_dir: bool = False,
    ) -> Path:
        payload = trash_root / "files" / name
        if is_dir:
            (payload / "nested").mkdir(parents=True)
            (payload / "nested" / "inner.txt").write_text("inner")
        else:
            payload.write_text("content")
        descriptor = trash_root / "info" / f"{name}.trashinfo"
        descriptor.write_text(
            TRASHINFO_TEMPLATE.format(
                path=original or f"/home/user/{name}", date=deleted
            )
        )
        return descriptor

    return _make


@pytest.fixture
def policy() -> PolicyConfig:
    return PolicyConfig(warn_after_days=50, delete_after_days=60)


@pytest.fixture
def sample_record(trash_root: Path) -> TrashRecord:
    return TrashRecord(
        metadata_path=trash_root / "info" / "report.pdf.trashinfo",
        payload_path=trash_root / "files" / "report.pdf",
        original_path="/home/user/report.pdf",
        deletion_timestamp=datetime(2024, 1, 1).astimezone(),
    )


@pytest.fixture
def mock_metadata() -> MagicMock:
    """Mock metadata port that delegates to the real parser."""
    mock = MagicMock(spec=MetadataPort)
    mock.parse.side_effect = TrashInfoAdapter().parse
    return mock


@pytest.fixture
def mock_storage() -> MagicMock:
    """Mock storage port."""
    return MagicMock(spec=StoragePort)
