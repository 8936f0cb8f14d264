"""Storage adapter using local filesystem."""

import logging
import shutil
from pathlib import Path

from ...domain.errors import DescriptorRemovalFailed, PayloadRemovalFailed
from ...domain.models import TrashRecord
from ...ports.storage import StoragePort

logger = logging.getLogger(__name__)


def remove_payload(path: Path) -> None:
    """Remove a file, symlink or directory tree.

    Symlinks are unlinked, never followed.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


class FilesystemAdapter(StoragePort):
    """Deletes trashed items from a local trash directory."""

    def delete(self, record: TrashRecord) -> None:
        """Remove payload first, descriptor second.

        An interrupted run leaves the descriptor behind, so the item is
        still tracked on the next run.
        """
        try:
            remove_payload(record.payload_path)
        except OSError as e:
            raise PayloadRemovalFailed(
                record, f"Error erasing {record.payload_path}: {e}"
            ) from e
        logger.debug(f"Removed payload: {record.payload_path}")

        try:
            record.metadata_path.unlink()
        except OSError as e:
            raise DescriptorRemovalFailed(
                record,
                f"Erased {record.payload_path} but could not remove "
                f"{record.metadata_path}: {e}",
            ) from e
        logger.debug(f"Removed descriptor: {record.metadata_path}")
