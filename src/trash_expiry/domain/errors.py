"""Domain errors."""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import TrashRecord


class TrashExpiryError(Exception):
    """Base class for all trash-expiry errors."""


class TrashDirectoryError(TrashExpiryError):
    """The trash info directory could not be listed at all."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot list trash directory {path}: {reason}")


class ParseError(TrashExpiryError):
    """A ``.trashinfo`` descriptor could not be turned into a record."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class MalformedDescriptor(ParseError):
    pass


class MissingSection(ParseError):
    pass


class MissingKey(ParseError):
    def __init__(self, path: Path, key: str) -> None:
        self.key = key
        super().__init__(path, f"No {key} key")


class BadTimestamp(ParseError):
    pass


class BadPathDerivation(ParseError):
    pass


class DeleteError(TrashExpiryError):
    """Removing a trashed item failed.

    The underlying ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, record: "TrashRecord", reason: str) -> None:
        self.record = record
        self.reason = reason
        super().__init__(reason)


class PayloadRemovalFailed(DeleteError):
    """Payload could not be removed; the descriptor was left untouched."""


class DescriptorRemovalFailed(DeleteError):
    """Payload was removed but the descriptor is still present."""
