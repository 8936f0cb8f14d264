"""Metadata port - interface for reading trash descriptors."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import TrashRecord


class MetadataPort(ABC):
    """Interface for turning a descriptor file into a trash record."""

    @abstractmethod
    def parse(self, path: Path) -> "TrashRecord":
        """Parse a descriptor and derive its payload path.

        Raises a ``ParseError`` subclass on failure.
        """
        pass
