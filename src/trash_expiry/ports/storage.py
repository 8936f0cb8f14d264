"""Storage port - interface for removing trashed items."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import TrashRecord


class StoragePort(ABC):
    """Interface for permanent deletion of trash records."""

    @abstractmethod
    def delete(self, record: "TrashRecord") -> None:
        """Remove the payload, then the descriptor.

        Raises ``PayloadRemovalFailed`` or ``DescriptorRemovalFailed``.
        """
        pass
