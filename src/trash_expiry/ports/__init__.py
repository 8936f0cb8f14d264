"""Ports - interfaces for external dependencies."""

from .metadata import MetadataPort
from .storage import StoragePort

__all__ = ["MetadataPort", "StoragePort"]
