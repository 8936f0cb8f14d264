"""Metadata adapters."""

from .trashinfo import TrashInfoAdapter, payload_path_for

__all__ = ["TrashInfoAdapter", "payload_path_for"]
