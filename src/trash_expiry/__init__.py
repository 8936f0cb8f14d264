"""Expire old items from a freedesktop trash directory."""

__version__ = "0.3.0"
