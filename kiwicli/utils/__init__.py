"""Utility modules for common operations."""

from kiwicli.utils.files import atomic_write_text

__all__ = ["atomic_write_text"]
