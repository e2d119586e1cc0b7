"""Application layer for kiwicli.

This layer orchestrates message building and signing without direct
filesystem, device or network I/O. All side effects are delegated to adapters
via port interfaces.
"""

__all__ = [
    "CanonicalMessage",
    "ConfigService",
    "SubmissionService",
    "build_message",
]

from kiwicli.app.config_service import ConfigService
from kiwicli.app.message import CanonicalMessage, build_message
from kiwicli.app.submission_service import SubmissionService
