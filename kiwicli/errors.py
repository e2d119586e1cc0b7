"""Error kinds surfaced by the kiwi client.

Every failure is terminal for the current invocation. Components raise one of
the concrete subclasses below; only the CLI layer converts them into an exit
status.
"""

from __future__ import annotations

from enum import Enum


class KiwiError(Exception):
    """Base class for all kiwi client failures."""

    exit_code: int = 1


class ValidationError(KiwiError):
    """A required argument is missing or empty."""

    exit_code = 2


class ConfigCorrupt(KiwiError):
    """An existing configuration file cannot be read or parsed."""


class CredentialFailure(str, Enum):
    """Distinguishes why a signing backend could not produce a signature."""

    MISSING_PASSWORD = "missing_password"
    MISSING_KEY_FILE = "missing_key_file"
    DECRYPT_FAILED = "decrypt_failed"
    DEVICE_UNREACHABLE = "device_unreachable"
    DEVICE_REJECTED = "device_rejected"


class CredentialError(KiwiError):
    """A signing backend failed (bad password, missing key, device error)."""

    def __init__(self, reason: CredentialFailure, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class NetworkError(KiwiError):
    """The signed payload could not be delivered to the endpoint."""


__all__ = [
    "ConfigCorrupt",
    "CredentialError",
    "CredentialFailure",
    "KiwiError",
    "NetworkError",
    "ValidationError",
]
