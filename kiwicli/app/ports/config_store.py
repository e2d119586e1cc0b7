"""Configuration store port and the persisted configuration model."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_ENDPOINT = "https://news.kiwistand.com/api/v1/messages"


class Backend(str, Enum):
    """Where the signing key lives."""

    LOCAL = "local"
    HARDWARE = "hardware"


def normalize_legacy_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Map the older Kiwi News CLI key names onto current fields.

    ``use_ledger`` (bool), ``ledger_address_index`` and ``path_to_keystore``
    are honoured when copied into ``config.yaml``; ``~/.kiwistand/config.toml``
    itself is never read. A current key present alongside its legacy
    counterpart wins.
    """
    data = dict(data)
    if "use_ledger" in data:
        use_ledger = data.pop("use_ledger")
        data.setdefault("backend", Backend.HARDWARE if use_ledger else Backend.LOCAL)
    if "ledger_address_index" in data:
        data.setdefault("hardware_account_index", data.pop("ledger_address_index"))
    if "path_to_keystore" in data:
        data.setdefault("key_file_path", data.pop("path_to_keystore"))
    return data


class Configuration(BaseModel):
    """User preferences persisted between invocations.

    Only one of ``hardware_account_index`` / ``key_file_path`` is meaningful at
    a time, selected by ``backend``; the inactive one is kept so switching
    backends back and forth does not lose it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    endpoint: str = Field(default=DEFAULT_ENDPOINT, min_length=1)
    backend: Backend = Field(default=Backend.HARDWARE)
    hardware_account_index: int = Field(default=0, ge=0)
    key_file_path: Path

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return normalize_legacy_keys(data)

    def to_document(self) -> dict[str, Any]:
        """Plain mapping suitable for YAML serialization."""
        return self.model_dump(mode="json")


class ConfigStorePort(Protocol):
    """Port interface for persisting :class:`Configuration`.

    Side effects: Reads/writes a single configuration file (whole-file replace).
    """

    def load(self) -> Configuration:
        """Load configuration, persisting defaults on first run.

        Raises:
            ConfigCorrupt: If an existing file cannot be read or parsed
        """
        ...

    def save(self, config: Configuration) -> None:
        """Overwrite the stored configuration with ``config``."""
        ...

    def reset(self) -> Configuration:
        """Overwrite the stored configuration with defaults and return them."""
        ...
