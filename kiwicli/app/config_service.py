"""Configuration read/update operations behind ``kiwi config``."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from kiwicli.app.ports import Backend, ConfigStorePort, Configuration
from kiwicli.errors import ValidationError


@dataclass(slots=True)
class ConfigService:
    """Expose show/reset/update over the configuration store.

    Never signs or touches the network.
    """

    store: ConfigStorePort

    def show(self) -> Configuration:
        return self.store.load()

    def reset(self) -> Configuration:
        return self.store.reset()

    def update(
        self,
        *,
        endpoint: str | None = None,
        backend: Backend | str | None = None,
        key_file_path: Path | str | None = None,
        hardware_account_index: int | None = None,
    ) -> tuple[Configuration, list[str]]:
        """Apply the provided changes and persist them in one write.

        Returns:
            The new configuration and the names of the fields that were set.
            Nothing is written when no change is requested.

        Raises:
            ValidationError: If a new value is not acceptable
        """
        changes: dict[str, Any] = {
            name: value
            for name, value in (
                ("endpoint", endpoint),
                ("backend", backend),
                ("key_file_path", key_file_path),
                ("hardware_account_index", hardware_account_index),
            )
            if value is not None
        }

        current = self.store.load()
        if not changes:
            return current, []

        try:
            updated = Configuration.model_validate({**current.to_document(), **changes})
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid configuration value: {exc}") from exc

        self.store.save(updated)
        return updated, list(changes)
