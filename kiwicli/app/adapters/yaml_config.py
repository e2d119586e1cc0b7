"""YAML file adapter for the configuration store port."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError as PydanticValidationError

from kiwicli.app.ports.config_store import (
    ConfigStorePort,
    Configuration,
    normalize_legacy_keys,
)
from kiwicli.errors import ConfigCorrupt
from kiwicli.utils.files import atomic_write_text

logger = logging.getLogger(__name__)


class YamlConfigStore(ConfigStorePort):
    """Persist :class:`Configuration` as a human-editable YAML document.

    Keys missing from an existing file fall back to ``defaults``; anything
    that cannot be parsed is reported as :class:`ConfigCorrupt` and the file
    is left untouched.
    """

    def __init__(self, path: Path, defaults: Configuration) -> None:
        self.path = Path(path)
        self.defaults = defaults

    def load(self) -> Configuration:
        if not self.path.exists():
            logger.info("No configuration at %s; writing defaults", self.path)
            self.save(self.defaults)
            return self.defaults

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise ConfigCorrupt(f"Couldn't parse config file {self.path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigCorrupt(
                f"Couldn't parse config file {self.path}: expected a mapping, "
                f"got {type(data).__name__}"
            )

        merged = {**self.defaults.to_document(), **normalize_legacy_keys(data)}
        try:
            return Configuration.model_validate(merged)
        except PydanticValidationError as e:
            raise ConfigCorrupt(f"Invalid config file {self.path}: {e}") from e

    def save(self, config: Configuration) -> None:
        document = yaml.safe_dump(config.to_document(), sort_keys=False)
        atomic_write_text(self.path, document)
        logger.debug("Configuration written to %s", self.path)

    def reset(self) -> Configuration:
        self.save(self.defaults)
        return self.defaults
