"""Process settings with Pydantic and XDG base directory support."""

import os
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "kiwistand"
CONFIG_FILE_NAME = "config.yaml"
KEY_FILE_NAME = "key"


def get_xdg_config_home() -> Path:
    """Get XDG_CONFIG_HOME directory, defaulting to ~/.config."""
    xdg_config = os.getenv("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


class Settings(BaseSettings):
    """Per-process settings for the kiwi client.

    These are resolved from CLI flags, ``KIWI_*`` environment variables and an
    optional ``.env`` file. They are never written back to disk; persisted user
    preferences live in the YAML configuration file (see
    :class:`kiwicli.app.ports.config_store.Configuration`).
    """

    model_config = SettingsConfigDict(
        env_prefix="KIWI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    config_dir: Path | None = Field(
        default=None,
        description="Override config directory (defaults to XDG_CONFIG_HOME/kiwistand)",
    )

    verbose: bool = Field(
        default=False,
        description="Emit debug logging to stderr",
    )

    keystore_password: SecretStr | None = Field(
        default=None,
        description="Keystore password used when none is passed on the command line",
    )

    def get_config_dir(self) -> Path:
        """Get the config directory, creating if necessary."""
        if self.config_dir:
            config_dir = self.config_dir.expanduser()
        else:
            config_dir = get_xdg_config_home() / APP_DIR_NAME

        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir

    def get_config_path(self) -> Path:
        """Get path to the persisted YAML configuration file."""
        return self.get_config_dir() / CONFIG_FILE_NAME

    def get_default_key_path(self) -> Path:
        """Default location of the encrypted keystore file."""
        return self.get_config_dir() / KEY_FILE_NAME

    def get_keystore_password(self) -> str | None:
        """Return the environment-provided keystore password, if any."""
        if self.keystore_password is None:
            return None
        return self.keystore_password.get_secret_value()


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
