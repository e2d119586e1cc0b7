"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from kiwicli.app import ConfigService, SubmissionService
from kiwicli.app.adapters import (
    HardwareDeviceSigner,
    HttpSubmissionClient,
    KeystoreSigner,
    LedgerDeviceTransport,
    YamlConfigStore,
)
from kiwicli.app.ports import (
    Backend,
    ConfigStorePort,
    Configuration,
    HardwareTransportPort,
    SignerPort,
    SubmissionPort,
)
from kiwicli.config import Settings, get_settings


def default_configuration(settings: Settings) -> Configuration:
    """Configuration written on first run and by ``kiwi config --reset``."""
    return Configuration(key_file_path=settings.get_default_key_path())


def create_signer(
    config: Configuration,
    password: str | None,
    *,
    transport_factory: Callable[[], HardwareTransportPort] = LedgerDeviceTransport,
) -> SignerPort:
    """Select the signing backend named by ``config.backend``."""
    if config.backend is Backend.HARDWARE:
        return HardwareDeviceSigner(transport_factory(), config.hardware_account_index)
    return KeystoreSigner(config.key_file_path, password)


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services and adapters for the CLI layer."""

    settings: Settings
    config_store: ConfigStorePort
    config_service: ConfigService
    submission_port: SubmissionPort
    transport_factory: Callable[[], HardwareTransportPort]

    def signer_for(self, config: Configuration, password: str | None) -> SignerPort:
        return create_signer(config, password, transport_factory=self.transport_factory)

    def create_submission_service(self) -> SubmissionService:
        """Load configuration once and bind it to a submission service.

        Raises:
            ConfigCorrupt: If the configuration file exists but is unreadable
        """
        config = self.config_store.load()
        return SubmissionService(
            config=config,
            signer_factory=self.signer_for,
            submission_port=self.submission_port,
        )


def bootstrap_application(
    settings: Settings | None = None,
    *,
    submission_port: SubmissionPort | None = None,
    transport_factory: Callable[[], HardwareTransportPort] | None = None,
) -> ApplicationContainer:
    """Instantiate adapters and services for CLI consumption."""

    active_settings = settings or get_settings()

    config_store = YamlConfigStore(
        active_settings.get_config_path(),
        defaults=default_configuration(active_settings),
    )

    return ApplicationContainer(
        settings=active_settings,
        config_store=config_store,
        config_service=ConfigService(store=config_store),
        submission_port=submission_port or HttpSubmissionClient(),
        transport_factory=transport_factory or LedgerDeviceTransport,
    )
