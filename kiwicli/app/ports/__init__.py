"""Port interfaces for the kiwi application layer.

These protocol interfaces define contracts for adapters.
Services depend on these ports, never on concrete implementations.
"""

__all__ = [
    "Backend",
    "ConfigStorePort",
    "Configuration",
    "Delivered",
    "DeviceRejected",
    "DeviceUnavailable",
    "HardwareTransportPort",
    "Signature",
    "SignerPort",
    "SubmissionPayload",
    "SubmissionPort",
    "SubmissionResult",
    "recover_signer",
]

from kiwicli.app.ports.config_store import Backend, ConfigStorePort, Configuration
from kiwicli.app.ports.signer import (
    DeviceRejected,
    DeviceUnavailable,
    HardwareTransportPort,
    Signature,
    SignerPort,
    recover_signer,
)
from kiwicli.app.ports.submission import (
    Delivered,
    SubmissionPayload,
    SubmissionPort,
    SubmissionResult,
)
