"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .http_submission import HttpSubmissionClient
from .keystore_signer import KeystoreSigner
from .ledger_signer import HardwareDeviceSigner, LedgerDeviceTransport, ledger_live_path
from .yaml_config import YamlConfigStore

__all__ = [
    "HardwareDeviceSigner",
    "HttpSubmissionClient",
    "KeystoreSigner",
    "LedgerDeviceTransport",
    "YamlConfigStore",
    "ledger_live_path",
]
