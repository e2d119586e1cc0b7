"""Hardware device signer for Ledger wallets running the Ethereum app."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from kiwicli.app.ports.signer import (
    DeviceRejected,
    DeviceUnavailable,
    HardwareTransportPort,
    Signature,
    SignerPort,
    recover_signer,
)
from kiwicli.errors import CredentialError, CredentialFailure

if TYPE_CHECKING:  # pragma: no cover
    from eth_account.messages import SignableMessage

    from kiwicli.app.message import CanonicalMessage

logger = logging.getLogger(__name__)


def ledger_live_path(account_index: int) -> str:
    """BIP-44 derivation path used by Ledger Live for ``account_index``."""
    if account_index < 0:
        raise ValueError(f"Account index must be non-negative, got {account_index}")
    return f"44'/60'/{account_index}'/0/0"


class LedgerDeviceTransport(HardwareTransportPort):
    """Talk to a USB-attached Ledger through ``ledgereth``.

    The dongle is opened lazily on first use so constructing the transport
    never touches USB. Signing blocks until the user approves or rejects the
    request on the device screen.
    """

    def __init__(self, dongle: Any = None) -> None:
        self._dongle = dongle

    def _connect(self) -> Any:
        if self._dongle is not None:
            return self._dongle
        try:
            from ledgereth.comms import init_dongle
        except ModuleNotFoundError as exc:
            raise DeviceUnavailable(
                "ledgereth is required to sign with a Ledger device"
            ) from exc

        # ledgereth reports an unsupported app version as NotImplementedError
        # and a missing dongle as a plain Exception besides LedgerError.
        try:
            self._dongle = init_dongle()
        except Exception as exc:
            raise DeviceUnavailable(f"No Ledger device found: {exc}") from exc
        return self._dongle

    def sign_typed_message(self, encoding: SignableMessage, account_index: int) -> bytes:
        dongle = self._connect()

        from ledgereth.messages import sign_typed_data_draft

        path = ledger_live_path(account_index)
        logger.info("Confirm the signature request on your Ledger (path %s)", path)
        try:
            signed = sign_typed_data_draft(
                bytes(encoding.header),
                bytes(encoding.body),
                sender_path=path,
                dongle=dongle,
            )
        except Exception as exc:
            raise DeviceRejected(f"Ledger declined the signing request: {exc}") from exc

        return Signature.from_vrs(signed.v, signed.r, signed.s).raw


class HardwareDeviceSigner(SignerPort):
    """Sign on an external device; the private key never leaves it."""

    def __init__(self, transport: HardwareTransportPort, account_index: int) -> None:
        if account_index < 0:
            raise ValueError(f"Account index must be non-negative, got {account_index}")
        self.transport = transport
        self.account_index = account_index
        self._address: str | None = None

    @property
    def address(self) -> str | None:
        return self._address

    def sign(self, message: CanonicalMessage) -> Signature:
        try:
            raw = self.transport.sign_typed_message(message.signable(), self.account_index)
        except DeviceUnavailable as exc:
            raise CredentialError(CredentialFailure.DEVICE_UNREACHABLE, str(exc)) from exc
        except DeviceRejected as exc:
            raise CredentialError(CredentialFailure.DEVICE_REJECTED, str(exc)) from exc

        try:
            signature = Signature(raw)
        except ValueError as exc:
            raise CredentialError(
                CredentialFailure.DEVICE_REJECTED,
                f"Device returned a malformed signature: {exc}",
            ) from exc

        self._address = recover_signer(message, signature)
        logger.debug(
            "Signed message with hardware account %d (%s)",
            self.account_index,
            self._address,
        )
        return signature
