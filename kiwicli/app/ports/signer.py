"""Signer port interface for endorsing canonical messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from eth_account import Account

if TYPE_CHECKING:  # pragma: no cover
    from eth_account.messages import SignableMessage

    from kiwicli.app.message import CanonicalMessage

SIGNATURE_LENGTH = 65


@dataclass(frozen=True, slots=True)
class Signature:
    """Recoverable secp256k1 signature laid out as ``r || s || v``."""

    raw: bytes

    def __post_init__(self) -> None:
        if len(self.raw) != SIGNATURE_LENGTH:
            raise ValueError(
                f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(self.raw)}"
            )

    @classmethod
    def from_vrs(cls, v: int, r: int, s: int) -> Signature:
        """Assemble a signature from its components, normalizing ``v`` to 27/28."""
        if v < 27:
            v += 27
        return cls(r.to_bytes(32, "big") + s.to_bytes(32, "big") + bytes([v]))

    def to_hex(self) -> str:
        """Transport form: ``0x``-prefixed lowercase hex."""
        return "0x" + self.raw.hex()


def recover_signer(message: CanonicalMessage, signature: Signature) -> str:
    """Return the checksum address that produced ``signature`` over ``message``."""
    return Account.recover_message(message.signable(), signature=signature.raw)


class SignerPort(Protocol):
    """Port interface for producing signatures over canonical messages.

    Implementations differ only in where the private key lives; all of them
    sign the same EIP-712 encoding so their output is interchangeable.

    Side effects: May read key material from disk or talk to a device.
    """

    @property
    def address(self) -> str | None:
        """Checksum address of the signer, when known."""
        ...

    def sign(self, message: CanonicalMessage) -> Signature:
        """Sign ``message``.

        Args:
            message: Canonical message to endorse

        Returns:
            Signature over the message's typed encoding

        Raises:
            CredentialError: If the credential cannot be used
        """
        ...


class HardwareTransportPort(Protocol):
    """Port interface for a locally attached signing device.

    Side effects: Blocks on device I/O until the user approves or rejects.
    """

    def sign_typed_message(self, encoding: SignableMessage, account_index: int) -> bytes:
        """Ask the device to sign ``encoding`` with account ``account_index``.

        Returns:
            65-byte ``r || s || v`` signature

        Raises:
            DeviceUnavailable: If no compatible device is reachable
            DeviceRejected: If the device refused or failed the request
        """
        ...


class DeviceUnavailable(Exception):
    """Raised by transports when no signing device can be reached."""


class DeviceRejected(Exception):
    """Raised by transports when the device declines or fails a request."""
