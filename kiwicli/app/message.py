"""Canonical EIP-712 message construction.

A message is encoded exactly as the Kiwi News nodes expect it. The domain
separator and field layout are fixed: changing any name, type or order here
invalidates every signature produced by other clients.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from eth_account.messages import SignableMessage, encode_typed_data
from eth_utils import keccak

from kiwicli.errors import ValidationError

logger = logging.getLogger(__name__)

MESSAGE_KIND = "amplify"
MAX_TIMESTAMP = 2**64 - 1

DOMAIN_NAME = "kiwinews"
DOMAIN_VERSION = "1.0.0"
DOMAIN_SALT = keccak(text="kiwinews domain separator salt")

EIP712_TYPES: dict[str, list[dict[str, str]]] = {
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "salt", "type": "bytes32"},
    ],
    "Message": [
        {"name": "title", "type": "string"},
        {"name": "href", "type": "string"},
        {"name": "type", "type": "string"},
        {"name": "timestamp", "type": "uint256"},
    ],
}


def eip712_domain() -> dict[str, Any]:
    """Return the canonical domain separator values."""
    return {
        "name": DOMAIN_NAME,
        "version": DOMAIN_VERSION,
        "salt": DOMAIN_SALT,
    }


@dataclass(frozen=True, slots=True)
class CanonicalMessage:
    """One endorsement of ``href``; an empty ``title`` encodes a vote."""

    title: str
    href: str
    timestamp: int
    kind: str = MESSAGE_KIND

    def __post_init__(self) -> None:
        if not 0 <= self.timestamp <= MAX_TIMESTAMP:
            raise ValidationError(f"Timestamp out of range: {self.timestamp}")

    @property
    def is_vote(self) -> bool:
        return self.title == ""

    def typed_data(self) -> dict[str, Any]:
        """Full EIP-712 structure (types, primary type, domain, message)."""
        return {
            "types": EIP712_TYPES,
            "primaryType": "Message",
            "domain": eip712_domain(),
            "message": {
                "title": self.title,
                "href": self.href,
                "type": self.kind,
                "timestamp": self.timestamp,
            },
        }

    def signable(self) -> SignableMessage:
        """EIP-191 version 0x01 envelope consumed by both signing backends."""
        return encode_typed_data(full_message=self.typed_data())

    def digest(self) -> bytes:
        """Keccak-256 hash that is actually signed."""
        envelope = self.signable()
        return keccak(b"\x19" + envelope.version + envelope.header + envelope.body)


def build_message(
    title: str | None,
    href: str | None,
    *,
    clock: Callable[[], float] = time.time,
) -> CanonicalMessage:
    """Build a :class:`CanonicalMessage` stamped with the current time.

    Args:
        title: Link title; ``""`` for a vote
        href: URL being endorsed (required)
        clock: Wall-clock source returning seconds since the Unix epoch

    Raises:
        ValidationError: If ``href`` is empty or ``title`` is missing
    """
    if href is None or not href.strip():
        raise ValidationError("href must be provided")
    if title is None:
        raise ValidationError("title must be provided")

    message = CanonicalMessage(title=title, href=href, timestamp=int(clock()))
    logger.debug(
        "Built %s message for %s at %d",
        "vote" if message.is_vote else "submit",
        message.href,
        message.timestamp,
    )
    return message
