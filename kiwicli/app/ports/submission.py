"""Submission port interface for delivering signed messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:  # pragma: no cover
    from kiwicli.app.message import CanonicalMessage
    from kiwicli.app.ports.signer import Signature


class SubmissionPayload(BaseModel):
    """Flat wire form posted to the node; field order is the wire order."""

    model_config = ConfigDict(frozen=True)

    title: str
    href: str
    type: Literal["amplify"] = "amplify"
    timestamp: int = Field(..., ge=0)
    signature: str = Field(..., pattern=r"^0x[0-9a-f]+$")

    @classmethod
    def from_signed(cls, message: CanonicalMessage, signature: Signature) -> SubmissionPayload:
        return cls(
            title=message.title,
            href=message.href,
            type=message.kind,
            timestamp=message.timestamp,
            signature=signature.to_hex(),
        )


@dataclass(frozen=True, slots=True)
class Delivered:
    """The endpoint answered; the status code is reported, not interpreted."""

    status_code: int
    body: str


SubmissionResult = Delivered


class SubmissionPort(Protocol):
    """Port interface for posting signed payloads.

    Side effects: One network request per call (online).
    """

    def submit(self, payload: SubmissionPayload, endpoint: str) -> SubmissionResult:
        """Deliver ``payload`` to ``endpoint``.

        Raises:
            NetworkError: If no HTTP response could be obtained
        """
        ...
