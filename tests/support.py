"""Test doubles shared across the suite."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from eth_account import Account
from eth_keys import keys
from eth_utils import keccak

from kiwicli.app.ports import Delivered, DeviceUnavailable, SubmissionPayload

# Private key behind 0x0f6A79A579658E401E0B81c6dde1F2cd51d97176, shared with
# the reference signatures produced by other Kiwi News clients.
KNOWN_PRIVATE_KEY = "ad54bdeade5537fb0a553190159783e45d02d316a992db05cbed606d3ca36b39"
KNOWN_ADDRESS = "0x0f6A79A579658E401E0B81c6dde1F2cd51d97176"
KNOWN_SIGNATURE = (
    "1df128dfe1f86df4e20ecc6ebbd586e0ab56e3fc8d0db9210422c3c765633ad8"
    "793af68aa232cf39cc3f75ea18f03260258f7276c2e0d555f98e1cf16672dd201c"
)
KEYSTORE_PASSWORD = "correct horse battery staple"


class FakeSession:
    """Stand-in for ``requests.Session`` recording every POST."""

    def __init__(
        self,
        *,
        status_code: int = 200,
        text: str = "ok",
        error: Exception | None = None,
    ) -> None:
        self.headers: dict[str, str] = {}
        self.status_code = status_code
        self.text = text
        self.error = error
        self.calls: list[tuple[str, Any]] = []

    def post(self, url: str, json: Any = None, **kwargs: Any) -> SimpleNamespace:
        self.calls.append((url, json))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(status_code=self.status_code, text=self.text)


class RecordingSubmissionPort:
    """Submission port that keeps payloads in memory."""

    def __init__(self, status_code: int = 200, body: str = '{"status":"success"}') -> None:
        self.result = Delivered(status_code=status_code, body=body)
        self.submitted: list[tuple[SubmissionPayload, str]] = []

    def submit(self, payload: SubmissionPayload, endpoint: str) -> Delivered:
        self.submitted.append((payload, endpoint))
        return self.result


class FakeDeviceTransport:
    """Hardware transport that signs in-process with a known key."""

    def __init__(
        self,
        private_key: str = KNOWN_PRIVATE_KEY,
        *,
        error: Exception | None = None,
    ) -> None:
        self._account = Account.from_key(private_key)
        self.error = error
        self.requests: list[int] = []

    def sign_typed_message(self, encoding: Any, account_index: int) -> bytes:
        self.requests.append(account_index)
        if self.error is not None:
            raise self.error
        return bytes(self._account.sign_message(encoding).signature)


class NoDeviceTransport(FakeDeviceTransport):
    def __init__(self) -> None:
        super().__init__(error=DeviceUnavailable("No Ledger device found"))


class ExplodingSignerFactory:
    """Signer factory that fails the test if any backend is requested."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, config: Any, password: str | None) -> Any:
        self.calls += 1
        raise AssertionError("signing backend must not be constructed")


class FakeDongle:
    """Ledger dongle double answering SIGN_TYPED_DATA with ``v || r || s``.

    The reply is computed from the hashes at the tail of the APDU, so the
    signature only recovers to the known key when the transport sent the
    exact domain and message hashes.
    """

    def __init__(self, private_key: str = KNOWN_PRIVATE_KEY, *, reply: bytes | None = None) -> None:
        self._key = keys.PrivateKey(bytes.fromhex(private_key))
        self.reply = reply
        self.apdus: list[bytes] = []

    def exchange(self, apdu: bytes, timeout: int = 20000) -> bytes:
        self.apdus.append(bytes(apdu))
        if self.reply is not None:
            return self.reply
        header, body = apdu[-64:-32], apdu[-32:]
        digest = keccak(b"\x19\x01" + header + body)
        signed = self._key.sign_msg_hash(digest)
        return (
            bytes([signed.v + 27])
            + signed.r.to_bytes(32, "big")
            + signed.s.to_bytes(32, "big")
        )

    def close(self) -> None:
        pass
