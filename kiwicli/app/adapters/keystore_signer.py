"""Local keystore signer backed by an encrypted Ethereum JSON keystore."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from eth_account import Account

from kiwicli.app.ports.signer import Signature, SignerPort
from kiwicli.errors import CredentialError, CredentialFailure

if TYPE_CHECKING:  # pragma: no cover
    from kiwicli.app.message import CanonicalMessage

logger = logging.getLogger(__name__)


class KeystoreSigner(SignerPort):
    """Sign with a private key decrypted from a password-protected keystore.

    The key is decrypted on every :meth:`sign` call and the reference dropped
    as soon as the signature exists; nothing decrypted is cached on the
    instance.

    Security: the password is kept only for the lifetime of the signer and is
    masked in ``repr()``.
    """

    def __init__(self, key_file_path: Path, password: str | None) -> None:
        self.key_file_path = Path(key_file_path).expanduser()
        self._password = password
        self._address: str | None = None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"key_file_path={str(self.key_file_path)!r}, "
            f"password={'[MASKED]' if self._password else 'None'})"
        )

    @property
    def address(self) -> str | None:
        return self._address

    def _read_keystore(self) -> dict:
        try:
            raw = self.key_file_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise CredentialError(
                CredentialFailure.MISSING_KEY_FILE,
                f"Keystore file not found: {self.key_file_path}",
            ) from exc
        except OSError as exc:
            raise CredentialError(
                CredentialFailure.MISSING_KEY_FILE,
                f"Couldn't read keystore file {self.key_file_path}: {exc}",
            ) from exc

        try:
            keystore = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CredentialError(
                CredentialFailure.DECRYPT_FAILED,
                f"Keystore file {self.key_file_path} is not valid JSON",
            ) from exc
        if not isinstance(keystore, dict):
            raise CredentialError(
                CredentialFailure.DECRYPT_FAILED,
                f"Keystore file {self.key_file_path} is not a keystore object",
            )
        return keystore

    def sign(self, message: CanonicalMessage) -> Signature:
        if not self._password:
            raise CredentialError(
                CredentialFailure.MISSING_PASSWORD,
                "A password is required to unlock the keystore",
            )

        keystore = self._read_keystore()
        try:
            private_key = Account.decrypt(keystore, self._password)
        except (ValueError, KeyError, TypeError) as exc:
            # eth-account reports a wrong password as "MAC mismatch"
            raise CredentialError(
                CredentialFailure.DECRYPT_FAILED,
                f"Problem decrypting the keystore {self.key_file_path}: "
                "wrong password or corrupt file",
            ) from exc

        try:
            account = Account.from_key(private_key)
            signed = account.sign_message(message.signable())
            self._address = account.address
        finally:
            del private_key

        logger.debug("Signed message with keystore account %s", self._address)
        return Signature(bytes(signed.signature))
