"""Pytest configuration and fixtures."""

import json
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from eth_account import Account
from support import (
    KEYSTORE_PASSWORD,
    KNOWN_PRIVATE_KEY,
    FakeDeviceTransport,
    FakeSession,
    RecordingSubmissionPort,
)

from kiwicli.config import Settings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def override_settings(temp_dir: Path) -> Generator[Settings, None, None]:
    """Provide isolated kiwi settings scoped to tests."""

    import kiwicli.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    config_dir = temp_dir / "appconfig"
    config_dir.mkdir(parents=True, exist_ok=True)

    settings = config_module.Settings(config_dir=config_dir, keystore_password=None)

    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings


@pytest.fixture
def keystore_file(temp_dir: Path) -> Path:
    """Encrypted keystore holding the known test key (cheap KDF parameters)."""
    keystore = Account.encrypt(KNOWN_PRIVATE_KEY, KEYSTORE_PASSWORD, kdf="pbkdf2", iterations=2)
    path = temp_dir / "key"
    path.write_text(json.dumps(keystore), encoding="utf-8")
    return path


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def submission_port() -> RecordingSubmissionPort:
    return RecordingSubmissionPort()


@pytest.fixture
def device_transport() -> FakeDeviceTransport:
    return FakeDeviceTransport()
