"""Tests for canonical message construction and typed encoding."""

from __future__ import annotations

import pytest
from eth_utils import keccak

from kiwicli.app.message import (
    DOMAIN_SALT,
    MESSAGE_KIND,
    CanonicalMessage,
    build_message,
)
from kiwicli.errors import ValidationError

TIMESTAMP = 1676559616


def _fixed_clock() -> float:
    return TIMESTAMP + 0.75


def test_build_message_captures_clock_in_whole_seconds() -> None:
    message = build_message("hello world", "https://example.com", clock=_fixed_clock)

    assert message.title == "hello world"
    assert message.href == "https://example.com"
    assert message.kind == MESSAGE_KIND == "amplify"
    assert message.timestamp == TIMESTAMP


def test_vote_is_encoded_as_empty_title() -> None:
    vote = build_message("", "https://example.com", clock=_fixed_clock)
    submission = build_message("Show HN", "https://example.com", clock=_fixed_clock)

    assert vote.title == ""
    assert vote.is_vote
    assert submission.title == "Show HN"
    assert not submission.is_vote


@pytest.mark.parametrize("href", ["", "   ", None])
def test_build_message_rejects_missing_href(href: str | None) -> None:
    with pytest.raises(ValidationError, match="href"):
        build_message("title", href, clock=_fixed_clock)


def test_build_message_rejects_missing_title() -> None:
    with pytest.raises(ValidationError, match="title"):
        build_message(None, "https://example.com", clock=_fixed_clock)


def test_timestamp_must_fit_unsigned_64_bits() -> None:
    CanonicalMessage(title="", href="https://example.com", timestamp=2**64 - 1)
    with pytest.raises(ValidationError):
        CanonicalMessage(title="", href="https://example.com", timestamp=2**64)
    with pytest.raises(ValidationError):
        CanonicalMessage(title="", href="https://example.com", timestamp=-1)


def test_typed_data_uses_fixed_domain_and_field_order() -> None:
    message = CanonicalMessage(title="t", href="https://example.com", timestamp=TIMESTAMP)
    typed = message.typed_data()

    assert typed["primaryType"] == "Message"
    assert typed["domain"] == {
        "name": "kiwinews",
        "version": "1.0.0",
        "salt": keccak(text="kiwinews domain separator salt"),
    }
    assert DOMAIN_SALT == typed["domain"]["salt"]
    assert [field["name"] for field in typed["types"]["Message"]] == [
        "title",
        "href",
        "type",
        "timestamp",
    ]
    assert [field["type"] for field in typed["types"]["Message"]] == [
        "string",
        "string",
        "string",
        "uint256",
    ]
    assert "chainId" not in typed["domain"]


def test_signable_is_eip712_envelope() -> None:
    message = CanonicalMessage(title="t", href="https://example.com", timestamp=TIMESTAMP)
    envelope = message.signable()

    assert envelope.version == b"\x01"
    assert len(envelope.header) == 32
    assert len(envelope.body) == 32
    assert message.digest() == keccak(b"\x19\x01" + envelope.header + envelope.body)


def test_encoding_is_deterministic() -> None:
    first = CanonicalMessage(title="a", href="https://example.com", timestamp=TIMESTAMP)
    second = CanonicalMessage(title="a", href="https://example.com", timestamp=TIMESTAMP)

    assert first == second
    assert first.digest() == second.digest()


@pytest.mark.parametrize(
    "other",
    [
        CanonicalMessage(title="b", href="https://example.com", timestamp=TIMESTAMP),
        CanonicalMessage(title="a", href="https://example.org", timestamp=TIMESTAMP),
        CanonicalMessage(title="a", href="https://example.com", timestamp=TIMESTAMP + 1),
        CanonicalMessage(title="", href="https://example.com", timestamp=TIMESTAMP),
        # Shifting characters between fields must not collide.
        CanonicalMessage(title="ahttps://", href="example.com", timestamp=TIMESTAMP),
    ],
)
def test_encoding_differs_when_any_field_differs(other: CanonicalMessage) -> None:
    base = CanonicalMessage(title="a", href="https://example.com", timestamp=TIMESTAMP)

    assert base.digest() != other.digest()


def test_canonical_message_is_immutable() -> None:
    message = CanonicalMessage(title="a", href="https://example.com", timestamp=TIMESTAMP)

    with pytest.raises(AttributeError):
        message.title = "b"  # type: ignore[misc]
