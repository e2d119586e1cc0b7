"""Submission orchestration: validate, build, sign, deliver."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from kiwicli.app.message import build_message
from kiwicli.app.ports import (
    Backend,
    Configuration,
    SignerPort,
    SubmissionPayload,
    SubmissionPort,
    SubmissionResult,
)
from kiwicli.errors import ValidationError

logger = logging.getLogger(__name__)

SignerFactory = Callable[[Configuration, str | None], SignerPort]


def require_title(title: str | None) -> str:
    if not title:
        raise ValidationError("title must be provided")
    return title


def require_href(href: str | None) -> str:
    """Reject a missing or whitespace-only href."""
    if href is None or not href.strip():
        raise ValidationError("href must be provided")
    return href


@dataclass(slots=True)
class SubmissionService:
    """Publish submit and vote endorsements for one loaded configuration.

    Every argument check happens before the signer factory is called, so an
    invalid request never unlocks a keystore, wakes a device or opens a
    connection.
    """

    config: Configuration
    signer_factory: SignerFactory
    submission_port: SubmissionPort
    clock: Callable[[], float] = time.time

    def submit(
        self,
        href: str | None,
        title: str | None,
        password: str | None = None,
    ) -> SubmissionResult:
        """Submit ``href`` under ``title``."""

        return self._publish(href, require_title(title), password)

    def vote(self, href: str | None, password: str | None = None) -> SubmissionResult:
        """Upvote ``href``; votes are messages with an empty title."""

        return self._publish(href, "", password)

    def _publish(
        self, href: str | None, title: str, password: str | None
    ) -> SubmissionResult:
        href = require_href(href)
        if self.config.backend is Backend.LOCAL and not password:
            raise ValidationError("password must be provided when signing with a keystore")

        message = build_message(title, href, clock=self.clock)

        logger.debug("Using %s signing backend", self.config.backend.value)
        signer = self.signer_factory(self.config, password)
        signature = signer.sign(message)
        logger.info("Message signed by %s", signer.address or "unknown signer")

        payload = SubmissionPayload.from_signed(message, signature)
        return self.submission_port.submit(payload, self.config.endpoint)
