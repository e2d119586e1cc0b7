"""HTTP adapter posting signed messages to a Kiwi News node."""

from __future__ import annotations

import logging

import requests

from kiwicli import __version__
from kiwicli.app.ports.submission import Delivered, SubmissionPayload, SubmissionPort
from kiwicli.errors import NetworkError

logger = logging.getLogger(__name__)


class HttpSubmissionClient(SubmissionPort):
    """Deliver payloads with a single synchronous ``requests`` POST.

    Any HTTP response counts as delivered. Timeouts are left to the session
    (none by default); a failed request is never retried.
    """

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": f"kiwicli/{__version__}"})

    def submit(self, payload: SubmissionPayload, endpoint: str) -> Delivered:
        body = payload.model_dump(mode="json")
        logger.debug("POST %s %s", endpoint, body)

        try:
            response = self.session.post(endpoint, json=body)
        except requests.RequestException as exc:
            raise NetworkError(f"Failed sending message to {endpoint}: {exc}") from exc

        logger.info("%s answered with HTTP %d", endpoint, response.status_code)
        return Delivered(status_code=response.status_code, body=response.text)
