"""
HTTP transport for the Flickr client.
The client only talks to the network through the Transport protocol below.
"""

import logging
from typing import Mapping, Optional, Protocol

import requests

from .errors import TransportError

DEFAULT_TIMEOUT_SEC = 30.0

log = logging.getLogger(__name__)


class Transport(Protocol):
    """Capability the client needs: a GET and a generic send, both returning the body."""

    def fetch(self, url: str) -> bytes:
        ...

    def send(
        self, method: str, url: str, headers: Mapping[str, str], body: bytes
    ) -> bytes:
        ...


def _endpoint(url: str) -> str:
    # The query carries api_sig and auth_token; keep it out of error messages.
    return url.split("?", 1)[0]


class RequestsTransport:
    """Transport backed by a requests.Session. Single attempt, no retries."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SEC,
    ):
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._timeout = timeout

    def close(self) -> None:
        """Close the session if this transport created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def fetch(self, url: str) -> bytes:
        return self.send("GET", url, {}, b"")

    def send(
        self, method: str, url: str, headers: Mapping[str, str], body: bytes
    ) -> bytes:
        log.debug("%s %s", method, _endpoint(url))
        try:
            resp = self._session.request(
                method,
                url,
                headers=dict(headers),
                data=body or None,
                timeout=self._timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise TransportError(method, _endpoint(url), exc) from exc
        return resp.content
