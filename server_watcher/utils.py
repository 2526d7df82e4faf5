"""Helper utilities.

This module centralises the HTTP plumbing shared by providers and notifiers:
creating a configured session, sending a request and checking its status,
and decoding JSON bodies.  No retry is attempted here; a failed call ends
the run and the external scheduler decides when to try again.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests
from requests import Response


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20


def get_http_session() -> requests.Session:
    """Return a new session identifying this tool, asking for JSON.

    The caller closes it.
    """
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": "server-watcher/1.0 (+https://github.com/)",
            "Accept": "application/json, */*; q=0.01",
        }
    )
    return session


class HTTPError(Exception):
    """Raised when an HTTP request fails at the transport or status level."""

    def __init__(self, message: str, response: Optional[Response] = None) -> None:
        super().__init__(message)
        self.response = response


def _raise_for_status(resp: Response) -> None:
    try:
        resp.raise_for_status()
    except requests.RequestException as e:
        raise HTTPError(str(e), response=resp) from e


def send_request(session: requests.Session, method: str, url: str, **kwargs: Any) -> Response:
    """Send one request and return the response if its status is 2xx.

    Transport errors and non-success statuses both raise :class:`HTTPError`;
    the failing response, when there is one, is attached to the error.
    """
    kwargs.setdefault("timeout", DEFAULT_TIMEOUT)
    logger.debug("%s %s", method, url)
    try:
        response = session.request(method, url, **kwargs)
    except requests.RequestException as e:
        raise HTTPError(f"{method} {url} failed: {e}") from e
    _raise_for_status(response)
    return response


def decode_json(response: Response) -> Any:
    """Decode a JSON body, raising ``ValueError`` when it is not JSON."""
    try:
        return response.json()
    except ValueError as e:
        raise ValueError(f"unparseable response body from {response.url}: {e}") from e


__all__ = ["DEFAULT_TIMEOUT", "get_http_session", "send_request", "decode_json", "HTTPError"]
