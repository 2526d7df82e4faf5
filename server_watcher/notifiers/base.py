"""Base class shared by every notifier."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, TypeVar

import requests

from ..errors import NotifierError
from ..models import CheckResult
from ..utils import HTTPError, get_http_session, send_request

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Notifier(ABC):
    name: str

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._session = session

    @abstractmethod
    def send(self, result: CheckResult) -> None:
        """Deliver ``result`` once; raise :class:`NotifierError` on failure."""

    def test(self) -> None:
        self.send(CheckResult.dummy())

    def _with_session(self, fn: Callable[[requests.Session], T]) -> T:
        if self._session is not None:
            return fn(self._session)
        session = get_http_session()
        try:
            return fn(session)
        finally:
            session.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        def _send(session: requests.Session) -> requests.Response:
            try:
                return send_request(session, method, url, **kwargs)
            except HTTPError as e:
                raise NotifierError(self.name, self._describe_failure(e)) from e

        response = self._with_session(_send)
        logger.info("%s: notification delivered (HTTP %s)", self.name, response.status_code)
        return response

    def _describe_failure(self, error: HTTPError) -> str:
        return str(error)
