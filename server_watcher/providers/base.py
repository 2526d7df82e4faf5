"""Base class shared by every provider."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, TypeVar

import requests

from ..errors import ProviderError
from ..models import ServerOffering
from ..utils import HTTPError, decode_json, get_http_session, send_request

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Provider(ABC):
    name: str

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._session = session

    @abstractmethod
    def fetch(self) -> Any:
        """Query the vendor API and return the decoded raw catalog."""

    @abstractmethod
    def normalize(self, raw: Any) -> List[ServerOffering]:
        """Map a raw catalog to offerings, each tagged with its availability."""

    def list_offerings(self) -> List[ServerOffering]:
        raw = self.fetch()
        try:
            offerings = self.normalize(raw)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ProviderError(self.name, f"unexpected catalog format: {e!r}") from e
        logger.info(
            "%s: %d offerings, %d available",
            self.name,
            len(offerings),
            sum(1 for o in offerings if o.available),
        )
        return offerings

    def _with_session(self, fn: Callable[[requests.Session], T]) -> T:
        if self._session is not None:
            return fn(self._session)
        session = get_http_session()
        try:
            return fn(session)
        finally:
            session.close()

    def _get_json(self, session: requests.Session, url: str, **kwargs: Any) -> Any:
        try:
            response = send_request(session, "GET", url, **kwargs)
            return decode_json(response)
        except (HTTPError, ValueError) as e:
            raise ProviderError(self.name, str(e)) from e
