"""Plain HTTP notifiers pointed at a user-supplied URL.

``simple-get`` puts the provider name and the comma-joined server list in two
query parameters whose names the user chooses.  ``simple-post`` and
``simple-put`` send the JSON payload as the request body.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import requests

from ..errors import missing_parameter
from ..models import CheckResult
from .base import Notifier

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class SimpleParams:
    url: Optional[str] = None
    param_provider: Optional[str] = None
    param_servers: Optional[str] = None


def _require(owner: str, value: Optional[str], env_name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise missing_parameter(owner, env_name)
    return value


class SimpleGet(Notifier):
    name = "simple-get"

    def __init__(self, params: SimpleParams, session: Optional[requests.Session] = None) -> None:
        super().__init__(session)
        self.url = _require(self.name, params.url, "SIMPLE_URL")
        self.param_provider = _require(self.name, params.param_provider, "SIMPLE_GET_PARAM_NAME_PROVIDER")
        self.param_servers = _require(self.name, params.param_servers, "SIMPLE_GET_PARAM_NAME_SERVERS")

    def build_query_parameters(self, result: CheckResult) -> Dict[str, str]:
        return {
            self.param_provider: result.provider_name,
            self.param_servers: ",".join(result.available_ids),
        }

    def send(self, result: CheckResult) -> None:
        self._request("GET", self.url, params=self.build_query_parameters(result))


class SimplePost(Notifier):
    name = "simple-post"
    method = "POST"

    def __init__(self, params: SimpleParams, session: Optional[requests.Session] = None) -> None:
        super().__init__(session)
        self.url = _require(self.name, params.url, "SIMPLE_URL")

    def send(self, result: CheckResult) -> None:
        self._request(self.method, self.url, data=result.to_json().encode("utf-8"), headers=JSON_HEADERS)


class SimplePut(SimplePost):
    name = "simple-put"
    method = "PUT"
