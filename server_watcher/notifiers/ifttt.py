"""IFTTT webhook notifiers.

Both variants trigger the same user event.  The ``json`` flavour posts the
full payload; the ``values`` flavour fills IFTTT's ``value1``/``value2``
ingredients with the provider name and the comma-joined server list.
"""

from __future__ import annotations

import json
import logging
from abc import abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from ..errors import missing_parameter
from ..models import CheckResult
from ..utils import HTTPError
from .base import Notifier
from .simple import JSON_HEADERS

logger = logging.getLogger(__name__)

IFTTT_JSON_URL = "https://maker.ifttt.com/trigger/{event}/json/with/key/{key}"
IFTTT_VALUES_URL = "https://maker.ifttt.com/trigger/{event}/with/key/{key}"


@dataclass(frozen=True)
class IftttParams:
    event: Optional[str] = None
    key: Optional[str] = None


class _IftttWebhook(Notifier):
    url_template: str

    def __init__(self, params: IftttParams, session: Optional[requests.Session] = None) -> None:
        super().__init__(session)
        # IFTTT does not follow its own event-name rules, so no further sanitizing.
        event = (params.event or "").strip()
        if not event:
            raise missing_parameter(self.name, "IFTTT_WEBHOOK_EVENT")
        key = (params.key or "").strip()
        if not key:
            raise missing_parameter(self.name, "IFTTT_WEBHOOK_KEY")
        self.url = self.url_template.format(event=event, key=key)

    @abstractmethod
    def body(self, result: CheckResult) -> str:
        """Render the request body for ``result``."""

    def send(self, result: CheckResult) -> None:
        self._request("POST", self.url, data=self.body(result).encode("utf-8"), headers=JSON_HEADERS)

    def _describe_failure(self, error: HTTPError) -> str:
        response = error.response
        if response is None:
            return str(error)
        if not 400 <= response.status_code < 500:
            return f"Unknown IFTTT-WEBHOOK error (HTTP {response.status_code})"
        try:
            errors = response.json().get("errors") or []
            messages = " / ".join(str(e.get("message", "")) for e in errors)
        except (ValueError, AttributeError):
            logger.debug("IFTTT error body is not the documented JSON: %r", response.text)
            return str(error)
        return f"Error during IFTTT-WEBHOOK query: {messages}"


class WebhookJson(_IftttWebhook):
    name = "ifttt-webhook-json"
    url_template = IFTTT_JSON_URL

    def body(self, result: CheckResult) -> str:
        return result.to_json()


class WebhookValues(_IftttWebhook):
    name = "ifttt-webhook-values"
    url_template = IFTTT_VALUES_URL

    def values(self, result: CheckResult) -> Dict[str, str]:
        return {"value1": result.provider_name, "value2": ",".join(result.available_ids)}

    def body(self, result: CheckResult) -> str:
        return json.dumps(self.values(result), separators=(",", ":"))
