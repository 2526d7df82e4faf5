"""Notification channels.

Each notifier renders a :class:`~server_watcher.models.CheckResult` for its
channel and delivers it exactly once per :meth:`Notifier.send` call.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from ..errors import unknown_handler
from .base import Notifier
from .emailer import EmailParams, SendmailEmail, SendmailParams, SmtpEmail, SmtpParams
from .ifttt import IftttParams, WebhookJson, WebhookValues
from .simple import SimpleGet, SimpleParams, SimplePost, SimplePut

NOTIFIERS: Dict[str, type] = {
    cls.name: cls
    for cls in (
        SimpleGet,
        SimplePost,
        SimplePut,
        WebhookJson,
        WebhookValues,
        SmtpEmail,
        SendmailEmail,
    )
}


def available_notifiers() -> List[str]:
    return sorted(NOTIFIERS)


def build_notifier(name: str, params: Any, session: Optional[requests.Session] = None) -> Notifier:
    try:
        cls = NOTIFIERS[name]
    except KeyError:
        raise unknown_handler("notifier", name, available_notifiers()) from None
    return cls(params, session=session)


__all__ = [
    "Notifier",
    "EmailParams",
    "SmtpParams",
    "SendmailParams",
    "SmtpEmail",
    "SendmailEmail",
    "IftttParams",
    "WebhookJson",
    "WebhookValues",
    "SimpleParams",
    "SimpleGet",
    "SimplePost",
    "SimplePut",
    "NOTIFIERS",
    "available_notifiers",
    "build_notifier",
]
