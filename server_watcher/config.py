"""Configuration loader.

Reads environment variables and `.env` to build the parameter objects the
providers and notifiers are constructed with.  This is the only module that
looks at the environment.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from dotenv import load_dotenv

from .errors import ConfigError, unknown_handler
from .notifiers import (
    NOTIFIERS,
    EmailParams,
    IftttParams,
    SendmailParams,
    SimpleParams,
    SmtpParams,
)
from .providers import PROVIDERS, OnlineParams, OvhParams, ScalewayParams

# Load variables from a .env file if present (working directory).
# Real environment variables win over the file.
load_dotenv(dotenv_path=Path.cwd() / ".env")


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip()
    return value if value else default


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes")


def _parse_int(name: str, default: int) -> int:
    value = _get_env(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Invalid variable `{name}`: `{value}` is not an integer") from None


def _get_csv(name: str) -> Tuple[str, ...]:
    """Split a comma-separated variable; empty tokens such as ``a,,b`` are rejected."""
    raw = _get_env(name)
    if raw is None:
        return ()
    tokens = tuple(s.strip() for s in raw.split(","))
    if any(not t for t in tokens):
        raise ConfigError(f"Invalid variable `{name}`: found empty token in `{raw}`")
    return tokens


LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO") or "INFO"


# ---- Providers ---------------------------------------------------------------

def ovh_params() -> OvhParams:
    # Examples: OVH_EXCLUDE_DATACENTER=bhs,gra  OVH_EXCLUDE_COUNTRY=ca
    return OvhParams(
        excluded_datacenters=_get_csv("OVH_EXCLUDE_DATACENTER"),
        excluded_countries=_get_csv("OVH_EXCLUDE_COUNTRY"),
    )


def online_params() -> OnlineParams:
    return OnlineParams(
        private_token=_get_env("ONLINE_PRIVATE_TOKEN"),
        datacenters=_get_csv("ONLINE_DATACENTERS"),
    )


def scaleway_params() -> ScalewayParams:
    return ScalewayParams(
        secret_key=_get_env("SCALEWAY_SECRET_KEY"),
        zones=_get_csv("SCALEWAY_BAREMETAL_ZONES"),
    )


# ---- Notifiers ---------------------------------------------------------------

def simple_params() -> SimpleParams:
    return SimpleParams(
        url=_get_env("SIMPLE_URL"),
        param_provider=_get_env("SIMPLE_GET_PARAM_NAME_PROVIDER"),
        param_servers=_get_env("SIMPLE_GET_PARAM_NAME_SERVERS"),
    )


def ifttt_params() -> IftttParams:
    return IftttParams(event=_get_env("IFTTT_WEBHOOK_EVENT"), key=_get_env("IFTTT_WEBHOOK_KEY"))


def email_params() -> EmailParams:
    return EmailParams(
        sender=_get_env("EMAIL_FROM"),
        recipients=_get_csv("EMAIL_TO"),
        subject_prefix=_get_env("EMAIL_SUBJECT_PREFIX", "") or "",
    )


def smtp_params() -> SmtpParams:
    return SmtpParams(
        email=email_params(),
        host=_get_env("EMAIL_SMTP_HOST", "smtp.gmail.com") or "",
        port=_parse_int("EMAIL_SMTP_PORT", 587),  # 587 (TLS) or 465 (SSL)
        use_tls=_parse_bool(_get_env("EMAIL_USE_TLS"), True),
        username=_get_env("EMAIL_USERNAME"),
        password=_get_env("EMAIL_PASSWORD"),  # app password if using Gmail
    )


def sendmail_params() -> SendmailParams:
    return SendmailParams(
        email=email_params(),
        command=_get_env("SENDMAIL_COMMAND") or shutil.which("sendmail"),
    )


_PROVIDER_PARAMS: Dict[str, Callable[[], Any]] = {
    "online": online_params,
    "ovh": ovh_params,
    "scaleway": scaleway_params,
}

_NOTIFIER_PARAMS: Dict[str, Callable[[], Any]] = {
    "simple-get": simple_params,
    "simple-post": simple_params,
    "simple-put": simple_params,
    "ifttt-webhook-json": ifttt_params,
    "ifttt-webhook-values": ifttt_params,
    "email-smtp": smtp_params,
    "email-sendmail": sendmail_params,
}


def provider_params(name: str) -> Any:
    if name not in PROVIDERS:
        raise unknown_handler("provider", name, sorted(PROVIDERS))
    return _PROVIDER_PARAMS[name]()


def notifier_params(name: str) -> Any:
    if name not in NOTIFIERS:
        raise unknown_handler("notifier", name, sorted(NOTIFIERS))
    return _NOTIFIER_PARAMS[name]()


__all__ = [
    "LOG_LEVEL",
    "ovh_params",
    "online_params",
    "scaleway_params",
    "simple_params",
    "ifttt_params",
    "email_params",
    "smtp_params",
    "sendmail_params",
    "provider_params",
    "notifier_params",
]
