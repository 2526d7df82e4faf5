"""Hosting providers.

A provider fetches its vendor's raw catalog and normalizes it into
:class:`~server_watcher.models.ServerOffering` items, applying that vendor's
own rule for deciding whether an item can be ordered right now.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from ..errors import unknown_handler
from .base import Provider
from .online import Online, OnlineParams
from .ovh import Ovh, OvhParams
from .scaleway import Scaleway, ScalewayParams

PROVIDERS: Dict[str, type] = {
    Online.name: Online,
    Ovh.name: Ovh,
    Scaleway.name: Scaleway,
}


def available_providers() -> List[str]:
    return sorted(PROVIDERS)


def build_provider(name: str, params: Any, session: Optional[requests.Session] = None) -> Provider:
    try:
        cls = PROVIDERS[name]
    except KeyError:
        raise unknown_handler("provider", name, available_providers()) from None
    return cls(params, session=session)


__all__ = [
    "Provider",
    "Online",
    "OnlineParams",
    "Ovh",
    "OvhParams",
    "Scaleway",
    "ScalewayParams",
    "PROVIDERS",
    "available_providers",
    "build_provider",
]
