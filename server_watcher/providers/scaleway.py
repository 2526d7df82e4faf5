"""Scaleway baremetal offers.

Offers are listed per zone with an explicit ``stock`` field.  Only the zones
configured by the caller are queried, and an offer is available when any of
them has it enabled and not ``empty``.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from ..errors import ConfigError, missing_parameter
from ..models import ServerOffering
from .base import Provider

logger = logging.getLogger(__name__)

SCALEWAY_OFFERS_URL = "https://api.scaleway.com/baremetal/v1/zones/{zone}/offers"


@dataclass(frozen=True)
class ScalewayParams:
    secret_key: Optional[str] = None
    zones: Tuple[str, ...] = ()


def _offer_available(offer: Dict[str, Any]) -> bool:
    return bool(offer["enable"]) and offer["stock"] != "empty"


def _gigabytes(items: List[Dict[str, Any]]) -> int:
    return sum(int(i["capacity"]) for i in items) // 1_000_000_000


class Scaleway(Provider):
    name = "scaleway"

    def __init__(self, params: ScalewayParams, session: Optional[requests.Session] = None) -> None:
        super().__init__(session)
        key = (params.secret_key or "").strip()
        if not key:
            raise missing_parameter(self.name, "SCALEWAY_SECRET_KEY")
        try:
            uuid.UUID(key)
        except ValueError:
            raise ConfigError("scaleway: malformed SCALEWAY_SECRET_KEY, expected a UUID") from None
        if not params.zones:
            raise missing_parameter(self.name, "SCALEWAY_BAREMETAL_ZONES", "e.g. fr-par-2,nl-ams-1")
        self._secret_key = key
        self.zones = params.zones

    def fetch(self) -> Any:
        """Return ``{zone: raw zone response}`` for every configured zone."""
        headers = {"X-Auth-Token": self._secret_key}

        def _fetch_all(session: requests.Session) -> Dict[str, Any]:
            return {
                zone: self._get_json(session, SCALEWAY_OFFERS_URL.format(zone=zone), headers=headers)
                for zone in self.zones
            }

        return self._with_session(_fetch_all)

    def normalize(self, raw: Any) -> List[ServerOffering]:
        merged: Dict[str, ServerOffering] = {}
        for zone in self.zones:
            if zone not in raw:
                continue
            for offer in raw[zone]["offers"]:
                offer_id = str(offer["id"])
                available = _offer_available(offer)
                known = merged.get(offer_id)
                if known is None:
                    memory = _gigabytes(offer.get("memories") or [])
                    storage = _gigabytes(offer.get("disks") or [])
                    merged[offer_id] = ServerOffering(
                        id=offer_id,
                        label=f"{offer['name']} {memory}G {storage}G",
                        available=available,
                    )
                elif available and not known.available:
                    logger.debug("scaleway: %s available in %s", offer_id, zone)
                    merged[offer_id] = ServerOffering(id=offer_id, label=known.label, available=True)
        return list(merged.values())
