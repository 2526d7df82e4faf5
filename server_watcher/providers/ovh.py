"""OVH dedicated servers.

The availabilities endpoint lists every server reference with one entry per
datacenter.  Exclusions are passed to the API and also applied locally.
Datacenter codes (``rbx``, ``gra``...) and country codes (``fr``, ``ca``...)
are matched as two unrelated lists: excluding ``fr`` does not exclude
``rbx``.  That is how the upstream API behaves, so both have to be listed to
drop a French datacenter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from ..models import ServerOffering
from .base import Provider

logger = logging.getLogger(__name__)

OVH_URL = "https://api.ovh.com/1.0/dedicated/server/datacenter/availabilities"

_UNAVAILABLE = ("unavailable", "unknown")


@dataclass(frozen=True)
class OvhParams:
    excluded_datacenters: Tuple[str, ...] = ()
    excluded_countries: Tuple[str, ...] = ()

    @property
    def excluded(self) -> Tuple[str, ...]:
        return (*self.excluded_datacenters, *self.excluded_countries)


class Ovh(Provider):
    name = "ovh"

    def __init__(self, params: OvhParams, session: Optional[requests.Session] = None) -> None:
        super().__init__(session)
        self.params = params

    def _query(self) -> Dict[str, str]:
        excluded = self.params.excluded
        if not excluded:
            return {"excludeDatacenters": "false"}
        return {"excludeDatacenters": "true", "datacenters": ",".join(excluded)}

    def fetch(self) -> Any:
        return self._with_session(lambda s: self._get_json(s, OVH_URL, params=self._query()))

    def _is_orderable(self, entry: Dict[str, Any]) -> bool:
        code = entry["datacenter"]
        if code in self.params.excluded_datacenters or code in self.params.excluded_countries:
            return False
        return entry["availability"] not in _UNAVAILABLE

    def normalize(self, raw: Any) -> List[ServerOffering]:
        # The same reference shows up once per memory/storage variant.
        merged: Dict[str, Dict[str, Any]] = {}
        for info in raw:
            server = str(info["server"])
            entry = merged.setdefault(
                server,
                {
                    "memory": info.get("memory") or "N/A",
                    "storage": info.get("storage") or "N/A",
                    "datacenters": [],
                    "available": False,
                },
            )
            for dc in info["datacenters"]:
                if dc["datacenter"] not in entry["datacenters"]:
                    entry["datacenters"].append(dc["datacenter"])
                if self._is_orderable(dc):
                    entry["available"] = True

        return [
            ServerOffering(
                id=server,
                label=f"{e['memory']} {e['storage']} @{','.join(e['datacenters'])}",
                available=e["available"],
            )
            for server, e in merged.items()
        ]
