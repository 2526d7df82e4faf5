"""Online.net / Dedibox.

The plans endpoint lists every product with a per-datacenter stock count.  A
product is available when any counted datacenter still has stock; with
``ONLINE_DATACENTERS`` set, only those datacenters are counted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from ..errors import missing_parameter
from ..models import ServerOffering
from .base import Provider

ONLINE_PLANS_URL = "https://api.online.net/api/v1/dedibox/plans"


@dataclass(frozen=True)
class OnlineParams:
    private_token: Optional[str] = None
    datacenters: Tuple[str, ...] = ()


def _squash(text: str) -> str:
    return "".join(str(text).split())


class Online(Provider):
    name = "online"

    def __init__(self, params: OnlineParams, session: Optional[requests.Session] = None) -> None:
        super().__init__(session)
        token = (params.private_token or "").strip()
        if not token:
            raise missing_parameter(self.name, "ONLINE_PRIVATE_TOKEN")
        self._token = token
        self.datacenters = params.datacenters

    def fetch(self) -> Any:
        headers = {"Authorization": f"Bearer {self._token}"}
        return self._with_session(lambda s: self._get_json(s, ONLINE_PLANS_URL, headers=headers))

    def _counted_stocks(self, product: Dict[str, Any]) -> List[Tuple[str, int]]:
        stocks = []
        for entry in product.get("stocks") or []:
            dc = entry["datacenter"]["name"]
            if self.datacenters and dc not in self.datacenters:
                continue
            stocks.append((dc, int(entry["stock"])))
        return stocks

    def normalize(self, raw: Any) -> List[ServerOffering]:
        offerings: List[ServerOffering] = []
        # {range name: {key: product}}
        for products in raw.values():
            for product in products.values():
                stocks = self._counted_stocks(product)
                specs = product.get("specs") or {}
                dcs = ",".join(dc for dc, _ in stocks) or "N/A"
                label = " ".join(
                    [
                        f"{product.get('slug') or 'N/A'}@{dcs}",
                        _squash(specs.get("cpu") or "N/A"),
                        _squash(specs.get("ram") or "N/A"),
                        _squash(specs.get("disks") or "N/A"),
                    ]
                )
                available = any(count > 0 for _, count in stocks)
                offerings.append(ServerOffering(id=str(product["id"]), label=label, available=available))
        return offerings
