"""Normalized inventory data shared by providers, the store and notifiers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ServerOffering:
    id: str
    label: str
    available: bool


@dataclass(frozen=True)
class CheckResult:
    """Available subset of a requested list of offering ids.

    ``available_ids`` keeps the order of ``requested_ids``; notification
    payloads and fingerprints both depend on it.
    """

    provider_name: str
    requested_ids: Tuple[str, ...] = ()
    available_ids: Tuple[str, ...] = ()

    @classmethod
    def dummy(cls) -> "CheckResult":
        servers = ("foo_server", "bar_server", "baz_server")
        return cls(provider_name="dummy_provider", requested_ids=servers, available_ids=servers)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "provider_name": self.provider_name,
            "available_servers": list(self.available_ids),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), separators=(",", ":"))

    def __str__(self) -> str:
        lines = [f"Report of available server types for {self.provider_name} :", ""]
        if not self.available_ids:
            lines.append("No server available for the selected types !")
        else:
            lines.extend(f"- {server}" for server in self.available_ids)
        return "\n".join(lines) + "\n"


__all__ = ["ServerOffering", "CheckResult"]
