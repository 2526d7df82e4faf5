"""Workflows composing providers, the fingerprint store and notifiers.

A ``check`` runs ``Fetching -> Comparing -> Notifying -> Persisting`` once and
stops.  Any failure aborts the remaining steps.  Since persisting comes
last, a failed delivery leaves the previous fingerprint in place and the next
run notifies again.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from .models import CheckResult, ServerOffering
from .notifiers import Notifier
from .providers import Provider
from .storage import FingerprintStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckOutcome:
    result: CheckResult
    changed: bool
    notified: bool
    fingerprint: Optional[str] = None


def inventory(provider: Provider, *, include_unavailable: bool = False) -> List[ServerOffering]:
    offerings = provider.list_offerings()
    if include_unavailable:
        return offerings
    return [o for o in offerings if o.available]


def evaluate(provider: Provider, requested_ids: Sequence[str]) -> CheckResult:
    """Intersect the provider's available offerings with ``requested_ids``.

    Unknown ids are not an error; they are just never available.
    """
    available = {o.id for o in provider.list_offerings() if o.available}
    requested = tuple(requested_ids)
    return CheckResult(
        provider_name=provider.name,
        requested_ids=requested,
        available_ids=tuple(i for i in requested if i in available),
    )


def check(
    provider: Provider,
    requested_ids: Sequence[str],
    *,
    notifier: Optional[Notifier] = None,
    storage_dir: Optional[Path | str] = None,
    out: Optional[TextIO] = None,
) -> CheckOutcome:
    out = out if out is not None else sys.stdout

    store: Optional[FingerprintStore] = None
    if storage_dir is not None:
        store = FingerprintStore(storage_dir)
        # Before any network call: no point fetching what we cannot record.
        store.ensure_ready()

    logger.info("Checking %s for %s", provider.name, ", ".join(requested_ids))
    result = evaluate(provider, requested_ids)

    fingerprint: Optional[str] = None
    if store is None:
        changed = True
    else:
        changed, fingerprint = store.has_changed(result)
        logger.info("%s: result %s since last run", provider.name, "changed" if changed else "unchanged")

    for server in result.available_ids:
        out.write(f"{server}\n")
    out.flush()

    notified = False
    if notifier is not None and changed:
        logger.info("Notifying through %s", notifier.name)
        notifier.send(result)
        notified = True
    elif notifier is not None:
        logger.info("No change, %s not notified", notifier.name)

    if store is not None and changed:
        store.save(result.provider_name, result.requested_ids, fingerprint)

    return CheckOutcome(result=result, changed=changed, notified=notified, fingerprint=fingerprint)


def send_test_notification(notifier: Notifier) -> None:
    logger.info("Sending test notification through %s", notifier.name)
    notifier.test()


__all__ = ["CheckOutcome", "inventory", "evaluate", "check", "send_test_notification"]
