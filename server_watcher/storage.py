"""File-backed fingerprint store.

Each ``check`` query (a provider plus the ids requested, in order) owns one
small file holding the SHA-256 digest of the last available-server list.
Comparing that digest with the current one is how a run decides whether a
notification is due, without keeping any process alive between runs.

The directory belongs to the caller: it is never created here, and its
files are never deleted.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple

from .errors import ConfigError, StoreError
from .models import CheckResult

logger = logging.getLogger(__name__)

_DIGEST_RE = re.compile(r"^[0-9a-f]{64}$")


def _json_sha256(value: Any) -> str:
    # Compact JSON escapes any character an id may contain, so element
    # boundaries stay unambiguous.
    data = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    digest = hashlib.sha256(data.encode("utf-8")).hexdigest()
    logger.debug("sha256(%s) -> %s", data, digest)
    return digest


def _discard(name: str) -> None:
    try:
        os.unlink(name)
    except FileNotFoundError:
        pass
    except OSError:
        logger.warning("Could not remove temporary file %s", name)


class FingerprintStore:
    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def ensure_ready(self) -> None:
        """Fail fast when the storage directory cannot be used at all."""
        path = self.directory
        if not path.exists():
            raise ConfigError(f"Storage directory does not exist: {path}")
        if not path.is_dir():
            raise ConfigError(f"Storage path is not a directory: {path}")
        if not os.access(path, os.R_OK | os.X_OK):
            raise ConfigError(f"Storage directory is not readable: {path}")

    @staticmethod
    def compute(result: CheckResult) -> str:
        return _json_sha256([result.provider_name, *result.available_ids])

    def path_for(self, provider_name: str, requested_ids: Sequence[str]) -> Path:
        key = _json_sha256(list(requested_ids))
        return self.directory / f"{provider_name}-{key}.sha256"

    def load(self, provider_name: str, requested_ids: Sequence[str]) -> Optional[str]:
        """Return the stored digest, or ``None`` when this query was never saved."""
        path = self.path_for(provider_name, requested_ids)
        try:
            content = path.read_text(encoding="ascii")
        except FileNotFoundError:
            logger.debug("No stored fingerprint at %s", path)
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(path, "cannot read stored fingerprint") from e

        digest = content.strip()
        if not _DIGEST_RE.match(digest):
            raise StoreError(path, "stored fingerprint is corrupt")
        logger.debug("Loaded fingerprint %s from %s", digest, path)
        return digest

    def save(self, provider_name: str, requested_ids: Sequence[str], fingerprint: str) -> None:
        """Replace the stored digest atomically.

        The digest goes to a temporary file in the same directory, which is then
        renamed over the state file, so an interrupted save leaves the previous
        digest in place.
        """
        path = self.path_for(provider_name, requested_ids)
        tmp_name: Optional[str] = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="ascii",
                dir=self.directory,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(fingerprint)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None:
                _discard(tmp_name)
            raise StoreError(path, "cannot write fingerprint") from e
        logger.debug("Saved fingerprint %s to %s", fingerprint, path)

    def has_changed(self, result: CheckResult) -> Tuple[bool, str]:
        """Compare ``result`` with the stored digest; return ``(changed, current)``."""
        current = self.compute(result)
        previous = self.load(result.provider_name, result.requested_ids)
        return previous is None or previous != current, current


__all__ = ["FingerprintStore"]
