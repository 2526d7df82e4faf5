"""Error taxonomy and exit codes.

Every failure that ends a run is a :class:`WatcherError`. The CLI prints
:meth:`WatcherError.format` and exits with :attr:`WatcherError.code`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class WatcherError(Exception):
    """Base class for all run-ending failures."""

    code: int = 1

    def __init__(self, short: str) -> None:
        super().__init__(short)
        self.short = short

    def format(self) -> str:
        lines = [f"ERROR [{self.code}]: {self.short}"]
        cause = self.__cause__
        while cause is not None:
            lines.append(f"  Caused by: {cause}")
            cause = cause.__cause__
        return "\n".join(lines) + "\n"


class ConfigError(WatcherError):
    """Missing or invalid parameter, unknown handler, unusable storage directory."""

    code = 2


class ProviderError(WatcherError):
    code = 3

    def __init__(self, vendor: str, cause: str) -> None:
        super().__init__(f"{vendor}: {cause}")
        self.vendor = vendor
        self.cause = cause


class StoreError(WatcherError):
    code = 4

    def __init__(self, path: Path, cause: str) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


class NotifierError(WatcherError):
    code = 5

    def __init__(self, channel: str, cause: str) -> None:
        super().__init__(f"{channel}: {cause}")
        self.channel = channel
        self.cause = cause


def unknown_handler(kind: str, name: str, known: list[str]) -> ConfigError:
    return ConfigError(f"Unknown {kind} `{name}` (known: {', '.join(known)})")


def missing_parameter(owner: str, name: str, hint: Optional[str] = None) -> ConfigError:
    msg = f"{owner}: required parameter `{name}` is not set"
    if hint:
        msg += f" ({hint})"
    return ConfigError(msg)


__all__ = [
    "WatcherError",
    "ConfigError",
    "ProviderError",
    "StoreError",
    "NotifierError",
    "unknown_handler",
    "missing_parameter",
]
