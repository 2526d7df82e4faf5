"""
Dedicated server availability watcher.

This package contains modules for querying hosting providers' dedicated
server catalogs, remembering the last result of each check on disk, and
notifying over HTTP, IFTTT or email when that result changes.  See
README.md for details.
"""

__all__ = [
    "cli",
    "config",
    "errors",
    "models",
    "notifiers",
    "providers",
    "runner",
    "storage",
    "utils",
]
