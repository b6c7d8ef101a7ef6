"""Error taxonomy shared by the browser core and its collaborators.

Every error carries a short user-facing message; the runtime shows it in
the status row. Only ``ConfigError`` is fatal, and only at startup.
"""

from __future__ import annotations


class ThunarsError(Exception):
    """Base class for all recoverable and fatal browser errors."""


class AccessError(ThunarsError):
    """A directory could not be read (permissions, removed, not a directory)."""


class ProviderError(ThunarsError):
    """An external search or jump provider failed or is not installed."""


class LaunchError(ThunarsError):
    """The external open command could not be started or reported failure."""


class ConfigError(ThunarsError):
    """The configuration file or its key table is malformed."""


__all__ = [
    "ThunarsError",
    "AccessError",
    "ProviderError",
    "LaunchError",
    "ConfigError",
]
