"""Exception hierarchy for the glue layers around the placement core."""

from __future__ import annotations


class TrifieldError(Exception):
    """Base class for every error raised by trifield."""


class OptionsError(TrifieldError, ValueError):
    """Raised when placement options are inconsistent."""


class RegionError(TrifieldError, ValueError):
    """Raised when a permissible region cannot be built."""


class ConfigError(TrifieldError):
    """Raised when a run configuration file cannot be loaded."""


class ExportError(TrifieldError):
    """Raised when a level document cannot be read or written."""


__all__ = [
    "TrifieldError",
    "OptionsError",
    "RegionError",
    "ConfigError",
    "ExportError",
]
