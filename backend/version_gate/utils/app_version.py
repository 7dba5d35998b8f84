from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

_log = logging.getLogger(__name__)

DEFAULT_FALLBACK = "0.0.0"


class StaticVersionSource:
    """Fixed version string, e.g. from configuration or tests."""

    def __init__(self, version_string: str) -> None:
        self._version = version_string

    def current_version_string(self) -> str:
        return self._version


class PackageVersionSource:
    """Reads the running app's version from installed distribution metadata.

    Falls back to ``fallback`` when the distribution is not installed or
    reports a blank version.
    """

    def __init__(self, distribution: str, fallback: str = DEFAULT_FALLBACK) -> None:
        self.distribution = distribution
        self.fallback = fallback

    def current_version_string(self) -> str:
        try:
            value = version(self.distribution)
        except PackageNotFoundError:
            _log.debug("distribution %s not installed; using fallback %s", self.distribution, self.fallback)
            return self.fallback
        if value is None or not value.strip():
            return self.fallback
        return value.strip()
