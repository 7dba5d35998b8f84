from __future__ import annotations


class VersionFetchError(Exception):
    """Base class for failures while retrieving a version descriptor."""


class TransportError(VersionFetchError):
    """Network unreachable, connection reset, timeout."""


class BadStatusError(VersionFetchError):
    def __init__(self, status_code: int, url: str | None = None):
        self.status_code = status_code
        self.url = url
        where = f" from {url}" if url else ""
        super().__init__(f"unexpected HTTP status {status_code}{where}")


class DecodeError(VersionFetchError):
    """Payload was not valid JSON or did not match the descriptor schema."""
