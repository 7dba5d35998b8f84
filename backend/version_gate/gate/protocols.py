"""Collaborator contracts consumed by the version gate controller.

The controller depends only on these shapes; concrete implementations live in
``version_gate.clients``, ``version_gate.storage`` and ``version_gate.utils``.
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Protocol, runtime_checkable

from version_gate.models.descriptor import VersionDescriptor
from version_gate.models.status import GateStatus


@runtime_checkable
class Fetcher(Protocol):
    async def fetch(self, url: str) -> VersionDescriptor:
        """Raise TransportError, BadStatusError or DecodeError on failure."""
        ...


@runtime_checkable
class LocalVersionSource(Protocol):
    def current_version_string(self) -> str: ...


@runtime_checkable
class LastFetchStore(Protocol):
    def get(self) -> Optional[datetime]: ...

    def set(self, timestamp: datetime) -> None: ...


Clock = Callable[[], datetime]

# Must not raise or block; used on the fail-open path.
ErrorSink = Callable[[BaseException], None]

StatusCalculator = Callable[[VersionDescriptor, str], GateStatus]

ChangeListener = Callable[[str, object], None]
