from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from version_gate.gate.comparator import derive_status
from version_gate.gate.interval import interval_seconds_for, should_refresh
from version_gate.gate.protocols import (
    ChangeListener,
    Clock,
    ErrorSink,
    Fetcher,
    LastFetchStore,
    LocalVersionSource,
    StatusCalculator,
)
from version_gate.models.descriptor import VersionDescriptor
from version_gate.models.status import GateStatus, RecommendedUpdate, UpToDate
from version_gate.tasks.single_flight import SingleFlightGate
from version_gate.utils.clock import utc_now

_log = logging.getLogger(__name__)


def log_error_sink(exc: BaseException) -> None:
    _log.warning("version gate refresh failed: %s: %s", exc.__class__.__name__, exc)


class VersionGateController:
    """Owns the version gate state for one UI session.

    Call ``refresh()`` on launch and ``refresh_if_needed()`` when the app
    returns to the foreground. Concurrent refreshes share a single fetch.
    Any failure fails open: status becomes ``UpToDate`` and the error goes to
    the error sink instead of the caller.

    State lives on one event loop and is only mutated by synchronous code
    between awaits, so no locking is needed.
    """

    def __init__(
        self,
        url: str,
        *,
        fetcher: Fetcher,
        version_source: LocalVersionSource,
        last_fetch_store: LastFetchStore,
        clock: Clock = utc_now,
        error_sink: ErrorSink | None = None,
        status_calculator: StatusCalculator = derive_status,
        refresh_interval_hours: int = 3,
        show_loading_on_refresh: bool = False,
    ):
        if refresh_interval_hours < 0:
            raise ValueError("refresh_interval_hours must be >= 0")
        self._url = url
        self._fetcher = fetcher
        self._version_source = version_source
        self._last_fetch_store = last_fetch_store
        self._clock = clock
        self._error_sink = error_sink or log_error_sink
        self._status_calculator = status_calculator
        self.refresh_interval_hours = refresh_interval_hours
        self.show_loading_on_refresh = show_loading_on_refresh

        self._descriptor: Optional[VersionDescriptor] = None
        self._status: Optional[GateStatus] = None
        self._is_loading = False
        self._gate: SingleFlightGate[None] = SingleFlightGate()
        self._listeners: List[ChangeListener] = []

    # --- observable state ---------------------------------------------
    @property
    def url(self) -> str:
        return self._url

    @property
    def status(self) -> Optional[GateStatus]:
        return self._status

    @property
    def descriptor(self) -> Optional[VersionDescriptor]:
        return self._descriptor

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def refresh_in_flight(self) -> bool:
        return self._gate.has_in_flight

    def on_change(self, cb: ChangeListener) -> None:
        self._listeners.append(cb)

    def _emit(self, field: str, value: object) -> None:
        for cb in list(self._listeners):
            try:
                cb(field, value)
            except Exception:
                _log.exception("change listener failed for field=%s", field)

    def _set_loading(self, value: bool) -> None:
        if self._is_loading == value:
            return
        self._is_loading = value
        self._emit('is_loading', value)

    def _set_status(self, value: GateStatus) -> None:
        if self._status == value:
            return
        _log.info("version gate status %s -> %s", _kind(self._status), _kind(value))
        self._status = value
        self._emit('status', value)

    def _set_descriptor(self, value: VersionDescriptor) -> None:
        if self._descriptor == value:
            return
        self._descriptor = value
        self._emit('descriptor', value)

    # --- operations ---------------------------------------------------
    async def refresh(self) -> None:
        """Fetch and re-derive the gate status, joining any refresh in flight."""
        if not self._gate.has_in_flight and (self._status is None or self.show_loading_on_refresh):
            self._set_loading(True)
        if self._gate.has_in_flight:
            _log.debug("refresh already in flight; joining")
        task = self._gate.run_or_join(self._perform_refresh)
        # Shielded so a cancelled waiter never cancels the shared fetch.
        await asyncio.shield(task)

    async def refresh_if_needed(self) -> bool:
        """Refresh only when the refresh interval has elapsed.

        Returns True when a refresh was started or joined.
        """
        try:
            last_fetch = self._last_fetch_store.get()
            due = should_refresh(self._clock(), last_fetch, interval_seconds_for(self.refresh_interval_hours))
        except Exception as exc:
            # Unreadable timestamp counts as never fetched.
            self._report(exc)
            due = True
        if not due:
            _log.debug("skipping refresh; last fetch at %s within %sh", last_fetch, self.refresh_interval_hours)
            return False
        await self.refresh()
        return True

    def dismiss_recommendation(self) -> bool:
        """Dismiss a recommended update for this session without a fetch.

        Required updates and end-of-life cannot be dismissed.
        """
        if not isinstance(self._status, RecommendedUpdate):
            return False
        self._set_status(UpToDate())
        return True

    async def _perform_refresh(self) -> None:
        _log.debug("refreshing version gate from %s", self._url)
        try:
            descriptor = await self._fetcher.fetch(self._url)
            status = self._status_calculator(descriptor, self._version_source.current_version_string())
            self._last_fetch_store.set(self._clock())
            self._set_descriptor(descriptor)
            self._set_status(status)
        except Exception as exc:
            self._report(exc)
            # Fail open, even over a stricter prior status.
            self._set_status(UpToDate())
        finally:
            self._set_loading(False)

    def _report(self, exc: Exception) -> None:
        try:
            self._error_sink(exc)
        except Exception:
            _log.exception("error sink raised while reporting %r", exc)


def _kind(status: Optional[GateStatus]) -> str:
    return status.kind.value if status is not None else 'none'
