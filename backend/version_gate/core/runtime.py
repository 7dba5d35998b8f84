from __future__ import annotations

"""Process-wide wiring of the version gate controller from settings."""

import logging
from typing import Optional

from version_gate.clients.http import HttpVersionFetcher
from version_gate.core.config import Settings, settings as default_settings
from version_gate.db.session import make_engine
from version_gate.gate.controller import VersionGateController
from version_gate.gate.protocols import LocalVersionSource
from version_gate.storage.last_fetch import SqlLastFetchStore
from version_gate.utils.app_version import PackageVersionSource, StaticVersionSource

_log = logging.getLogger(__name__)

_controller: Optional[VersionGateController] = None
_fetcher: Optional[HttpVersionFetcher] = None


def version_source_for(cfg: Settings) -> LocalVersionSource:
    if cfg.app_version:
        return StaticVersionSource(cfg.app_version)
    return PackageVersionSource(cfg.app_distribution)


def build_controller(cfg: Settings | None = None) -> VersionGateController:
    """Create (or replace) the process-wide controller."""
    global _controller, _fetcher

    cfg = cfg or default_settings
    _fetcher = HttpVersionFetcher(timeout=cfg.http_timeout)
    store = SqlLastFetchStore(make_engine(cfg.database_url))
    _controller = VersionGateController(
        cfg.gate_url,
        fetcher=_fetcher,
        version_source=version_source_for(cfg),
        last_fetch_store=store,
        refresh_interval_hours=cfg.refresh_interval_hours,
        show_loading_on_refresh=cfg.show_loading_on_refresh,
    )
    _log.info(
        "version gate configured url=%s interval=%sh show_loading_on_refresh=%s",
        cfg.gate_url,
        cfg.refresh_interval_hours,
        cfg.show_loading_on_refresh,
    )
    return _controller


def get_controller() -> VersionGateController:
    if _controller is None:
        return build_controller()
    return _controller


async def shutdown() -> None:
    global _controller, _fetcher
    if _fetcher is not None:
        await _fetcher.aclose()
    _fetcher = None
    _controller = None
