from __future__ import annotations

"""Central configuration.

Values come from environment variables, optionally seeded from a
``config.env`` file so local development can keep endpoint overrides out of
shell profiles. Copy ``backend/config.sample.env`` to ``backend/config.env``.

Env vars:
  VERSION_GATE_URL                       - version descriptor endpoint
  VERSION_GATE_REFRESH_INTERVAL_HOURS    - foreground refresh interval (default 3)
  VERSION_GATE_SHOW_LOADING_ON_REFRESH   - show loading on background re-checks
  VERSION_GATE_HTTP_TIMEOUT              - fetch timeout in seconds
  VERSION_GATE_APP_DISTRIBUTION          - installed distribution whose version is checked
  VERSION_GATE_APP_VERSION               - fixed app version (overrides the distribution)
  VERSION_GATE_DATA_DIR                  - directory for writable data (created)
  VERSION_GATE_DB_PATH                   - explicit SQLite path (overrides DATA dir)
  VERSION_GATE_LOG_LEVEL                 - DEBUG, INFO, WARNING, ...
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

_log = logging.getLogger(__name__)

_DEFAULT_URL = 'https://example.com/version-gate.json'


def load_config_env() -> Path | None:
    """Load the first ``config.env`` found; explicit override wins."""
    candidates: list[Path] = []
    override = os.getenv('VERSION_GATE_CONFIG_FILE')
    if override:
        candidates.append(Path(override))
    candidates.append(Path.cwd() / 'config.env')
    candidates.append(Path.cwd() / 'backend' / 'config.env')
    for p in candidates:
        if p.exists():
            load_dotenv(str(p))
            _log.debug("loaded config from %s", p)
            return p
    return None


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _resolve_data_dir() -> Path:
    env_dir = os.getenv('VERSION_GATE_DATA_DIR')
    return Path(env_dir) if env_dir else Path.cwd() / 'data'


def _resolve_db_path(data_dir: Path) -> Path:
    db_path = os.getenv('VERSION_GATE_DB_PATH')
    if db_path:
        return Path(db_path)
    return data_dir / 'version_gate.db'


class Settings(BaseModel):
    app_name: str = 'Version Gate'
    api_v1_prefix: str = '/api/v1'
    gate_url: str = _DEFAULT_URL
    refresh_interval_hours: int = Field(default=3, ge=0)
    show_loading_on_refresh: bool = False
    http_timeout: float = Field(default=10.0, gt=0)
    # Distribution whose installed version is compared against the descriptor;
    # app_version, when set, takes precedence.
    app_distribution: str = 'version-gate'
    app_version: str | None = None
    data_dir: Path = Path('data')
    db_file: Path = Path('data') / 'version_gate.db'
    log_level: str = 'INFO'

    @property
    def database_url(self) -> str:
        return f'sqlite:///{self.db_file}'

    @classmethod
    def from_env(cls) -> 'Settings':
        data_dir = _resolve_data_dir()
        return cls(
            gate_url=os.getenv('VERSION_GATE_URL', _DEFAULT_URL),
            refresh_interval_hours=int(os.getenv('VERSION_GATE_REFRESH_INTERVAL_HOURS', '3')),
            show_loading_on_refresh=_env_flag('VERSION_GATE_SHOW_LOADING_ON_REFRESH'),
            http_timeout=float(os.getenv('VERSION_GATE_HTTP_TIMEOUT', '10')),
            app_distribution=os.getenv('VERSION_GATE_APP_DISTRIBUTION', 'version-gate'),
            app_version=os.getenv('VERSION_GATE_APP_VERSION') or None,
            data_dir=data_dir,
            db_file=_resolve_db_path(data_dir),
            log_level=os.getenv('VERSION_GATE_LOG_LEVEL', 'INFO'),
        )


load_config_env()
settings = Settings.from_env()
