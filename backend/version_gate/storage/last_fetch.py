from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import Engine, Float, String, select
from sqlalchemy.orm import Mapped, mapped_column

from version_gate.db.session import Base, make_session_factory
from version_gate.utils.clock import from_epoch, to_epoch

_log = logging.getLogger(__name__)

DEFAULT_KEY = 'version_gate.last_fetch'


class GateState(Base):
    __tablename__ = 'version_gate_state'
    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    # Epoch seconds (UTC); SQLite DateTime drops tzinfo.
    last_fetch_at: Mapped[float | None] = mapped_column(Float, nullable=True)


class InMemoryLastFetchStore:
    def __init__(self, initial: Optional[datetime] = None) -> None:
        self._value = initial

    def get(self) -> Optional[datetime]:
        return self._value

    def set(self, timestamp: datetime) -> None:
        self._value = timestamp


class SqlLastFetchStore:
    """Persists the last successful fetch time in a key/value table."""

    def __init__(self, engine: Engine, key: str = DEFAULT_KEY) -> None:
        self.key = key
        Base.metadata.create_all(engine, tables=[GateState.__table__])
        self._session_factory = make_session_factory(engine)

    def get(self) -> Optional[datetime]:
        with self._session_factory() as db:
            value = db.execute(select(GateState.last_fetch_at).where(GateState.key == self.key)).scalar_one_or_none()
        if value is None:
            return None
        return from_epoch(value)

    def set(self, timestamp: datetime) -> None:
        with self._session_factory() as db:
            row = db.get(GateState, self.key)
            if row is None:
                row = GateState(key=self.key)
                db.add(row)
            row.last_fetch_at = to_epoch(timestamp)
            db.commit()
        _log.debug("stored last fetch key=%s at=%s", self.key, timestamp.isoformat())
