"""Signal persistence — mirror Signal models into the signals table."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timezone
from decimal import Decimal

from sqlalchemy import Engine, delete, select
from sqlalchemy.orm import Session, sessionmaker

from signal_scanner.db import Base, create_db_engine, create_session_factory
from signal_scanner.db.tables.signals import SignalRow
from signal_scanner.models import Signal


def _to_row(signal: Signal) -> SignalRow:
    return SignalRow(
        id=signal.id,
        instrument=signal.instrument,
        category=signal.category,
        direction=signal.direction,
        entry=signal.entry,
        stop_loss=signal.stop_loss,
        take_profit=signal.take_profit,
        confidence=signal.confidence,
        created_at=signal.created_at,
    )


def _from_row(row: SignalRow) -> Signal:
    created_at = row.created_at
    # SQLite drops the offset on the way back out; everything is stored as UTC.
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Signal(
        id=row.id,
        instrument=row.instrument,
        category=row.category,
        direction=row.direction,
        entry=Decimal(str(row.entry)),
        stop_loss=Decimal(str(row.stop_loss)),
        take_profit=Decimal(str(row.take_profit)),
        confidence=float(row.confidence),
        created_at=created_at,
    )


class SignalRepository:
    """Flat record store for signals. Methods raise on database errors."""

    def __init__(self, session_factory: sessionmaker[Session], engine: Engine | None = None) -> None:
        self._session_factory = session_factory
        self._engine = engine

    @classmethod
    def from_url(cls, url: str) -> SignalRepository:
        engine = create_db_engine(url)
        return cls(create_session_factory(engine), engine=engine)

    def create_schema(self) -> None:
        """Create the signals table if it does not exist."""
        if self._engine is None:
            raise RuntimeError("Repository has no engine — construct it with from_url()")
        Base.metadata.create_all(self._engine)

    def load_all(self) -> list[Signal]:
        with self._session_factory() as session:
            rows = session.execute(select(SignalRow).order_by(SignalRow.created_at)).scalars().all()
            return [_from_row(r) for r in rows]

    def insert(self, signal: Signal) -> None:
        with self._session_factory() as session:
            session.add(_to_row(signal))
            session.commit()

    def delete(self, ids: Iterable[str]) -> int:
        """Delete rows by id and return how many were removed."""
        ids = list(ids)
        if not ids:
            return 0
        with self._session_factory() as session:
            result = session.execute(delete(SignalRow).where(SignalRow.id.in_(ids)))
            session.commit()
            return result.rowcount or 0

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
