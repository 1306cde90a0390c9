"""SQLAlchemy ORM model for persisted signals — one row per live Signal."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Float, Index, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import DateTime

from signal_scanner.db.base import Base


class SignalRow(Base):
    __tablename__ = "signals"
    __table_args__ = (Index("ix_signals_instrument_category", "instrument", "category"),)

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    instrument: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    direction: Mapped[str] = mapped_column(Text, nullable=False)
    entry: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    stop_loss: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    take_profit: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    confidence: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
