"""
debtcollector.database.models — SQLAlchemy 2.0 Data Models
===========================================================

Tables:
- transactions — Append-only debt ledger.  One row per recorded debt;
  settlement and partial payments update the row in place, but rows are
  never deleted.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Discord snowflakes are stored as opaque strings; the ledger only ever
# compares them for equality.
ID_LENGTH = 32

# Numeric(12, 2): up to 9,999,999,999.99 with cent precision.
AMOUNT_TYPE = Numeric(12, 2)


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all DebtCollector ORM models."""


# ---------------------------------------------------------------------------
# Transactions — the ledger
# ---------------------------------------------------------------------------
class Transaction(Base):
    """A single debt: *debtor_id* owes *creditor_id* ``amount``.

    ``amount`` is the *outstanding* balance.  It only ever moves toward
    zero, and reaching zero settles the row in the same UPDATE.
    """
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    creditor_id: Mapped[str] = mapped_column(String(ID_LENGTH), nullable=False)
    debtor_id: Mapped[str] = mapped_column(String(ID_LENGTH), nullable=False)
    amount: Mapped[Decimal] = mapped_column(AMOUNT_TYPE, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    guild_id: Mapped[str] = mapped_column(String(ID_LENGTH), nullable=False)
    currency: Mapped[str] = mapped_column(String(8), nullable=False, default="USD")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    is_settled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    settled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )

    __table_args__ = (
        CheckConstraint("creditor_id <> debtor_id", name="ck_transactions_not_self"),
        CheckConstraint("amount >= 0", name="ck_transactions_amount_non_negative"),
        # user-to-user lookups (/owes-me, /i-owe, /transactions)
        Index("ix_transactions_creditor_debtor", "creditor_id", "debtor_id"),
        # per-user totals
        Index("ix_transactions_creditor_settled", "creditor_id", "is_settled"),
        Index("ix_transactions_debtor_settled", "debtor_id", "is_settled"),
        # guild leaderboards
        Index("ix_transactions_guild_settled", "guild_id", "is_settled"),
        Index("ix_transactions_created_at", "created_at"),
        Index("ix_transactions_settled", "is_settled"),
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction id={self.id} {self.debtor_id}→{self.creditor_id} "
            f"amount={self.amount} settled={self.is_settled}>"
        )
