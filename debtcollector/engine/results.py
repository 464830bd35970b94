"""
debtcollector.engine.results — Typed Ledger Query Results
==========================================================

Plain dataclasses returned by the aggregation and breakdown services.
They carry raw :class:`~decimal.Decimal` amounts (already rounded to
cents); turning them into text is the presentation layer's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

from debtcollector.engine.amounts import ZERO

if TYPE_CHECKING:
    from debtcollector.database.models import Transaction

__all__ = [
    "CounterpartySummary",
    "DebtTotal",
    "DebtorRanking",
    "TransactionDetails",
]


@dataclass(frozen=True, slots=True)
class DebtTotal:
    """Sum and count of a set of unsettled transactions."""

    total_amount: Decimal = ZERO
    debt_count: int = 0


@dataclass(frozen=True, slots=True)
class CounterpartySummary:
    """One row of a breakdown: everything owed between a user and
    *counterparty_id*, in a single direction."""

    counterparty_id: str
    total_amount: Decimal
    debt_count: int


@dataclass(frozen=True, slots=True)
class DebtorRanking:
    """One leaderboard row for ``/top-debtors``."""

    debtor_id: str
    total_amount: Decimal
    debt_count: int
    creditor_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class TransactionDetails:
    """Pair total plus the itemized transactions behind it (newest first)."""

    total: DebtTotal
    transactions: list[Transaction] = field(default_factory=list)
