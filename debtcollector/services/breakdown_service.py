"""
debtcollector.services.breakdown_service — Per-Counterparty Breakdowns
=======================================================================

A single total answers "how much do I owe?"; a breakdown answers "who do
I owe, and how much each?".  Once a member can owe several people at
once, the breakdown is the view that matters, so every breakdown is
sorted by amount, largest first.

Also hosts the two per-pair listings used by ``/transactions``: the
itemized detail view and the raw backing list for paging and for picking
a transaction to settle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from debtcollector.database.models import Transaction
from debtcollector.engine.amounts import quantize_amount
from debtcollector.engine.results import CounterpartySummary, TransactionDetails
from debtcollector.services.aggregation_service import pair_total

if TYPE_CHECKING:
    from sqlalchemy import Engine
    from sqlalchemy.orm import InstrumentedAttribute


def _grouped(
    engine: Engine,
    guild_id: str | None,
    user_column: InstrumentedAttribute[str],
    counterparty_column: InstrumentedAttribute[str],
    user_id: str,
) -> list[CounterpartySummary]:
    """Group *user_id*'s open transactions by the other party."""
    total_col = func.sum(Transaction.amount).label("total_amount")
    stmt = (
        select(
            counterparty_column.label("counterparty_id"),
            total_col,
            func.count(Transaction.id).label("debt_count"),
        )
        .where(user_column == user_id, Transaction.is_settled.is_(False))
        .group_by(counterparty_column)
        .order_by(total_col.desc(), counterparty_column.asc())
    )
    if guild_id is not None:
        stmt = stmt.where(Transaction.guild_id == guild_id)

    with Session(engine) as session:
        rows = session.execute(stmt).all()

    return [
        CounterpartySummary(
            counterparty_id=row.counterparty_id,
            total_amount=quantize_amount(row.total_amount),
            debt_count=int(row.debt_count),
        )
        for row in rows
    ]


def debts_by_creditor(
    engine: Engine, guild_id: str | None, user_id: str
) -> list[CounterpartySummary]:
    """Who *user_id* owes money to, one row per creditor."""
    return _grouped(
        engine, guild_id, Transaction.debtor_id, Transaction.creditor_id, user_id
    )


def credits_by_debtor(
    engine: Engine, guild_id: str | None, user_id: str
) -> list[CounterpartySummary]:
    """Who owes *user_id* money, one row per debtor."""
    return _grouped(
        engine, guild_id, Transaction.creditor_id, Transaction.debtor_id, user_id
    )


def _unsettled_between(
    engine: Engine, creditor_id: str, debtor_id: str, *, newest_first: bool
) -> list[Transaction]:
    order = (
        (Transaction.created_at.desc(), Transaction.id.desc())
        if newest_first
        else (Transaction.created_at.asc(), Transaction.id.asc())
    )
    with Session(engine, expire_on_commit=False) as session:
        rows = list(session.scalars(
            select(Transaction)
            .where(
                Transaction.creditor_id == creditor_id,
                Transaction.debtor_id == debtor_id,
                Transaction.is_settled.is_(False),
            )
            .order_by(*order)
        ).all())
        session.expunge_all()
    return rows


def transaction_details(
    engine: Engine, creditor_id: str, debtor_id: str
) -> TransactionDetails:
    """Pair total plus every open transaction behind it, newest first."""
    return TransactionDetails(
        total=pair_total(engine, creditor_id, debtor_id),
        transactions=_unsettled_between(
            engine, creditor_id, debtor_id, newest_first=True
        ),
    )


def all_unsettled_between(
    engine: Engine, creditor_id: str, debtor_id: str
) -> list[Transaction]:
    """Raw open transactions for the pair, in the order they were recorded.

    Backing data for the paged ``/transactions`` view; row numbers shown to
    the user are positions in this list.
    """
    return _unsettled_between(engine, creditor_id, debtor_id, newest_first=False)
