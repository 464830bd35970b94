"""
debtcollector.services.aggregation_service — Totals & Leaderboard
==================================================================

Read-only sums and counts over **unsettled** transactions:

* ``total_debt``  — what a user owes (optionally within one guild)
* ``total_credit`` — what a user is owed (optionally within one guild)
* ``pair_total``  — what one specific debtor owes one specific creditor,
  across every guild
* ``top_debtors`` — the guild leaderboard

Each query has a fixed filter/group/sort shape.  Settled rows never
contribute, so settling a debt is immediately reflected in every total.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from debtcollector.database.models import Transaction
from debtcollector.engine.amounts import quantize_amount
from debtcollector.engine.results import DebtorRanking, DebtTotal

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Engine

logger = logging.getLogger(__name__)

DEFAULT_LEADERBOARD_SIZE = 10


# ---------------------------------------------------------------------------
# Shared query pieces
# ---------------------------------------------------------------------------
def _sum_count() -> Select:
    """``SELECT COALESCE(SUM(amount), 0), COUNT(id)`` over open transactions."""
    return select(
        func.coalesce(func.sum(Transaction.amount), 0).label("total_amount"),
        func.count(Transaction.id).label("debt_count"),
    ).where(Transaction.is_settled.is_(False))


def _fetch_total(engine: Engine, *criteria: ColumnElement[bool]) -> DebtTotal:
    with Session(engine) as session:
        row = session.execute(_sum_count().where(*criteria)).one()
    return DebtTotal(
        total_amount=quantize_amount(row.total_amount),
        debt_count=int(row.debt_count),
    )


# ---------------------------------------------------------------------------
# Per-user totals
# ---------------------------------------------------------------------------
def total_debt(engine: Engine, user_id: str, guild_id: str | None = None) -> DebtTotal:
    """Everything *user_id* still owes, in *guild_id* or across all guilds."""
    criteria = [Transaction.debtor_id == user_id]
    if guild_id is not None:
        criteria.append(Transaction.guild_id == guild_id)
    return _fetch_total(engine, *criteria)


def total_credit(engine: Engine, user_id: str, guild_id: str | None = None) -> DebtTotal:
    """Everything *user_id* is still owed, in *guild_id* or across all guilds."""
    criteria = [Transaction.creditor_id == user_id]
    if guild_id is not None:
        criteria.append(Transaction.guild_id == guild_id)
    return _fetch_total(engine, *criteria)


def pair_total(engine: Engine, creditor_id: str, debtor_id: str) -> DebtTotal:
    """How much *debtor_id* owes *creditor_id*.

    Guild-agnostic: a relationship between two people spans every server
    they share.
    """
    return _fetch_total(
        engine,
        Transaction.creditor_id == creditor_id,
        Transaction.debtor_id == debtor_id,
    )


# ---------------------------------------------------------------------------
# Leaderboard
# ---------------------------------------------------------------------------
def top_debtors(
    engine: Engine, guild_id: str, limit: int = DEFAULT_LEADERBOARD_SIZE
) -> list[DebtorRanking]:
    """Rank the guild's debtors by outstanding total, largest first.

    Ties on amount are broken by ``debtor_id`` ascending so the order is
    stable between calls.  Each row carries the distinct creditors that
    debtor owes within the guild (sorted).
    """
    if limit < 1:
        return []

    total_col = func.sum(Transaction.amount).label("total_amount")
    with Session(engine) as session:
        ranked = session.execute(
            select(
                Transaction.debtor_id,
                total_col,
                func.count(Transaction.id).label("debt_count"),
            )
            .where(
                Transaction.guild_id == guild_id,
                Transaction.is_settled.is_(False),
            )
            .group_by(Transaction.debtor_id)
            .order_by(total_col.desc(), Transaction.debtor_id.asc())
            .limit(limit)
        ).all()

        if not ranked:
            return []

        debtor_ids = [row.debtor_id for row in ranked]
        pairs = session.execute(
            select(Transaction.debtor_id, Transaction.creditor_id)
            .where(
                Transaction.guild_id == guild_id,
                Transaction.is_settled.is_(False),
                Transaction.debtor_id.in_(debtor_ids),
            )
            .distinct()
        ).all()

    creditors: dict[str, set[str]] = {debtor_id: set() for debtor_id in debtor_ids}
    for debtor_id, creditor_id in pairs:
        creditors[debtor_id].add(creditor_id)

    return [
        DebtorRanking(
            debtor_id=row.debtor_id,
            total_amount=quantize_amount(row.total_amount),
            debt_count=int(row.debt_count),
            creditor_ids=sorted(creditors[row.debtor_id]),
        )
        for row in ranked
    ]
