"""
debtcollector.api.routes.ledger — Read-only ledger endpoints
=============================================================

Mirrors the bot's query commands for dashboards and scripts.  Nothing
here mutates the ledger; settling stays a creditor action inside Discord.
Amounts are serialized as two-decimal strings.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy import Engine

from debtcollector.api.deps import get_engine
from debtcollector.engine.results import CounterpartySummary, DebtTotal
from debtcollector.services import aggregation_service, breakdown_service

router = APIRouter(tags=["ledger"])


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------
class TotalOut(BaseModel):
    total_amount: Decimal
    debt_count: int

    @classmethod
    def of(cls, total: DebtTotal) -> TotalOut:
        return cls(total_amount=total.total_amount, debt_count=total.debt_count)


class CounterpartyOut(BaseModel):
    user_id: str
    total_amount: Decimal
    debt_count: int

    @classmethod
    def of(cls, row: CounterpartySummary) -> CounterpartyOut:
        return cls(
            user_id=row.counterparty_id,
            total_amount=row.total_amount,
            debt_count=row.debt_count,
        )


class DebtorRankOut(BaseModel):
    rank: int
    debtor_id: str
    total_amount: Decimal
    debt_count: int
    creditor_ids: list[str]


class TransactionOut(BaseModel):
    id: int
    amount: Decimal
    description: str | None
    guild_id: str
    currency: str
    created_at: datetime


class PairDetailsOut(BaseModel):
    creditor_id: str
    debtor_id: str
    total: TotalOut
    transactions: list[TransactionOut]


# ---------------------------------------------------------------------------
# Per-user totals
# ---------------------------------------------------------------------------
@router.get("/users/{user_id}/debt", response_model=TotalOut)
def get_user_debt(
    user_id: str,
    guild_id: str | None = Query(None),
    engine: Engine = Depends(get_engine),
):
    """What *user_id* owes; omit ``guild_id`` for every server."""
    return TotalOut.of(aggregation_service.total_debt(engine, user_id, guild_id))


@router.get("/users/{user_id}/credit", response_model=TotalOut)
def get_user_credit(
    user_id: str,
    guild_id: str | None = Query(None),
    engine: Engine = Depends(get_engine),
):
    """What *user_id* is owed; omit ``guild_id`` for every server."""
    return TotalOut.of(aggregation_service.total_credit(engine, user_id, guild_id))


# ---------------------------------------------------------------------------
# Breakdowns
# ---------------------------------------------------------------------------
@router.get("/users/{user_id}/debts-by-creditor", response_model=list[CounterpartyOut])
def get_debts_by_creditor(
    user_id: str,
    guild_id: str | None = Query(None),
    engine: Engine = Depends(get_engine),
):
    rows = breakdown_service.debts_by_creditor(engine, guild_id, user_id)
    return [CounterpartyOut.of(row) for row in rows]


@router.get("/users/{user_id}/credits-by-debtor", response_model=list[CounterpartyOut])
def get_credits_by_debtor(
    user_id: str,
    guild_id: str | None = Query(None),
    engine: Engine = Depends(get_engine),
):
    rows = breakdown_service.credits_by_debtor(engine, guild_id, user_id)
    return [CounterpartyOut.of(row) for row in rows]


@router.get("/pairs/{creditor_id}/{debtor_id}", response_model=PairDetailsOut)
def get_pair_details(
    creditor_id: str,
    debtor_id: str,
    engine: Engine = Depends(get_engine),
):
    """Itemized open debts from *debtor_id* to *creditor_id*, newest first."""
    details = breakdown_service.transaction_details(engine, creditor_id, debtor_id)
    return PairDetailsOut(
        creditor_id=creditor_id,
        debtor_id=debtor_id,
        total=TotalOut.of(details.total),
        transactions=[
            TransactionOut(
                id=tx.id,
                amount=tx.amount,
                description=tx.description,
                guild_id=tx.guild_id,
                currency=tx.currency,
                created_at=tx.created_at,
            )
            for tx in details.transactions
        ],
    )


# ---------------------------------------------------------------------------
# Leaderboard
# ---------------------------------------------------------------------------
@router.get("/guilds/{guild_id}/top-debtors", response_model=list[DebtorRankOut])
def get_top_debtors(
    guild_id: str,
    limit: int = Query(10, ge=1, le=100),
    engine: Engine = Depends(get_engine),
):
    rankings = aggregation_service.top_debtors(engine, guild_id, limit)
    return [
        DebtorRankOut(
            rank=i,
            debtor_id=row.debtor_id,
            total_amount=row.total_amount,
            debt_count=row.debt_count,
            creditor_ids=row.creditor_ids,
        )
        for i, row in enumerate(rankings, 1)
    ]
