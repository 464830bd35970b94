"""
debtcollector.services.mutation_service — Recording & Settling Debts
=====================================================================

Every write to the ledger goes through here.

State machine per transaction::

    Open (is_settled=False, amount>0) ──settle / pay-off / write-off──▶ Settled (amount=0)

Settled is terminal.  Rows are never deleted; "deleting" a debt is a
forced settlement so the history survives.

Ownership and atomicity
-----------------------
Only the creditor may touch a transaction.  That rule is part of the
UPDATE's WHERE clause (``id = :id AND creditor_id = :actor``), not a
separate check, so:

* a missing row and somebody else's row both come back as ``None`` — the
  caller cannot tell them apart;
* two partial payments racing on the same row are serialized by the
  database; each sees the other's result, and the balance can never be
  driven below zero because the clamp lives in the same statement.

Nothing here retries.  A database error propagates; re-running a payment
blindly could apply it twice.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Update, case, func, literal, update

from debtcollector.database.engine import get_session
from debtcollector.database.models import AMOUNT_TYPE, Transaction
from debtcollector.engine.amounts import ZERO, AmountLike, normalize_amount
from debtcollector.engine.errors import InvalidAmountError, SelfDebtError

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------
def record_debt(
    engine: Engine,
    guild_id: str,
    creditor_id: str,
    debtor_id: str,
    amount: AmountLike,
    description: str | None,
    *,
    currency: str = "USD",
) -> Transaction:
    """Insert a new open transaction: *debtor_id* owes *creditor_id*.

    Raises
    ------
    SelfDebtError
        If creditor and debtor are the same user.
    InvalidAmountError
        If *amount* is not a number or is not positive after rounding.
    """
    if creditor_id == debtor_id:
        raise SelfDebtError(creditor_id)

    normalized = normalize_amount(amount)
    if normalized <= ZERO:
        raise InvalidAmountError(f"Debt amount must be positive, got {amount!r}")

    row = Transaction(
        creditor_id=creditor_id,
        debtor_id=debtor_id,
        amount=normalized,
        description=description,
        guild_id=guild_id,
        currency=currency,
        is_settled=False,
    )
    with get_session(engine) as session:
        session.add(row)
        session.flush()
        session.refresh(row)
        session.expunge(row)

    logger.info(
        "Recorded debt #%d: %s owes %s %s in guild %s",
        row.id, debtor_id, creditor_id, normalized, guild_id,
    )
    return row


# ---------------------------------------------------------------------------
# Conditional update plumbing
# ---------------------------------------------------------------------------
def _owned_by(acting_user_id: str, transaction_id: int) -> Update:
    """UPDATE scoped to one transaction *and* its creditor."""
    return update(Transaction).where(
        Transaction.id == transaction_id,
        Transaction.creditor_id == acting_user_id,
    )


def _execute(
    engine: Engine,
    stmt: Update,
    *,
    action: str,
    acting_user_id: str,
    transaction_id: int,
) -> Transaction | None:
    """Run *stmt* with RETURNING and hand back the detached post-update row."""
    stmt = stmt.returning(Transaction).execution_options(synchronize_session=False)
    with get_session(engine) as session:
        row = session.execute(stmt).scalars().first()
        if row is not None:
            session.expunge(row)

    if row is None:
        logger.info(
            "%s rejected: transaction #%s not found or not owned by %s",
            action, transaction_id, acting_user_id,
        )
        return None

    logger.info(
        "%s transaction #%d by %s → amount=%s settled=%s",
        action, row.id, acting_user_id, row.amount, row.is_settled,
    )
    return row


def _closed_values() -> dict:
    """SET clause that zeroes a transaction and marks it settled.

    ``settled_at`` keeps its first value, so closing twice is harmless.
    """
    now = literal(datetime.now(UTC), DateTime(timezone=True))
    return {
        "amount": literal(ZERO, AMOUNT_TYPE),
        "is_settled": True,
        "settled_at": case(
            (Transaction.settled_at.is_(None), now),
            else_=Transaction.settled_at,
        ),
    }


# ---------------------------------------------------------------------------
# Settle / write off
# ---------------------------------------------------------------------------
def settle(engine: Engine, acting_user_id: str, transaction_id: int) -> Transaction | None:
    """Mark a transaction fully paid, whatever is left on it.

    Returns the settled row, or ``None`` if it doesn't exist or
    *acting_user_id* isn't its creditor.
    """
    stmt = _owned_by(acting_user_id, transaction_id).values(**_closed_values())
    return _execute(
        engine, stmt,
        action="Settle", acting_user_id=acting_user_id, transaction_id=transaction_id,
    )


def force_close(engine: Engine, acting_user_id: str, transaction_id: int) -> Transaction | None:
    """Write a debt off ("delete" it) without removing the row.

    Same UPDATE as :func:`settle`; only the logged action differs, so the
    audit log tells a write-off from a payment in full.
    """
    stmt = _owned_by(acting_user_id, transaction_id).values(**_closed_values())
    return _execute(
        engine, stmt,
        action="Force-close", acting_user_id=acting_user_id, transaction_id=transaction_id,
    )


# ---------------------------------------------------------------------------
# Partial payments
# ---------------------------------------------------------------------------
def adjust_amount(
    engine: Engine,
    acting_user_id: str,
    transaction_id: int,
    delta: AmountLike,
) -> Transaction | None:
    """Apply ``amount += delta`` to one of the acting user's open debts.

    The result is rounded to cents inside the statement.  At or below zero
    it is stored as exactly zero and settles the transaction in the same
    statement, however large the overpayment.
    Settled transactions are not matched; adjusting one returns ``None``.
    """
    delta = normalize_amount(delta)
    # Rounded in SQL: SQLite stores Numeric as REAL, so 1.10 - 1.00 - 0.10
    # would otherwise leave a positive remainder far below one cent.
    new_amount = func.round(
        Transaction.amount + literal(delta, AMOUNT_TYPE), 2, type_=AMOUNT_TYPE
    )
    reaches_zero = new_amount <= 0
    now = literal(datetime.now(UTC), DateTime(timezone=True))

    stmt = (
        _owned_by(acting_user_id, transaction_id)
        .where(Transaction.is_settled.is_(False))
        .values(
            amount=case((reaches_zero, literal(ZERO, AMOUNT_TYPE)), else_=new_amount),
            is_settled=case((reaches_zero, True), else_=False),
            settled_at=case((reaches_zero, now), else_=None),
        )
    )
    return _execute(
        engine, stmt,
        action="Adjust", acting_user_id=acting_user_id, transaction_id=transaction_id,
    )


def apply_payment(
    engine: Engine,
    acting_user_id: str,
    transaction_id: int,
    payment_amount: AmountLike,
) -> Transaction | None:
    """Record a payment of *payment_amount* against a transaction.

    Callers should check *payment_amount* against the outstanding balance
    first; an overpayment is silently absorbed by the clamp to zero.

    Raises
    ------
    InvalidAmountError
        If *payment_amount* is not a number or is not positive.
    """
    payment = normalize_amount(payment_amount)
    if payment <= ZERO:
        raise InvalidAmountError(
            f"Payment amount must be positive, got {payment_amount!r}"
        )
    return adjust_amount(engine, acting_user_id, transaction_id, -payment)
