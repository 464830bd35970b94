"""
debtcollector.engine.errors — Ledger Exceptions
================================================

Validation failures are raised *before* any database call.  A mutation that
targets a missing transaction, or one owned by somebody else, is not an
exception: it returns ``None`` so both cases look identical to the caller.
Database errors are SQLAlchemy's own and propagate untouched.
"""

from __future__ import annotations

__all__ = [
    "InvalidAmountError",
    "LedgerError",
    "LedgerValidationError",
    "SelfDebtError",
]


class LedgerError(Exception):
    """Base class for every error the ledger raises itself."""


class LedgerValidationError(LedgerError, ValueError):
    """Input rejected before touching the store."""


class SelfDebtError(LedgerValidationError):
    """Creditor and debtor are the same user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"Self-debt is not allowed (user {user_id}).")
        self.user_id = user_id


class InvalidAmountError(LedgerValidationError):
    """Amount is NaN, non-numeric, or not positive where it must be."""
