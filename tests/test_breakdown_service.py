"""
tests/test_breakdown_service.py — Per-Counterparty Breakdown Tests
===================================================================

Uses an in-memory SQLite database via the shared conftest fixtures.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from debtcollector.engine.results import CounterpartySummary, DebtTotal
from debtcollector.services import breakdown_service as bd
from debtcollector.services.mutation_service import apply_payment, record_debt, settle

G1 = "100"
G2 = "200"
ALICE, BOB, CAROL, DAVE = "1", "2", "3", "4"


@pytest.fixture
def engine(db_engine):
    return db_engine


def _debt(engine, creditor, debtor, amount, guild=G1, description="test"):
    return record_debt(engine, guild, creditor, debtor, amount, description)


# ===========================================================================
# debts_by_creditor / credits_by_debtor
# ===========================================================================
class TestDebtsByCreditor:
    def test_groups_and_sorts_by_amount(self, engine):
        _debt(engine, ALICE, BOB, 10)
        _debt(engine, CAROL, BOB, 40)
        _debt(engine, ALICE, BOB, 5)
        _debt(engine, DAVE, BOB, 25)

        rows = bd.debts_by_creditor(engine, G1, BOB)
        assert rows == [
            CounterpartySummary(CAROL, Decimal("40.00"), 1),
            CounterpartySummary(DAVE, Decimal("25.00"), 1),
            CounterpartySummary(ALICE, Decimal("15.00"), 2),
        ]

    def test_scoped_to_guild(self, engine):
        _debt(engine, ALICE, BOB, 10, guild=G1)
        _debt(engine, CAROL, BOB, 40, guild=G2)

        rows = bd.debts_by_creditor(engine, G1, BOB)
        assert [row.counterparty_id for row in rows] == [ALICE]

    def test_none_guild_spans_all(self, engine):
        _debt(engine, ALICE, BOB, 10, guild=G1)
        _debt(engine, CAROL, BOB, 40, guild=G2)

        rows = bd.debts_by_creditor(engine, None, BOB)
        assert [row.counterparty_id for row in rows] == [CAROL, ALICE]

    def test_settled_rows_excluded(self, engine):
        tx = _debt(engine, ALICE, BOB, 10)
        settle(engine, ALICE, tx.id)
        assert bd.debts_by_creditor(engine, G1, BOB) == []

    def test_equal_totals_order_by_counterparty(self, engine):
        _debt(engine, DAVE, BOB, 10)
        _debt(engine, ALICE, BOB, 10)

        rows = bd.debts_by_creditor(engine, G1, BOB)
        assert [row.counterparty_id for row in rows] == [ALICE, DAVE]


class TestCreditsByDebtor:
    def test_groups_by_debtor(self, engine):
        _debt(engine, ALICE, BOB, 10)
        _debt(engine, ALICE, CAROL, 30)
        _debt(engine, ALICE, BOB, 7.25)
        _debt(engine, DAVE, BOB, 99)  # not Alice's

        rows = bd.credits_by_debtor(engine, G1, ALICE)
        assert rows == [
            CounterpartySummary(CAROL, Decimal("30.00"), 1),
            CounterpartySummary(BOB, Decimal("17.25"), 2),
        ]

    def test_partial_payment_reduces_breakdown(self, engine):
        tx = _debt(engine, ALICE, BOB, 50)
        apply_payment(engine, ALICE, tx.id, 20)

        (row,) = bd.credits_by_debtor(engine, G1, ALICE)
        assert row.total_amount == Decimal("30.00")
        assert row.debt_count == 1


# ===========================================================================
# Per-pair listings
# ===========================================================================
class TestTransactionDetails:
    def test_total_and_newest_first(self, engine):
        first = _debt(engine, ALICE, BOB, 10, description="lunch")
        second = _debt(engine, ALICE, BOB, 20, description="cinema", guild=G2)
        _debt(engine, ALICE, CAROL, 99)

        details = bd.transaction_details(engine, ALICE, BOB)
        assert details.total == DebtTotal(Decimal("30.00"), 2)
        assert [tx.id for tx in details.transactions] == [second.id, first.id]
        assert details.transactions[0].description == "cinema"

    def test_empty_pair(self, engine):
        details = bd.transaction_details(engine, ALICE, BOB)
        assert details.total.debt_count == 0
        assert details.transactions == []

    def test_settled_rows_excluded(self, engine):
        tx = _debt(engine, ALICE, BOB, 10)
        settle(engine, ALICE, tx.id)
        assert bd.transaction_details(engine, ALICE, BOB).transactions == []


class TestAllUnsettledBetween:
    def test_recording_order(self, engine):
        ids = [_debt(engine, ALICE, BOB, n).id for n in (5, 15, 10)]

        rows = bd.all_unsettled_between(engine, ALICE, BOB)
        assert [row.id for row in rows] == ids
        assert [row.amount for row in rows] == [
            Decimal("5.00"), Decimal("15.00"), Decimal("10.00"),
        ]

    def test_rows_are_usable_after_session_closes(self, engine):
        _debt(engine, ALICE, BOB, 5, description="coffee")

        (row,) = bd.all_unsettled_between(engine, ALICE, BOB)
        assert row.description == "coffee"
        assert row.is_settled is False
