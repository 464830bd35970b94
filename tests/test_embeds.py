"""
tests/test_embeds.py — Embed Builder & Text Helper Tests
=========================================================

Pure presentation: no database, no Discord connection.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import discord

from debtcollector.constants import (
    DIVIDER,
    ordinal,
    placement_badge,
    placement_label,
    pluralize,
    preview,
)
from debtcollector.engine.pagination import paginate
from debtcollector.engine.results import CounterpartySummary, DebtorRanking, DebtTotal
from debtcollector.services.embeds import (
    build_breakdown_embed,
    build_leaderboard_embed,
    build_transactions_embed,
    money,
    total_sentence,
    transaction_line,
)


def _tx(tx_id: int, amount: str, description: str | None = "dinner"):
    return SimpleNamespace(
        id=tx_id,
        amount=Decimal(amount),
        description=description,
        created_at=datetime(2024, 3, 1, 12, 0),
    )


# ===========================================================================
# Text helpers
# ===========================================================================
class TestTextHelpers:
    def test_pluralize(self):
        assert pluralize("transaction", 1) == "transaction"
        assert pluralize("transaction", 0) == "transactions"
        assert pluralize("transaction", 2) == "transactions"

    def test_ordinal(self):
        assert [ordinal(n) for n in (1, 2, 3, 4, 11, 12, 13, 21, 22, 112)] == [
            "1st", "2nd", "3rd", "4th", "11th", "12th", "13th", "21st", "22nd", "112th",
        ]

    def test_podium(self):
        assert placement_badge(1) == "\U0001f947"
        assert placement_badge(4) == ""
        assert placement_label(2) == "**2nd Place!**"
        assert placement_label(5) == "5th Place"

    def test_preview(self):
        assert preview(None) == "No description"
        assert preview("short") == "short"
        assert preview("x" * 40) == "x" * 30 + "..."

    def test_money(self):
        assert money(Decimal("1234.5")) == "$1,234.50"
        assert money(Decimal("3"), "€") == "€3.00"

    def test_total_sentence(self):
        assert total_sentence(DebtTotal(Decimal("75.50"), 2)) == "$75.50 from 2 transactions"
        assert total_sentence(DebtTotal(Decimal("5"), 1)) == "$5.00 from 1 transaction"
        assert total_sentence(DebtTotal()) == "$0.00"


# ===========================================================================
# Leaderboard
# ===========================================================================
class TestLeaderboardEmbed:
    def test_empty(self):
        embed = build_leaderboard_embed([], 10)
        assert "No outstanding debts" in embed.title
        assert embed.color == discord.Color.green()

    def test_podium_and_summary(self):
        rankings = [
            DebtorRanking("2", Decimal("80"), 2, ["1"]),
            DebtorRanking("3", Decimal("50"), 1, ["1"]),
            DebtorRanking("4", Decimal("20"), 1, ["1"]),
            DebtorRanking("5", Decimal("10.5"), 3, ["1", "6"]),
        ]
        embed = build_leaderboard_embed(rankings, 10)
        text = embed.description

        assert embed.title == "\U0001f4b8 Server Debt Leaderboard \U0001f4b8"
        assert "\U0001f947 **1st Place!**" in text
        assert "└─ <@2>" in text
        assert "4th Place • <@5>" in text
        assert "**$10.50** (3 transactions)" in text
        assert DIVIDER in text
        assert "**Total Server Debt:** $160.50" in text
        assert "**Total Transactions:** 7" in text
        assert "**Debtors Shown:** 4" in text
        assert "(limit:" not in text

    def test_full_board_mentions_limit(self):
        rankings = [DebtorRanking(str(n), Decimal("1"), 1) for n in range(2)]
        embed = build_leaderboard_embed(rankings, 2)
        assert "**Debtors Shown:** 2 (limit: 2)" in embed.description


# ===========================================================================
# Breakdown
# ===========================================================================
class TestBreakdownEmbed:
    def test_lines_and_total(self):
        rows = [
            CounterpartySummary("7", Decimal("40"), 1),
            CounterpartySummary("8", Decimal("15"), 2),
        ]
        embed = build_breakdown_embed("Bob owes money to:", rows)

        assert embed.title == "Bob owes money to:"
        lines = embed.description.split("\n")
        assert lines[0] == "• <@7>: $40.00 (from 1 transaction)"
        assert lines[1] == "• <@8>: $15.00 (from 2 transactions)"
        assert lines[-1] == "**Total: $55.00** from 3 transactions"


# ===========================================================================
# Transactions page
# ===========================================================================
class TestTransactionsEmbed:
    def test_transaction_line(self):
        line = transaction_line(3, _tx(17, "12.5"))
        assert line == "**3.** $12.50 - dinner *(2024-03-01)* `#17`"

    def test_missing_description(self):
        assert "*No description*" in transaction_line(1, _tx(1, "1", None))

    def test_numbering_continues_across_pages(self):
        rows = [_tx(n, "1") for n in range(1, 8)]
        page = paginate(rows, 1, 5)
        embed = build_transactions_embed(page, "2", DebtTotal(Decimal("7"), 7))

        assert "**6.**" in embed.description
        assert "**7.**" in embed.description
        assert "**1.**" not in embed.description
        assert embed.footer.text.startswith("Page 2 of 2")
        assert embed.fields[0].value == "$7.00 from 7 transactions"
