"""
debtcollector.services.embeds — Discord embed builders
=======================================================

All embed construction lives here so the cogs only need to supply ledger
results — no layout concerns.  Amounts are formatted at this boundary and
nowhere earlier.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import discord

from debtcollector.constants import (
    DIVIDER,
    placement_badge,
    placement_label,
    pluralize,
)
from debtcollector.engine.amounts import ZERO, format_for_display

if TYPE_CHECKING:
    from debtcollector.database.models import Transaction
    from debtcollector.engine.pagination import Page
    from debtcollector.engine.results import (
        CounterpartySummary,
        DebtorRanking,
        DebtTotal,
    )


def mention(user_id: str) -> str:
    return f"<@{user_id}>"


def money(amount, symbol: str = "$") -> str:
    """``Decimal("1234.5") → "$1,234.50"``."""
    return f"{symbol}{format_for_display(amount)}"


def transaction_count_text(count: int) -> str:
    return f"{count} {pluralize('transaction', count)}"


def total_sentence(total: DebtTotal, symbol: str = "$") -> str:
    """``"$75.50 from 2 transactions"``, or just ``"$0.00"`` when empty."""
    text = money(total.total_amount, symbol)
    if total.debt_count > 0:
        text += f" from {transaction_count_text(total.debt_count)}"
    return text


# ---------------------------------------------------------------------------
# /top-debtors
# ---------------------------------------------------------------------------
def build_leaderboard_embed(
    rankings: Sequence[DebtorRanking],
    limit: int,
    symbol: str = "$",
) -> discord.Embed:
    """Server debt leaderboard: podium entries get a medal and two lines."""
    if not rankings:
        return discord.Embed(
            title="\U0001f389 No outstanding debts found!",
            description="Everyone in this server is debt-free! \U0001f91d",
            color=discord.Color.green(),
        )

    lines: list[str] = []
    for position, row in enumerate(rankings, 1):
        badge = placement_badge(position)
        label = placement_label(position)
        amount_line = (
            f"└─ **{money(row.total_amount, symbol)}** "
            f"({transaction_count_text(row.debt_count)})"
        )
        if badge:
            lines.append(f"{badge} {label}")
            lines.append(f"└─ {mention(row.debtor_id)}")
        else:
            lines.append(f"{label} • {mention(row.debtor_id)}")
        lines.append(amount_line)
        lines.append("")

    total_debt = sum((row.total_amount for row in rankings), ZERO)
    total_count = sum(row.debt_count for row in rankings)
    shown = f"{len(rankings)}"
    if len(rankings) == limit:
        shown += f" (limit: {limit})"

    lines.append(DIVIDER)
    lines.append(f"\U0001f4ca **Total Server Debt:** {money(total_debt, symbol)}")
    lines.append(f"\U0001f4c8 **Total Transactions:** {total_count}")
    lines.append(f"\U0001f465 **Debtors Shown:** {shown}")

    return discord.Embed(
        title="\U0001f4b8 Server Debt Leaderboard \U0001f4b8",
        description="\n".join(lines),
        color=discord.Color.gold(),
    )


# ---------------------------------------------------------------------------
# /view-debt and /view-owed
# ---------------------------------------------------------------------------
def build_breakdown_embed(
    title: str,
    rows: Sequence[CounterpartySummary],
    symbol: str = "$",
) -> discord.Embed:
    """One line per counterparty, then the grand total."""
    lines = [
        f"• {mention(row.counterparty_id)}: {money(row.total_amount, symbol)} "
        f"(from {transaction_count_text(row.debt_count)})"
        for row in rows
    ]
    total_amount = sum((row.total_amount for row in rows), ZERO)
    total_count = sum(row.debt_count for row in rows)
    lines.append("")
    lines.append(
        f"**Total: {money(total_amount, symbol)}** from "
        f"{transaction_count_text(total_count)}"
    )
    return discord.Embed(
        title=title,
        description="\n".join(lines),
        color=discord.Color.orange(),
    )


# ---------------------------------------------------------------------------
# /transactions
# ---------------------------------------------------------------------------
def transaction_line(number: int, tx: Transaction, symbol: str = "$") -> str:
    date = tx.created_at.strftime("%Y-%m-%d") if tx.created_at else "?"
    description = tx.description or "*No description*"
    return (
        f"**{number}.** {money(tx.amount, symbol)} - {description} "
        f"*({date})* `#{tx.id}`"
    )


def build_transactions_embed(
    page: Page[Transaction],
    debtor_id: str,
    total: DebtTotal,
    symbol: str = "$",
) -> discord.Embed:
    """One page of open transactions between the caller and *debtor_id*."""
    if page.items:
        description = "\n".join(
            transaction_line(page.start_index + i + 1, tx, symbol)
            for i, tx in enumerate(page.items)
        )
    else:
        description = "No unsettled transactions."

    embed = discord.Embed(
        title="Open transactions",
        description=f"Owed by {mention(debtor_id)}\n\n{description}",
        color=discord.Color.blurple(),
    )
    embed.add_field(name="Outstanding", value=total_sentence(total, symbol), inline=False)
    embed.set_footer(
        text=(
            f"Page {page.page + 1} of {page.total_pages} | "
            "Use /settle, /pay or /delete-debt with a transaction #id"
        )
    )
    return embed
