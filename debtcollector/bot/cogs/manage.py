"""
debtcollector.bot.cogs.manage — Settling & Paying Down Debts
=============================================================

Slash commands for creditors:
- /transactions — paged list of open debts someone owes you
- /settle — mark one of them fully paid
- /pay — record a partial payment against one of them
- /delete-debt — write one off (kept in history as settled)

Every mutation is followed by a fresh read of the pair's balance; the
reply always reflects what is in the ledger *after* the change.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from debtcollector.bot.core import handle_app_command_error, send_reply
from debtcollector.constants import NOT_FOUND_OR_FORBIDDEN, SELF_DEBT_MESSAGE, preview
from debtcollector.database.engine import run_db
from debtcollector.engine.amounts import normalize_amount
from debtcollector.engine.pagination import paginate
from debtcollector.services.aggregation_service import pair_total
from debtcollector.services.breakdown_service import all_unsettled_between
from debtcollector.services.embeds import (
    build_transactions_embed,
    mention,
    money,
    total_sentence,
)
from debtcollector.services.mutation_service import apply_payment, force_close, settle

if TYPE_CHECKING:
    from debtcollector.bot.core import DebtCollectorBot
    from debtcollector.database.models import Transaction

logger = logging.getLogger(__name__)


class Manage(commands.Cog, name="Manage"):
    """Creditor-side management of open transactions."""

    def __init__(self, bot: DebtCollectorBot) -> None:
        self.bot = bot

    @property
    def symbol(self) -> str:
        return self.bot.cfg.currency_symbol

    async def cog_app_command_error(
        self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        await handle_app_command_error(interaction, error)

    async def _remaining_text(self, creditor_id: str, debtor_id: str) -> str:
        """Fresh balance line for the pair, read after a mutation."""
        remaining = await run_db(pair_total, self.bot.engine, creditor_id, debtor_id)
        if remaining.debt_count == 0:
            return (
                f"{mention(debtor_id)} has paid off all their debts to "
                f"{mention(creditor_id)}."
            )
        return f"{mention(debtor_id)} still owes you {total_sentence(remaining, self.symbol)}."

    # -------------------------------------------------------------------
    # /transactions
    # -------------------------------------------------------------------
    @app_commands.command(
        name="transactions",
        description="Show all open transactions with a user",
    )
    @app_commands.describe(debtor="Who owes you?", page="Page number (default 1)")
    async def transactions(
        self,
        interaction: discord.Interaction,
        debtor: discord.User,
        page: app_commands.Range[int, 1] = 1,
    ) -> None:
        user_id = str(interaction.user.id)
        debtor_id = str(debtor.id)
        if user_id == debtor_id:
            await send_reply(interaction, SELF_DEBT_MESSAGE, ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True)
        rows = await run_db(all_unsettled_between, self.bot.engine, user_id, debtor_id)
        if not rows:
            await send_reply(interaction, f"{mention(debtor_id)} owes you nothing", ephemeral=True)
            return

        total = await run_db(pair_total, self.bot.engine, user_id, debtor_id)
        current = paginate(rows, page - 1, self.bot.cfg.transactions_per_page)
        embed = build_transactions_embed(current, debtor_id, total, self.symbol)
        await send_reply(interaction, embed=embed, ephemeral=True)

    # -------------------------------------------------------------------
    # /settle
    # -------------------------------------------------------------------
    @app_commands.command(name="settle", description="Mark a transaction as fully paid")
    @app_commands.describe(transaction_id="The #id shown by /transactions")
    async def settle_cmd(self, interaction: discord.Interaction, transaction_id: int) -> None:
        user_id = str(interaction.user.id)
        tx = await run_db(settle, self.bot.engine, user_id, transaction_id)
        if tx is None:
            await send_reply(interaction, NOT_FOUND_OR_FORBIDDEN, ephemeral=True)
            return
        remaining = await self._remaining_text(user_id, tx.debtor_id)
        await send_reply(
            interaction,
            f"✅ Transaction `#{tx.id}` settled ('{preview(tx.description)}'). "
            f"{remaining}",
        )

    # -------------------------------------------------------------------
    # /pay
    # -------------------------------------------------------------------
    @app_commands.command(name="pay", description="Record a partial payment on a transaction")
    @app_commands.describe(
        debtor="Who made the payment?",
        transaction_id="The #id shown by /transactions",
        amount="How much they paid",
    )
    async def pay(
        self,
        interaction: discord.Interaction,
        debtor: discord.User,
        transaction_id: int,
        amount: app_commands.Range[float, 0.01],
    ) -> None:
        user_id = str(interaction.user.id)
        debtor_id = str(debtor.id)
        if user_id == debtor_id:
            await send_reply(interaction, SELF_DEBT_MESSAGE, ephemeral=True)
            return

        open_rows = await run_db(all_unsettled_between, self.bot.engine, user_id, debtor_id)
        target: Transaction | None = next(
            (row for row in open_rows if row.id == transaction_id), None
        )
        if target is None:
            await send_reply(interaction, NOT_FOUND_OR_FORBIDDEN, ephemeral=True)
            return

        payment = normalize_amount(amount)
        if payment > target.amount:
            await send_reply(
                interaction,
                f"Payment amount ({money(payment, self.symbol)}) cannot exceed the "
                f"debt amount ({money(target.amount, self.symbol)}).",
                ephemeral=True,
            )
            return

        tx = await run_db(apply_payment, self.bot.engine, user_id, transaction_id, payment)
        if tx is None:
            # Settled or reassigned between the lookup and the update.
            await send_reply(interaction, NOT_FOUND_OR_FORBIDDEN, ephemeral=True)
            return

        if tx.is_settled:
            headline = (
                f"✅ Payment processed! {mention(debtor_id)} paid "
                f"{money(payment, self.symbol)} and fully settled `#{tx.id}`."
            )
        else:
            headline = (
                f"✅ Partial payment processed! {mention(debtor_id)} paid "
                f"{money(payment, self.symbol)}. Remaining on `#{tx.id}`: "
                f"{money(tx.amount, self.symbol)}."
            )
        remaining = await self._remaining_text(user_id, debtor_id)
        await send_reply(interaction, f"{headline} {remaining}")

    # -------------------------------------------------------------------
    # /delete-debt
    # -------------------------------------------------------------------
    @app_commands.command(
        name="delete-debt",
        description="Write off a transaction (kept in history as settled)",
    )
    @app_commands.describe(transaction_id="The #id shown by /transactions")
    async def delete_debt(self, interaction: discord.Interaction, transaction_id: int) -> None:
        user_id = str(interaction.user.id)
        tx = await run_db(force_close, self.bot.engine, user_id, transaction_id)
        if tx is None:
            await send_reply(interaction, NOT_FOUND_OR_FORBIDDEN, ephemeral=True)
            return
        await send_reply(
            interaction,
            f"\U0001f5d1️ Transaction `#{tx.id}` with {mention(tx.debtor_id)} written off.",
            ephemeral=True,
        )


async def setup(bot: DebtCollectorBot) -> None:
    await bot.add_cog(Manage(bot))
