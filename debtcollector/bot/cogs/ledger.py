"""
debtcollector.bot.cogs.ledger — Recording & Querying Debts
===========================================================

Slash commands:
- /add-debt — record that someone owes you
- /debt, /total-debt — what you owe (this server / everywhere)
- /owed, /total-owed — what you are owed (this server / everywhere)
- /i-owe, /owes-me — one specific relationship, across servers
- /top-debtors — server leaderboard
- /view-debt, /view-owed — per-person breakdown for any member
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from debtcollector.bot.core import handle_app_command_error, send_reply
from debtcollector.constants import SELF_DEBT_MESSAGE
from debtcollector.database.engine import run_db
from debtcollector.services.aggregation_service import (
    pair_total,
    top_debtors,
    total_credit,
    total_debt,
)
from debtcollector.services.breakdown_service import (
    credits_by_debtor,
    debts_by_creditor,
)
from debtcollector.services.embeds import (
    build_breakdown_embed,
    build_leaderboard_embed,
    mention,
    money,
    total_sentence,
)
from debtcollector.services.mutation_service import record_debt

if TYPE_CHECKING:
    from debtcollector.bot.core import DebtCollectorBot

logger = logging.getLogger(__name__)

# Hard ceiling for the slash-command option; the configured
# ``max_debt_amount`` is checked in the handler.
_AMOUNT_OPTION = app_commands.Range[float, 0.01, 100000.0]


class Ledger(commands.Cog, name="Ledger"):
    """Record debts and look up who owes whom."""

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

    # -------------------------------------------------------------------
    # /add-debt
    # -------------------------------------------------------------------
    @app_commands.command(name="add-debt", description="Add a debt that someone owes you")
    @app_commands.describe(
        debtor="Who owes you?",
        amount="Debt amount",
        description="What was the money for?",
    )
    @app_commands.guild_only()
    async def add_debt(
        self,
        interaction: discord.Interaction,
        debtor: discord.User,
        amount: _AMOUNT_OPTION,
        description: str,
    ) -> None:
        creditor_id = str(interaction.user.id)
        debtor_id = str(debtor.id)
        if creditor_id == debtor_id:
            await send_reply(interaction, SELF_DEBT_MESSAGE, ephemeral=True)
            return

        max_amount = self.bot.cfg.max_debt_amount
        if amount > max_amount:
            await send_reply(
                interaction,
                f"❌ Debts are limited to {money(max_amount, self.symbol)}.",
                ephemeral=True,
            )
            return

        tx = await run_db(
            record_debt,
            self.bot.engine,
            str(interaction.guild_id),
            creditor_id,
            debtor_id,
            amount,
            description,
            currency=self.bot.cfg.currency,
        )
        await send_reply(
            interaction,
            f"{mention(debtor_id)} now owes {mention(creditor_id)} "
            f"{money(tx.amount, self.symbol)} for \"{description}\"",
        )

    # -------------------------------------------------------------------
    # /debt and /total-debt
    # -------------------------------------------------------------------
    @app_commands.command(name="debt", description="The total debt you owe to others in this server")
    @app_commands.guild_only()
    async def debt(self, interaction: discord.Interaction) -> None:
        user_id = str(interaction.user.id)
        total = await run_db(total_debt, self.bot.engine, user_id, str(interaction.guild_id))
        await send_reply(
            interaction,
            f"{mention(user_id)} owes {total_sentence(total, self.symbol)} in this server",
        )

    @app_commands.command(
        name="total-debt",
        description="The total debt you owe to others across all servers",
    )
    async def total_debt_cmd(self, interaction: discord.Interaction) -> None:
        user_id = str(interaction.user.id)
        total = await run_db(total_debt, self.bot.engine, user_id, None)
        await send_reply(
            interaction,
            f"{mention(user_id)} owes others {total_sentence(total, self.symbol)}",
        )

    # -------------------------------------------------------------------
    # /owed and /total-owed
    # -------------------------------------------------------------------
    @app_commands.command(name="owed", description="The total you are owed by others in this server")
    @app_commands.guild_only()
    async def owed(self, interaction: discord.Interaction) -> None:
        user_id = str(interaction.user.id)
        total = await run_db(total_credit, self.bot.engine, user_id, str(interaction.guild_id))
        await send_reply(
            interaction,
            f"{mention(user_id)} is owed {total_sentence(total, self.symbol)} in this server",
        )

    @app_commands.command(
        name="total-owed",
        description="The total you are owed by others across all servers",
    )
    async def total_owed(self, interaction: discord.Interaction) -> None:
        user_id = str(interaction.user.id)
        total = await run_db(total_credit, self.bot.engine, user_id, None)
        await send_reply(
            interaction,
            f"{mention(user_id)} is owed {total_sentence(total, self.symbol)}",
        )

    # -------------------------------------------------------------------
    # /i-owe and /owes-me
    # -------------------------------------------------------------------
    @app_commands.command(name="i-owe", description="Check how much you owe someone")
    @app_commands.describe(creditor="Who do you owe?")
    async def i_owe(self, interaction: discord.Interaction, creditor: discord.User) -> None:
        user_id = str(interaction.user.id)
        creditor_id = str(creditor.id)
        if user_id == creditor_id:
            await send_reply(interaction, SELF_DEBT_MESSAGE, ephemeral=True)
            return
        total = await run_db(pair_total, self.bot.engine, creditor_id, user_id)
        await send_reply(
            interaction,
            f"You owe {mention(creditor_id)} {total_sentence(total, self.symbol)}",
            ephemeral=True,
        )

    @app_commands.command(name="owes-me", description="Check how much someone owes you")
    @app_commands.describe(debtor="Who owes you?")
    async def owes_me(self, interaction: discord.Interaction, debtor: discord.User) -> None:
        user_id = str(interaction.user.id)
        debtor_id = str(debtor.id)
        if user_id == debtor_id:
            await send_reply(interaction, SELF_DEBT_MESSAGE, ephemeral=True)
            return
        total = await run_db(pair_total, self.bot.engine, user_id, debtor_id)
        await send_reply(
            interaction,
            f"{mention(debtor_id)} owes you {total_sentence(total, self.symbol)}",
            ephemeral=True,
        )

    # -------------------------------------------------------------------
    # /top-debtors
    # -------------------------------------------------------------------
    @app_commands.command(name="top-debtors", description="Leaderboard of top debtors in this server")
    @app_commands.guild_only()
    async def top_debtors_cmd(self, interaction: discord.Interaction) -> None:
        limit = self.bot.cfg.leaderboard_size
        rankings = await run_db(
            top_debtors, self.bot.engine, str(interaction.guild_id), limit
        )
        embed = build_leaderboard_embed(rankings, limit, self.symbol)
        await send_reply(interaction, embed=embed)

    # -------------------------------------------------------------------
    # /view-debt and /view-owed
    # -------------------------------------------------------------------
    @app_commands.command(name="view-debt", description="View who a user owes money to in this server")
    @app_commands.describe(user="User to view debts for")
    @app_commands.guild_only()
    async def view_debt(self, interaction: discord.Interaction, user: discord.User) -> None:
        await interaction.response.defer()
        rows = await run_db(
            debts_by_creditor, self.bot.engine, str(interaction.guild_id), str(user.id)
        )
        if not rows:
            await send_reply(
                interaction,
                f"{user.display_name} doesn't owe anyone money in this server! \U0001f389",
            )
            return
        embed = build_breakdown_embed(
            f"{user.display_name} owes money to:", rows, self.symbol
        )
        await send_reply(interaction, embed=embed)

    @app_commands.command(name="view-owed", description="View who owes a user money in this server")
    @app_commands.describe(user="User to view what they are owed")
    @app_commands.guild_only()
    async def view_owed(self, interaction: discord.Interaction, user: discord.User) -> None:
        await interaction.response.defer()
        rows = await run_db(
            credits_by_debtor, self.bot.engine, str(interaction.guild_id), str(user.id)
        )
        if not rows:
            await send_reply(
                interaction,
                f"No one owes {user.display_name} money in this server! \U0001f4b8",
            )
            return
        embed = build_breakdown_embed(
            f"People who owe {user.display_name}:", rows, self.symbol
        )
        await send_reply(interaction, embed=embed)


async def setup(bot: DebtCollectorBot) -> None:
    await bot.add_cog(Ledger(bot))
