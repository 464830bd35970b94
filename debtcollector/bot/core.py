"""
debtcollector.bot.core — Bot Instance & Cog Loader
===================================================

Defines :class:`DebtCollectorBot`, a ``commands.Bot`` subclass that:

1. Owns the config (``bot.cfg``) and the ledger's DB engine (``bot.engine``)
   so every Cog reaches them via ``self.bot.cfg`` / ``self.bot.engine``.
2. Loads every Cog listed in :data:`EXTENSIONS` and registers their slash
   commands once per process (one dev guild when ``DEV_GUILD_ID`` is set).
3. Disposes the engine on shutdown.

Also hosts the shared slash-command error handler used by the cogs.
"""

from __future__ import annotations

import logging
import os

import discord
from discord import app_commands
from discord.ext import commands
from sqlalchemy import Engine

from debtcollector.config import DebtCollectorConfig
from debtcollector.database.engine import dispose_db_engine
from debtcollector.engine.errors import LedgerValidationError

logger = logging.getLogger(__name__)

# Cog modules to load on startup.
EXTENSIONS: list[str] = [
    "debtcollector.bot.cogs.ledger",
    "debtcollector.bot.cogs.manage",
]

GENERIC_ERROR_MESSAGE = "There was an error while executing this command!"


class DebtCollectorBot(commands.Bot):
    """Custom Bot subclass that carries project-wide state.

    Parameters
    ----------
    cfg:
        The parsed :class:`DebtCollectorConfig` from ``config.yaml``.
    engine:
        A SQLAlchemy :class:`Engine` — the ledger store.  The bot takes
        ownership and disposes it in :meth:`close`.
    """

    def __init__(self, cfg: DebtCollectorConfig, engine: Engine) -> None:
        # Slash commands only: no privileged intents needed.
        intents = discord.Intents.default()
        intents.message_content = False
        intents.presences = False

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            description=f"{cfg.bot_name} — who owes whom, and how much",
        )

        self.cfg = cfg
        self.engine = engine

    # -----------------------------------------------------------------------
    # Lifecycle hooks
    # -----------------------------------------------------------------------
    async def setup_hook(self) -> None:
        """Load the ledger cogs and publish their slash commands.

        Runs once per process, before the gateway connects.  A cog that
        fails to load stops startup.
        """
        for ext in EXTENSIONS:
            await self.load_extension(ext)
            logger.info("Cog ready: %s", ext)
        await self._sync_commands()

    async def _sync_commands(self) -> None:
        """Push the command tree to Discord.

        With ``DEV_GUILD_ID`` set, commands go to that guild only, where they
        appear immediately; otherwise they are registered globally.
        """
        dev_guild_id = os.getenv("DEV_GUILD_ID")
        if not dev_guild_id:
            synced = await self.tree.sync()
            logger.info("%d slash commands registered globally", len(synced))
            return

        guild = discord.Object(id=int(dev_guild_id))
        self.tree.copy_global_to(guild=guild)
        synced = await self.tree.sync(guild=guild)
        logger.info("%d slash commands registered to guild %s", len(synced), dev_guild_id)

    async def on_ready(self) -> None:
        if self.user is not None:
            logger.info(
                "%s online as %s in %d guild(s)",
                self.cfg.bot_name, self.user, len(self.guilds),
            )

    async def close(self) -> None:
        """Disconnect from Discord, then release the ledger's connections."""
        logger.info("%s shutting down…", self.cfg.bot_name)
        await super().close()
        dispose_db_engine(self.engine)


# ---------------------------------------------------------------------------
# Shared reply helpers
# ---------------------------------------------------------------------------
async def send_reply(
    interaction: discord.Interaction,
    content: str | None = None,
    *,
    embed: discord.Embed | None = None,
    ephemeral: bool = False,
) -> None:
    """Reply whether or not the interaction was already deferred/answered."""
    kwargs: dict = {"ephemeral": ephemeral}
    if content is not None:
        kwargs["content"] = content
    if embed is not None:
        kwargs["embed"] = embed
    if interaction.response.is_done():
        await interaction.followup.send(**kwargs)
    else:
        await interaction.response.send_message(**kwargs)


async def handle_app_command_error(
    interaction: discord.Interaction,
    error: app_commands.AppCommandError,
) -> None:
    """Turn ledger validation errors into user messages; log everything else."""
    original = getattr(error, "original", error)
    if isinstance(original, LedgerValidationError):
        await send_reply(interaction, f"❌ {original}", ephemeral=True)
        return

    command_name = interaction.command.name if interaction.command else "?"
    logger.error(
        "Command /%s failed for user %s",
        command_name, interaction.user.id, exc_info=original,
    )
    try:
        await send_reply(interaction, GENERIC_ERROR_MESSAGE, ephemeral=True)
    except discord.HTTPException:
        logger.exception("Failed to report error for /%s", command_name)
