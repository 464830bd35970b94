"""
debtcollector.bot.__main__ — Entry point for ``python -m debtcollector.bot``
============================================================================

Reads secrets from ``.env`` and soft settings from ``config.yaml``, makes
sure the ledger table exists, then hands config and engine to
:class:`~debtcollector.bot.core.DebtCollectorBot` and blocks in its event
loop until interrupted.
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

from debtcollector.bot.core import DebtCollectorBot
from debtcollector.config import load_config
from debtcollector.database.engine import create_db_engine, init_db

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("debtcollector")

_PLACEHOLDER_TOKEN = "your-discord-bot-token-here"


def _discord_token() -> str:
    """The bot token, or exit with a hint when it is missing."""
    token = os.getenv("DISCORD_TOKEN", "")
    if not token or token == _PLACEHOLDER_TOKEN:
        logger.critical("DISCORD_TOKEN missing — put your bot token in .env (see .env.example).")
        sys.exit(1)
    return token


def main() -> None:
    load_dotenv()
    token = _discord_token()

    cfg = load_config()
    logger.info(
        "%s starting (currency %s, max debt %s)",
        cfg.bot_name, cfg.currency, cfg.max_debt_amount,
    )

    engine = create_db_engine()
    init_db(engine)

    bot = DebtCollectorBot(cfg=cfg, engine=engine)
    try:
        # discord.py's own handler is disabled; basicConfig above covers it.
        bot.run(token, log_handler=None)
    except KeyboardInterrupt:
        logger.info("Interrupted — %s stopped.", cfg.bot_name)


if __name__ == "__main__":
    main()
