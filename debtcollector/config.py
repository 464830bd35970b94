"""
debtcollector.config — YAML Configuration Loader
=================================================

Secrets (``DISCORD_TOKEN``, ``DATABASE_URL``) come from the environment.
Everything else that shapes how the bot talks — the currency it quotes,
how many rows a leaderboard shows, the largest debt a member may record —
lives in ``config.yaml`` so it can be tuned without a redeploy.

Usage::

    from debtcollector.config import load_config

    cfg = load_config()          # reads ./config.yaml by default
    print(cfg.currency_symbol)   # "$"
    print(cfg.leaderboard_size)  # 10
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class DebtCollectorConfig:
    """Immutable configuration loaded from ``config.yaml``.

    Every key has a default so a missing file section never stops the bot
    from starting; only a missing *file* is treated as an error.
    """

    bot_name: str = "DebtCollector"

    # Currency (single currency per deployment)
    currency: str = "USD"
    currency_symbol: str = "$"

    # Slash-command input limits
    max_debt_amount: float = 10000.0

    # Presentation
    leaderboard_size: int = 10
    transactions_per_page: int = 10


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path = "config.yaml") -> DebtCollectorConfig:
    """Read *path* and return a :class:`DebtCollectorConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.
        Defaults to ``config.yaml`` in the current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    ValueError
        If a numeric setting cannot be parsed or is out of range.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"No config at {config_path.resolve()} — start from config.yaml.example."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    defaults = DebtCollectorConfig()
    cfg = DebtCollectorConfig(
        bot_name=str(raw.get("bot_name", defaults.bot_name)),
        currency=str(raw.get("currency", defaults.currency)).upper(),
        currency_symbol=str(raw.get("currency_symbol", defaults.currency_symbol)),
        max_debt_amount=float(raw.get("max_debt_amount", defaults.max_debt_amount)),
        leaderboard_size=int(raw.get("leaderboard_size", defaults.leaderboard_size)),
        transactions_per_page=int(
            raw.get("transactions_per_page", defaults.transactions_per_page)
        ),
    )

    if cfg.leaderboard_size < 1 or cfg.transactions_per_page < 1:
        raise ValueError("leaderboard_size and transactions_per_page must be >= 1")
    if cfg.max_debt_amount <= 0:
        raise ValueError("max_debt_amount must be positive")
    return cfg
