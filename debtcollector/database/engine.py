"""
debtcollector.database.engine — Database Connection & Async Helper
===================================================================

The ledger functions are plain synchronous SQLAlchemy code.  Slash-command
handlers live on the bot's event loop, so they never call them directly:
:func:`run_db` hands each call to a worker thread and awaits the result.

The engine itself is the ledger's *store handle*.  It is created once at
startup by whoever owns the process (bot or API), passed explicitly into
every ledger function, and disposed on shutdown.  Nothing in the ledger
reaches for a module-level connection.

Usage::

    from debtcollector.database.engine import create_db_engine, init_db, run_db

    engine = create_db_engine()          # DATABASE_URL, or pass a URL
    init_db(engine)

    # Inside an async Cog method:
    total = await run_db(total_debt, engine, user_id, guild_id)

    dispose_db_engine(engine)            # on shutdown
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from contextlib import contextmanager
from typing import ParamSpec, TypeVar

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session

from debtcollector.database.models import Base

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


# Pool settings for PostgreSQL.  Mutations hold a connection only for one
# UPDATE, so a small pool covers a bot in a handful of guilds plus the API.
POOL_OPTIONS: dict[str, int | bool] = {
    "pool_size": 5,
    "max_overflow": 10,
    "pool_pre_ping": True,
    "pool_timeout": 10,
    "pool_recycle": 3600,
}


# ---------------------------------------------------------------------------
# Engine creation / disposal
# ---------------------------------------------------------------------------
def create_db_engine(url: str | None = None) -> Engine:
    """Build the ledger's SQLAlchemy :class:`Engine`.

    *url* defaults to ``DATABASE_URL``.  PostgreSQL gets :data:`POOL_OPTIONS`;
    a ``sqlite://`` URL is accepted for local runs and skips pool sizing.

    Raises
    ------
    RuntimeError
        If no URL is given and ``DATABASE_URL`` is not set.
    """
    url = url or os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError(
            "No database configured: set DATABASE_URL in .env "
            "(see .env.example) or pass a URL."
        )

    options = {} if url.startswith("sqlite") else POOL_OPTIONS
    engine = create_engine(url, echo=False, **options)
    logger.info("Ledger engine created → %s", engine.url.host or engine.url.database)
    return engine


def dispose_db_engine(engine: Engine) -> None:
    """Close every pooled connection.  Call once on shutdown."""
    engine.dispose()
    logger.info("Ledger engine disposed.")


# ---------------------------------------------------------------------------
# Schema initialization
# ---------------------------------------------------------------------------
def init_db(engine: Engine) -> None:
    """Create the ``transactions`` table and its indexes if missing.

    Deployments run ``alembic upgrade head``; this covers local SQLite files
    and first boots where no migration has been applied yet.
    """
    Base.metadata.create_all(engine)
    logger.info("Ledger schema ready.")


# ---------------------------------------------------------------------------
# Session helper
# ---------------------------------------------------------------------------
@contextmanager
def get_session(engine: Engine):
    """Yield a :class:`Session` that auto-commits on success and rolls back
    on exception.

    Objects are not expired on commit, so rows can be expunged and handed
    to the presentation layer after the block exits.
    """
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# ---------------------------------------------------------------------------
# Async bridge
# ---------------------------------------------------------------------------
async def run_db(func: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
    """Run a **synchronous** ledger function on a background thread.

    Every DB call in a Cog should go through this wrapper::

        result = await run_db(pair_total, engine, creditor_id, debtor_id)

    Exceptions raised by *func* propagate to the awaiting coroutine
    unchanged; nothing is retried.
    """
    return await asyncio.to_thread(func, *args, **kwargs)
