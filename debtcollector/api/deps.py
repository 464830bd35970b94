"""
debtcollector.api.deps — FastAPI dependency injection
======================================================

One engine per API process, created on first use and disposed by the
app's lifespan hook.  Tests swap it out through
``app.dependency_overrides[get_engine]``.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy import Engine

from debtcollector.database.engine import create_db_engine


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return create_db_engine()
