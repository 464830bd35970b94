"""
debtcollector.api.main — FastAPI application entry point
=========================================================

Run with::

    uvicorn debtcollector.api.main:app --port 8000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

load_dotenv()

from debtcollector import __version__  # noqa: E402
from debtcollector.api.deps import get_engine  # noqa: E402
from debtcollector.api.routes.ledger import router as ledger_router  # noqa: E402
from debtcollector.database.engine import dispose_db_engine  # noqa: E402
from debtcollector.engine.errors import LedgerValidationError  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle — warm the DB engine, dispose it on exit."""
    engine = get_engine()
    logger.info("DebtCollector API started — engine ready (%s)", engine.url.database)
    yield
    dispose_db_engine(engine)
    logger.info("DebtCollector API shutting down")


app = FastAPI(
    title="DebtCollector Ledger API",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(ledger_router, prefix="/api")


@app.exception_handler(LedgerValidationError)
async def ledger_validation_handler(request: Request, exc: LedgerValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/api/health")
def health():
    return {"status": "ok"}
