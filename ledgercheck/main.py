"""
Main FastAPI application - double-entry validation preview API.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ledgercheck import __version__
from ledgercheck.api.routers import journal_entries, register, vouchers
from ledgercheck.core.config import get_settings
from ledgercheck.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan - startup and shutdown events."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger.info(
        "ledgercheck started",
        extra={
            "balance_tolerance": str(settings.balance_tolerance),
            "default_currency": settings.default_currency,
        },
    )
    yield


app = FastAPI(
    title="Ledgercheck API",
    description="""
## Double-entry validation for journal entry and voucher forms

### Features:
- **Journal entries**: per-line and per-entry validation, live totals
- **Vouchers**: payment/receipt/deposit projection into balanced journal lines
- **Ledger payload**: single-entry DEBIT/CREDIT transactions for submission
- **Transaction register**: unified, filterable list of entry and voucher lines

### Rules:
- Every line carries exactly one positive amount against an account
- Total debit = total credit within the currency tolerance
- Validation never stops at the first error
    """,
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(journal_entries.router)
app.include_router(vouchers.router)
app.include_router(register.router)


@app.get("/")
def root():
    return {
        "name": "Ledgercheck API",
        "version": __version__,
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle validation errors."""
    logger.warning("request rejected", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc)}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
