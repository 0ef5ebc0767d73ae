"""
Main FastAPI application - Jewellery ledger balances and statements.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jewel_ledger.api.routers import accounts, reports, vouchers
from jewel_ledger.core.config import settings
from jewel_ledger.core.logging_config import configure_logging, get_logger
from jewel_ledger.domain.exceptions import LedgerError
from jewel_ledger.infrastructure.database import init_db

logger = get_logger("api")

ERROR_STATUS: dict[str, int] = {
    "INCONSISTENT_VOUCHER": 422,
    "INVALID_CAPACITY": 500,
    "ACCOUNT_NOT_FOUND": 404,
    "VOUCHER_NOT_FOUND": 404,
    "ACCOUNT_IN_USE": 409,
    "CHEQUE_STATE": 409,
    "INVALID_DATE_RANGE": 400,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan - startup and shutdown events."""
    configure_logging(level=settings.log_level, json_lines=settings.log_json)
    init_db()
    logger.info("application_started", extra={"app_env": settings.app_env})
    yield


app = FastAPI(
    title="Jewel Ledger API",
    description="""
## Gold and KWD bookkeeping for a jewellery trading house

### Features:
- **Accounts**: Market, Casting, Faceting, Project and Gold Fixing, numbered per type
- **Vouchers**: INV, REC, GFV and Alloy, with batch entry
- **Cheques**: pending and cashed Market receipts
- **Statements**: account, account type, locker and open balance ledgers, paginated
- **Summaries**: closing balances per account and per account type

### Rules:
- Balances are always recomputed from the full voucher history
- Opening balances replay every voucher before the start date
- Amounts are signed and rounded to three places only on output
    """,
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(accounts.router)
app.include_router(vouchers.router)
app.include_router(reports.router)


@app.get("/")
def root():
    return {
        "name": "Jewel Ledger API",
        "version": "0.1.0",
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    """Map domain errors to HTTP statuses by code."""
    status_code = ERROR_STATUS.get(exc.code, 400)
    log = logger.error if status_code >= 500 else logger.warning
    log("request_failed", extra={"path": request.url.path, "code": exc.code, "status": status_code})
    content = {"detail": exc.message, "code": exc.code}
    field = getattr(exc, "field", None)
    if field:
        content["field"] = field
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle validation errors."""
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc)}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
