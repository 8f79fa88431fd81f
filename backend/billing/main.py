from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from billing import __version__
from billing.routers import clients, documents, dashboard, settings as settings_router
from billing.database import engine, Base
from billing.config import settings
from billing.exceptions import (
    LedgerError,
    NotFoundError,
    InvalidTransitionError,
    DocumentFinalizedError,
    InvalidPaymentError,
    ReferentialIntegrityError,
    StorageError,
)
import logging
import sys

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)

# Log startup information
logger.info("="*60)
logger.info("Starting Billing Ledger API")
logger.info("="*60)
logger.info(f"Database: {engine.url.render_as_string(hide_password=True)}")
logger.info(f"Default tax rate: {settings.default_tax_rate}%")
logger.info(f"Numbering prefixes: {settings.invoice_prefix} / {settings.quotation_prefix}")
logger.info("="*60)

if settings.auto_create_tables:
    # Local single-user setups; otherwise run alembic upgrade head
    Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Billing Ledger API",
    description="API for managing invoices, quotations and payments",
    version=__version__
)


def parse_cors_origins(origins_str: str) -> list:
    """Parse CORS origins string into a list."""
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


app.add_middleware(
    CORSMiddleware,
    allow_origins=parse_cors_origins(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Include routers
app.include_router(clients.router)
app.include_router(documents.router)
app.include_router(dashboard.router)
app.include_router(settings_router.router)


# Checked in order; subclasses before their bases
ERROR_STATUS_CODES = (
    (NotFoundError, 404),
    (InvalidTransitionError, 409),
    (DocumentFinalizedError, 409),
    (InvalidPaymentError, 400),
    (ReferentialIntegrityError, 409),
    (StorageError, 503),
)


def status_code_for(exc: LedgerError) -> int:
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return 400


@app.get("/")
def root():
    return {"message": "Billing Ledger API", "version": __version__}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.exception_handler(LedgerError)
async def ledger_exception_handler(request: Request, exc: LedgerError):
    """Report a refused ledger operation with its error kind"""
    return JSONResponse(
        status_code=status_code_for(exc),
        content={"detail": exc.message, "error": exc.code},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal server error: {str(exc)}", "error": "internal_error"},
    )
