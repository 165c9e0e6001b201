"""FastAPI application entry point."""

import logging
import sys
import traceback
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import DataError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from city_info_api.config import settings
from city_info_api.database import get_db, get_session_factory
from city_info_api.routes import cities_router, points_of_interest_router
from city_info_api.seed import ensure_seed_data
from city_info_api.validation import ValidationFailedError, errors_from_pydantic

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Configure logging for the API."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and seed an empty database on startup."""
    setup_logging()
    if settings.seed_on_startup:
        session_factory = get_session_factory()
        async with session_factory() as session:
            await ensure_seed_data(session)
    yield


app = FastAPI(
    title="City Info API",
    description="Cities and their points of interest",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(cities_router, prefix="/api")
app.include_router(points_of_interest_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "city-info-api"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/api/testdatabase")
async def test_database(db: AsyncSession = Depends(get_db)):
    """Check that the database answers a trivial query."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}


def _validation_response(errors: dict[str, list[str]]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation failed",
            "errors": errors,
            "error_type": "ValidationError",
        },
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and parameters are reported as 400 Bad Request."""
    errors = errors_from_pydantic(exc.errors())
    logger.warning(f"Invalid request on {request.method} {request.url}: {errors}")
    return _validation_response(errors)


@app.exception_handler(ValidationFailedError)
async def validation_failed_handler(request: Request, exc: ValidationFailedError):
    """Domain rule and patch failures are reported as 400 Bad Request."""
    return _validation_response(exc.errors)


@app.exception_handler(OperationalError)
async def operational_error_handler(request: Request, exc: OperationalError):
    """Handle database operational errors (connection issues, timeouts).

    Returns 503 Service Unavailable for database connectivity issues.
    """
    logger.error(
        f"Database operational error on {request.method} {request.url}: {exc}\n"
        f"{traceback.format_exc()}"
    )
    return JSONResponse(
        status_code=503,
        content={
            "detail": "Database temporarily unavailable",
            "error_type": "OperationalError",
        },
    )


@app.exception_handler(DataError)
async def data_error_handler(request: Request, exc: DataError):
    """Handle database data errors (invalid data types, out of range values)."""
    logger.warning(
        f"Database data error on {request.method} {request.url}: {exc.orig}"
    )
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid data format for database field",
            "error_type": "DataError",
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unexpected errors and return a JSON 500 response."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url}: {exc}\n"
        f"{traceback.format_exc()}"
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_type": type(exc).__name__,
        },
    )
