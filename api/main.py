"""
Sales Analytics API - Main Application.

FastAPI application with CORS enabled for the dashboard frontend.
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import __version__
from api.logging_config import configure_logging
from api.models import ErrorResponse
from config import get_settings
from domain.month_range import InvalidMonth
from repositories.record_store import StoreUnavailable
from services.combined_service import AggregationTimeout, PartialAggregationFailure

configure_logging(get_settings().log_level)

logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Sales Analytics API",
    description="REST API for browsing sale records and monthly sales analytics",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS - Allow all origins for development
# TODO: Restrict origins once the dashboard has a fixed production host
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, error: str, detail: str) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail, status_code=status_code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    response = _error_response(exc.status_code, HTTPStatus(exc.status_code).phrase, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(InvalidMonth)
async def invalid_month_handler(request: Request, exc: InvalidMonth) -> JSONResponse:
    return _error_response(400, "Invalid month", str(exc))


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error("Record store unavailable", extra={"path": request.url.path, "error": str(exc)})
    return _error_response(503, "Record store unavailable", str(exc))


@app.exception_handler(PartialAggregationFailure)
async def aggregation_failure_handler(request: Request, exc: PartialAggregationFailure) -> JSONResponse:
    if isinstance(exc, AggregationTimeout):
        return _error_response(504, "Analytics timed out", str(exc))
    return _error_response(503, "Analytics unavailable", str(exc))


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "sales-analytics-api"
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Sales Analytics API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import analytics, products

app.include_router(products.router, prefix="/api/v1", tags=["Products"])
app.include_router(analytics.router, prefix="/api/v1", tags=["Analytics"])
