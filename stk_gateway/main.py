"""
STK Gateway - Main Application Entry Point

Accepts charge requests for M-Pesa subscribers, sends the STK push
through PayHero and waits for the payment to be confirmed.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from stk_gateway import __version__
from stk_gateway.core.config import settings
from stk_gateway.core.logging import setup_logging
from stk_gateway.core.metrics import get_metrics, get_metrics_content_type
from stk_gateway.presentation.api import api_router
from stk_gateway.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    register_exception_handlers,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Sets up logging and reports the configured PayHero account.
    """
    setup_logging(settings)

    logger = structlog.get_logger(__name__)
    if not settings.auth_token or not settings.channel_id:
        logger.warning("payhero_not_configured")

    logger.info(
        "application_started",
        version=__version__,
        port=settings.port,
        provider=settings.default_provider,
        channel_id=settings.channel_id,
    )

    yield

    logger.info("application_stopped")


app = FastAPI(
    title="STK Gateway",
    description="Mobile-money STK push gateway backed by PayHero",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

register_exception_handlers(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.metrics_enabled:
        return Response(status_code=404)
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "stk_gateway.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
