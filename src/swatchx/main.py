"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from swatchx.config import Settings

import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from swatchx.api.routes import router
from swatchx.config import get_settings
from swatchx.discovery.cache import LookupCache
from swatchx.discovery.cancellation import DiscoveryRegistry
from swatchx.discovery.engine import AdaptiveDiscoveryEngine
from swatchx.discovery.errors import Cancelled, InvalidInput, RemoteError
from swatchx.remote.color_api import ColorApiClassifier
from swatchx.remote.limiter import RequestLimiter

logger = logging.getLogger(__name__)


def init_app_state(
    app: FastAPI,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Build the HTTP client, cache, and engine onto ``app.state``."""
    client = httpx.AsyncClient(timeout=settings.request_timeout, transport=transport)
    limiter = RequestLimiter(settings.max_concurrent)
    classifier = ColorApiClassifier(client, settings.color_api_url, limiter)

    app.state.settings = settings
    app.state.http_client = client
    app.state.limiter = limiter
    app.state.engine = AdaptiveDiscoveryEngine(
        classifier,
        LookupCache(),
        batch_size=settings.batch_size,
        coarse_step=settings.coarse_step,
    )
    app.state.registry = DiscoveryRegistry()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: initialize on startup, clean up on shutdown."""
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    logger.info(
        "Starting SwatchX (color_api=%s, batch_size=%s, coarse_step=%s, max_concurrent=%s)",
        settings.color_api_url,
        settings.batch_size,
        settings.coarse_step,
        settings.max_concurrent,
    )

    init_app_state(app, settings)

    logger.info("SwatchX ready")
    yield

    logger.info("Shutting down SwatchX")
    await app.state.http_client.aclose()
    logger.info("SwatchX shutdown complete")


async def _invalid_input_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)},
    )


async def _remote_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = cast(RemoteError, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(error), "kind": error.kind.value, "status_code": error.status_code},
    )


async def _cancelled_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc)},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title="SwatchX",
        description="Distinct color-name discovery around the hue wheel",
        version="0.1.0",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(InvalidInput, _invalid_input_handler)
    application.add_exception_handler(RemoteError, _remote_error_handler)
    application.add_exception_handler(Cancelled, _cancelled_handler)

    application.include_router(router)
    return application


app = create_app()
