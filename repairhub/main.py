"""FastAPI application entry point (``uvicorn repairhub.main:app``)."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from repairhub import __version__
from repairhub.api.errors import register_exception_handlers
from repairhub.api.router import api_router
from repairhub.config import get_settings
from repairhub.core.logging import get_logger, setup_logging
from repairhub.core.middleware import CorsHeadersMiddleware, ObservabilityMiddleware
from repairhub.services.search.sources import build_http_client

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging()
    app.state.http_client = build_http_client(get_settings())
    logger.info("app_started", version=__version__)
    try:
        yield
    finally:
        await app.state.http_client.aclose()
        logger.info("app_stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="RepairHub Search API",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(CorsHeadersMiddleware)
    app.add_middleware(ObservabilityMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
