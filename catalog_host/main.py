"""Catalog Host API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI

from catalog_host.api.catalog_bff import router as catalog_bff_router
from catalog_host.api.catalog_items import router as catalog_items_router
from catalog_host.api.health import router as health_router
from catalog_host.api.middleware import setup_middleware
from catalog_host.infrastructure.config import settings
from catalog_host.infrastructure.database import engine
from catalog_host.infrastructure.logging import configure_logging

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting Catalog Host API",
        version=settings.api_version,
        debug=settings.debug,
    )

    yield

    logger.info("Shutting down Catalog Host API")
    await engine.dispose()


app = FastAPI(
    title="Catalog Host API",
    description="Paginated catalog of items, brands and types",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

setup_middleware(app)

app.include_router(health_router, tags=["Health"])
app.include_router(catalog_bff_router)
app.include_router(catalog_items_router)

