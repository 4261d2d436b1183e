"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures routers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from src.api.dependencies import build_controller_factory, build_directory, get_notifier
from src.api.flows import ResetFlowRegistry
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Account API v1 - Register, sign in and reset passwords",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the in-memory account directory on startup
    - Creates the password reset flow registry
    - Drops all open reset flows on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")

    directory = build_directory(settings)
    controller_factory = build_controller_factory(directory, get_notifier(), settings)

    # Store shared state in app state for dependency injection
    app.state.directory = directory
    app.state.controller_factory = controller_factory
    app.state.flows = ResetFlowRegistry(controller_factory)

    logger.info("Application startup complete (%d seeded account(s))", len(directory))

    yield

    # Shutdown
    logger.info("Shutting down application...")
    logger.info("Discarding %d open reset flow(s)", len(app.state.flows))


app = FastAPI(
    title="blockhost-accounts",
    description="Account lifecycle API - Registration, login and password reset "
    "with emailed verification codes",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint.

    Returns 200 OK once the account directory is initialized.
    """
    directory = request.app.state.directory
    return {"status": "healthy", "accounts": str(len(directory))}
