"""
Edit Server Application Entry Point

Defines the FastAPI application, registers routers and the global exception
handler, and provides a test-friendly application factory.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from .config import settings
from .core.errors import unhandled_exception_handler

from .api import (
    health_routes,
    tool_routes,
    verification_routes,
)


logger = logging.getLogger("mcp.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Fail fast on missing secrets before the first request is served.
    """
    logger.info("Starting mw-edit-server")

    _ = settings.jwt_mw_to_mcp_secret.get_secret_value()
    _ = settings.jwt_mcp_to_mw_secret.get_secret_value()

    logger.info(
        "Configuration validated (verification %s)",
        "enabled" if settings.verification_enabled else "disabled",
    )
    yield
    logger.info("Shutting down mw-edit-server")


# ---------------------------------------------------------------------
# Application Factory (Test-Friendly)
# ---------------------------------------------------------------------

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns
    -------
    FastAPI
        Fully configured FastAPI application.
    """
    app = FastAPI(
        title="mw-edit-server",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health_routes.router)
    app.include_router(tool_routes.router)
    app.include_router(verification_routes.router)

    return app


app = create_app()
