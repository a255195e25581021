"""FastAPI application entry point for the Escrow Registry.

The HTTP app is the host environment: it supplies the caller identity from
request headers and serialises calls on a single event loop.

Lifecycle:
    1. Startup: Initialize logging, load the state snapshot (if configured).
    2. Running: Serve the registry and wallet routes under /api/v1/*.
    3. Shutdown: Save the state snapshot (if configured).

Run with:
    uvicorn escrow_registry.main:app --reload --host 0.0.0.0 --port 8000
    or: escrow-registry
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from escrow_registry.config import get_settings
from escrow_registry.logging_config import get_logger, setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle."""
    settings = get_settings()

    setup_logging(
        log_level=settings.app_log_level,
        json_logs=not settings.is_development,
    )
    logger = get_logger(__name__)
    logger.info("app.starting", env=settings.app_env, debug=settings.app_debug)

    from escrow_registry.infrastructure.state import close_state, init_state

    init_state()
    logger.info("app.started", host=settings.app_host, port=settings.app_port)

    yield

    logger.info("app.shutting_down")
    close_state()
    logger.info("app.stopped")


def create_app() -> FastAPI:
    """Application factory — creates and configures the FastAPI app."""
    settings = get_settings()

    app = FastAPI(
        title="Escrow Registry",
        description=(
            "Lister and contractor registries, business contracts, "
            "and multisig escrow wallets."
        ),
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.app_debug,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    from escrow_registry.api.middleware import setup_middleware

    setup_middleware(app)

    from escrow_registry.api.routes.contracts import router as contracts_router
    from escrow_registry.api.routes.health import router as health_router
    from escrow_registry.api.routes.identity import router as identity_router
    from escrow_registry.api.routes.wallet import router as wallet_router

    app.include_router(health_router)
    app.include_router(identity_router)
    app.include_router(contracts_router)
    app.include_router(wallet_router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "escrow_registry.main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_config=None,
    )


# The app instance used by Uvicorn
app = create_app()
