"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from insole_tracker.config import get_settings
from insole_tracker.infrastructure.dependencies import get_http_client, get_insole_store
from insole_tracker.infrastructure.logging.log_config import setup_logging
from insole_tracker.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — show cached insoles, then sync from the remote store."""
    settings = get_settings()
    setup_logging()

    store = get_insole_store()
    if not settings.remote_store_url:
        logger.warning("REMOTE_STORE_URL is not configured; running from the local cache only.")
    await store.initialize()
    logger.info("Insole store ready: %d insoles", len(store.insoles))

    yield

    # Shutdown
    store.shutdown()
    await get_http_client().aclose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "insole_tracker.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
