"""Health check endpoint. Does not touch the remote store."""

from fastapi import APIRouter

from insole_tracker.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Application status plus whether a spreadsheet endpoint is configured."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "remote_configured": bool(settings.remote_store_url.strip()),
    }
