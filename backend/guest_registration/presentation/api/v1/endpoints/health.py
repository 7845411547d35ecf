"""Health check endpoint — no dependencies, always available."""

from fastapi import APIRouter

from guest_registration.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Liveness probe. Does not touch the record store."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
    }
