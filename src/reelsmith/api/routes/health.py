"""Health check endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from reelsmith.api.schemas import HealthResponse
from reelsmith.app_version import get_app_version
from reelsmith.config.settings import settings

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> dict[str, Any]:
    """Liveness probe. Does not call the generation service."""

    return {
        "status": "healthy",
        "version": get_app_version(),
        "generation_provider": settings.generation_provider,
    }


__all__ = ["router"]
