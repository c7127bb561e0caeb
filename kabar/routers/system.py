"""System-level routes for diagnostics."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings

router = APIRouter(tags=["system"])


@router.get("/api")
def api_info(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    return {"service": settings.app_name, "version": settings.api_version}


@router.get("/healthz")
async def healthcheck(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """Report liveness and the backend this instance talks to."""

    return {"status": "ok", "backend": settings.api_base}


__all__ = ["router"]
