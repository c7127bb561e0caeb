"""Application entry point for the Kabar web front end."""
from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from .config import get_settings
from .routers import posts_router, search_router, system_router
from .services.session_service import LoginRequired
from .ui import router as ui_router

logger = logging.getLogger(__name__)

settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title=settings.app_name, version=settings.api_version)

origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()] or ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ui_router)
app.include_router(posts_router)
app.include_router(search_router)
app.include_router(system_router)


def _wants_json(request: Request) -> bool:
    accept = request.headers.get("accept", "")
    content_type = request.headers.get("content-type", "")
    return "application/json" in accept or content_type.startswith("application/json")


@app.exception_handler(LoginRequired)
async def _login_required(request: Request, exc: LoginRequired):
    if _wants_json(request):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": "Login required", "login_url": exc.login_url},
        )
    return RedirectResponse(exc.login_url, status_code=status.HTTP_303_SEE_OTHER)


@app.on_event("startup")
async def _startup() -> None:
    logger.info("%s %s talking to %s", settings.app_name, settings.api_version, settings.api_base)


UI_STATIC_ROOT = Path(__file__).resolve().parent / "ui" / "static"
app.mount("/assets", StaticFiles(directory=str(UI_STATIC_ROOT), check_dir=False), name="assets")
