"""Home/feed page surface."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ...clients.backend import BackendClient, get_backend_client
from ...config import Settings, get_settings
from ...services.feed_service import FeedPager
from ...services.session_service import Viewer, get_optional_viewer
from ..template_helpers import render_template

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def feed(
    request: Request,
    client: BackendClient = Depends(get_backend_client),
    viewer: Viewer | None = Depends(get_optional_viewer),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Render the first feed page; later pages come from ``/feed``."""

    pager = FeedPager(limit=settings.feed_page_size)
    await pager.load(client, reset=True, token=viewer.access_token if viewer else None)
    return render_template(
        request,
        "home.html",
        {
            "page_title": "Beranda",
            "active_nav": "/",
            "viewer": viewer,
            "pager": pager,
        },
    )
