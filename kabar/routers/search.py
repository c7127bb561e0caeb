"""Search endpoint used by the navbar dialog."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..clients.backend import BackendClient, get_backend_client
from ..config import Settings, get_settings
from ..schemas import SearchResponse
from ..services.search_service import search_posts
from ..services.session_service import Viewer, get_optional_viewer
from ..ui.components.cards import search_results
from ..ui.template_helpers import request_translator

router = APIRouter(tags=["search"])


@router.get("/search", response_model=SearchResponse)
async def search(
    request: Request,
    q: str = "",
    client: BackendClient = Depends(get_backend_client),
    viewer: Viewer | None = Depends(get_optional_viewer),
    settings: Settings = Depends(get_settings),
) -> SearchResponse:
    query = q.strip()
    if not query:
        return SearchResponse(html="", count=0)
    posts = await search_posts(
        client, query, limit=settings.search_limit, token=viewer.access_token if viewer else None
    )
    _, t = request_translator(request)
    return SearchResponse(html=str(search_results(posts, query=query, t=t)), count=len(posts))


__all__ = ["router"]
