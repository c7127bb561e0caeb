"""JSON endpoints behind the feed's load-more button and the like buttons."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request

from ..clients.backend import BackendClient, get_backend_client
from ..config import Settings, get_settings
from ..schemas import FeedChunkResponse, LikeStateResponse, LikeToggleRequest
from ..services.feed_service import FeedPager
from ..services.like_service import LikeState, toggle_like
from ..services.session_service import LoginRequired, Viewer, get_optional_viewer
from ..ui.components.cards import post_cards
from ..ui.template_helpers import request_translator

router = APIRouter(tags=["posts"])

logger = logging.getLogger(__name__)


@router.get("/feed", response_model=FeedChunkResponse)
async def feed_chunk(
    request: Request,
    offset: int = Query(0, ge=0),
    client: BackendClient = Depends(get_backend_client),
    viewer: Viewer | None = Depends(get_optional_viewer),
    settings: Settings = Depends(get_settings),
) -> FeedChunkResponse:
    """Next page of post cards starting at ``offset``."""

    pager = FeedPager(limit=settings.feed_page_size, offset=offset)
    await pager.load_more(client, token=viewer.access_token if viewer else None)
    locale, t = request_translator(request)
    return FeedChunkResponse(
        html=str(post_cards(pager.posts, t=t, locale=locale)),
        offset=pager.offset,
        has_more=pager.has_more,
    )


@router.post("/posts/{post_id}/like", response_model=LikeStateResponse)
async def like_post(
    post_id: str,
    payload: LikeToggleRequest,
    client: BackendClient = Depends(get_backend_client),
    viewer: Viewer | None = Depends(get_optional_viewer),
) -> LikeStateResponse:
    if viewer is None:
        raise LoginRequired(f"/share/{post_id}")
    outcome = await toggle_like(
        client,
        post_id,
        LikeState(is_liked=payload.liked, likes_count=payload.count),
        token=viewer.access_token,
    )
    return LikeStateResponse(
        is_liked=outcome.state.is_liked,
        likes_count=outcome.state.likes_count,
        ok=outcome.ok,
        error=outcome.error,
    )


__all__ = ["router"]
