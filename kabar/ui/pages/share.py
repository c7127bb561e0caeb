"""Public post detail page with its gallery, likes and comments."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from ...clients.backend import BackendClient, BackendError, get_backend_client
from ...config import Settings, get_settings
from ...services.gallery import clamp_index, collect_images, gallery_layout, parse_image_index
from ...services.like_service import LikeState, toggle_like
from ...services.post_service import add_comment, load_post
from ...services.session_service import LoginRequired, Viewer, get_optional_viewer
from ..template_helpers import render_template

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/share")


@router.get("/{post_id}", response_class=HTMLResponse)
async def share_page(
    request: Request,
    post_id: str,
    image: str | None = None,
    client: BackendClient = Depends(get_backend_client),
    viewer: Viewer | None = Depends(get_optional_viewer),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    token = viewer.access_token if viewer else None
    try:
        post = await load_post(client, post_id, token=token)
    except BackendError as exc:
        logger.warning("Could not load post %s: %s", post_id, exc.message)
        post = None

    if post is None:
        return render_template(
            request,
            "share.html",
            {"page_title": "Post not found", "viewer": viewer, "post": None},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    images = collect_images(post)
    current = parse_image_index(image, len(images))
    return render_template(
        request,
        "share.html",
        {
            "page_title": post.title or "Untitled Post",
            "viewer": viewer,
            "post": post,
            "images": images,
            "layout": gallery_layout(images, blurred=post.blurred),
            "current_image": current,
            "prev_image": clamp_index(current - 1, len(images)),
            "next_image": clamp_index(current + 1, len(images)),
            "comments": post.comments,
            "share_url": f"{settings.public_base_url.rstrip('/')}/share/{post.post_id}",
        },
    )


@router.post("/{post_id}/comments")
async def share_comment(
    post_id: str,
    content: str = Form(""),
    client: BackendClient = Depends(get_backend_client),
    viewer: Viewer | None = Depends(get_optional_viewer),
) -> RedirectResponse:
    back = f"/share/{post_id}#comments"
    if viewer is None:
        raise LoginRequired(f"/share/{post_id}")
    try:
        await add_comment(client, post_id, content, token=viewer.access_token)
    except BackendError as exc:
        logger.warning("Comment on %s failed: %s", post_id, exc.message)
    return RedirectResponse(back, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/{post_id}/like")
async def share_like(
    post_id: str,
    liked: bool = Form(False),
    count: int = Form(0),
    client: BackendClient = Depends(get_backend_client),
    viewer: Viewer | None = Depends(get_optional_viewer),
) -> RedirectResponse:
    """Form fallback for the like button when scripts are unavailable."""

    if viewer is None:
        raise LoginRequired(f"/share/{post_id}")
    await toggle_like(client, post_id, LikeState(is_liked=liked, likes_count=max(0, count)), token=viewer.access_token)
    return RedirectResponse(f"/share/{post_id}", status_code=status.HTTP_303_SEE_OTHER)
