"""Dashboard of the viewer's own posts with edit and delete."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from ...clients.backend import BackendClient, BackendError, get_backend_client
from ...clients.image_host import ImageHostClient, get_image_host
from ...services.composer_service import PostComposer
from ...services.post_service import PostsResponseError, list_own_posts, load_post
from ...services.session_service import Viewer, require_viewer
from ..template_helpers import render_template, request_translator
from .posts import handle_composer_post, render_composer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/update")


@router.get("", response_class=HTMLResponse)
async def manage_posts(
    request: Request,
    deleted: str | None = None,
    viewer: Viewer = Depends(require_viewer),
    client: BackendClient = Depends(get_backend_client),
) -> HTMLResponse:
    _, t = request_translator(request)
    posts = []
    error = None
    try:
        posts = await list_own_posts(client, viewer.id, token=viewer.access_token)
    except (BackendError, PostsResponseError) as exc:
        error = exc.message if isinstance(exc, BackendError) else str(exc)
        logger.warning("Could not list posts for %s: %s", viewer.id, error)

    notice = None
    if deleted == "1":
        notice = t("manage.deleted")
    elif deleted == "0":
        error = "Failed to delete post"
    return render_template(
        request,
        "manage.html",
        {
            "page_title": "Dashboard",
            "active_nav": "/update",
            "viewer": viewer,
            "posts": posts,
            "error": error,
            "notice": notice,
        },
    )


@router.get("/{post_id}", response_class=HTMLResponse)
async def edit_post_page(
    request: Request,
    post_id: str,
    viewer: Viewer = Depends(require_viewer),
    client: BackendClient = Depends(get_backend_client),
):
    try:
        post = await load_post(client, post_id, token=viewer.access_token)
    except BackendError as exc:
        logger.warning("Failed to load post %s for editing: %s", post_id, exc.message)
        post = None
    if post is None:
        return render_template(
            request,
            "share.html",
            {"page_title": "Post not found", "viewer": viewer, "post": None},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return render_composer(request, viewer, PostComposer.from_post(post, role=viewer.role))


@router.post("/{post_id}", response_class=HTMLResponse)
async def edit_post_submit(
    request: Request,
    post_id: str,
    viewer: Viewer = Depends(require_viewer),
    client: BackendClient = Depends(get_backend_client),
    image_host: ImageHostClient = Depends(get_image_host),
):
    composer = PostComposer(role=viewer.role, mode="edit", post_id=post_id)
    return await handle_composer_post(request, viewer, composer, client, image_host)


@router.post("/{post_id}/delete")
async def delete_post(
    post_id: str,
    viewer: Viewer = Depends(require_viewer),
    client: BackendClient = Depends(get_backend_client),
) -> RedirectResponse:
    try:
        ok = await client.delete_post(post_id, token=viewer.access_token)
    except BackendError as exc:
        logger.warning("Delete of %s failed: %s", post_id, exc.message)
        ok = False
    return RedirectResponse(f"/update?deleted={'1' if ok else '0'}", status_code=status.HTTP_303_SEE_OTHER)
