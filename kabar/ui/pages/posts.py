"""Post creation pages: the multi-section composer and the quick form."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from ...clients.backend import BackendClient, BackendError, get_backend_client
from ...clients.image_host import ImageHostClient, ImageUploadError, ImageValidationError, get_image_host
from ...constants import POST_LIMITS
from ...services.composer_service import ComposerAuthor, ComposerError, PostComposer, apply_action, post_limit_reached
from ...services.post_service import QuickPostDraft, QuickPostError, create_quick_post, created_post_id, load_posts_count
from ...services.session_service import Viewer, require_viewer
from ..composer_form import composer_context, raw_sections, read_composer_form
from ..template_helpers import render_template, request_translator

logger = logging.getLogger(__name__)

router = APIRouter()


def author_for(viewer: Viewer) -> ComposerAuthor:
    return ComposerAuthor(user_id=viewer.id, username=viewer.name, profile_pic=viewer.image)


def render_composer(
    request: Request,
    viewer: Viewer,
    composer: PostComposer,
    *,
    sections: list[dict[str, Any]] | None = None,
    error: str | None = None,
    notice: str | None = None,
    limit_reached: bool = False,
    status_code: int = 200,
):
    editing = composer.mode == "edit"
    context = composer_context(composer, sections=sections)
    context.update(
        {
            "page_title": "Edit Post" if editing else "Create Post",
            "active_nav": "/update" if editing else "/post",
            "viewer": viewer,
            "form_action": f"/update/{composer.post_id}" if editing else "/post",
            "error": error,
            "notice": notice or (" ".join(composer.notices) if composer.notices else None),
            "limit_reached": limit_reached,
            "post_limit": POST_LIMITS.get(composer.role or ""),
        }
    )
    return render_template(request, "composer.html", context, status_code=status_code)


async def _limit_reached(client: BackendClient, viewer: Viewer) -> tuple[bool, str | None]:
    count = await load_posts_count(client, token=viewer.access_token)
    role = count.role or viewer.role
    return post_limit_reached(role, count.posts_count), role


async def handle_composer_post(
    request: Request,
    viewer: Viewer,
    composer: PostComposer,
    client: BackendClient,
    image_host: ImageHostClient,
):
    """Shared POST flow for create and edit: editor actions re-render, submit saves."""

    form = await request.form()
    try:
        await read_composer_form(form, composer)
    except (ComposerError, ImageValidationError) as exc:
        try:
            submitted = raw_sections(form)
        except ComposerError:
            submitted = []
        return render_composer(request, viewer, composer, sections=submitted, error=str(exc), status_code=400)

    action = form.get("action")
    if isinstance(action, str) and action:
        try:
            apply_action(composer, action)
        except ComposerError as exc:
            return render_composer(request, viewer, composer, error=str(exc), status_code=400)
        return render_composer(request, viewer, composer)

    try:
        payload = await composer.submit(image_host.upload, author=author_for(viewer))
    except ComposerError as exc:
        return render_composer(request, viewer, composer, error=str(exc), status_code=400)
    except ImageUploadError as exc:
        logger.warning("Image upload failed while saving a post: %s", exc)
        return render_composer(request, viewer, composer, error=str(exc), status_code=502)

    try:
        if composer.mode == "edit" and composer.post_id:
            await client.update_post(composer.post_id, payload, token=viewer.access_token)
            return RedirectResponse(f"/share/{composer.post_id}", status_code=status.HTTP_303_SEE_OTHER)
        response = await client.create_post(payload, token=viewer.access_token)
    except BackendError as exc:
        logger.warning("Saving post failed (%s): %s", composer.mode, exc.message)
        return render_composer(request, viewer, composer, error=exc.message, status_code=exc.status_code if exc.status_code < 500 else 502)

    post_id = created_post_id(response)
    if post_id:
        return RedirectResponse(f"/share/{post_id}", status_code=status.HTTP_303_SEE_OTHER)
    return RedirectResponse("/post?created=1", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/post", response_class=HTMLResponse)
async def composer_page(
    request: Request,
    created: bool = False,
    viewer: Viewer = Depends(require_viewer),
    client: BackendClient = Depends(get_backend_client),
):
    reached, role = await _limit_reached(client, viewer)
    composer = PostComposer(role=role)
    _, t = request_translator(request)
    return render_composer(
        request,
        viewer,
        composer,
        notice=t("quick.created") if created else None,
        limit_reached=reached,
    )


@router.post("/post", response_class=HTMLResponse)
async def composer_submit(
    request: Request,
    viewer: Viewer = Depends(require_viewer),
    client: BackendClient = Depends(get_backend_client),
    image_host: ImageHostClient = Depends(get_image_host),
):
    reached, role = await _limit_reached(client, viewer)
    composer = PostComposer(role=role)
    if reached:
        return render_composer(request, viewer, composer, limit_reached=True, status_code=403)
    return await handle_composer_post(request, viewer, composer, client, image_host)


def _quick_page(request: Request, viewer: Viewer, draft: QuickPostDraft, *, error: str | None = None, status_code: int = 200):
    return render_template(
        request,
        "quick_create.html",
        {
            "page_title": "Buat Post Baru",
            "active_nav": "/post",
            "viewer": viewer,
            "draft": draft,
            "error": error,
        },
        status_code=status_code,
    )


@router.get("/posts/create", response_class=HTMLResponse)
async def quick_create_page(request: Request, viewer: Viewer = Depends(require_viewer)):
    return _quick_page(request, viewer, QuickPostDraft())


@router.post("/posts/create", response_class=HTMLResponse)
async def quick_create_submit(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    content: str = Form(""),
    category: str = Form(""),
    mediaUrl: str = Form(""),
    blurred: bool = Form(False),
    isPublished: bool = Form(False),
    viewer: Viewer = Depends(require_viewer),
    client: BackendClient = Depends(get_backend_client),
):
    draft = QuickPostDraft(
        title=title,
        description=description,
        content=content,
        category=category,
        media_url=mediaUrl,
        blurred=blurred,
        is_published=isPublished,
    )
    _, t = request_translator(request)
    try:
        await create_quick_post(client, draft, token=viewer.access_token)
    except QuickPostError as exc:
        return _quick_page(request, viewer, draft, error=t(exc.key), status_code=400)
    except BackendError as exc:
        logger.warning("Quick create failed: %s", exc.message)
        return _quick_page(request, viewer, draft, error=exc.message, status_code=400)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
