"""Viewer profile page and its edit form."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse

from ...clients.backend import BackendClient, BackendError, get_backend_client
from ...clients.image_host import ImageHostClient, ImageUploadError, ImageValidationError, PendingImage, get_image_host
from ...services.profile_service import NoProfileChanges, load_profile, update_profile
from ...services.session_service import Viewer, get_optional_viewer, login_url
from ..template_helpers import render_template, request_translator

logger = logging.getLogger(__name__)

router = APIRouter()


async def _render_profile(
    request: Request,
    viewer: Viewer | None,
    client: BackendClient,
    *,
    error: str | None = None,
    notice: str | None = None,
    status_code: int = 200,
):
    profile = None
    if viewer is not None:
        try:
            profile = await load_profile(client, token=viewer.access_token)
        except BackendError as exc:
            logger.warning("Failed to fetch profile for %s: %s", viewer.id, exc.message)
    return render_template(
        request,
        "profile.html",
        {
            "page_title": "Profile Settings",
            "active_nav": "/profile",
            "viewer": viewer,
            "profile": profile,
            "login_link": login_url("/profile"),
            "error": error,
            "notice": notice,
        },
        status_code=status_code,
    )


@router.get("/profile", response_class=HTMLResponse)
async def profile(
    request: Request,
    viewer: Viewer | None = Depends(get_optional_viewer),
    client: BackendClient = Depends(get_backend_client),
) -> HTMLResponse:
    return await _render_profile(request, viewer, client)


@router.post("/profile", response_class=HTMLResponse)
async def profile_update(
    request: Request,
    username: str = Form(""),
    bio: str | None = Form(None),
    photo: UploadFile | None = File(None),
    viewer: Viewer | None = Depends(get_optional_viewer),
    client: BackendClient = Depends(get_backend_client),
    image_host: ImageHostClient = Depends(get_image_host),
) -> HTMLResponse:
    if viewer is None:
        return await _render_profile(request, None, client, error="Please login to update profile", status_code=401)

    _, t = request_translator(request)
    try:
        await update_profile(
            client,
            viewer,
            username=username.strip() or None,
            bio=bio,
            photo=await PendingImage.from_upload(photo),
            uploader=image_host.upload,
        )
    except NoProfileChanges:
        return await _render_profile(request, viewer, client, notice=t("profile.no_changes"))
    except (ImageValidationError, ImageUploadError) as exc:
        return await _render_profile(request, viewer, client, error=str(exc), status_code=400)
    except BackendError as exc:
        logger.warning("Profile update for %s failed: %s", viewer.id, exc.message)
        return await _render_profile(request, viewer, client, error=exc.message, status_code=400)
    return await _render_profile(request, viewer, client, notice=t("profile.updated"))
