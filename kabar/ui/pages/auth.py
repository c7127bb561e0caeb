"""Sign-in and sign-out pages backed by the backend's auth endpoint."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from ...clients.backend import BackendClient, BackendError, get_backend_client
from ...schemas import LoginRequest, SessionTokens
from ...services.session_service import (
    Viewer,
    clear_session,
    get_optional_viewer,
    redirect_if_authenticated,
    safe_callback,
    store_session,
)
from ..template_helpers import render_template

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")


def _login_page(request: Request, *, callback: str, email: str = "", error: str | None = None, status_code: int = 200):
    return render_template(
        request,
        "login.html",
        {
            "page_title": "Sign In",
            "callback_url": callback,
            "email": email,
            "error": error,
        },
        status_code=status_code,
    )


@router.get("/login", response_class=HTMLResponse)
async def login(
    request: Request,
    callbackUrl: str | None = None,
    viewer: Viewer | None = Depends(get_optional_viewer),
):
    callback = safe_callback(callbackUrl)
    redirect = redirect_if_authenticated(viewer, callback)
    if redirect is not None:
        return redirect
    return _login_page(request, callback=callback)


@router.post("/login", response_class=HTMLResponse)
async def login_submit(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    callbackUrl: str = Form("/"),
    client: BackendClient = Depends(get_backend_client),
):
    callback = safe_callback(callbackUrl)
    try:
        credentials = LoginRequest(email=email.strip(), password=password)
    except ValidationError:
        return _login_page(request, callback=callback, email=email, error="Email and password are required", status_code=400)

    try:
        tokens = SessionTokens.model_validate(await client.login(credentials.email, credentials.password))
    except BackendError as exc:
        logger.warning("Login failed for %s: %s", email, exc.message)
        return _login_page(request, callback=callback, email=email, error=exc.message, status_code=400)

    if not tokens.access_token:
        return _login_page(request, callback=callback, email=email, error="Login failed", status_code=502)

    response = RedirectResponse(callback, status_code=status.HTTP_303_SEE_OTHER)
    store_session(response, tokens.access_token, tokens.refresh_token)
    return response


@router.post("/logout")
async def logout() -> RedirectResponse:
    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    clear_session(response)
    return response
