"""Viewer identity derived from the backend-issued session token.

The backend owns authentication. This module only stores the tokens it hands
out in cookies and reads the viewer's claims back from the access token.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

from fastapi import Depends, Request
from fastapi.responses import RedirectResponse, Response
from jose import JWTError, jwt

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"


class LoginRequired(Exception):
    """Raised when a page or action needs a signed-in viewer."""

    def __init__(self, next_path: str = "/") -> None:
        super().__init__("Login required")
        self.next_path = next_path

    @property
    def login_url(self) -> str:
        return login_url(self.next_path)


@dataclass(frozen=True)
class Viewer:
    """The signed-in user as described by the access token."""

    id: str
    email: str
    name: str
    access_token: str
    refresh_token: str | None = None
    image: str | None = None
    user_type: str | None = None
    is_verified: bool = False
    login_type: str | None = None

    @property
    def role(self) -> str | None:
        return self.user_type


def login_url(next_path: str | None = None) -> str:
    if not next_path or next_path == "/":
        return LOGIN_PATH
    return f"{LOGIN_PATH}?callbackUrl={quote(next_path, safe='')}"


def safe_callback(candidate: str | None) -> str:
    """Only allow same-site relative redirect targets."""

    if not candidate:
        return "/"
    value = candidate.strip()
    if not value.startswith("/") or value.startswith("//") or "\\" in value:
        return "/"
    return value


def _first(claims: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = claims.get(key)
        if value not in (None, ""):
            return value
    return None


def viewer_from_token(access_token: str | None, refresh_token: str | None = None) -> Viewer | None:
    """Build a :class:`Viewer` from unverified JWT claims, or ``None`` if unusable."""

    if not access_token:
        return None
    try:
        claims = jwt.get_unverified_claims(access_token)
    except JWTError:
        logger.warning("Discarding undecodable session token")
        return None

    expires = claims.get("exp")
    if isinstance(expires, (int, float)) and expires <= datetime.now(timezone.utc).timestamp():
        return None

    user_id = _first(claims, "id", "userId", "sub")
    if not user_id:
        return None

    email = str(_first(claims, "email") or "")
    name = _first(claims, "name", "username") or (email.split("@")[0] if email else None) or "User"
    return Viewer(
        id=str(user_id),
        email=email,
        name=str(name),
        access_token=access_token,
        refresh_token=refresh_token,
        image=_first(claims, "image", "picture", "profilePic"),
        user_type=_first(claims, "userType", "role"),
        is_verified=bool(claims.get("isVerified", False)),
        login_type=_first(claims, "loginType"),
    )


def _refresh_cookie_name(settings: Settings) -> str:
    return f"{settings.session_cookie_name}_refresh"


def store_session(response: Response, access_token: str, refresh_token: str | None = None) -> None:
    settings = get_settings()
    options = {
        "max_age": settings.session_cookie_max_age,
        "httponly": True,
        "secure": settings.session_cookie_secure,
        "samesite": "lax",
        "path": "/",
    }
    response.set_cookie(settings.session_cookie_name, access_token, **options)
    if refresh_token:
        response.set_cookie(_refresh_cookie_name(settings), refresh_token, **options)


def clear_session(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(settings.session_cookie_name, path="/")
    response.delete_cookie(_refresh_cookie_name(settings), path="/")


def get_optional_viewer(request: Request, settings: Settings = Depends(get_settings)) -> Viewer | None:
    """FastAPI dependency returning the viewer or ``None`` when signed out."""

    return viewer_from_token(
        request.cookies.get(settings.session_cookie_name),
        request.cookies.get(_refresh_cookie_name(settings)),
    )


def _current_path(request: Request) -> str:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return path


def require_viewer(request: Request, viewer: Viewer | None = Depends(get_optional_viewer)) -> Viewer:
    """FastAPI dependency that insists on a signed-in viewer."""

    if viewer is None:
        raise LoginRequired(_current_path(request))
    return viewer


def redirect_if_authenticated(viewer: Viewer | None, target: str = "/") -> RedirectResponse | None:
    """Signed-in visitors skip the login page."""

    if viewer is None:
        return None
    return RedirectResponse(safe_callback(target), status_code=303)


__all__ = [
    "LOGIN_PATH",
    "LoginRequired",
    "Viewer",
    "clear_session",
    "get_optional_viewer",
    "login_url",
    "redirect_if_authenticated",
    "require_viewer",
    "safe_callback",
    "store_session",
    "viewer_from_token",
]
