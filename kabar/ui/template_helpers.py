"""Utilities for rendering UI templates with shared context."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates

from ..config import get_settings
from ..services.formatting import initials, login_type_label, relative_time, repost_count, user_type_label
from ..services.i18n_service import DEFAULT_LOCALE, get_messages, remember_locale, resolve_request_locale, translate
from . import components

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def request_translator(request: Request):
    """Return ``(locale, t)`` for the request's resolved locale."""

    locale = resolve_request_locale(request)

    def _t(key: str, default: str | None = None, **params: object) -> str:
        return translate(locale, key, default, **params)

    return locale, _t


def render_template(
    request: Request,
    template_name: str,
    context: dict[str, Any] | None = None,
    *,
    status_code: int = 200,
):
    """Return a TemplateResponse with shared UI + i18n context."""

    locale, _t = request_translator(request)

    def _relative(value: Any, with_time: bool = False) -> str:
        return relative_time(value, locale=locale, with_time=with_time)

    base_context: dict[str, Any] = {
        "request": request,
        "app_name": get_settings().app_name,
        "components": components.REGISTRY,
        "active_nav": None,
        "page_title": "",
        "viewer": None,
        "notice": None,
        "error": None,
        "static_version": components.layout.STATIC_VERSION,
        "locale": locale,
        "i18n_messages": get_messages(locale),
        "i18n_default_messages": get_messages(DEFAULT_LOCALE),
        "t": _t,
        "relative_time": _relative,
        "initials": initials,
        "repost_count": repost_count,
        "user_type_label": user_type_label,
        "login_type_label": login_type_label,
    }
    if context:
        base_context.update(context)

    response = templates.TemplateResponse(request, template_name, base_context, status_code=status_code)
    remember_locale(response, locale)
    return response


__all__ = ["render_template", "request_translator", "templates"]
