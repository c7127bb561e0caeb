"""Translation bundles for page scripts (like button toasts, search dialog, load more)."""
from __future__ import annotations

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from ..services.i18n_service import (
    DEFAULT_LOCALE,
    SUPPORTED_LOCALES,
    get_messages,
    remember_locale,
    resolve_request_locale,
)

router = APIRouter(prefix="/i18n", include_in_schema=False)


def _scoped(messages: dict[str, str], prefix: str | None) -> dict[str, str]:
    if not prefix:
        return dict(messages)
    return {key: value for key, value in messages.items() if key.startswith(prefix)}


@router.get("/messages")
async def fetch_messages(request: Request, prefix: str | None = Query(None, max_length=40)):
    """Bundle for the resolved locale; ``prefix`` (e.g. ``feed.``) narrows the keys."""

    locale = resolve_request_locale(request)
    response = JSONResponse(
        {
            "locale": locale,
            "supported": list(SUPPORTED_LOCALES),
            "messages": _scoped(get_messages(locale), prefix),
            "fallback": _scoped(get_messages(DEFAULT_LOCALE), prefix),
        }
    )
    remember_locale(response, locale)
    return response


__all__ = ["router"]
