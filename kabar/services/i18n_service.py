"""Locale bundles for the server-rendered UI."""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable

from fastapi import HTTPException, Request, Response, status

logger = logging.getLogger(__name__)

SUPPORTED_LOCALES: tuple[str, ...] = ("id", "en")
DEFAULT_LOCALE = "id"
LOCALE_COOKIE = "ui_locale"
LOCALE_COOKIE_MAX_AGE = 60 * 60 * 24 * 365
_I18N_DIR = Path(__file__).resolve().parent.parent / "ui" / "i18n"


def _load_messages(locale: str) -> dict[str, str]:
    path = _I18N_DIR / f"{locale}.json"
    if not path.exists():
        raise FileNotFoundError(f"Missing locale bundle: {locale}")
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


@lru_cache(maxsize=8)
def get_messages(locale: str) -> dict[str, str]:
    normalized = normalize_locale(locale)
    try:
        return _load_messages(normalized)
    except (OSError, ValueError) as exc:
        logger.exception("Failed to load locale bundle %s", normalized)
        if normalized != DEFAULT_LOCALE:
            return get_messages(DEFAULT_LOCALE)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load translations") from exc


def normalize_locale(locale: str | None) -> str:
    if not locale:
        return DEFAULT_LOCALE
    value = locale.strip().replace("_", "-")
    if value in SUPPORTED_LOCALES:
        return value
    prefix = value.split("-")[0].lower()
    if prefix in ("id", "in"):
        return "id"
    if prefix == "en":
        return "en"
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unsupported locale")


def select_locale(candidate: str | None, accept_languages: Iterable[str] | None = None) -> str:
    """First supported locale among the explicit choice and the browser's list."""

    for value in (candidate, *(accept_languages or ())):
        if not value:
            continue
        try:
            return normalize_locale(value)
        except HTTPException:
            continue
    return DEFAULT_LOCALE


def translate(locale: str, key: str, default: str | None = None, **params: object) -> str:
    """Look ``key`` up in ``locale``, then the Indonesian bundle, then ``default``.

    ``params`` fill ``{placeholders}`` such as ``{count}``.
    """

    text = get_messages(locale).get(key)
    if text is None:
        text = get_messages(DEFAULT_LOCALE).get(key, default if default is not None else key)
    return text.format(**params) if params else text


def _accept_language(header: str) -> list[str]:
    ranked: list[tuple[float, int, str]] = []
    for position, segment in enumerate(header.split(",")):
        tag, _, options = segment.strip().partition(";")
        if not tag or tag == "*":
            continue
        quality = 1.0
        if options.strip().startswith("q="):
            try:
                quality = float(options.strip()[2:])
            except ValueError:
                quality = 0.0
        ranked.append((-quality, position, tag.strip()))
    return [tag for _, _, tag in sorted(ranked)]


def resolve_request_locale(request: Request) -> str:
    """``?lang=`` wins, then the ``ui_locale`` cookie, then Accept-Language."""

    explicit = request.query_params.get("lang") or request.cookies.get(LOCALE_COOKIE)
    return select_locale(explicit, _accept_language(request.headers.get("accept-language", "")))


def remember_locale(response: Response, locale: str) -> None:
    response.set_cookie(LOCALE_COOKIE, locale, max_age=LOCALE_COOKIE_MAX_AGE, httponly=False, samesite="lax", path="/")
    response.headers["Content-Language"] = locale


__all__ = [
    "DEFAULT_LOCALE",
    "LOCALE_COOKIE",
    "SUPPORTED_LOCALES",
    "get_messages",
    "normalize_locale",
    "remember_locale",
    "resolve_request_locale",
    "select_locale",
    "translate",
]
