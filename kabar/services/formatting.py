"""Display helpers shared by post cards, the share page and the profile."""
from __future__ import annotations

import math
from datetime import datetime, timezone

from ..constants import REPOST_RATIO
from .i18n_service import DEFAULT_LOCALE, translate

_MONTHS = {
    "id": ("Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des"),
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
}

USER_TYPE_LABELS = {
    "admin": "Administrator",
    "moderator": "Moderator",
    "member": "Member",
    "premium": "Premium Member",
}

LOGIN_TYPE_LABELS = {
    "google": "Google",
    "password": "Email & Password",
    "email": "Email",
}


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    """Accept backend ISO strings (``Z`` suffix included) or datetimes; naive values are UTC."""

    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def short_date(moment: datetime, *, locale: str = DEFAULT_LOCALE, with_time: bool = False) -> str:
    months = _MONTHS.get(locale, _MONTHS[DEFAULT_LOCALE])
    text = f"{moment.day} {months[moment.month - 1]} {moment.year}"
    if with_time:
        separator = "." if locale == "id" else ":"
        text = f"{text} {moment.hour:02d}{separator}{moment.minute:02d}"
    return text


def relative_time(
    value: datetime | str | None,
    *,
    locale: str = DEFAULT_LOCALE,
    now: datetime | None = None,
    with_time: bool = False,
) -> str:
    """Render "N menit yang lalu" style labels, falling back to a short date after a week.

    ``with_time`` appends the clock to the fallback date, which comment lists use.
    """

    moment = parse_timestamp(value)
    if moment is None:
        return ""
    current = now or datetime.now(timezone.utc)
    seconds = int((current - moment).total_seconds())

    if seconds < 60:
        return translate(locale, "time.just_now")
    if seconds < 3600:
        return translate(locale, "time.minutes_ago", count=seconds // 60)
    if seconds < 86400:
        return translate(locale, "time.hours_ago", count=seconds // 3600)
    if seconds < 604800:
        return translate(locale, "time.days_ago", count=seconds // 86400)
    return short_date(moment, locale=locale, with_time=with_time)


def initials(name: str | None) -> str:
    words = (name or "").split()
    if not words:
        return "U"
    return "".join(word[0] for word in words[:2]).upper()


def user_type_label(user_type: str | None) -> str:
    value = user_type or "member"
    return USER_TYPE_LABELS.get(value, value)


def login_type_label(login_type: str | None) -> str:
    if not login_type:
        return ""
    return LOGIN_TYPE_LABELS.get(login_type, login_type)


def repost_count(shares: int | None) -> int:
    return math.floor((shares or 0) * REPOST_RATIO)


__all__ = [
    "LOGIN_TYPE_LABELS",
    "USER_TYPE_LABELS",
    "initials",
    "login_type_label",
    "parse_timestamp",
    "relative_time",
    "repost_count",
    "short_date",
    "user_type_label",
]
