"""Translate the composer's multipart form into a :class:`PostComposer`."""
from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from typing import Any

from starlette.datastructures import FormData, UploadFile

from ..clients.image_host import PendingImage
from ..constants import CATEGORIES, CUSTOM_CATEGORY, SECTION_LABELS, SECTION_TYPES
from ..services.composer_service import (
    ComposerError,
    ComposerValidationError,
    PostComposer,
    format_utc,
    local_zone,
    replay_sections,
)

logger = logging.getLogger(__name__)

SECTION_FIELD = "sections"
FEATURED_FIELD = "featured_image"
SECTION_FILE_PREFIX = "section_image_"
TZ_OFFSET_FIELD = "tz_offset"
SCHEDULED_UTC_FIELD = "scheduled_utc"
SCHEDULED_SHOWN_FIELD = "scheduled_shown"


def _text(form: FormData, name: str) -> str:
    value = form.get(name)
    return value if isinstance(value, str) else ""


def _flag(form: FormData, name: str) -> bool:
    return _text(form, name).lower() in {"true", "on", "1"}


def raw_sections(form: FormData) -> list[dict[str, Any]]:
    """Section list as the page script submitted it, before any checks."""

    raw = _text(form, SECTION_FIELD).strip()
    if not raw:
        return []
    try:
        state = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ComposerError("Malformed section data") from exc
    if not isinstance(state, list):
        raise ComposerError("Malformed section data")
    return state


async def _pending_files(form: FormData) -> dict[str, PendingImage]:
    files: dict[str, PendingImage] = {}
    for key, value in form.multi_items():
        if not key.startswith(SECTION_FILE_PREFIX) or not isinstance(value, UploadFile):
            continue
        pending = await PendingImage.from_upload(value)
        if pending is not None:
            files[key] = pending
    return files


def _tz_offset(form: FormData) -> int:
    raw = _text(form, TZ_OFFSET_FIELD).strip()
    if not raw:
        return 0
    try:
        minutes = int(raw)
    except ValueError as exc:
        raise ComposerValidationError("Invalid timezone offset") from exc
    local_zone(minutes)
    return minutes


def shown_schedule(day: str, clock: str) -> str:
    return f"{day}T{clock}"


def _kept_schedule(form: FormData, day: str, clock: str) -> datetime | None:
    """The loaded instant, unless the date or time fields were changed since rendering."""

    raw = _text(form, SCHEDULED_UTC_FIELD).strip()
    if not raw or _text(form, SCHEDULED_SHOWN_FIELD) != shown_schedule(day, clock):
        return None
    try:
        moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


async def read_composer_form(form: FormData, composer: PostComposer) -> None:
    """Copy the main fields, then replay sections and attach the selected files."""

    composer.title = _text(form, "title")
    composer.description = _text(form, "description")
    composer.category = _text(form, "category")
    composer.custom_category = _text(form, "custom_category")
    composer.media_url = _text(form, "media_url").strip()
    composer.blurred = _flag(form, "blurred")
    composer.is_scheduled = _flag(form, "is_scheduled")
    composer.scheduled_time = _text(form, "scheduled_time").strip()

    scheduled_date = _text(form, "scheduled_date").strip()
    if scheduled_date:
        try:
            composer.scheduled_date = date.fromisoformat(scheduled_date)
        except ValueError as exc:
            raise ComposerValidationError("Invalid scheduled date") from exc
    composer.tz_offset_minutes = _tz_offset(form)
    composer.scheduled_utc = _kept_schedule(form, scheduled_date, composer.scheduled_time)

    replay_sections(composer, raw_sections(form), await _pending_files(form))

    featured = form.get(FEATURED_FIELD)
    if isinstance(featured, UploadFile):
        pending = await PendingImage.from_upload(featured)
        if pending is not None:
            composer.set_featured_image(pending)


def composer_context(composer: PostComposer, *, sections: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    """Template values for the create/edit page."""

    state = composer.sections_state() if sections is None else sections
    scheduled_date = composer.scheduled_date.isoformat() if composer.scheduled_date else ""
    used = {entry.get("type") for entry in state if isinstance(entry, dict)}
    category_options = [(value, value) for value in CATEGORIES]
    return {
        "composer": composer,
        "sections": state,
        "sections_json": json.dumps(state),
        "section_labels": SECTION_LABELS,
        "available_sections": [kind for kind in SECTION_TYPES if kind not in used],
        "category_options": category_options,
        "custom_category_value": CUSTOM_CATEGORY,
        "image_limit": composer.image_limit,
        "scheduled_date": scheduled_date,
        "scheduled_utc": format_utc(composer.scheduled_utc) if composer.scheduled_utc else "",
        "scheduled_shown": shown_schedule(scheduled_date, composer.scheduled_time),
    }


__all__ = ["composer_context", "raw_sections", "read_composer_form", "shown_schedule"]
