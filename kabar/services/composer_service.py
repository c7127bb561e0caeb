"""Form state for composing multi-section posts.

A :class:`PostComposer` mirrors everything the create/edit page lets a user do
before pressing submit: add typed sections, attach images to an image section,
reorder sections, pick a featured image, and schedule the post. Selected files
stay in memory as :class:`~kabar.clients.image_host.PendingImage` objects and are
only uploaded by :meth:`PostComposer.submit` after validation has passed.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Awaitable, Callable, Literal

from ..clients.image_host import PendingImage, validate_image
from ..constants import (
    CATEGORIES,
    CUSTOM_CATEGORY,
    DEFAULT_IMAGE_LIMIT,
    DESCRIPTION_MAX_LENGTH,
    GOD_IMAGE_LIMIT,
    MAX_TZ_OFFSET_MINUTES,
    POST_IMAGE_MAX_BYTES,
    POST_LIMITS,
    PRIVILEGED_ROLES,
    SECTION_LABELS,
    SECTION_TYPES,
    TITLE_MIN_LENGTH,
)
from ..schemas import Post

logger = logging.getLogger(__name__)

Uploader = Callable[[PendingImage], Awaitable[str]]
Direction = Literal["up", "down"]


class ComposerError(ValueError):
    """Raised when the composer refuses an operation."""


class ComposerValidationError(ComposerError):
    """Raised when the main fields fail validation; holds the first issue only."""


def is_privileged(role: str | None) -> bool:
    return (role or "") in PRIVILEGED_ROLES


def image_limit_for(role: str | None) -> int | None:
    """Images allowed per image section, ``None`` meaning unlimited."""

    if is_privileged(role):
        return None
    return GOD_IMAGE_LIMIT if role == "god" else DEFAULT_IMAGE_LIMIT


def post_limit_reached(role: str | None, posts_count: int) -> bool:
    limit = POST_LIMITS.get(role or "")
    if limit is None:
        return False
    return posts_count >= limit


@dataclass
class ImageSlot:
    url: str = ""
    pending: PendingImage | None = None


@dataclass
class DraftSection:
    type: str
    order: int
    content: str | None = None
    src: str | None = None
    images: list[ImageSlot] | None = None


@dataclass
class ComposerAuthor:
    user_id: str
    username: str
    profile_pic: str | None = None


def _parse_time(value: str) -> time:
    parts = [int(part) for part in value.split(":")]
    while len(parts) < 3:
        parts.append(0)
    hours, minutes, seconds = parts[:3]
    return time(hours, minutes, seconds)


def local_zone(tz_offset_minutes: int) -> timezone:
    """Fixed-offset zone for a browser ``getTimezoneOffset()`` value."""

    if not -MAX_TZ_OFFSET_MINUTES <= tz_offset_minutes <= MAX_TZ_OFFSET_MINUTES:
        raise ComposerValidationError("Invalid timezone offset")
    return timezone(timedelta(minutes=-tz_offset_minutes))


def format_utc(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")


def scheduled_at_iso(day: date, clock: str, *, tz_offset_minutes: int = 0) -> str:
    """Combine a local date and ``HH:MM[:SS]`` into a UTC ISO-8601 timestamp.

    ``tz_offset_minutes`` follows the browser convention (UTC minus local time),
    so UTC+7 is ``-420``.
    """

    zone = local_zone(tz_offset_minutes)
    try:
        local_time = _parse_time(clock)
    except ValueError as exc:
        raise ComposerValidationError("Invalid scheduled time") from exc
    return format_utc(datetime.combine(day, local_time, tzinfo=zone))


@dataclass
class PostComposer:
    """Draft of a post being created or edited."""

    role: str | None = None
    mode: Literal["create", "edit"] = "create"
    post_id: str | None = None
    title: str = ""
    description: str = ""
    category: str = ""
    custom_category: str = ""
    media_url: str = ""
    blurred: bool = False
    sections: list[DraftSection] = field(default_factory=list)
    featured_image: PendingImage | None = None
    is_scheduled: bool = False
    scheduled_date: date | None = None
    scheduled_time: str = ""
    tz_offset_minutes: int = 0
    # Instant loaded from an existing post; resent as is while the date and time
    # fields still show the values it was rendered as.
    scheduled_utc: datetime | None = None
    notices: list[str] = field(default_factory=list)

    # -- sections ----------------------------------------------------------

    def add_section(self, section_type: str) -> DraftSection:
        if section_type not in SECTION_TYPES:
            raise ComposerError(f"Unknown section type: {section_type}")
        if any(section.type == section_type for section in self.sections):
            raise ComposerError(f"Only one {SECTION_LABELS[section_type]} Section is allowed.")

        section = DraftSection(
            type=section_type,
            order=len(self.sections),
            content="" if section_type in {"code", "html"} else None,
            src="" if section_type in {"image", "video", "link"} else None,
            images=[ImageSlot()] if section_type == "image" else None,
        )
        self.sections.append(section)
        return section

    def _section(self, index: int) -> DraftSection:
        if index < 0 or index >= len(self.sections):
            raise ComposerError(f"No section at position {index}")
        return self.sections[index]

    def _image_section(self, index: int) -> DraftSection:
        section = self._section(index)
        if section.type != "image" or section.images is None:
            raise ComposerError("Section does not hold images")
        return section

    def update_section(self, index: int, *, content: str | None = None, src: str | None = None) -> None:
        section = self._section(index)
        if content is not None:
            section.content = content
        if src is not None:
            section.src = src

    def _renumber(self) -> None:
        for position, section in enumerate(self.sections):
            section.order = position

    def remove_section(self, index: int) -> None:
        self._section(index)
        del self.sections[index]
        self._renumber()

    def move_section(self, index: int, direction: Direction) -> None:
        self._section(index)
        if (direction == "up" and index == 0) or (direction == "down" and index == len(self.sections) - 1):
            return
        target = index - 1 if direction == "up" else index + 1
        self.sections[index], self.sections[target] = self.sections[target], self.sections[index]
        self._renumber()

    # -- image slots ---------------------------------------------------------

    @property
    def image_limit(self) -> int | None:
        return image_limit_for(self.role)

    def add_image_slot(self, section_index: int) -> None:
        section = self._image_section(section_index)
        images = section.images or []
        limit = self.image_limit
        if limit is not None and len(images) >= limit:
            raise ComposerError(f"You can only add up to {limit} images per section.")
        images.append(ImageSlot())
        section.images = images

    def _slot(self, section_index: int, image_index: int) -> ImageSlot:
        images = self._image_section(section_index).images or []
        if image_index < 0 or image_index >= len(images):
            raise ComposerError(f"No image slot at position {image_index}")
        return images[image_index]

    def set_image_url(self, section_index: int, image_index: int, url: str) -> None:
        self._slot(section_index, image_index).url = url

    def attach_image(self, section_index: int, image_index: int, image: PendingImage | None) -> None:
        """Hold a file for a slot; the typed URL is cleared in favour of the file."""

        if image is not None:
            validate_image(image, max_bytes=POST_IMAGE_MAX_BYTES)
        slot = self._slot(section_index, image_index)
        slot.pending = image
        slot.url = ""

        limit = self.image_limit
        attached = sum(1 for item in self._image_section(section_index).images or [] if item.pending)
        if limit is not None and attached == limit:
            self.notices.append(f"You have added {limit} images. This is the maximum allowed per section.")

    def remove_image_slot(self, section_index: int, image_index: int) -> None:
        self._slot(section_index, image_index)
        images = self._image_section(section_index).images or []
        del images[image_index]

    # -- featured image ----------------------------------------------------

    def set_featured_image(self, image: PendingImage) -> None:
        validate_image(image, max_bytes=POST_IMAGE_MAX_BYTES)
        self.featured_image = image

    def remove_featured_image(self) -> None:
        self.featured_image = None
        self.media_url = ""

    # -- main fields -------------------------------------------------------

    @property
    def resolved_category(self) -> str:
        value = self.custom_category if self.category == CUSTOM_CATEGORY else self.category
        return value.strip()

    def validate(self) -> None:
        if len(self.title.strip()) < TITLE_MIN_LENGTH:
            raise ComposerValidationError(f"Title must be at least {TITLE_MIN_LENGTH} characters")
        if len(self.description) > DESCRIPTION_MAX_LENGTH:
            raise ComposerValidationError("Description max 500 characters")
        if not self.resolved_category:
            raise ComposerValidationError("Category is required")

    def scheduled_at(self) -> str | None:
        if not self.is_scheduled:
            return None
        if self.scheduled_utc is not None:
            return format_utc(self.scheduled_utc)
        local_now = datetime.now(local_zone(self.tz_offset_minutes))
        day = self.scheduled_date or local_now.date()
        clock = self.scheduled_time or local_now.strftime("%H:%M:%S")
        return scheduled_at_iso(day, clock, tz_offset_minutes=self.tz_offset_minutes)

    def sections_state(self) -> list[dict[str, Any]]:
        """Serializable section list for the page script (pending files excluded)."""

        state: list[dict[str, Any]] = []
        for section in self.sections:
            entry: dict[str, Any] = {"type": section.type, "content": section.content, "src": section.src}
            if section.images is not None:
                entry["images"] = [slot.url for slot in section.images]
            state.append(entry)
        return state

    # -- edit mode ---------------------------------------------------------

    @classmethod
    def from_post(cls, post: Post, *, role: str | None = None) -> "PostComposer":
        """Load an existing post into an edit-mode draft."""

        composer = cls(role=role, mode="edit", post_id=post.post_id)
        composer.title = post.title or ""
        composer.description = post.description or ""
        category = post.category or ""
        if category and category not in CATEGORIES:
            composer.category = CUSTOM_CATEGORY
            composer.custom_category = category
        else:
            composer.category = category
        composer.media_url = post.media_url or ""
        composer.blurred = post.blurred
        for position, section in enumerate(sorted(post.sections, key=lambda item: item.order)):
            images = None
            if section.type == "image":
                images = [ImageSlot(url=url) for url in (section.image_detail or [])] or [ImageSlot()]
            composer.sections.append(
                DraftSection(
                    type=section.type,
                    order=position,
                    content=section.content,
                    src=section.src,
                    images=images,
                )
            )
        if post.is_scheduled and post.scheduled_at is not None:
            scheduled = post.scheduled_at.astimezone(timezone.utc)
            composer.is_scheduled = True
            composer.scheduled_date = scheduled.date()
            composer.scheduled_time = scheduled.strftime("%H:%M:%S")
            composer.scheduled_utc = scheduled
        return composer

    # -- submission --------------------------------------------------------

    async def _resolve_section_images(self, section: DraftSection, uploader: Uploader) -> list[str]:
        urls: list[str] = []
        for slot in section.images or []:
            if slot.pending is not None:
                urls.append(await uploader(slot.pending))
            elif slot.url.strip():
                urls.append(slot.url.strip())
        return urls

    async def submit(self, uploader: Uploader, *, author: ComposerAuthor) -> dict[str, Any]:
        """Validate, upload every pending file, and return the backend payload.

        Nothing is uploaded when validation fails. The featured image goes first,
        then each image section's files in slot order.
        """

        self.validate()

        media_url = self.media_url.strip() or None
        if self.featured_image is not None:
            media_url = await uploader(self.featured_image)
            self.media_url = media_url
            self.featured_image = None

        image_sections = [section for section in self.sections if section.type == "image"]
        resolved = await asyncio.gather(
            *(self._resolve_section_images(section, uploader) for section in image_sections)
        )
        uploaded = {id(section): urls for section, urls in zip(image_sections, resolved)}

        sections_payload: list[dict[str, Any]] = []
        for section in self.sections:
            if section.type == "html":
                continue
            entry: dict[str, Any] = {
                "type": section.type,
                "content": section.content or None,
                "src": section.src or None,
                "order": section.order,
            }
            if section.type == "image":
                entry["imageDetail"] = uploaded[id(section)]
            sections_payload.append(entry)

        payload: dict[str, Any] = {
            "title": self.title.strip(),
            "description": self.description.strip(),
            "category": self.resolved_category,
            "blurred": self.blurred,
            "sections": sections_payload,
            "author": {"userId": author.user_id, "username": author.username},
            "isScheduled": self.is_scheduled,
        }
        if author.profile_pic:
            payload["author"]["profilePic"] = author.profile_pic
        if media_url:
            payload["mediaUrl"] = media_url
        scheduled_at = self.scheduled_at()
        if scheduled_at:
            payload["scheduledAt"] = scheduled_at
        logger.info(
            "Composed %s payload with %d sections (scheduled=%s)", self.mode, len(sections_payload), self.is_scheduled
        )
        return payload


def _slot_urls(entry: dict[str, Any]) -> list[str]:
    images = entry.get("images")
    if not isinstance(images, list):
        return [""]
    return [str(url or "") for url in images] or [""]


def replay_sections(
    composer: PostComposer,
    state: list[dict[str, Any]],
    files: dict[str, PendingImage],
) -> None:
    """Rebuild the section list submitted by the page script.

    Every entry goes through the same operations a user would perform, so the
    one-per-type and per-section image limits hold for hand-crafted requests too.
    Files are looked up under ``section_image_{section}_{slot}``.
    """

    for index, entry in enumerate(state):
        if not isinstance(entry, dict):
            raise ComposerError("Malformed section data")
        composer.add_section(str(entry.get("type") or ""))
        composer.update_section(
            index,
            content=entry.get("content") if isinstance(entry.get("content"), str) else None,
            src=entry.get("src") if isinstance(entry.get("src"), str) else None,
        )
        if composer.sections[index].type != "image":
            continue
        for slot_index, url in enumerate(_slot_urls(entry)):
            if slot_index > 0:
                composer.add_image_slot(index)
            composer.set_image_url(index, slot_index, url)
            pending = files.get(f"section_image_{index}_{slot_index}")
            if pending is not None:
                composer.attach_image(index, slot_index, pending)


def apply_action(composer: PostComposer, action: str) -> None:
    """Apply an editor button press such as ``move_section:2:up`` to the draft."""

    name, _, rest = action.partition(":")
    args = rest.split(":") if rest else []
    try:
        if name == "add_section" and len(args) == 1:
            composer.add_section(args[0])
        elif name == "remove_section" and len(args) == 1:
            composer.remove_section(int(args[0]))
        elif name == "move_section" and len(args) == 2 and args[1] in ("up", "down"):
            composer.move_section(int(args[0]), args[1])  # type: ignore[arg-type]
        elif name == "add_image" and len(args) == 1:
            composer.add_image_slot(int(args[0]))
        elif name == "remove_image" and len(args) == 2:
            composer.remove_image_slot(int(args[0]), int(args[1]))
        elif name == "remove_featured" and not args:
            composer.remove_featured_image()
        else:
            raise ComposerError(f"Unknown editor action: {action}")
    except ValueError as exc:
        if isinstance(exc, ComposerError):
            raise
        raise ComposerError(f"Unknown editor action: {action}") from exc


__all__ = [
    "ComposerAuthor",
    "ComposerError",
    "ComposerValidationError",
    "DraftSection",
    "ImageSlot",
    "PostComposer",
    "apply_action",
    "image_limit_for",
    "is_privileged",
    "post_limit_reached",
    "replay_sections",
    "format_utc",
    "local_zone",
    "scheduled_at_iso",
]
