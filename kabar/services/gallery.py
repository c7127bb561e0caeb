"""Image gallery helpers for post cards and the share page."""
from __future__ import annotations

from dataclasses import dataclass, field

from ..schemas import Post

MAX_TILES = 6

_KINDS = {
    1: "single",
    2: "pair",
    3: "featured-2",
    4: "featured-3",
    5: "featured-4",
}


@dataclass(frozen=True)
class GalleryTile:
    url: str
    index: int
    featured: bool = False
    blurred: bool = False
    overflow: int = 0


@dataclass(frozen=True)
class GalleryLayout:
    kind: str
    tiles: list[GalleryTile] = field(default_factory=list)
    total: int = 0


def collect_images(post: Post) -> list[str]:
    """Featured image first, then every non-blank URL of the image sections."""

    images: list[str] = []
    if post.media_url and post.media_url.strip():
        images.append(post.media_url)
    for section in post.sections:
        if section.type != "image" or not section.image_detail:
            continue
        images.extend(url for url in section.image_detail if url and url.strip())
    return images


def gallery_layout(images: list[str], *, blurred: bool = False) -> GalleryLayout:
    count = len(images)
    if count == 0:
        return GalleryLayout(kind="empty")

    kind = _KINDS.get(count, "featured-5")
    shown = images[:MAX_TILES]
    remaining = count - len(shown)
    tiles = []
    for index, url in enumerate(shown):
        is_last = index == len(shown) - 1
        tiles.append(
            GalleryTile(
                url=url,
                index=index,
                featured=index == 0 and count > 2,
                blurred=blurred and index == 0,
                overflow=remaining if is_last and remaining > 0 else 0,
            )
        )
    return GalleryLayout(kind=kind, tiles=tiles, total=count)


def wrap_index(index: int, step: int, total: int) -> int:
    """Lightbox stepping: wraps around both ends."""

    if total <= 0:
        return 0
    return (index + step) % total


def clamp_index(index: int, total: int) -> int:
    if total <= 0:
        return 0
    return max(0, min(index, total - 1))


def parse_image_index(raw: str | None, total: int) -> int:
    """Read the share page's ``?image=N`` parameter; anything but a non-negative integer means 0."""

    if raw is None or not raw.isdigit():
        return 0
    return clamp_index(int(raw), total)


__all__ = [
    "GalleryLayout",
    "GalleryTile",
    "clamp_index",
    "collect_images",
    "gallery_layout",
    "parse_image_index",
    "wrap_index",
]
