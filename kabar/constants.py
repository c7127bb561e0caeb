"""Project-wide constant values."""
from __future__ import annotations

SECTION_TYPES: tuple[str, ...] = ("image", "code", "video", "link", "html")

SECTION_LABELS = {
    "image": "Image",
    "code": "Copy Text",
    "video": "Video",
    "link": "Link",
    "html": "HTML",
}

CUSTOM_CATEGORY = "__CUSTOM__"

CATEGORIES: tuple[str, ...] = ("DOKSIL", "NEWS", "GLOBAL", "CRYPTO")

# Maximum posts a role may own; roles not listed are unlimited.
POST_LIMITS = {"member": 1, "vip": 5, "god": 20}

PRIVILEGED_ROLES = frozenset({"owner", "admin", "mod"})
DEFAULT_IMAGE_LIMIT = 5
GOD_IMAGE_LIMIT = 30

POST_IMAGE_MAX_BYTES = 3 * 1024 * 1024
PROFILE_IMAGE_MAX_BYTES = 5 * 1024 * 1024

TITLE_MIN_LENGTH = 3
DESCRIPTION_MAX_LENGTH = 5000

# Browser timezone offsets stay strictly within a day.
MAX_TZ_OFFSET_MINUTES = 1439

REPOST_RATIO = 0.6

__all__ = [
    "SECTION_TYPES",
    "SECTION_LABELS",
    "CUSTOM_CATEGORY",
    "CATEGORIES",
    "POST_LIMITS",
    "PRIVILEGED_ROLES",
    "DEFAULT_IMAGE_LIMIT",
    "GOD_IMAGE_LIMIT",
    "POST_IMAGE_MAX_BYTES",
    "PROFILE_IMAGE_MAX_BYTES",
    "TITLE_MIN_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "MAX_TZ_OFFSET_MINUTES",
    "REPOST_RATIO",
]
