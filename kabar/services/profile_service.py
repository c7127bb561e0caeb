"""Viewer profile lookup and partial updates."""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from ..clients.backend import BackendClient
from ..clients.image_host import PendingImage, validate_image
from ..constants import PROFILE_IMAGE_MAX_BYTES
from ..schemas import Profile, ProfileUpdate
from .session_service import Viewer

logger = logging.getLogger(__name__)


class NoProfileChanges(ValueError):
    def __init__(self) -> None:
        super().__init__("No changes to save")


def parse_profile(user: dict[str, Any] | None) -> Profile | None:
    if not user or not user.get("id"):
        return None
    return Profile(
        id=str(user["id"]),
        username=user.get("username") or "",
        email=user.get("email"),
        full_name=user.get("full_name") or user.get("username") or "",
        profile_photo=user.get("profile_photo"),
        is_verified=bool(user.get("is_verified", False)),
        user_type=user.get("user_type"),
        login_type=user.get("login_type"),
        bio=user.get("bio"),
    )


async def load_profile(client: BackendClient, *, token: str | None) -> Profile | None:
    return parse_profile(await client.get_me(token=token))


def build_profile_update(
    viewer: Viewer,
    *,
    username: str | None,
    bio: str | None,
    profile_pic: str | None,
) -> ProfileUpdate:
    """Keep only what differs from the session; ``bio`` is sent whenever it was submitted."""

    changes: dict[str, Any] = {}
    if username and username != viewer.name:
        changes["username"] = username
    if bio is not None:
        changes["bio"] = bio or None
    if profile_pic and profile_pic != viewer.image:
        changes["profile_pic"] = profile_pic
    if not changes:
        raise NoProfileChanges()
    return ProfileUpdate(**changes)


async def update_profile(
    client: BackendClient,
    viewer: Viewer,
    *,
    username: str | None,
    bio: str | None,
    photo: PendingImage | None,
    uploader: Callable[[PendingImage], Awaitable[str]],
) -> ProfileUpdate:
    """Upload the new photo (if any), then send the changed fields."""

    profile_pic = viewer.image
    if photo is not None:
        validate_image(photo, max_bytes=PROFILE_IMAGE_MAX_BYTES)
        profile_pic = await uploader(photo)

    update = build_profile_update(viewer, username=username, bio=bio, profile_pic=profile_pic)
    await client.update_profile(update.model_dump(by_alias=True, exclude_unset=True), token=viewer.access_token)
    logger.info("Updated profile for user %s (%s)", viewer.id, ", ".join(sorted(update.model_fields_set)))
    return update


__all__ = ["NoProfileChanges", "build_profile_update", "load_profile", "parse_profile", "update_profile"]
