"""Post reads and writes that sit between the pages and the backend client."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from ..clients.backend import BackendClient, BackendError, extract_posts
from ..schemas import Post, PostComment, PostsCount
from .feed_service import normalize_post, parse_posts
from .i18n_service import DEFAULT_LOCALE, translate

logger = logging.getLogger(__name__)


class PostsResponseError(ValueError):
    """The backend answered with a post list shape we do not recognise."""


class QuickPostError(ValueError):
    """A required quick-create field is blank; ``key`` names the i18n message."""

    def __init__(self, key: str) -> None:
        super().__init__(translate(DEFAULT_LOCALE, key))
        self.key = key


async def load_post(client: BackendClient, post_id: str, *, token: str | None = None) -> Post | None:
    raw = await client.get_post(post_id, token=token)
    if raw is None:
        return None
    try:
        return Post.model_validate(normalize_post(raw))
    except ValidationError:
        logger.warning("Backend returned an unreadable post %s", post_id)
        return None


def extract_own_posts(payload: Any) -> list[Post]:
    items = extract_posts(payload)
    if items is None:
        raise PostsResponseError("Failed to parse posts response")
    return parse_posts(items)


async def list_own_posts(client: BackendClient, user_id: str, *, token: str | None) -> list[Post]:
    payload = await client.list_user_posts(user_id, token=token)
    return extract_own_posts(payload)


async def load_posts_count(client: BackendClient, *, token: str | None) -> PostsCount:
    """Current post count for the viewer; a failed lookup counts as zero."""

    try:
        return PostsCount.model_validate(await client.posts_count(token=token))
    except BackendError as exc:
        logger.warning("Error fetching posts count: %s", exc.message)
        return PostsCount()


async def add_comment(client: BackendClient, post_id: str, content: str, *, token: str | None) -> PostComment | None:
    """Post a comment; blank input is ignored without calling the backend."""

    text = content.strip()
    if not text:
        return None
    raw = await client.add_comment(post_id, text, token=token)
    if raw is None:
        return None
    return PostComment.model_validate(raw)


def created_post_id(response: Any) -> str | None:
    """Read ``post.postId`` from a create answer of either envelope shape."""

    if not isinstance(response, dict):
        return None
    for source in (response.get("data"), response):
        if isinstance(source, dict) and isinstance(source.get("post"), dict):
            post_id = source["post"].get("postId")
            if post_id:
                return str(post_id)
    return None


@dataclass
class QuickPostDraft:
    title: str = ""
    description: str = ""
    content: str = ""
    category: str = ""
    media_url: str = ""
    blurred: bool = False
    is_published: bool = True

    def validate(self) -> None:
        if not self.title.strip():
            raise QuickPostError("quick.title_required")
        if not self.category.strip():
            raise QuickPostError("quick.category_required")

    def payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {"title": self.title, "category": self.category}
        if self.description:
            body["description"] = self.description
        if self.content:
            body["content"] = self.content
        if self.media_url:
            body["mediaUrl"] = self.media_url
        body["blurred"] = self.blurred
        body["isPublished"] = self.is_published
        return body


async def create_quick_post(client: BackendClient, draft: QuickPostDraft, *, token: str | None) -> Any:
    draft.validate()
    return await client.create_post(draft.payload(), token=token)


__all__ = [
    "PostsResponseError",
    "QuickPostDraft",
    "QuickPostError",
    "add_comment",
    "create_quick_post",
    "created_post_id",
    "extract_own_posts",
    "list_own_posts",
    "load_post",
    "load_posts_count",
]
