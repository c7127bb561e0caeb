"""Feed pagination: accumulate backend pages behind a running offset."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from ..clients.backend import BackendClient, BackendError
from ..schemas import FeedPage, Post

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def normalize_post(raw: dict[str, Any]) -> dict[str, Any]:
    """Give author-only posts a ``user`` block so templates have one shape."""

    post = dict(raw)
    author = post.get("author")
    if not post.get("user") and isinstance(author, dict):
        post["user"] = {
            "id": author.get("userId") or "",
            "full_name": author.get("username"),
            "username": author.get("username"),
            "profile_photo": author.get("profilePic"),
            "is_verified": False,
        }
    return post


def parse_posts(items: list[dict[str, Any]]) -> list[Post]:
    posts: list[Post] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            posts.append(Post.model_validate(normalize_post(item)))
        except ValidationError:
            logger.warning("Skipping malformed post payload: %s", item.get("postId"))
    return posts


async def fetch_page(client: BackendClient, *, limit: int, offset: int, token: str | None = None) -> FeedPage:
    items, total = await client.list_posts(limit=limit, offset=offset, token=token)
    return FeedPage(posts=parse_posts(items), total=total)


@dataclass
class FeedPager:
    """Offset accumulator behind the home feed and its load-more button.

    ``offset`` always equals the number of posts received since the last reset,
    and ``has_more`` turns false as soon as a short page arrives or the backend's
    total has been reached.
    """

    limit: int = DEFAULT_PAGE_SIZE
    posts: list[Post] = field(default_factory=list)
    offset: int = 0
    has_more: bool = True
    loading: bool = False
    loading_more: bool = False

    def apply_page(self, page: FeedPage, *, request_offset: int, reset: bool) -> None:
        if reset:
            self.posts = list(page.posts)
        else:
            self.posts.extend(page.posts)
        self.has_more = len(page.posts) == self.limit and (request_offset + self.limit) < page.total
        self.offset = request_offset + len(page.posts)

    async def load(self, client: BackendClient, *, reset: bool = False, token: str | None = None) -> None:
        if reset:
            self.loading = True
            self.offset = 0
        else:
            self.loading_more = True
        request_offset = 0 if reset else self.offset
        try:
            page = await fetch_page(client, limit=self.limit, offset=request_offset, token=token)
            self.apply_page(page, request_offset=request_offset, reset=reset)
        except BackendError:
            logger.exception("Error loading posts at offset %d", request_offset)
        finally:
            self.loading = False
            self.loading_more = False

    @property
    def can_load_more(self) -> bool:
        return self.has_more and not self.loading_more

    async def load_more(self, client: BackendClient, *, token: str | None = None) -> bool:
        """Fetch the next page; returns ``False`` when nothing was requested."""

        if not self.can_load_more:
            return False
        await self.load(client, reset=False, token=token)
        return True


__all__ = ["DEFAULT_PAGE_SIZE", "FeedPager", "fetch_page", "normalize_post", "parse_posts"]
