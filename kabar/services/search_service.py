"""Post search behind the navbar dialog."""
from __future__ import annotations

import logging

from ..clients.backend import BackendClient, BackendError
from ..schemas import Post
from .feed_service import parse_posts

logger = logging.getLogger(__name__)


async def search_posts(
    client: BackendClient,
    query: str | None,
    *,
    limit: int = 10,
    token: str | None = None,
) -> list[Post]:
    """Return matching posts; a blank query or a failed call yields no results."""

    term = (query or "").strip()
    if not term:
        return []
    try:
        items = await client.search_posts(term, page=1, limit=limit, token=token)
    except BackendError as exc:
        logger.warning("Search for %r failed: %s", term, exc.message)
        return []
    return parse_posts(items)


__all__ = ["search_posts"]
