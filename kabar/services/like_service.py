"""Optimistic like toggling with server reconciliation and rollback."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from ..clients.backend import BackendClient, BackendError
from ..schemas import LikeResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LikeState:
    is_liked: bool = False
    likes_count: int = 0

    def optimistic(self) -> "LikeState":
        """Return the state the viewer should see before the backend answers."""

        delta = -1 if self.is_liked else 1
        return LikeState(is_liked=not self.is_liked, likes_count=max(0, self.likes_count + delta))

    def reconcile(self, server: LikeResult) -> "LikeState":
        """Adopt whatever the backend reported, keeping local values for missing fields."""

        state = self
        if server.is_liked is not None:
            state = replace(state, is_liked=server.is_liked)
        if server.likes_count is not None:
            state = replace(state, likes_count=max(0, server.likes_count))
        return state


@dataclass(frozen=True)
class LikeOutcome:
    state: LikeState
    ok: bool
    error: str | None = None


async def toggle_like(
    client: BackendClient,
    post_id: str,
    current: LikeState,
    *,
    token: str | None,
) -> LikeOutcome:
    """Flip the like optimistically, then settle on the backend's answer.

    On failure the original state is restored so the counter never drifts from
    what the backend holds.
    """

    pending = current.optimistic()
    try:
        payload = await client.like_post(post_id, token=token)
    except BackendError as exc:
        logger.warning("Error liking post %s: %s", post_id, exc.message)
        return LikeOutcome(state=current, ok=False, error=exc.message)
    return LikeOutcome(state=pending.reconcile(LikeResult.model_validate(payload)), ok=True)


__all__ = ["LikeOutcome", "LikeState", "toggle_like"]
