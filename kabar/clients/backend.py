"""Async client for the external posts/auth REST API."""
from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)

_MISSING_TOKEN = "JWT token not available. Please login again."


class BackendError(RuntimeError):
    """Raised when the backend is unreachable or answers with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class MissingTokenError(BackendError):
    """Raised before calling an endpoint that requires a bearer token."""

    def __init__(self) -> None:
        super().__init__(401, _MISSING_TOKEN)


def unwrap(payload: Any) -> Any:
    """Return ``payload["data"]`` when the backend wrapped its answer, else the payload."""

    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        return payload["data"]
    return payload


def error_message(payload: Any, fallback: str) -> str:
    if not isinstance(payload, dict):
        return fallback
    message = payload.get("message")
    if isinstance(message, str) and message:
        return message
    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
        return error["message"]
    if isinstance(error, str) and error:
        return error
    detail = payload.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    return fallback


def extract_posts(payload: Any) -> list[dict[str, Any]] | None:
    """Pull the post list out of any of the envelope shapes the backend produces.

    Returns ``None`` when no list can be found so callers can report a parse error.
    """

    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("posts"), list):
        return data["posts"]
    if isinstance(payload.get("posts"), list):
        return payload["posts"]
    if isinstance(data, list):
        return data
    return None


def extract_total(payload: Any) -> int:
    if not isinstance(payload, dict):
        return 0
    data = payload.get("data")
    for source in (data, payload):
        if isinstance(source, dict) and source.get("total"):
            try:
                return int(source["total"])
            except (TypeError, ValueError):
                return 0
    return 0


def extract_user(payload: Any) -> dict[str, Any] | None:
    """Find the user object in ``/auth/me`` answers of either shape."""

    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("user"), dict):
        return data["user"]
    if isinstance(payload.get("user"), dict):
        return payload["user"]
    if isinstance(data, dict) and data.get("id"):
        return data
    return None


class BackendClient:
    """Thin wrapper over ``/api/v1`` that speaks JSON and bearer tokens."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._settings.api_base

    def _headers(self, token: str | None, *, json_body: bool) -> dict[str, str]:
        headers: dict[str, str] = {}
        if json_body:
            headers["Content-Type"] = "application/json"
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        fallback_error: str = "Request failed",
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers = self._headers(token, json_body=json is not None)
        try:
            async with httpx.AsyncClient(timeout=self._settings.backend_timeout, transport=self._transport) as client:
                response = await client.request(method, url, params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            logger.exception("Backend request %s %s failed", method, path)
            raise BackendError(502, fallback_error) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.is_error:
            message = error_message(payload, fallback_error)
            logger.warning("Backend %s %s answered %s: %s", method, path, response.status_code, message)
            raise BackendError(response.status_code, message)
        return payload

    @staticmethod
    def _require(token: str | None) -> str:
        if not token:
            raise MissingTokenError()
        return token

    # -- posts -------------------------------------------------------------

    async def list_posts(self, *, limit: int, offset: int, token: str | None = None) -> tuple[list[dict[str, Any]], int]:
        payload = await self.request(
            "GET",
            "/posts",
            token=token,
            params={"limit": limit, "offset": offset},
            fallback_error="Failed to fetch posts",
        )
        return extract_posts(payload) or [], extract_total(payload)

    async def list_user_posts(self, user_id: str, *, token: str | None) -> Any:
        return await self.request(
            "GET",
            "/posts",
            token=self._require(token),
            params={"userId": user_id},
            fallback_error="Failed to fetch posts",
        )

    async def get_post(self, post_id: str, *, token: str | None = None) -> dict[str, Any] | None:
        payload = await self.request("GET", f"/posts/{post_id}", token=token, fallback_error="Failed to fetch post")
        if not isinstance(payload, dict):
            return None
        data = payload.get("data")
        for source in (data, payload):
            if isinstance(source, dict) and isinstance(source.get("post"), dict):
                return source["post"]
        return None

    async def create_post(self, payload: dict[str, Any], *, token: str | None) -> Any:
        return await self.request(
            "POST", "/posts", token=self._require(token), json=payload, fallback_error="Failed to create post"
        )

    async def update_post(self, post_id: str, payload: dict[str, Any], *, token: str | None) -> Any:
        return await self.request(
            "PUT", f"/posts/{post_id}", token=self._require(token), json=payload, fallback_error="Failed to update post"
        )

    async def delete_post(self, post_id: str, *, token: str | None) -> bool:
        payload = await self.request(
            "DELETE", f"/posts/{post_id}", token=self._require(token), fallback_error="Failed to delete post"
        )
        if isinstance(payload, dict):
            data = payload.get("data")
            if isinstance(data, dict) and "success" in data:
                return bool(data["success"])
            if "success" in payload:
                return bool(payload["success"])
        # A 2xx answer without a success flag still counts.
        return True

    async def like_post(self, post_id: str, *, token: str | None) -> dict[str, Any]:
        payload = await self.request(
            "POST", f"/posts/{post_id}/like", token=self._require(token), fallback_error="Failed to like post"
        )
        data = unwrap(payload)
        return data if isinstance(data, dict) else {}

    async def add_comment(self, post_id: str, content: str, *, token: str | None) -> dict[str, Any] | None:
        payload = await self.request(
            "POST",
            f"/posts/{post_id}/comments",
            token=self._require(token),
            json={"content": content},
            fallback_error="Failed to add comment",
        )
        data = unwrap(payload)
        comment = data.get("comment") if isinstance(data, dict) else None
        return comment if isinstance(comment, dict) else None

    async def posts_count(self, *, token: str | None) -> dict[str, Any]:
        payload = await self.request(
            "GET", "/posts/user/posts-count", token=self._require(token), fallback_error="Failed to fetch posts count"
        )
        data = unwrap(payload)
        return data if isinstance(data, dict) else {}

    async def search_posts(self, query: str, *, page: int = 1, limit: int = 10, token: str | None = None) -> list[dict[str, Any]]:
        payload = await self.request(
            "GET",
            "/posts/search",
            token=token,
            params={"q": query, "page": page, "limit": limit},
            fallback_error="Search failed",
        )
        return extract_posts(payload) or []

    # -- auth --------------------------------------------------------------

    async def login(self, email: str, password: str) -> dict[str, Any]:
        payload = await self.request(
            "POST", "/auth/login", json={"email": email, "password": password}, fallback_error="Login failed"
        )
        data = unwrap(payload)
        return data if isinstance(data, dict) else {}

    async def get_me(self, *, token: str | None) -> dict[str, Any] | None:
        payload = await self.request("GET", "/auth/me", token=self._require(token), fallback_error="Failed to fetch profile")
        return extract_user(payload)

    async def update_profile(self, changes: dict[str, Any], *, token: str | None) -> Any:
        return await self.request(
            "PUT", "/auth/profile", token=self._require(token), json=changes, fallback_error="Failed to update profile"
        )


def get_backend_client() -> BackendClient:
    """FastAPI dependency; tests override it with a transport-backed client."""

    return BackendClient()


__all__ = [
    "BackendClient",
    "BackendError",
    "MissingTokenError",
    "extract_posts",
    "extract_total",
    "extract_user",
    "error_message",
    "get_backend_client",
    "unwrap",
]
