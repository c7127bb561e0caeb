"""Backend client: envelopes, bearer tokens and error messages."""
from __future__ import annotations

import asyncio

import httpx
import pytest

from kabar.clients.backend import (
    BackendClient,
    BackendError,
    MissingTokenError,
    error_message,
    extract_posts,
    extract_user,
)
from kabar.config import get_settings


def test_list_posts_sends_paging_and_bearer(backend, backend_client):
    backend.on("GET", "/api/v1/posts", {"data": {"posts": [{"postId": "p1"}], "total": 7}})

    items, total = asyncio.run(backend_client.list_posts(limit=20, offset=40, token="abc"))

    assert items == [{"postId": "p1"}]
    assert total == 7
    sent = backend.sent("GET", "/api/v1/posts")[0]
    assert sent.url.params["limit"] == "20"
    assert sent.url.params["offset"] == "40"
    assert sent.headers["Authorization"] == "Bearer abc"


def test_anonymous_calls_send_no_authorization(backend, backend_client):
    backend.on("GET", "/api/v1/posts", {"posts": []})

    asyncio.run(backend_client.list_posts(limit=20, offset=0))

    assert "Authorization" not in backend.requests[0].headers


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"message": "Title taken"}, "Title taken"),
        ({"error": {"message": "Bad section"}}, "Bad section"),
        ({"error": "Forbidden"}, "Forbidden"),
        ({"detail": "Nope"}, "Nope"),
        ({}, "Failed to create post"),
        ("not a dict", "Failed to create post"),
    ],
)
def test_error_message_lookup_order(payload, expected):
    assert error_message(payload, "Failed to create post") == expected


def test_error_status_raises_backend_error(backend, backend_client):
    backend.on("POST", "/api/v1/posts", {"error": {"message": "Post limit reached"}}, status=403)

    with pytest.raises(BackendError) as excinfo:
        asyncio.run(backend_client.create_post({"title": "x"}, token="abc"))

    assert excinfo.value.status_code == 403
    assert excinfo.value.message == "Post limit reached"


def test_transport_failure_maps_to_502():
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    client = BackendClient(get_settings(), transport=httpx.MockTransport(_boom))
    with pytest.raises(BackendError) as excinfo:
        asyncio.run(client.get_post("p1"))

    assert excinfo.value.status_code == 502
    assert excinfo.value.message == "Failed to fetch post"


def test_token_required_operations_refuse_without_token(backend, backend_client):
    with pytest.raises(MissingTokenError) as excinfo:
        asyncio.run(backend_client.like_post("p1", token=None))

    assert excinfo.value.status_code == 401
    assert "Please login again" in excinfo.value.message
    assert backend.requests == []


@pytest.mark.parametrize(
    "body",
    [
        {"data": {"post": {"postId": "p1"}}},
        {"post": {"postId": "p1"}},
        {"data": {"total": 1}, "post": {"postId": "p1"}},
    ],
)
def test_get_post_accepts_both_envelopes(backend, backend_client, body):
    backend.on("GET", "/api/v1/posts/p1", body)

    assert asyncio.run(backend_client.get_post("p1")) == {"postId": "p1"}


@pytest.mark.parametrize(
    "body, expected",
    [
        ({"data": {"success": False}}, False),
        ({"success": False}, False),
        ({"data": {"success": True}}, True),
        ({}, True),
    ],
)
def test_delete_post_success_flag(backend, backend_client, body, expected):
    backend.on("DELETE", "/api/v1/posts/p1", body)

    assert asyncio.run(backend_client.delete_post("p1", token="abc")) is expected


def test_like_and_comment_unwrap_data(backend, backend_client):
    backend.on("POST", "/api/v1/posts/p1/like", {"data": {"isLiked": True, "likesCount": 3}})
    backend.on("POST", "/api/v1/posts/p1/comments", {"data": {"comment": {"commentId": "c1", "content": "hai"}}})

    assert asyncio.run(backend_client.like_post("p1", token="abc")) == {"isLiked": True, "likesCount": 3}
    comment = asyncio.run(backend_client.add_comment("p1", "hai", token="abc"))

    assert comment == {"commentId": "c1", "content": "hai"}
    assert backend.body(backend.sent("POST", "/api/v1/posts/p1/comments")[0]) == {"content": "hai"}


def test_search_uses_query_page_and_limit(backend, backend_client):
    backend.on("GET", "/api/v1/posts/search", {"data": {"posts": [{"postId": "p9"}]}})

    items = asyncio.run(backend_client.search_posts("kopi", page=1, limit=10))

    assert items == [{"postId": "p9"}]
    params = backend.requests[0].url.params
    assert (params["q"], params["page"], params["limit"]) == ("kopi", "1", "10")


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"data": {"posts": [{"postId": "a"}]}}, [{"postId": "a"}]),
        ({"data": {"success": True, "posts": []}}, []),
        ({"success": True, "posts": [{"postId": "b"}]}, [{"postId": "b"}]),
        ({"data": [{"postId": "c"}]}, [{"postId": "c"}]),
        ({"data": {"items": []}}, None),
        ([], None),
    ],
)
def test_extract_posts_shapes(payload, expected):
    assert extract_posts(payload) == expected


@pytest.mark.parametrize(
    "payload",
    [
        {"data": {"user": {"id": "u1"}}},
        {"user": {"id": "u1"}},
        {"data": {"id": "u1"}},
    ],
)
def test_extract_user_shapes(payload):
    assert extract_user(payload) == {"id": "u1"}


def test_extract_user_without_id_is_none():
    assert extract_user({"data": {"username": "x"}}) is None
