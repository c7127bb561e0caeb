"""Shared fixtures: a scripted backend behind ``httpx.MockTransport``."""
from __future__ import annotations

import json
import os
import time
from typing import Any, Callable, Iterator

import httpx
import pytest
from jose import jwt

os.environ.setdefault("BACKEND_URL", "http://backend.test")
os.environ.setdefault("IMAGE_UPLOAD_URL", "http://images.test/upload")
os.environ.setdefault("PUBLIC_BASE_URL", "http://kabar.test")

from kabar.clients.backend import BackendClient, get_backend_client  # noqa: E402
from kabar.clients.image_host import ImageHostClient, PendingImage, get_image_host  # noqa: E402
from kabar.config import get_settings  # noqa: E402

Handler = Callable[[httpx.Request], httpx.Response]


class FakeService:
    """Routes requests to canned handlers and records what was sent."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, body: Any = None, *, status: int = 200) -> None:
        self.routes[(method, path)] = lambda request: httpx.Response(status, json=body if body is not None else {})

    def handle(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"message": f"No route for {request.method} {request.url.path}"})
        return handler(request)

    def sent(self, method: str, path: str) -> list[httpx.Request]:
        return [item for item in self.requests if item.method == method and item.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content.decode("utf-8"))


@pytest.fixture
def backend() -> FakeService:
    return FakeService()


@pytest.fixture
def image_service() -> FakeService:
    service = FakeService()
    counter = {"n": 0}

    def _upload(request: httpx.Request) -> httpx.Response:
        counter["n"] += 1
        return httpx.Response(200, json={"url": f"https://cdn.test/img-{counter['n']}.png"})

    service.handle("POST", "/upload", _upload)
    return service


@pytest.fixture
def backend_client(backend: FakeService) -> BackendClient:
    return BackendClient(get_settings(), transport=httpx.MockTransport(backend))


@pytest.fixture
def image_host(image_service: FakeService) -> ImageHostClient:
    return ImageHostClient(get_settings(), transport=httpx.MockTransport(image_service))


def make_token(**claims: Any) -> str:
    payload = {"id": "user-1", "email": "sari@example.com", "name": "Sari", "exp": int(time.time()) + 3600}
    payload.update(claims)
    return jwt.encode(payload, "test-secret", algorithm="HS256")


@pytest.fixture
def token_factory() -> Callable[..., str]:
    return make_token


def png(name: str = "photo.png", size: int = 64) -> PendingImage:
    return PendingImage(filename=name, content_type="image/png", data=b"\x89PNG" + b"0" * size)


@pytest.fixture
def app_client(backend_client: BackendClient, image_host: ImageHostClient) -> Iterator[Any]:
    """TestClient with both collaborators bound to the fake services."""

    from fastapi.testclient import TestClient

    from kabar.main import app

    app.dependency_overrides[get_backend_client] = lambda: backend_client
    app.dependency_overrides[get_image_host] = lambda: image_host
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def sign_in(client: Any, token: str) -> None:
    client.cookies.set(get_settings().session_cookie_name, token)
