"""Client for the external image-hosting endpoint.

Files picked in a form are held as :class:`PendingImage` objects and only sent
to the host once the surrounding form has been validated and submitted.
"""
from __future__ import annotations

import base64
import logging
from dataclasses import dataclass

import httpx
from fastapi import UploadFile

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)


class ImageUploadError(RuntimeError):
    """Raised when the image host rejects an upload or cannot be reached."""


class ImageValidationError(ValueError):
    """Raised when a selected file is not an acceptable image."""


@dataclass(frozen=True)
class PendingImage:
    """A file chosen by the user that has not been uploaded yet."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    async def from_upload(cls, upload: UploadFile | None) -> "PendingImage | None":
        """Read a multipart upload; empty file inputs yield ``None``."""

        if upload is None or not upload.filename:
            return None
        data = await upload.read()
        if not data:
            return None
        content_type = (upload.content_type or "application/octet-stream").strip()
        return cls(filename=upload.filename, content_type=content_type, data=data)


def _format_megabytes(max_bytes: int) -> str:
    return f"{max_bytes // (1024 * 1024)}MB"


def validate_image(image: PendingImage, *, max_bytes: int) -> None:
    if image.size > max_bytes:
        raise ImageValidationError(f"Image size must be less than {_format_megabytes(max_bytes)}")
    if not image.content_type.startswith("image/"):
        raise ImageValidationError("File must be an image")


def to_data_uri(content_type: str, data: bytes) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


class ImageHostClient:
    """Uploads base64 data URIs and returns the hosted URL."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._transport = transport

    async def upload(self, image: PendingImage) -> str:
        payload = {"file": to_data_uri(image.content_type, image.data)}
        try:
            async with httpx.AsyncClient(timeout=self._settings.backend_timeout, transport=self._transport) as client:
                response = await client.post(self._settings.image_upload_url, json=payload)
        except httpx.HTTPError as exc:  # pragma: no cover - network bound
            logger.exception("Image upload for %s failed", image.filename)
            raise ImageUploadError("Failed to upload image") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise ImageUploadError(message if isinstance(message, str) and message else "Failed to upload image")

        url = data.get("url") if isinstance(data, dict) else None
        if not isinstance(url, str) or not url.strip():
            raise ImageUploadError("Upload failed")
        logger.info("Uploaded %s (%d bytes)", image.filename, image.size)
        return url


def get_image_host() -> ImageHostClient:
    return ImageHostClient()


__all__ = [
    "ImageHostClient",
    "ImageUploadError",
    "ImageValidationError",
    "PendingImage",
    "get_image_host",
    "to_data_uri",
    "validate_image",
]
