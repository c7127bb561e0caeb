"""HTTP clients for the collaborators this front end depends on."""
from .backend import BackendClient, BackendError, MissingTokenError, get_backend_client
from .image_host import (
    ImageHostClient,
    ImageUploadError,
    ImageValidationError,
    PendingImage,
    get_image_host,
    validate_image,
)

__all__ = [
    "BackendClient",
    "BackendError",
    "MissingTokenError",
    "get_backend_client",
    "ImageHostClient",
    "ImageUploadError",
    "ImageValidationError",
    "PendingImage",
    "get_image_host",
    "validate_image",
]
