"""Schemas for the viewer's profile as served by the backend auth API."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Profile(BaseModel):
    """Profile card data mapped from ``/auth/me``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    username: str = ""
    email: str | None = None
    full_name: str = ""
    profile_photo: str | None = None
    is_verified: bool = False
    user_type: str | None = None
    login_type: str | None = None
    bio: str | None = None


class ProfileUpdate(BaseModel):
    """Partial update sent to ``PUT /auth/profile``; unset fields are omitted."""

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = None
    bio: str | None = None
    profile_pic: str | None = Field(default=None, serialization_alias="profilePic")


__all__ = ["Profile", "ProfileUpdate"]
