"""Pydantic schemas for the login exchange with the backend."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class SessionTokens(BaseModel):
    """Tokens issued by the backend after a successful login."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    access_token: str = Field(default="", alias="accessToken")
    refresh_token: str | None = Field(default=None, alias="refreshToken")


__all__ = ["LoginRequest", "SessionTokens"]
