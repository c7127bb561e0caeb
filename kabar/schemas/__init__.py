"""Convenience exports for schema layer."""
from .auth import LoginRequest, SessionTokens
from .posts import (
    FeedChunkResponse,
    FeedPage,
    LikeResult,
    LikeStateResponse,
    LikeToggleRequest,
    Post,
    PostAuthor,
    PostComment,
    PostSection,
    PostsCount,
    PostUser,
    SearchResponse,
    SectionType,
)
from .profiles import Profile, ProfileUpdate

__all__ = [
    "LoginRequest",
    "SessionTokens",
    "FeedChunkResponse",
    "FeedPage",
    "LikeResult",
    "LikeStateResponse",
    "LikeToggleRequest",
    "Post",
    "PostAuthor",
    "PostComment",
    "PostSection",
    "PostsCount",
    "PostUser",
    "SearchResponse",
    "SectionType",
    "Profile",
    "ProfileUpdate",
]
