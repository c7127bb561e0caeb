"""Pydantic schemas mirroring the backend's post resources.

The backend speaks camelCase JSON; fields are exposed in snake_case and
populated through aliases so either spelling validates.
"""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SectionType = Literal["image", "code", "video", "link", "html"]


class _BackendModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PostAuthor(_BackendModel):
    """Author block embedded in a post by the backend."""

    user_id: str = Field(default="", alias="userId")
    username: str = ""
    profile_pic: str | None = Field(default=None, alias="profilePic")
    is_verified: bool = Field(default=False, alias="isVerified")


class PostUser(_BackendModel):
    """Legacy user block; synthesized from ``author`` when absent."""

    id: str = ""
    full_name: str | None = None
    username: str | None = None
    profile_photo: str | None = None
    is_verified: bool = False


class PostSection(_BackendModel):
    type: SectionType
    content: str | None = None
    src: str | None = None
    image_detail: list[str] | None = Field(default=None, alias="imageDetail")
    order: int = 0


class PostComment(_BackendModel):
    id: str | None = Field(default=None, alias="commentId")
    content: str = ""
    created_at: datetime | None = Field(default=None, alias="createdAt")
    author: PostAuthor | None = None
    user: PostUser | None = None

    @property
    def display_name(self) -> str:
        if self.user and (self.user.full_name or self.user.username):
            return self.user.full_name or self.user.username or "User"
        if self.author and self.author.username:
            return self.author.username
        return "User"

    @property
    def avatar_url(self) -> str | None:
        if self.author and self.author.profile_pic:
            return self.author.profile_pic
        return self.user.profile_photo if self.user else None


class Post(_BackendModel):
    """A post as rendered by the feed, the share page and the editor."""

    post_id: str = Field(alias="postId")
    title: str = ""
    description: str | None = None
    content: str | None = None
    category: str | None = None
    media_url: str | None = Field(default=None, alias="mediaUrl")
    blurred: bool = False
    sections: list[PostSection] = Field(default_factory=list)
    author: PostAuthor | None = None
    user: PostUser | None = None
    likes_count: int = Field(default=0, alias="likesCount")
    comments_count: int = Field(default=0, alias="commentsCount")
    shares_count: int = Field(default=0, alias="sharesCount")
    views_count: int = Field(default=0, alias="viewsCount")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    is_liked: bool = Field(default=False, alias="isLiked")
    scheduled_at: datetime | None = Field(default=None, alias="scheduledAt")
    is_scheduled: bool = Field(default=False, alias="isScheduled")
    comments: list[PostComment] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        user = self.user
        if user and user.full_name:
            return user.full_name
        if self.author and self.author.username:
            return self.author.username
        if user and user.username:
            return user.username
        return "User"

    @property
    def avatar_url(self) -> str | None:
        if self.author and self.author.profile_pic:
            return self.author.profile_pic
        return self.user.profile_photo if self.user else None

    @property
    def is_verified(self) -> bool:
        return bool((self.user and self.user.is_verified) or (self.author and self.author.is_verified))

    @property
    def author_id(self) -> str | None:
        if self.author and self.author.user_id:
            return self.author.user_id
        return self.user.id if self.user and self.user.id else None


class LikeResult(_BackendModel):
    """Body returned by the like endpoint; both fields may be missing."""

    is_liked: bool | None = Field(default=None, alias="isLiked")
    likes_count: int | None = Field(default=None, alias="likesCount")


class PostsCount(_BackendModel):
    success: bool = False
    posts_count: int = Field(default=0, alias="postsCount")
    role: str | None = None


class FeedPage(BaseModel):
    """One backend page of the feed plus the reported total."""

    posts: list[Post]
    total: int = 0


class FeedChunkResponse(BaseModel):
    """JSON envelope returned to the load-more button."""

    html: str
    offset: int
    has_more: bool


class LikeToggleRequest(BaseModel):
    """State the like button showed when it was pressed."""

    liked: bool = False
    count: int = Field(default=0, ge=0)


class LikeStateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_liked: bool = Field(serialization_alias="isLiked")
    likes_count: int = Field(serialization_alias="likesCount")
    ok: bool = True
    error: str | None = None


class SearchResponse(BaseModel):
    html: str
    count: int


__all__ = [
    "SectionType",
    "PostAuthor",
    "PostUser",
    "PostSection",
    "PostComment",
    "Post",
    "LikeResult",
    "LikeToggleRequest",
    "PostsCount",
    "FeedPage",
    "FeedChunkResponse",
    "LikeStateResponse",
    "SearchResponse",
]
