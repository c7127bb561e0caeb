"""Aggregate UI page routes into a single router."""
from __future__ import annotations

from fastapi import APIRouter

from . import i18n
from .pages import auth, home, manage, posts, profile, share

router = APIRouter(include_in_schema=False)

router.include_router(i18n.router)
router.include_router(home.router)
router.include_router(auth.router)
router.include_router(posts.router)
router.include_router(share.router)
router.include_router(profile.router)
router.include_router(manage.router)

__all__ = ["router"]
