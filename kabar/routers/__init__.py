"""Aggregate router exports."""
from .posts import router as posts_router
from .search import router as search_router
from .system import router as system_router

__all__ = [
    "posts_router",
    "search_router",
    "system_router",
]
