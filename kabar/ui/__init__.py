"""Server-rendered UI: pages, components, templates and static assets."""
from .router import router

__all__ = ["router"]
