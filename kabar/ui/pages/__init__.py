"""Page routers for the server-rendered UI."""
from . import auth, home, manage, posts, profile, share

__all__ = ["auth", "home", "manage", "posts", "profile", "share"]
