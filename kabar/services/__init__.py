"""Convenience exports for service layer."""
from .composer_service import (
    ComposerAuthor,
    ComposerError,
    ComposerValidationError,
    PostComposer,
    apply_action,
    image_limit_for,
    post_limit_reached,
    replay_sections,
)
from .feed_service import DEFAULT_PAGE_SIZE, FeedPager, fetch_page, normalize_post, parse_posts
from .formatting import initials, login_type_label, relative_time, repost_count, user_type_label
from .gallery import clamp_index, collect_images, gallery_layout, parse_image_index, wrap_index
from .like_service import LikeOutcome, LikeState, toggle_like
from .post_service import (
    PostsResponseError,
    QuickPostDraft,
    QuickPostError,
    add_comment,
    create_quick_post,
    created_post_id,
    extract_own_posts,
    list_own_posts,
    load_post,
    load_posts_count,
)
from .profile_service import NoProfileChanges, build_profile_update, load_profile, parse_profile, update_profile
from .search_service import search_posts
from .session_service import (
    LoginRequired,
    Viewer,
    clear_session,
    get_optional_viewer,
    login_url,
    redirect_if_authenticated,
    require_viewer,
    safe_callback,
    store_session,
    viewer_from_token,
)

__all__ = [
    "ComposerAuthor",
    "ComposerError",
    "ComposerValidationError",
    "PostComposer",
    "apply_action",
    "image_limit_for",
    "post_limit_reached",
    "replay_sections",
    "DEFAULT_PAGE_SIZE",
    "FeedPager",
    "fetch_page",
    "normalize_post",
    "parse_posts",
    "initials",
    "login_type_label",
    "relative_time",
    "repost_count",
    "user_type_label",
    "clamp_index",
    "collect_images",
    "gallery_layout",
    "parse_image_index",
    "wrap_index",
    "LikeOutcome",
    "LikeState",
    "toggle_like",
    "PostsResponseError",
    "QuickPostDraft",
    "QuickPostError",
    "add_comment",
    "create_quick_post",
    "created_post_id",
    "extract_own_posts",
    "list_own_posts",
    "load_post",
    "load_posts_count",
    "NoProfileChanges",
    "build_profile_update",
    "load_profile",
    "parse_profile",
    "update_profile",
    "search_posts",
    "LoginRequired",
    "Viewer",
    "clear_session",
    "get_optional_viewer",
    "login_url",
    "redirect_if_authenticated",
    "require_viewer",
    "safe_callback",
    "store_session",
    "viewer_from_token",
]
