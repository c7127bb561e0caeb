"""Card-style components for the feed, search results and comments."""
from __future__ import annotations

import json
from typing import Callable

from markupsafe import Markup, escape

from ...schemas import Post, PostComment
from ...services.formatting import initials, relative_time, repost_count
from ...services.gallery import GalleryLayout, collect_images, gallery_layout

Translate = Callable[..., str]

_TILE_CLASSES = {
    "single": "grid-cols-1",
    "pair": "grid-cols-2",
    "featured-2": "grid-cols-2",
    "featured-3": "grid-cols-3",
    "featured-4": "grid-cols-4",
    "featured-5": "grid-cols-5",
}


def avatar(name: str, url: str | None, *, size: str = "h-11 w-11") -> Markup:
    if url:
        return Markup(
            f"<img src=\"{escape(url)}\" alt=\"{escape(name)}\" class=\"{size} rounded-full border border-slate-700/60 object-cover\" loading=\"lazy\">"
        )
    return Markup(
        f"<span class=\"{size} inline-flex items-center justify-center rounded-full bg-indigo-600 text-sm font-semibold text-white\">{escape(initials(name))}</span>"
    )


def verified_badge(is_verified: bool) -> Markup:
    if not is_verified:
        return Markup("")
    return Markup('<span class="ml-1 text-sky-400" title="Verified">&#10004;</span>')


def gallery(layout: GalleryLayout, images: list[str], *, post_id: str, t: Translate) -> Markup:
    """Render the tile grid; each tile opens the lightbox at its index."""

    if not layout.tiles:
        return Markup("")
    columns = _TILE_CLASSES.get(layout.kind, "grid-cols-2")
    tiles: list[str] = []
    for tile in layout.tiles:
        span = " col-span-full row-span-2" if tile.featured else ""
        blur = " blur-xl" if tile.blurred else ""
        overlay = ""
        if tile.blurred:
            overlay = (
                "<span class=\"absolute inset-0 flex items-center justify-center bg-black/40 text-sm font-semibold text-white\">"
                f"{escape(t('post.blurred'))}</span>"
            )
        if tile.overflow:
            overlay += (
                "<span class=\"absolute inset-0 flex items-center justify-center bg-black/60 text-2xl font-bold text-white\">"
                f"+{tile.overflow}</span>"
            )
        tiles.append(
            f"<button type=\"button\" class=\"relative overflow-hidden rounded-2xl{span}\" data-lightbox-open=\"{tile.index}\">"
            f"<img src=\"{escape(tile.url)}\" alt=\"\" class=\"h-full w-full object-cover{blur}\" loading=\"lazy\">{overlay}</button>"
        )
    sources = escape(json.dumps(images))
    return Markup(
        f"<div class=\"mt-4 grid gap-2 {columns}\" data-lightbox=\"{escape(post_id)}\" data-lightbox-images=\"{sources}\" data-lightbox-total=\"{layout.total}\">"
        + "".join(tiles)
        + "</div>"
    )


def like_button(post_id: str, *, liked: bool, count: int, t: Translate) -> Markup:
    tone = "bg-rose-600 text-white" if liked else "bg-slate-800/90 text-slate-300"
    return Markup(
        f"""
        <button type=\"button\" class=\"like-btn inline-flex items-center gap-2 rounded-full px-4 py-2 transition hover:bg-rose-500 hover:text-white {tone}\"
            data-like-url=\"/posts/{escape(post_id)}/like\" data-liked=\"{'true' if liked else 'false'}\" data-count=\"{count}\" title=\"{escape(t('post.like'))}\">
            <span class=\"text-base\">&#10084;</span><span data-like-count>{count}</span><span class=\"hidden sm:inline\">{escape(t('post.like'))}</span>
        </button>
        """
    )


def post_card(post: Post, *, t: Translate, locale: str) -> Markup:
    """Return a feed card for ``post``."""

    name = post.display_name
    share_url = f"/share/{post.post_id}"
    description = (
        f"<p class=\"mt-2 whitespace-pre-line text-sm text-slate-300\">{escape(post.description)}</p>"
        if post.description
        else ""
    )
    category = (
        f"<span class=\"rounded-full bg-indigo-500/15 px-3 py-1 text-xs font-semibold text-indigo-300\">{escape(post.category)}</span>"
        if post.category
        else ""
    )
    images = collect_images(post)
    layout = gallery_layout(images, blurred=post.blurred)
    return Markup(
        f"""
        <article class=\"group rounded-3xl bg-slate-900/70 p-6 shadow-lg shadow-black/20\" data-post-id=\"{escape(post.post_id)}\">
            <header class=\"flex items-center gap-4\">
                {avatar(name, post.avatar_url)}
                <div class=\"flex-1\">
                    <p class=\"text-sm font-semibold text-white\">{escape(name)}{verified_badge(post.is_verified)}</p>
                    <p class=\"text-xs text-slate-400\">{escape(relative_time(post.created_at, locale=locale))}</p>
                </div>
                {category}
            </header>
            <a href=\"{share_url}\" class=\"mt-4 block text-lg font-semibold text-white hover:text-indigo-300\">{escape(post.title or t('post.untitled'))}</a>
            {description}
            {gallery(layout, images, post_id=post.post_id, t=t)}
            <div class=\"mt-4 flex flex-wrap gap-4 text-xs text-slate-400\">
                <span>{escape(t('post.comments_count', count=post.comments_count))}</span>
                <span>{escape(t('post.reposts_count', count=repost_count(post.shares_count)))}</span>
                <span>{escape(t('post.views_count', count=post.views_count))}</span>
            </div>
            <footer class=\"mt-4 flex flex-wrap items-center gap-3 text-sm\">
                {like_button(post.post_id, liked=post.is_liked, count=post.likes_count, t=t)}
                <a href=\"{share_url}#comments\" class=\"inline-flex items-center gap-2 rounded-full bg-slate-800/90 px-4 py-2 text-slate-300 transition hover:bg-indigo-600 hover:text-white\">
                    <span class=\"text-base\">&#128172;</span><span>{escape(t('post.comment'))}</span>
                </a>
                <button type=\"button\" class=\"share-btn inline-flex items-center gap-2 rounded-full bg-slate-800/90 px-4 py-2 text-slate-300 transition hover:bg-indigo-600 hover:text-white\" data-share-url=\"{share_url}\" data-copied-label=\"{escape(t('post.link_copied'))}\">
                    <span class=\"text-base\">&#8599;</span><span>{escape(t('post.share'))}</span>
                </button>
            </footer>
        </article>
        """
    )


def post_cards(posts: list[Post], *, t: Translate, locale: str) -> Markup:
    return Markup("").join(post_card(post, t=t, locale=locale) for post in posts)


def search_result(post: Post) -> Markup:
    return Markup(
        f"""
        <a href=\"/share/{escape(post.post_id)}\" class=\"flex items-center gap-3 rounded-2xl px-3 py-2 transition hover:bg-slate-800\">
            {avatar(post.display_name, post.avatar_url, size='h-8 w-8')}
            <span class=\"flex-1\">
                <span class=\"block text-sm font-semibold text-white\">{escape(post.title)}</span>
                <span class=\"block text-xs text-slate-400\">{escape(post.category or '')}</span>
            </span>
        </a>
        """
    )


def search_results(posts: list[Post], *, query: str, t: Translate) -> Markup:
    if not posts:
        return Markup(
            f"<p class=\"px-3 py-6 text-center text-sm text-slate-400\">{escape(t('search.no_results', query=query))}</p>"
        )
    return Markup("").join(search_result(post) for post in posts)


def comment_item(comment: PostComment, *, locale: str) -> Markup:
    name = comment.display_name
    return Markup(
        f"""
        <li class=\"flex gap-3 rounded-2xl bg-slate-900/60 p-4\">
            {avatar(name, comment.avatar_url, size='h-9 w-9')}
            <div class=\"flex-1\">
                <p class=\"text-sm font-semibold text-white\">{escape(name)}
                    <time class=\"ml-2 text-xs font-normal text-slate-400\">{escape(relative_time(comment.created_at, locale=locale, with_time=True))}</time>
                </p>
                <p class=\"mt-1 whitespace-pre-line text-sm text-slate-200\">{escape(comment.content)}</p>
            </div>
        </li>
        """
    )


__all__ = [
    "avatar",
    "comment_item",
    "gallery",
    "like_button",
    "post_card",
    "post_cards",
    "search_result",
    "search_results",
    "verified_badge",
]
