"""Layout building blocks shared across pages."""
from __future__ import annotations

import os
from typing import Callable

from markupsafe import Markup, escape

from ...services.session_service import Viewer
from .cards import avatar

STATIC_VERSION = os.getenv("STATIC_ASSET_VERSION", "20261019")

NAV_LINKS = (
    ("nav.home", "/"),
    ("nav.create", "/post"),
    ("nav.manage", "/update"),
    ("nav.profile", "/profile"),
)
# Links only shown to signed-in viewers.
NAV_AUTH_ONLY = {"/post", "/update", "/profile"}


def _auth_block(viewer: Viewer | None, t: Callable[..., str]) -> str:
    if viewer is None:
        return (
            f"<a id=\"nav-auth-btn\" href=\"/auth/login\" class=\"rounded-full border border-indigo-500/40 px-4 py-2 text-center text-xs font-semibold text-indigo-300 transition hover:bg-indigo-600/20 sm:text-sm\">{escape(t('nav.login'))}</a>"
        )
    return (
        "<div class=\"flex items-center gap-2\">"
        f"<a href=\"/profile\" class=\"flex items-center gap-2 text-sm text-slate-200\">{avatar(viewer.name, viewer.image, size='h-8 w-8')}<span class=\"hidden sm:inline\">{escape(viewer.name)}</span></a>"
        "<form method=\"post\" action=\"/auth/logout\">"
        f"<button type=\"submit\" class=\"rounded-full border border-slate-700/70 px-3 py-2 text-xs font-semibold text-slate-200 transition hover:border-rose-500 hover:text-rose-300\">{escape(t('nav.logout'))}</button>"
        "</form></div>"
    )


def navbar(*, t: Callable[..., str], viewer: Viewer | None = None, active: str | None = None, app_name: str = "Kabar") -> Markup:
    links_html: list[str] = []
    for key, href in NAV_LINKS:
        if href in NAV_AUTH_ONLY and viewer is None:
            continue
        text_class = "text-white" if active == href else "text-slate-300"
        links_html.append(
            f"<a href=\"{href}\" class=\"rounded-full px-4 py-2 text-sm font-medium transition hover:text-white {text_class}\">{escape(t(key))}</a>"
        )

    return Markup(
        f"""
        <header class=\"sticky top-0 z-40 border-b border-slate-800/60 bg-slate-950/90 backdrop-blur\">
            <div class=\"mx-auto flex max-w-5xl flex-wrap items-center gap-3 px-4 py-4 sm:px-6\">
                <a href=\"/\" class=\"flex-1 text-lg font-semibold text-white\">{escape(app_name)}</a>
                <nav class=\"hidden items-center gap-1 md:flex\">{''.join(links_html)}</nav>
                <button type=\"button\" data-search-open class=\"rounded-full border border-slate-700/70 px-3 py-2 text-xs font-semibold text-slate-200 transition hover:border-indigo-500 hover:text-indigo-300 sm:text-sm\">&#128269; {escape(t('nav.search'))}</button>
                {_auth_block(viewer, t)}
            </div>
        </header>
        """
    )


def search_dialog(*, t: Callable[..., str]) -> Markup:
    return Markup(
        f"""
        <dialog id=\"search-dialog\" class=\"w-full max-w-lg rounded-3xl bg-slate-900 p-6 text-slate-100 backdrop:bg-black/60\">
            <div class=\"flex items-center justify-between\">
                <h2 class=\"text-lg font-semibold\">{escape(t('search.title'))}</h2>
                <button type=\"button\" data-search-close class=\"text-slate-400 hover:text-white\">&#10005;</button>
            </div>
            <input id=\"search-input\" type=\"search\" autocomplete=\"off\" placeholder=\"{escape(t('search.placeholder'))}\"
                class=\"mt-4 block w-full rounded-xl border border-slate-700/60 bg-slate-950/70 px-4 py-2.5 text-sm\">
            <div id=\"search-results\" class=\"mt-4 flex max-h-96 flex-col gap-1 overflow-y-auto\"></div>
        </dialog>
        """
    )


__all__ = ["NAV_LINKS", "STATIC_VERSION", "navbar", "search_dialog"]
