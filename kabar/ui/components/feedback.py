"""Feedback elements like loaders, notices and toast containers."""
from __future__ import annotations

from markupsafe import Markup, escape

_TONES = {
    "error": "border-rose-500/40 bg-rose-500/10 text-rose-200",
    "success": "border-emerald-500/40 bg-emerald-500/10 text-emerald-200",
    "info": "border-sky-500/40 bg-sky-500/10 text-sky-200",
}


def loading_spinner(*, label: str = "Memuat") -> Markup:
    return Markup(
        f"""
        <div class=\"flex items-center gap-3 text-sm text-slate-200\">
            <span class=\"inline-block h-3 w-3 animate-spin rounded-full border-2 border-indigo-500 border-t-transparent\"></span>
            <span>{escape(label)}</span>
        </div>
        """
    )


def notice(message: str | None, *, tone: str = "info") -> Markup:
    if not message:
        return Markup("")
    classes = _TONES.get(tone, _TONES["info"])
    return Markup(
        f"<div role=\"status\" class=\"rounded-2xl border px-4 py-3 text-sm {classes}\" data-tone=\"{escape(tone)}\">{escape(message)}</div>"
    )


def toast_container() -> Markup:
    return Markup(
        """
        <div id=\"toast-root\" class=\"pointer-events-none fixed inset-x-0 top-5 z-50 flex flex-col items-center gap-3\"></div>
        """
    )


__all__ = ["loading_spinner", "notice", "toast_container"]
