"""Reusable button components for the UI."""
from __future__ import annotations

from markupsafe import Markup, escape


_PRIMARY = "inline-flex items-center justify-center gap-2 rounded-full bg-indigo-600 px-5 py-2 text-sm font-semibold text-white shadow-lg shadow-indigo-500/30 transition hover:bg-indigo-500 focus-visible:outline focus-visible:outline-2 focus-visible:outline-offset-2 focus-visible:outline-indigo-600 disabled:opacity-50"
_GHOST = "inline-flex items-center gap-2 rounded-full border border-slate-600/40 px-4 py-2 text-sm font-medium text-slate-100 transition hover:border-indigo-500 hover:text-indigo-300"
_DANGER = "inline-flex items-center gap-2 rounded-full bg-rose-600 px-4 py-2 text-sm font-semibold text-white transition hover:bg-rose-500"


def primary(
    label: str,
    *,
    id_: str | None = None,
    href: str | None = None,
    icon: str | None = None,
    submit: bool = False,
    disabled: bool = False,
) -> Markup:
    """Return a stylised primary button (or link when ``href`` is given)."""

    content = f"<span>{escape(label)}</span>"
    if icon:
        content = f"<span class=\"text-base\">{icon}</span>{content}"

    attrs = []
    if id_:
        attrs.append(f'id="{id_}"')

    if href:
        attrs.append(f'href="{escape(href)}"')
        tag = "a"
    else:
        tag = "button"
        attrs.append(f"type=\"{'submit' if submit else 'button'}\"")
        if disabled:
            attrs.append("disabled")

    attr_str = " ".join(attrs)
    return Markup(f"<{tag} class=\"{_PRIMARY}\" {attr_str}>{content}</{tag}>")


def ghost(label: str, *, id_: str | None = None, icon: str | None = None, href: str | None = None) -> Markup:
    """Return a subtle button suitable for secondary actions."""

    content = f"<span>{escape(label)}</span>"
    if icon:
        content = f"<span class=\"text-base\">{icon}</span>{content}"
    if href:
        return Markup(f"<a class=\"{_GHOST}\" href=\"{escape(href)}\">{content}</a>")

    attrs = ["type=\"button\""]
    if id_:
        attrs.append(f'id="{id_}"')
    return Markup(f"<button class=\"{_GHOST}\" {' '.join(attrs)}>{content}</button>")


def action(label: str, value: str, *, danger: bool = False, title: str | None = None) -> Markup:
    """Submit button that posts ``action=value`` with the surrounding form."""

    title_attr = f' title="{escape(title)}"' if title else ""
    return Markup(
        f"<button type=\"submit\" name=\"action\" value=\"{escape(value)}\" formnovalidate class=\"{_DANGER if danger else _GHOST}\"{title_attr}>{escape(label)}</button>"
    )


__all__ = ["primary", "ghost", "action"]
