"""Form field components styled with Tailwind."""
from __future__ import annotations

from typing import Iterable

from markupsafe import Markup, escape


_INPUT_BASE = (
    "block w-full rounded-xl border border-slate-700/60 bg-slate-900/70 px-4 py-2.5 text-sm text-slate-100 "
    "placeholder:text-slate-500 focus:border-indigo-500 focus:ring-2 focus:ring-indigo-600 focus:ring-offset-0"
)


def text_input(
    name: str,
    *,
    label: str,
    value: str | None = "",
    placeholder: str = "",
    type_: str = "text",
    required: bool = False,
) -> Markup:
    required_attr = "required" if required else ""
    return Markup(
        f"""
        <label class=\"flex flex-col gap-2 text-sm font-medium text-slate-200\" for=\"{name}\">
            <span>{escape(label)}</span>
            <input id=\"{name}\" name=\"{name}\" type=\"{type_}\" value=\"{escape(value or '')}\" placeholder=\"{escape(placeholder)}\" class=\"{_INPUT_BASE}\" {required_attr}>
        </label>
        """
    )


def password_input(name: str, *, label: str, placeholder: str = "", required: bool = True) -> Markup:
    return text_input(name, label=label, placeholder=placeholder, type_="password", required=required)


def textarea(name: str, *, label: str, value: str | None = "", placeholder: str = "", rows: int = 4) -> Markup:
    return Markup(
        f"""
        <label class=\"flex flex-col gap-2 text-sm font-medium text-slate-200\" for=\"{name}\">
            <span>{escape(label)}</span>
            <textarea id=\"{name}\" name=\"{name}\" rows=\"{rows}\" placeholder=\"{escape(placeholder)}\" class=\"{_INPUT_BASE} resize-y\">{escape(value or '')}</textarea>
        </label>
        """
    )


def file_input(name: str, *, label: str, accept: str = "image/*") -> Markup:
    return Markup(
        f"""
        <label class=\"flex flex-col gap-2 text-sm font-medium text-slate-200\" for=\"{name}\">
            <span>{escape(label)}</span>
            <input id=\"{name}\" name=\"{name}\" type=\"file\" accept=\"{accept}\" class=\"{_INPUT_BASE} file:mr-4 file:rounded-full file:border-0 file:bg-indigo-500 file:px-4 file:py-2 file:text-sm file:font-semibold file:text-white hover:file:bg-indigo-400\">
        </label>
        """
    )


def select(name: str, *, label: str, options: Iterable[tuple[str, str]], selected: str | None = None, placeholder: str = "") -> Markup:
    items = [f"<option value=\"\">{escape(placeholder)}</option>"] if placeholder else []
    for value, text in options:
        chosen = " selected" if value == selected else ""
        items.append(f"<option value=\"{escape(value)}\"{chosen}>{escape(text)}</option>")
    return Markup(
        f"""
        <label class=\"flex flex-col gap-2 text-sm font-medium text-slate-200\" for=\"{name}\">
            <span>{escape(label)}</span>
            <select id=\"{name}\" name=\"{name}\" class=\"{_INPUT_BASE}\">{''.join(items)}</select>
        </label>
        """
    )


def checkbox(name: str, *, label: str, checked: bool = False) -> Markup:
    state = "checked" if checked else ""
    return Markup(
        f"""
        <label class=\"flex cursor-pointer items-center gap-3 text-sm text-slate-200\">
            <input id=\"{name}\" name=\"{name}\" type=\"checkbox\" value=\"true\" class=\"h-4 w-4 rounded border-slate-600 bg-slate-900 text-indigo-500\" {state}>
            <span>{escape(label)}</span>
        </label>
        """
    )


__all__ = ["text_input", "password_input", "textarea", "file_input", "select", "checkbox"]
