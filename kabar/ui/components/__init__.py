"""Markup builders shared by the Jinja templates and the JSON fragment endpoints."""
from __future__ import annotations

from types import ModuleType

from . import buttons, cards, feedback, forms, layout

# Exposed to templates as ``components.<name>``.
REGISTRY: dict[str, ModuleType] = {
    "buttons": buttons,
    "cards": cards,
    "feedback": feedback,
    "forms": forms,
    "layout": layout,
}

__all__ = ["REGISTRY", "buttons", "cards", "feedback", "forms", "layout"]
