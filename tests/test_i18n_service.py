"""Locale negotiation and message lookup."""
from __future__ import annotations

import pytest
from fastapi import HTTPException

from kabar.services.i18n_service import DEFAULT_LOCALE, normalize_locale, select_locale, translate


def test_normalize_accepts_regional_tags():
    assert normalize_locale("id-ID") == "id"
    assert normalize_locale("in") == "id"
    assert normalize_locale("en_GB") == "en"
    assert normalize_locale(None) == DEFAULT_LOCALE


def test_normalize_rejects_unknown_locale():
    with pytest.raises(HTTPException) as exc:
        normalize_locale("fr")
    assert exc.value.status_code == 400


def test_select_prefers_explicit_choice_then_browser_list():
    assert select_locale("en", ["id"]) == "en"
    assert select_locale("xx", ["fr", "en-US"]) == "en"
    assert select_locale(None, ["de"]) == DEFAULT_LOCALE


def test_translate_fills_placeholders_and_falls_back():
    assert translate("id", "time.minutes_ago", count=5) == "5 menit yang lalu"
    assert translate("en", "missing.key", "Fallback") == "Fallback"
    assert translate("en", "missing.key") == "missing.key"
