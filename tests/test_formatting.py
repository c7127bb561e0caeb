"""Relative times, labels and counters."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from kabar.services.formatting import (
    initials,
    login_type_label,
    relative_time,
    repost_count,
    user_type_label,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=30), "Baru saja"),
        (timedelta(minutes=5), "5 menit yang lalu"),
        (timedelta(hours=3), "3 jam yang lalu"),
        (timedelta(days=6), "6 hari yang lalu"),
        (timedelta(days=30), "19 Sep 2026"),
    ],
)
def test_relative_time_indonesian(delta, expected):
    assert relative_time(NOW - delta, now=NOW) == expected


def test_relative_time_parses_backend_strings():
    assert relative_time("2026-10-19T11:58:00.000Z", now=NOW) == "2 menit yang lalu"
    assert relative_time("2026-08-01T09:05:00Z", now=NOW) == "1 Agu 2026"


def test_comment_fallback_includes_clock():
    assert relative_time("2026-05-03T07:09:00Z", now=NOW, with_time=True) == "3 Mei 2026 07.09"


def test_relative_time_english_bundle():
    assert relative_time(NOW - timedelta(minutes=2), now=NOW, locale="en") == "2 minutes ago"
    assert relative_time(NOW - timedelta(days=9), now=NOW, locale="en") == "10 Oct 2026"


def test_relative_time_handles_missing_values():
    assert relative_time(None) == ""
    assert relative_time("garbage") == ""


@pytest.mark.parametrize(
    "name, expected",
    [("sari dewi putri", "SD"), ("budi", "B"), ("", "U"), (None, "U")],
)
def test_initials(name, expected):
    assert initials(name) == expected


def test_labels_pass_unknown_values_through():
    assert user_type_label("admin") == "Administrator"
    assert user_type_label("premium") == "Premium Member"
    assert user_type_label("god") == "god"
    assert user_type_label(None) == "Member"
    assert login_type_label("password") == "Email & Password"
    assert login_type_label("github") == "github"


@pytest.mark.parametrize("shares, expected", [(0, 0), (1, 0), (5, 3), (10, 6), (None, 0)])
def test_repost_count(shares, expected):
    assert repost_count(shares) == expected
