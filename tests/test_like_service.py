"""Optimistic like toggling."""
from __future__ import annotations

import asyncio

from kabar.schemas import LikeResult
from kabar.services.like_service import LikeState, toggle_like


def test_optimistic_like_and_unlike():
    assert LikeState(False, 4).optimistic() == LikeState(True, 5)
    assert LikeState(True, 5).optimistic() == LikeState(False, 4)


def test_optimistic_unlike_never_goes_negative():
    assert LikeState(True, 0).optimistic() == LikeState(False, 0)


def test_reconcile_respects_false_and_zero():
    state = LikeState(True, 5).reconcile(LikeResult.model_validate({"isLiked": False, "likesCount": 0}))

    assert state == LikeState(False, 0)


def test_reconcile_keeps_local_values_for_missing_fields():
    state = LikeState(True, 5).reconcile(LikeResult.model_validate({"likesCount": 9}))

    assert state == LikeState(True, 9)


def test_toggle_like_uses_server_answer(backend, backend_client):
    backend.on("POST", "/api/v1/posts/p1/like", {"data": {"isLiked": True, "likesCount": 11}})

    outcome = asyncio.run(toggle_like(backend_client, "p1", LikeState(False, 4), token="abc"))

    assert outcome.ok is True
    assert outcome.state == LikeState(True, 11)


def test_toggle_like_falls_back_to_optimistic_state(backend, backend_client):
    backend.on("POST", "/api/v1/posts/p1/like", {"success": True})

    outcome = asyncio.run(toggle_like(backend_client, "p1", LikeState(False, 4), token="abc"))

    assert outcome.state == LikeState(True, 5)


def test_toggle_like_rolls_back_on_failure(backend, backend_client):
    backend.on("POST", "/api/v1/posts/p1/like", {"message": "Server error"}, status=500)

    outcome = asyncio.run(toggle_like(backend_client, "p1", LikeState(False, 4), token="abc"))

    assert outcome.ok is False
    assert outcome.state == LikeState(False, 4)
    assert outcome.error == "Server error"
