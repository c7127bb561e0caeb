"""Uvicorn launch options."""
from __future__ import annotations

import run_server
from kabar.config import get_settings


def test_server_options_read_environment(monkeypatch):
    monkeypatch.setenv("KABAR_HOST", "127.0.0.1")
    monkeypatch.setenv("KABAR_PORT", "9100")
    monkeypatch.setenv("UVICORN_RELOAD", "false")

    options = run_server.server_options()

    assert options["host"] == "127.0.0.1"
    assert options["port"] == 9100
    assert options["reload"] is False
    assert options["log_level"] == get_settings().log_level.lower()


def test_main_starts_the_kabar_app(monkeypatch):
    calls = []
    monkeypatch.setattr(run_server.uvicorn, "run", lambda app, **options: calls.append((app, options)))

    run_server.main()

    assert calls[0][0] == "kabar.main:app"
