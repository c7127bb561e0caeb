"""Start the Kabar web front end under Uvicorn.

``KABAR_HOST``/``KABAR_PORT`` pick the bind address, ``UVICORN_RELOAD`` toggles
auto-reload and the log level follows ``LOG_LEVEL`` from the app settings.
"""
from __future__ import annotations

import os

import uvicorn

from kabar.config import get_settings


def server_options() -> dict[str, object]:
  settings = get_settings()
  return {
    "host": os.getenv("KABAR_HOST", "0.0.0.0"),
    "port": int(os.getenv("KABAR_PORT", "8000")),
    "reload": os.getenv("UVICORN_RELOAD", "true").lower() == "true",
    "log_level": settings.log_level.lower(),
  }


def main() -> None:
  uvicorn.run("kabar.main:app", **server_options())


if __name__ == "__main__":
  main()
