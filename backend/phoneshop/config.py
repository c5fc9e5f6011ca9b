# backend/phoneshop/config.py
from __future__ import annotations
import os


def _split_prefixes(raw: str) -> list[str]:
    prefixes = []
    for part in raw.split(","):
        part = part.strip().rstrip("/")
        if part and not part.startswith("/"):
            part = "/" + part
        if part not in prefixes:
            prefixes.append(part)
    return prefixes or [""]


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/phoneshop.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///phoneshop.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "auto" probes the SQL engine once and falls back to memory on failure
    KV_BACKEND = os.environ.get("KV_BACKEND", "auto").lower()

    # Every resource route is mounted once per prefix ("" = root)
    API_MOUNT_PREFIXES = _split_prefixes(os.environ.get("API_MOUNT_PREFIXES", ""))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    REQUEST_LOGGING = os.environ.get("REQUEST_LOGGING", "1") == "1"
