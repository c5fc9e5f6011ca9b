# Overview: Key-value store adapter; SQL-backed engine with an in-memory fallback.

"""
Key-Value Store

Four primitives used by every resource handler:

    get(key) -> value | None
    set(key, value) -> None
    delete(key) -> None        (absent key is a no-op)
    scan(prefix) -> [value]    (every value whose key starts with prefix)

There are no multi-key transactions and no version checks: the last
writer wins. The durable backend is a single SQL table; when it cannot be
used the store silently runs on a process-local dict instead, with the
same semantics (data is lost on restart).
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models import KVEntry

logger = logging.getLogger(__name__)

BACKEND_AUTO = "auto"
BACKEND_SQL = "sql"
BACKEND_MEMORY = "memory"


class KVBackendError(RuntimeError):
    """Raised when a backend is requested that cannot be used."""


def _escape_like(prefix: str) -> str:
    return prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class MemoryBackend:
    """Process-lifetime dict store. Values are copied in and out."""

    name = BACKEND_MEMORY

    def __init__(self):
        self._data: dict[str, Any] = {}

    def get(self, key: str) -> Any:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def scan(self, prefix: str) -> list:
        return [
            copy.deepcopy(value)
            for key, value in sorted(self._data.items())
            if key.startswith(prefix)
        ]

    def clear(self) -> None:
        self._data.clear()


class SqlBackend:
    """kv_store table through the application's SQLAlchemy session."""

    name = BACKEND_SQL

    def probe(self) -> None:
        """Create the table if needed and run one trivial query."""
        db.create_all()
        db.session.query(KVEntry.key).limit(1).all()

    def get(self, key: str) -> Any:
        entry = db.session.get(KVEntry, key)
        if entry is None:
            return None
        return copy.deepcopy(entry.value)

    def set(self, key: str, value: Any) -> None:
        try:
            entry = db.session.get(KVEntry, key)
            if entry is None:
                db.session.add(KVEntry(key=key, value=value))
            else:
                entry.value = copy.deepcopy(value)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise

    def delete(self, key: str) -> None:
        try:
            db.session.query(KVEntry).filter(KVEntry.key == key).delete()
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise

    def scan(self, prefix: str) -> list:
        rows = (
            db.session.query(KVEntry)
            .filter(KVEntry.key.like(_escape_like(prefix) + "%", escape="\\"))
            .order_by(KVEntry.key.asc())
            .all()
        )
        return [copy.deepcopy(row.value) for row in rows]

    def clear(self) -> None:
        try:
            db.session.query(KVEntry).delete()
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise


def select_backend(mode: str):
    """
    Resolve the configured backend. Must run inside an app context.

    - "memory": always the dict store
    - "sql": the SQL store; probe failures propagate
    - "auto": the SQL store if the probe succeeds, else the dict store
    """
    if mode == BACKEND_MEMORY:
        return MemoryBackend()

    if mode not in (BACKEND_SQL, BACKEND_AUTO):
        raise KVBackendError(f"Unknown KV_BACKEND: {mode}")

    backend = SqlBackend()
    try:
        backend.probe()
    except SQLAlchemyError:
        if mode == BACKEND_SQL:
            raise
        db.session.rollback()
        logger.warning("SQL key-value engine unavailable, using in-memory store", exc_info=True)
        return MemoryBackend()
    return backend


class KeyValueStore:
    """
    Flask extension facade. The backend is chosen once in init_app and
    kept in app.extensions, so callers never see which one is active.
    """

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        mode = app.config.get("KV_BACKEND", BACKEND_AUTO)
        with app.app_context():
            backend = select_backend(mode)
        app.extensions["kv_store"] = backend
        app.logger.debug("Key-value store ready (mode=%s)", mode)

    @property
    def backend(self):
        return current_app.extensions["kv_store"]

    def get(self, key: str) -> Any:
        return self.backend.get(key)

    def set(self, key: str, value: Any) -> None:
        self.backend.set(key, value)

    def delete(self, key: str) -> None:
        self.backend.delete(key)

    def scan(self, prefix: str) -> list:
        return self.backend.scan(prefix)

    def clear(self) -> None:
        self.backend.clear()


kv = KeyValueStore()
