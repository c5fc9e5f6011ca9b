# Overview: SQLAlchemy model backing the durable key-value store.

from __future__ import annotations

from .extensions import db


class KVEntry(db.Model):
    """
    One row per key-value pair.

    Keys are namespaced as "<prefix>:<id>" so a resource listing is a
    LIKE 'prefix%' scan over the primary key index. Values are stored as
    JSON documents and returned verbatim.
    """
    __tablename__ = "kv_store"

    key = db.Column(db.String(255), primary_key=True)
    value = db.Column(db.JSON, nullable=True)

    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())
