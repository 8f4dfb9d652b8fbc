"""Persistence of short links."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, insert, select
from sqlalchemy.engine import Engine

from .domain import Link, LinkNotFoundError

_links = Table(
    "links",
    MetaData(),
    Column("id", Integer, primary_key=True),
    Column("hash", String),
    Column("url", String),
    Column("expires_at", DateTime(timezone=True)),
)


class LinkRepository:
    """Stores and looks up links in the ``links`` table."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def add(self, link: Link) -> None:
        """Insert a new link; its id is assigned by the database."""
        with self.engine.begin() as conn:
            conn.execute(
                insert(_links).values(hash=link.hash, url=link.url, expires_at=link.expires_at)
            )

    def get_by_hash(self, hash_: str) -> Link:
        """Return the link stored under ``hash_``; raise LinkNotFoundError if none."""
        with self.engine.connect() as conn:
            row = conn.execute(select(_links).where(_links.c.hash == hash_)).first()
        if row is None:
            raise LinkNotFoundError()
        return Link(id=row.id, hash=row.hash, url=row.url, expires_at=row.expires_at)