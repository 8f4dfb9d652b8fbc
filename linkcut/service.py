"""Business logic for creating and resolving short links."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from .cache import Cacher
from .domain import Link, LinkExpiredError, LinkNotFoundError
from .hashgen import Generator

log = logging.getLogger(__name__)


class LinkService:
    """Creates short links and resolves them through a cache."""

    def __init__(self, repository, generator: Generator, cacher: Cacher) -> None:
        self.repository = repository
        self.generator = generator
        self.cacher = cacher

    def generate_link(self, url: str, expires_at: datetime) -> str:
        """Store ``url`` under a fresh hash valid until ``expires_at``; return the hash."""
        hash_ = self.generator.generate()
        self.repository.add(Link(hash=hash_, url=url, expires_at=expires_at))
        return hash_

    def get_link(self, hash_: str) -> str:
        """Return the URL under ``hash_``; raise LinkNotFoundError or LinkExpiredError."""
        try:
            cached = self.cacher.get(hash_)
        except Exception:
            cached = None
        if cached:
            return cached

        try:
            link = self.repository.get_by_hash(hash_)
        except LinkNotFoundError:
            raise
        except Exception:
            log.error("Mystery error")
            raise

        now = datetime.now(timezone.utc if link.expires_at.tzinfo else None)
        if link.is_expired(now):
            raise LinkExpiredError()

        ttl = int((link.expires_at - now).total_seconds())
        if ttl > 0:
            try:
                self.cacher.set(hash_, link.url, ttl)
            except Exception:
                pass
        return link.url