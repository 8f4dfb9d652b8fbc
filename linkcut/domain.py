"""Domain objects and errors for short links."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


class LinkError(Exception):
    """Base class for link lookup failures."""

    default_message = "Link error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class LinkNotFoundError(LinkError):
    default_message = "Link not found"


class LinkExpiredError(LinkError):
    default_message = "Link expired"


@dataclass
class Link:
    """A stored short link."""

    hash: str
    url: str
    expires_at: datetime
    id: int | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True if ``now`` lies strictly after the expiry time."""
        if now is None:
            now = datetime.now(timezone.utc if self.expires_at.tzinfo else None)
        return now > self.expires_at