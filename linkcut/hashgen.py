"""Random short-link hash generation."""

from __future__ import annotations

import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass


class Generator(ABC):
    """Something that produces new link hashes."""

    @abstractmethod
    def generate(self) -> str:
        """Return a new hash."""


@dataclass
class HashGenerator(Generator):
    """Builds hashes of ``length`` characters drawn from ``charset``."""

    charset: str
    length: int

    def generate(self) -> str:
        """Return a random hash; each random byte picks ``charset[byte % len(charset)]``."""
        data = secrets.token_bytes(self.length)
        if data and not self.charset:
            raise ValueError("hash charset must not be empty")
        return "".join(self.charset[byte % len(self.charset)] for byte in data)