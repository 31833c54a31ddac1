from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TypeAlias

from cdn77_client.utils.credentials import MASK


class JobKind(enum.StrEnum):
    PREFETCH = "prefetch"
    PURGE = "purge"


@dataclass(frozen=True)
class Prefetch:
    """Warm URLs into the edge caches of a CDN resource."""

    resource_id: int
    urls: tuple[str, ...]

    kind = JobKind.PREFETCH


@dataclass(frozen=True)
class Purge:
    """Invalidate cached content for URLs of a CDN resource."""

    resource_id: int
    urls: tuple[str, ...]

    kind = JobKind.PURGE


Command: TypeAlias = Prefetch | Purge


@dataclass(frozen=True)
class ApiRequest:
    method: str
    url: str
    headers: dict[str, str] = field(repr=False)
    body: bytes
    url_count: int = 0

    def masked_headers(self) -> dict[str, str]:
        """Headers safe to print."""
        return {
            name: (f"Bearer {MASK}" if name.lower() == "authorization" else value)
            for name, value in self.headers.items()
        }
