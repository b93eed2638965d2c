"""Package-wide type definitions."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AssetReference:
    """A custom emoji seen in a message, tied to the collection it belongs to."""

    id: str
    display_name: str
    collection_name: str

    def __post_init__(self) -> None:
        # The ID becomes the ``-<id>.png`` filename suffix verbatim.
        if not self.id or not (self.id.isascii() and self.id.isdigit()):
            raise ValueError(f"Asset id must be ASCII digits, got {self.id!r}")


class CacheStatus(enum.Enum):
    """How a single cache attempt resolved."""

    CACHED = "cached"
    TRACKED = "tracked"
    EXISTING = "existing"
    JOINED = "joined"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class CacheOutcome:
    """Result of caching one asset.

    ``path`` is ``None`` whenever no file location is reported: the ID was
    already tracked, or the attempt failed (``reason`` then carries the
    error text).
    """

    status: CacheStatus
    asset: AssetReference
    path: Path | None = None
    reason: str | None = None

    @property
    def was_newly_cached(self) -> bool:
        """Return True only when this attempt downloaded and wrote the file."""
        return self.status is CacheStatus.CACHED

    @property
    def failed(self) -> bool:
        return self.status is CacheStatus.FAILED
