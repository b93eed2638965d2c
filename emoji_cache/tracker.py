"""In-memory record of emoji IDs known to be on disk."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class DedupTracker:
    """Set of asset IDs believed to be cached.

    The tracker only grows. It is an optimistic view of the disk: callers
    still check for the file before writing. Not safe for use from
    multiple threads; share it only between tasks of one event loop.
    """

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._ids: set[str] = set(ids)

    def has(self, asset_id: str) -> bool:
        return asset_id in self._ids

    def add(self, asset_id: str) -> None:
        self._ids.add(asset_id)

    def count_from_scan(self, ids: Iterable[str]) -> int:
        """Add every ID yielded by a disk scan and return how many were seen.

        Duplicates are counted once per occurrence, matching the number of
        recognised files rather than the number of distinct IDs.
        """
        count = 0
        for asset_id in ids:
            self._ids.add(asset_id)
            count += 1
        return count

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._ids))
