"""Caching engine tying the tracker, fetcher and writer together."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Iterable
from pathlib import Path
from typing import Protocol

from .bootstrap import bootstrap_tracker
from .client import EmojiCdnClient
from .download.api import AssetFetcher, FetchBytes
from .naming import resolve_cache_path, resolve_root
from .settings import Settings, get_settings
from .tracker import DedupTracker
from .types import AssetReference, CacheOutcome, CacheStatus
from .writer import AssetWriter

__all__ = ["EmojiCacheManager", "ProgressCallback"]

logger = logging.getLogger(__name__)


class ProgressCallback(Protocol):
    """Callback invoked after each asset of a batch is processed."""

    def __call__(self, outcome: CacheOutcome) -> Awaitable[None] | None: ...


class EmojiCacheManager:
    """Owns the dedup tracker and caches emojis under a configurable root.

    Without ``fetch_bytes`` the manager opens its own :class:`EmojiCdnClient`;
    use it as an async context manager so that client gets closed.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        fetch_bytes: FetchBytes | None = None,
        tracker: DedupTracker | None = None,
        writer: AssetWriter | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._tracker = tracker if tracker is not None else DedupTracker()
        self._writer = writer or AssetWriter()
        self._client: EmojiCdnClient | None = None
        if fetch_bytes is None:
            self._client = EmojiCdnClient(self._settings)
            fetch_bytes = self._client.fetch_bytes
        self._fetcher = AssetFetcher(fetch_bytes, base=self._settings.cdn_base)
        self._in_flight: dict[str, asyncio.Task[CacheOutcome]] = {}

    async def __aenter__(self) -> EmojiCacheManager:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        if self._client is not None:
            await self._client.aclose()

    @property
    def tracker(self) -> DedupTracker:
        return self._tracker

    def resolve_root(self, cache_dir: str | None = None) -> Path:
        """Resolve the cache root; ``None`` falls back to the configured override."""
        override = self._settings.cache_dir if cache_dir is None else cache_dir
        return resolve_root(override, data_dir=self._settings.data_dir)

    def bootstrap(self, cache_dir: str | None = None) -> int:
        """Populate the tracker from files already cached under the root."""
        root = self.resolve_root(cache_dir)
        count = bootstrap_tracker(root, self._tracker)
        logger.info("Initialized emoji cache with %d existing emojis.", count)
        return count

    async def cache_one(
        self,
        ref: AssetReference,
        *,
        root: Path | None = None,
        size: int | None = None,
    ) -> CacheOutcome:
        """Download and store one emoji unless it is already cached.

        Never raises for filesystem or network trouble; those come back as a
        ``FAILED`` outcome and leave the tracker untouched. Concurrent calls
        for the same ID share one download, and only the first caller sees
        ``CACHED``.
        """
        if self._tracker.has(ref.id):
            return CacheOutcome(CacheStatus.TRACKED, ref)

        pending = self._in_flight.get(ref.id)
        if pending is not None and not pending.done():
            shared = await asyncio.shield(pending)
            if shared.failed:
                return CacheOutcome(CacheStatus.FAILED, ref, reason=shared.reason)
            return CacheOutcome(CacheStatus.JOINED, ref, shared.path)

        target_root = root if root is not None else self.resolve_root()
        target_size = size if size is not None else self._settings.asset_size
        task = asyncio.ensure_future(self._materialize(ref, target_root, target_size))
        self._in_flight[ref.id] = task

        def _release(done: asyncio.Task[CacheOutcome]) -> None:
            if self._in_flight.get(ref.id) is done:
                del self._in_flight[ref.id]

        task.add_done_callback(_release)
        return await asyncio.shield(task)

    async def cache_all(
        self,
        refs: Iterable[AssetReference],
        *,
        cache_dir: str | None = None,
        size: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> int:
        """Cache a batch in order, one asset at a time; return how many were new.

        When ``progress_callback`` is provided it is invoked with the
        :class:`CacheOutcome` of every reference. Callbacks may be synchronous
        or async functions.
        """
        root = self.resolve_root(cache_dir)
        newly_cached = 0
        for ref in refs:
            outcome = await self.cache_one(ref, root=root, size=size)
            if outcome.was_newly_cached:
                newly_cached += 1
            if progress_callback is not None:
                result = progress_callback(outcome)
                if inspect.isawaitable(result):
                    await result
        return newly_cached

    async def _materialize(
        self,
        ref: AssetReference,
        root: Path,
        size: int,
    ) -> CacheOutcome:
        try:
            path = resolve_cache_path(
                root, ref.collection_name, ref.display_name, ref.id
            )
            if await self._writer.exists(path):
                self._tracker.add(ref.id)
                return CacheOutcome(CacheStatus.EXISTING, ref, path)
            await self._writer.ensure_directory(path.parent)
            payload = await self._fetcher.fetch(ref.id, size)
            await self._writer.write(path, payload)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Failed to cache emoji %s (%s): %s", ref.display_name, ref.id, exc
            )
            return CacheOutcome(
                CacheStatus.FAILED, ref, reason=str(exc) or type(exc).__name__
            )
        self._tracker.add(ref.id)
        logger.debug("Cached emoji %s (%s) at %s", ref.display_name, ref.id, path)
        return CacheOutcome(CacheStatus.CACHED, ref, path)
