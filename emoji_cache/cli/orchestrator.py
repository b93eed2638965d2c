from __future__ import annotations

from typing import Dict, List

from tqdm import tqdm

from emoji_cache.download.api import FetchBytes
from emoji_cache.extract import references_from_message
from emoji_cache.manager import EmojiCacheManager
from emoji_cache.settings import Settings
from emoji_cache.types import CacheOutcome

from .inputs import Message


async def process_messages(
    messages: List[Message],
    *,
    settings: Settings,
    cache_dir: str | None = None,
    size: int | None = None,
    verbose: bool = False,
    fetch_bytes: FetchBytes | None = None,
) -> Dict[str, int]:
    stats = {"messages": 0, "skipped": 0, "cached": 0, "failed": 0}

    def _progress_callback(outcome: CacheOutcome) -> None:
        if outcome.failed:
            stats["failed"] += 1

    async with EmojiCacheManager(settings, fetch_bytes=fetch_bytes) as manager:
        manager.bootstrap(cache_dir)

        bar = tqdm(messages, desc="Caching", unit="message", disable=not verbose)
        for message in bar:
            stats["messages"] += 1
            refs = references_from_message(message, message.get("collection"))
            if not refs:
                stats["skipped"] += 1
                continue
            cached = await manager.cache_all(
                refs,
                cache_dir=cache_dir,
                size=size,
                progress_callback=_progress_callback,
            )
            stats["cached"] += cached
            if verbose and cached > 0:
                channel = message.get("channel_id") or message.get("collection")
                bar.write(f"Cached {cached} new emoji(s) from #{channel}")
        bar.close()

    return stats
