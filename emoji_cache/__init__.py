"""
Local disk cache for custom chat emojis.

Each emoji is downloaded at most once and stored as
``<root>/<server>/<name>-<id>.png``.
"""

from __future__ import annotations

from .extract import extract_emojis, references_from_message
from .manager import EmojiCacheManager
from .naming import resolve_cache_path, resolve_root, sanitize_name
from .tracker import DedupTracker
from .types import AssetReference, CacheOutcome, CacheStatus

__all__: tuple[str, ...] = (
    "AssetReference",
    "CacheOutcome",
    "CacheStatus",
    "DedupTracker",
    "EmojiCacheManager",
    "extract_emojis",
    "references_from_message",
    "resolve_cache_path",
    "resolve_root",
    "sanitize_name",
)
