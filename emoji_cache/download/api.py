"""Emoji download helpers."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Protocol

from emoji_cache.settings import ALLOWED_SIZES


class FetchBytes(Protocol):
    """Network primitive that turns a URL into the response body."""

    def __call__(self, url: str) -> Awaitable[bytes]: ...


def build_asset_url(asset_id: str, size: int, *, base: str) -> str:
    """Return the CDN URL for a lossless PNG rendition of ``asset_id``."""
    if size not in ALLOWED_SIZES:
        raise ValueError(f"Unsupported emoji size: {size}")
    return f"{base.rstrip('/')}/{asset_id}.png?size={size}&quality=lossless"


class AssetFetcher:
    """Fetch emoji images by ID using a fixed CDN URL template."""

    def __init__(self, fetch_bytes: FetchBytes, *, base: str) -> None:
        self._fetch_bytes = fetch_bytes
        self._base = base

    def url_for(self, asset_id: str, size: int) -> str:
        return build_asset_url(asset_id, size, base=self._base)

    async def fetch(self, asset_id: str, size: int) -> bytes:
        return await self._fetch_bytes(self.url_for(asset_id, size))
