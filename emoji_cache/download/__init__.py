"""Emoji CDN download helpers."""

from .api import AssetFetcher, FetchBytes, build_asset_url

__all__ = ["AssetFetcher", "FetchBytes", "build_asset_url"]
