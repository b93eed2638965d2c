"""Async emoji CDN client built on httpx."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from .settings import Settings

__all__ = ["EmojiCdnClient"]


class EmojiCdnClient:
    """Thin wrapper around httpx.AsyncClient that turns a URL into bytes."""

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        concurrency = settings.concurrency or 1
        self._semaphore = asyncio.Semaphore(concurrency)

    async def __aenter__(self) -> EmojiCdnClient:
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_bytes(self, url: str) -> bytes:
        """GET ``url`` once and return the body, raising on non-success status."""
        await self._ensure_client()
        assert self._client is not None
        async with self._semaphore:
            response = await self._client.get(url, headers={"Accept": "image/*"})
        response.raise_for_status()
        return response.content

    async def _ensure_client(self) -> None:
        if self._client is not None:
            return
        headers: dict[str, str] = {"User-Agent": self._settings.user_agent}
        timeout = httpx.Timeout(self._settings.timeout)
        client_kwargs: dict[str, Any] = {
            "timeout": timeout,
            "headers": headers,
            "transport": self._transport,
            "http2": True,
            "follow_redirects": True,
        }
        if self._settings.use_proxy:
            proxy_value = self._settings.https_proxy or self._settings.http_proxy
            if proxy_value:
                client_kwargs["proxy"] = proxy_value
        else:
            client_kwargs["trust_env"] = False
        self._client = httpx.AsyncClient(**client_kwargs)
