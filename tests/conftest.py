"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest

from emoji_cache.settings import Settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def _strip_cookies(response: dict[str, Any]) -> dict[str, Any]:
    """Remove volatile cookie headers before storing responses."""
    response.get("headers", {}).pop("Set-Cookie", None)
    response.get("headers", {}).pop("set-cookie", None)
    return response


@pytest.fixture(scope="session")
def vcr_config() -> dict[str, Any]:
    """Configure pytest-recording for cassette storage and header scrubbing."""
    cassette_dir = Path(__file__).parent / "cassettes"
    cassette_dir.mkdir(parents=True, exist_ok=True)
    return {
        "cassette_library_dir": str(cassette_dir),
        "record_mode": os.getenv("PYTEST_RECORDING_MODE", "once"),
        "filter_headers": ["cookie", "set-cookie", "user-agent"],
        "decode_compressed_response": False,
        "allow_playback_repeats": True,
        "before_record_response": _strip_cookies,
    }


def make_settings(tmp_path: Path, **overrides: Any) -> Settings:
    """Build Settings rooted in ``tmp_path`` without touching the environment."""
    values: dict[str, Any] = {
        "cache_dir": "",
        "data_dir": tmp_path / "data",
        "asset_size": 128,
        "cdn_base": "https://cdn.example.test/emojis",
        "timeout": 5.0,
        "concurrency": 2,
        "user_agent": "TestClient/0.0.0",
        "http_proxy": None,
        "https_proxy": None,
        "use_proxy": False,
    }
    values.update(overrides)
    return Settings(**values)


class StubFetch:
    """Records requested URLs and returns canned bytes or raises."""

    def __init__(
        self,
        payload: bytes = PNG_BYTES,
        *,
        failures: dict[str, BaseException] | None = None,
    ) -> None:
        self.payload = payload
        self.failures = failures or {}
        self.urls: list[str] = []

    async def __call__(self, url: str) -> bytes:
        self.urls.append(url)
        for marker, error in self.failures.items():
            if marker in url:
                raise error
        return self.payload


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def stub_fetch() -> StubFetch:
    return StubFetch()


@pytest.fixture
def settings_factory(tmp_path: Path):
    def _factory(**overrides: Any) -> Settings:
        return make_settings(tmp_path, **overrides)

    return _factory


@pytest.fixture
def stub_fetch_factory() -> type[StubFetch]:
    return StubFetch
