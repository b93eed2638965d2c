"""Application configuration loading."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import platformdirs
from dotenv import load_dotenv

_APP_NAME: Final[str] = "emoji-cache"
_DEFAULT_CDN_BASE: Final[str] = "https://cdn.discordapp.com/emojis"
_DEFAULT_TIMEOUT: Final[float] = 30.0
_DEFAULT_CONCURRENCY: Final[int] = 4
_DEFAULT_USER_AGENT: Final[str] = "emojiCache/0.1.0"

ALLOWED_SIZES: Final[tuple[int, ...]] = (48, 64, 96, 128, 256)
DEFAULT_SIZE: Final[int] = 128

_CACHED_SETTINGS: Settings | None = None


@dataclass(frozen=True)
class Settings:
    """Runtime configuration derived from environment variables."""

    cache_dir: str
    data_dir: Path
    asset_size: int
    cdn_base: str
    timeout: float
    concurrency: int
    user_agent: str
    http_proxy: str | None
    https_proxy: str | None
    use_proxy: bool


_TRUE_VALUES: Final[set[str]] = {"1", "true", "yes", "on"}
_FALSE_VALUES: Final[set[str]] = {"0", "false", "no", "off"}


def _coerce_bool(value: str | None, *, default: bool) -> bool:
    """Convert common textual boolean representations to bool."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def _coerce_size(value: str | None) -> int:
    if value is None or not value.strip():
        return DEFAULT_SIZE
    try:
        size = int(value)
    except ValueError:
        size = -1
    if size not in ALLOWED_SIZES:
        allowed = ", ".join(str(item) for item in ALLOWED_SIZES)
        raise RuntimeError(
            f"EMOJI_CACHE_SIZE must be one of {allowed}; got {value!r}."
        )
    return size


def default_data_dir() -> Path:
    """Return the per-user data directory of the host application."""
    return Path(platformdirs.user_data_dir(_APP_NAME))


def get_settings(*, force_reload: bool = False) -> Settings:
    """Load configuration, optionally reloading from the environment."""
    global _CACHED_SETTINGS  # noqa: PLW0603
    if not force_reload and _CACHED_SETTINGS is not None:
        return _CACHED_SETTINGS

    dotenv_override = os.getenv("EMOJI_CACHE_DOTENV_PATH")
    if dotenv_override:
        load_dotenv(dotenv_override, override=True)
    else:
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path=dotenv_path)

    cache_dir = os.getenv("EMOJI_CACHE_DIR", "")
    data_dir_raw = os.getenv("EMOJI_CACHE_DATA_DIR")
    if data_dir_raw and data_dir_raw.strip():
        data_dir = Path(data_dir_raw).expanduser()
    else:
        data_dir = default_data_dir()
    asset_size = _coerce_size(os.getenv("EMOJI_CACHE_SIZE"))
    cdn_base = os.getenv("EMOJI_CACHE_CDN_BASE", _DEFAULT_CDN_BASE).rstrip("/")
    timeout = float(os.getenv("EMOJI_CACHE_TIMEOUT", _DEFAULT_TIMEOUT))
    concurrency = int(os.getenv("EMOJI_CACHE_CONCURRENCY", _DEFAULT_CONCURRENCY))
    user_agent = os.getenv("EMOJI_CACHE_USER_AGENT", _DEFAULT_USER_AGENT)
    http_proxy = os.getenv("EMOJI_CACHE_HTTP_PROXY")
    https_proxy = os.getenv("EMOJI_CACHE_HTTPS_PROXY")
    default_use_proxy = bool(http_proxy or https_proxy)
    use_proxy = _coerce_bool(
        os.getenv("EMOJI_CACHE_USE_PROXY"),
        default=default_use_proxy,
    )

    _CACHED_SETTINGS = Settings(
        cache_dir=cache_dir,
        data_dir=data_dir,
        asset_size=asset_size,
        cdn_base=cdn_base,
        timeout=timeout,
        concurrency=concurrency,
        user_agent=user_agent,
        http_proxy=http_proxy,
        https_proxy=https_proxy,
        use_proxy=use_proxy,
    )
    return _CACHED_SETTINGS
