"""Filesystem-safe naming and cache path resolution.

The on-disk layout is ``<root>/<collection>/<name>-<id>.png``. The
``-<id>.png`` suffix is what :func:`asset_id_from_filename` reads back when
the cache is rebuilt from disk, so the ID is appended verbatim and only the
display segments go through :func:`sanitize_name`.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

from emoji_cache.settings import default_data_dir

_UNSAFE_CHARS: Final[re.Pattern[str]] = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_TRAILING_JUNK: Final[re.Pattern[str]] = re.compile(r"[.\s]+$")
_ASSET_FILENAME: Final[re.Pattern[str]] = re.compile(r"-([0-9]+)\.png\Z")

_FALLBACK_NAME: Final[str] = "unknown"
_ROOT_SUBDIR: Final[str] = "emotes"


def sanitize_name(raw: str) -> str:
    """Return ``raw`` as a single safe path segment.

    Unsafe characters become underscores, trailing periods and whitespace
    are dropped, and an empty result falls back to ``"unknown"``.
    """
    cleaned = _UNSAFE_CHARS.sub("_", raw or "")
    cleaned = _TRAILING_JUNK.sub("", cleaned).strip()
    return cleaned or _FALLBACK_NAME


def resolve_root(override: str | None = None, *, data_dir: Path | None = None) -> Path:
    """Return the cache root, honouring a non-blank ``override``."""
    if override and override.strip():
        return Path(override).expanduser()
    base = data_dir if data_dir is not None else default_data_dir()
    return base / _ROOT_SUBDIR


def asset_filename(display_name: str, asset_id: str) -> str:
    return f"{sanitize_name(display_name)}-{asset_id}.png"


def resolve_cache_path(
    root: Path,
    collection_name: str,
    display_name: str,
    asset_id: str,
) -> Path:
    """Compute where an asset lives on disk. Performs no I/O."""
    return Path(root) / sanitize_name(collection_name) / asset_filename(display_name, asset_id)


def asset_id_from_filename(filename: str) -> str | None:
    """Recover the asset ID from a cached filename, if it has one."""
    match = _ASSET_FILENAME.search(filename)
    if match is None:
        return None
    return match.group(1)
