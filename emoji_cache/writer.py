"""Disk persistence for downloaded emoji images."""

from __future__ import annotations

import asyncio
from pathlib import Path


class AssetWriter:
    """Write asset payloads to disk without blocking the event loop."""

    async def exists(self, path: Path) -> bool:
        """Return True if something already occupies ``path``."""
        return await asyncio.to_thread(path.exists)

    async def ensure_directory(self, directory: Path) -> None:
        await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)

    async def write(self, path: Path, data: bytes) -> None:
        """Persist ``data`` at ``path``, creating parent directories."""
        await asyncio.to_thread(self._write_atomic, path, data)

    @staticmethod
    def _write_atomic(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".tmp")
        try:
            tmp_path.write_bytes(data)
            tmp_path.replace(path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
