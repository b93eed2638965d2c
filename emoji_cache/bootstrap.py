"""Rebuild cache state from files already on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from .naming import asset_id_from_filename
from .tracker import DedupTracker

logger = logging.getLogger(__name__)


def bootstrap_tracker(root: Path, tracker: DedupTracker) -> int:
    """Register every ``*-<id>.png`` under ``root/<collection>/`` with ``tracker``.

    Creates ``root`` when missing. Files without an ID suffix are ignored.
    A collection that cannot be listed is logged and skipped so the others
    still count; a root that cannot be created or listed yields whatever
    was counted so far (zero). Never raises ``OSError``.
    """
    try:
        root.mkdir(parents=True, exist_ok=True)
        collections = sorted(entry for entry in root.iterdir() if entry.is_dir())
    except OSError:
        logger.error("Failed to scan emoji cache root %s", root, exc_info=True)
        return 0

    count = 0
    for collection_dir in collections:
        ids: list[str] = []
        try:
            for entry in collection_dir.iterdir():
                asset_id = asset_id_from_filename(entry.name)
                if asset_id is not None and entry.is_file():
                    ids.append(asset_id)
        except OSError:
            logger.error(
                "Failed to scan emoji collection %s", collection_dir, exc_info=True
            )
            continue
        count += tracker.count_from_scan(ids)
    return count
