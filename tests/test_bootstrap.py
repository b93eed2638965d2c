"""Tests for rebuilding the tracker from disk."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from emoji_cache.bootstrap import bootstrap_tracker
from emoji_cache.tracker import DedupTracker


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"png")


def test_bootstrap_recognises_suffixed_files(tmp_path: Path) -> None:
    _touch(tmp_path / "Guild A" / "Foo-123.png")
    _touch(tmp_path / "Guild B" / "bar-456.png")
    _touch(tmp_path / "Guild B" / "weird.png")
    _touch(tmp_path / "stray-789.png")
    tracker = DedupTracker()

    count = bootstrap_tracker(tmp_path, tracker)

    assert count == 2
    assert set(tracker) == {"123", "456"}
    assert not tracker.has("789")


def test_bootstrap_creates_missing_root(tmp_path: Path) -> None:
    root = tmp_path / "nested" / "emotes"
    tracker = DedupTracker()
    assert bootstrap_tracker(root, tracker) == 0
    assert root.is_dir()
    assert len(tracker) == 0


def test_bootstrap_ignores_nested_directories(tmp_path: Path) -> None:
    (tmp_path / "Guild" / "dir-5.png").mkdir(parents=True)
    _touch(tmp_path / "Guild" / "ok-6.png")
    tracker = DedupTracker()
    assert bootstrap_tracker(tmp_path, tracker) == 1
    assert set(tracker) == {"6"}


def test_bootstrap_root_failure_returns_zero(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file")
    tracker = DedupTracker()

    with caplog.at_level(logging.ERROR, logger="emoji_cache.bootstrap"):
        count = bootstrap_tracker(blocker / "emotes", tracker)

    assert count == 0
    assert len(tracker) == 0
    assert "Failed to scan emoji cache root" in caplog.text


def test_bootstrap_skips_unreadable_collection(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    _touch(tmp_path / "Broken" / "x-1.png")
    _touch(tmp_path / "Fine" / "y-2.png")
    original_iterdir = Path.iterdir

    def flaky_iterdir(self: Path):
        if self.name == "Broken":
            raise PermissionError("denied")
        return original_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", flaky_iterdir)
    tracker = DedupTracker()

    with caplog.at_level(logging.ERROR, logger="emoji_cache.bootstrap"):
        count = bootstrap_tracker(tmp_path, tracker)

    assert count == 1
    assert set(tracker) == {"2"}
    assert "Broken" in caplog.text
