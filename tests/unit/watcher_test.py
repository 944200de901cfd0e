"""Tests for the watchfiles watcher adapter."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from watchfiles import Change

from schemawatch.watcher.watchfiles_adapter import (
    WatchfilesWatcher,
    _is_json_file,
)


class TestIsJsonFile:
    def test_json_file(self) -> None:
        assert _is_json_file(Path("foo.json")) is True

    def test_upper_case_suffix(self) -> None:
        assert _is_json_file(Path("FOO.JSON")) is True

    def test_schema_file(self) -> None:
        assert _is_json_file(Path("FooSchema.json")) is True

    def test_unsupported_txt(self) -> None:
        assert _is_json_file(Path("readme.txt")) is False

    def test_unsupported_no_extension(self) -> None:
        assert _is_json_file(Path("Makefile")) is False


class TestWatchfilesWatcher:
    def test_implements_protocol(self) -> None:
        from schemawatch.core.ports.watcher import FileWatcherPort

        callback = AsyncMock()
        watcher: FileWatcherPort = WatchfilesWatcher("/tmp", callback)
        assert hasattr(watcher, "start")
        assert hasattr(watcher, "stop")

    @pytest.mark.asyncio
    async def test_start_creates_task(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        with patch("schemawatch.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            assert watcher._task is not None
            await watcher.stop()
            assert watcher._task is None

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)
        await watcher.stop()

    @pytest.mark.asyncio
    async def test_double_start_is_noop(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        with patch("schemawatch.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            task1 = watcher._task
            await watcher.start()
            assert watcher._task is task1
            await watcher.stop()

    @pytest.mark.asyncio
    async def test_callback_splits_changes_and_deletions(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        changes = {
            (Change.added, "/tmp/foo.json"),
            (Change.modified, "/tmp/barSchema.json"),
            (Change.deleted, "/tmp/old.json"),
            (Change.modified, "/tmp/notes.txt"),
        }

        with patch("schemawatch.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_called_once()
        changed, deleted = callback.call_args[0]
        assert changed == {Path("/tmp/foo.json"), Path("/tmp/barSchema.json")}
        assert deleted == {Path("/tmp/old.json")}

    @pytest.mark.asyncio
    async def test_custom_relevance_filter(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback, is_relevant=lambda p: p.suffix == ".conf")

        changes = {(Change.modified, "/tmp/app.conf"), (Change.modified, "/tmp/foo.json")}

        with patch("schemawatch.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        changed, deleted = callback.call_args[0]
        assert changed == {Path("/tmp/app.conf")}
        assert deleted == set()

    @pytest.mark.asyncio
    async def test_callback_not_called_for_unsupported_only(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        changes = {(Change.modified, "/tmp/readme.txt"), (Change.added, "/tmp/Makefile")}

        with patch("schemawatch.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_callback_errors_do_not_stop_watching(self) -> None:
        callback = AsyncMock(side_effect=RuntimeError("boom"))
        watcher = WatchfilesWatcher("/tmp", callback)

        with patch("schemawatch.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter({(Change.modified, "/tmp/foo.json")})
            await watcher.start()
            await asyncio.sleep(0.05)
            assert watcher._task is not None
            assert not watcher._task.done()
            await watcher.stop()

        callback.assert_called_once()


async def _empty_async_iter() -> AsyncIterator[Any]:
    """Async iterator that never yields, just blocks until cancelled."""
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
    yield  # pragma: no cover


async def _single_change_iter(changes: set[tuple[Change, str]]) -> AsyncIterator[set[tuple[Change, str]]]:
    """Async iterator that yields one set of changes then blocks."""
    yield changes
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
