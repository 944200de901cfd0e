from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

from watchfiles import Change, awatch

logger = logging.getLogger(__name__)


def _is_json_file(path: Path) -> bool:
    return path.suffix.lower() == ".json"


class WatchfilesWatcher:
    """Watch a directory for file changes and trigger a callback.

    The callback receives the changed (added or modified) paths and the
    deleted paths of one batch. Implements the ``FileWatcherPort`` protocol.
    """

    def __init__(
        self,
        directory: str | Path,
        on_change: Callable[[set[Path], set[Path]], Coroutine[Any, Any, None]],
        is_relevant: Callable[[Path], bool] = _is_json_file,
    ) -> None:
        self._directory = Path(directory)
        self._on_change = on_change
        self._is_relevant = is_relevant
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watcher started for %s", self._directory)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Watcher stopped for %s", self._directory)

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    async def _watch(self) -> None:
        async for changes in awatch(self._directory):
            changed: set[Path] = set()
            deleted: set[Path] = set()
            for change, raw_path in changes:
                path = Path(raw_path)
                if not self._is_relevant(path):
                    continue
                if change == Change.deleted:
                    deleted.add(path)
                else:
                    changed.add(path)
            if changed or deleted:
                logger.info("Detected %d change(s), %d deletion(s)", len(changed), len(deleted))
                try:
                    await self._on_change(changed, deleted)
                except Exception:
                    logger.exception("Error in watcher callback")
