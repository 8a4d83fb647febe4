"""One-shot background deck loading.

The deck is built on a worker thread while the web app keeps serving a
loading screen. The consumer polls for exactly one outcome.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from kanji_drill.deck import Deck, load_deck
from kanji_drill.errors import LoadError, SourceParseError

_log = logging.getLogger("kanji_drill.load")


class LoadStatus(Enum):
    PENDING = "loading"
    READY = "ready"
    FAILED = "error"


@dataclass(frozen=True)
class LoadState:
    status: LoadStatus
    deck: Deck | None = None
    error: LoadError | None = None


_PENDING = LoadState(LoadStatus.PENDING)


class DeckLoader:
    def __init__(self, path: Path):
        self.path = path
        self._task: asyncio.Task | None = None

    @property
    def started(self) -> bool:
        return self._task is not None

    def start(self) -> None:
        """Schedule the load on the running event loop. Later calls do nothing."""
        if self._task is not None:
            return
        _log.info("Loading vocabulary: %s", self.path)
        self._task = asyncio.create_task(asyncio.to_thread(load_deck, self.path))
        self._task.add_done_callback(self._log_outcome)

    def poll(self) -> LoadState:
        if self._task is None or not self._task.done():
            return _PENDING
        return self._state_from(self._task)

    async def wait(self) -> LoadState:
        self.start()
        await asyncio.wait({self._task})
        return self._state_from(self._task)

    @staticmethod
    def _state_from(task: asyncio.Task) -> LoadState:
        """Any failure of the worker ends in FAILED; nothing is re-raised."""
        exc = task.exception()
        if exc is not None:
            return LoadState(LoadStatus.FAILED, error=SourceParseError(f"{type(exc).__name__}: {exc}"))
        result = task.result()
        if isinstance(result, LoadError):
            return LoadState(LoadStatus.FAILED, error=result)
        return LoadState(LoadStatus.READY, deck=result)

    def _log_outcome(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _log.error("Vocabulary load crashed: %r", exc)
            return
        result = task.result()
        if isinstance(result, LoadError):
            _log.warning("Vocabulary load failed: %s", result)
        else:
            _log.info("Vocabulary loaded: %d entries", len(result))
