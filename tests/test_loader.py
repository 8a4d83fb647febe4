"""Tests for the background deck loader."""
from __future__ import annotations

from unittest.mock import patch

import pytest

from kanji_drill.deck import Deck
from kanji_drill.errors import EmptySourceError, LoadError, SourceNotFoundError, SourceParseError
from kanji_drill.loader import DeckLoader, LoadStatus


class TestDeckLoader:
    def test_pending_before_start(self, vocab_file):
        loader = DeckLoader(vocab_file)
        assert loader.started is False
        assert loader.poll().status is LoadStatus.PENDING

    @pytest.mark.asyncio
    async def test_ready(self, vocab_file):
        loader = DeckLoader(vocab_file)
        state = await loader.wait()
        assert state.status is LoadStatus.READY
        assert isinstance(state.deck, Deck)
        assert len(state.deck) == 3
        assert state.error is None

    @pytest.mark.asyncio
    async def test_poll_after_completion(self, vocab_file):
        loader = DeckLoader(vocab_file)
        loader.start()
        await loader.wait()
        assert loader.poll().status is LoadStatus.READY

    @pytest.mark.asyncio
    async def test_same_deck_on_every_poll(self, vocab_file):
        loader = DeckLoader(vocab_file)
        await loader.wait()
        assert loader.poll().deck is loader.poll().deck

    @pytest.mark.asyncio
    async def test_start_twice_is_noop(self, vocab_file):
        loader = DeckLoader(vocab_file)
        loader.start()
        task = loader._task
        loader.start()
        assert loader._task is task
        await loader.wait()

    @pytest.mark.asyncio
    async def test_missing_file_fails(self, tmp_path):
        loader = DeckLoader(tmp_path / "missing.json")
        state = await loader.wait()
        assert state.status is LoadStatus.FAILED
        assert isinstance(state.error, SourceNotFoundError)
        assert state.deck is None

    @pytest.mark.asyncio
    async def test_empty_vocabulary_fails(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("{}", encoding="utf-8")
        state = await DeckLoader(path).wait()
        assert isinstance(state.error, EmptySourceError)

    @pytest.mark.asyncio
    async def test_deeply_nested_json_fails(self, tmp_path):
        path = tmp_path / "nested.json"
        path.write_text("[" * 200000 + "]" * 200000, encoding="utf-8")
        loader = DeckLoader(path)
        state = await loader.wait()
        assert state.status is LoadStatus.FAILED
        assert isinstance(state.error, SourceParseError)
        # Polling again keeps reporting the failure instead of raising
        assert loader.poll().status is LoadStatus.FAILED

    @pytest.mark.asyncio
    async def test_unexpected_worker_error_fails(self, vocab_file):
        loader = DeckLoader(vocab_file)
        with patch("kanji_drill.loader.load_deck", side_effect=RuntimeError("disk on fire")):
            state = await loader.wait()
        assert state.status is LoadStatus.FAILED
        assert isinstance(state.error, LoadError)
        assert "disk on fire" in str(state.error)
        assert loader.poll().error is not None
