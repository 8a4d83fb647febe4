"""Shuffled, cyclic deck of vocabulary entries."""
from __future__ import annotations

import logging
import random
from collections import Counter
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path

from kanji_drill.errors import EmptySourceError, LoadError, MalformedEntryError
from kanji_drill.models import VocabEntry
from kanji_drill.parsers.vocabulary_parser import parse_vocabulary_file

_log = logging.getLogger("kanji_drill.deck")

# field -> accepted keys in the source record, canonical name first
FIELD_ALIASES = {
    "phonetic": ("phonetic", "kana"),
    "translation": ("translation",),
    "example_source": ("example_source", "sentence_jp"),
    "example_target": ("example_target", "sentence_en"),
    "part_of_speech": ("part_of_speech", "pos"),
}


def _read_field(symbol: str, record: Mapping, field: str) -> str:
    for key in FIELD_ALIASES[field]:
        if key in record:
            value = record[key]
            break
    else:
        raise MalformedEntryError(symbol, field, "is missing")
    if not isinstance(value, str):
        raise MalformedEntryError(symbol, field, f"must be a string, got {type(value).__name__}")
    if not value.strip():
        raise MalformedEntryError(symbol, field, "is empty")
    return value


def entry_from_record(symbol: str, record: object) -> VocabEntry:
    """Build a VocabEntry from one source item. Raises MalformedEntryError."""
    if not isinstance(symbol, str) or not symbol.strip():
        raise MalformedEntryError(str(symbol), "symbol", "is empty")
    if not isinstance(record, Mapping):
        raise MalformedEntryError(symbol, "record", f"must be an object, got {type(record).__name__}")
    fields = {name: _read_field(symbol, record, name) for name in FIELD_ALIASES}
    return VocabEntry(symbol=symbol, **fields)


class Deck:
    """Entries in a fixed order, handed out one at a time, wrapping at the end.

    Build with Deck.load() to get the shuffled deck for a session. The order is
    fixed for the deck's lifetime; wrapping around never reshuffles.
    """

    def __init__(self, entries: Sequence[VocabEntry]):
        if not entries:
            raise EmptySourceError()
        self._entries = tuple(entries)
        self._next_index = 0

    @classmethod
    def load(cls, source: Mapping, rng: random.Random | None = None) -> Deck | LoadError:
        """Convert and shuffle source. Returns the Deck or the LoadError."""
        if not isinstance(source, Mapping):
            return MalformedEntryError("<root>", "source", f"must be an object, got {type(source).__name__}")
        try:
            entries = [entry_from_record(symbol, record) for symbol, record in source.items()]
        except MalformedEntryError as e:
            return e
        if not entries:
            return EmptySourceError()
        (rng or random).shuffle(entries)
        _log.debug("Deck built with %d entries", len(entries))
        return cls(entries)

    def get_next(self) -> VocabEntry:
        if self._next_index >= len(self._entries):
            self._next_index = 0
        entry = self._entries[self._next_index]
        self._next_index += 1
        return entry

    @property
    def next_index(self) -> int:
        return self._next_index

    def parts_of_speech(self) -> dict[str, int]:
        counts = Counter(e.part_of_speech for e in self._entries)
        return dict(counts.most_common())

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[VocabEntry]:
        return iter(self._entries)


def load_deck(path: Path, rng: random.Random | None = None) -> Deck | LoadError:
    """Read the vocabulary file at path and build a shuffled deck."""
    try:
        source = parse_vocabulary_file(path)
    except LoadError as e:
        return e
    return Deck.load(source, rng=rng)
