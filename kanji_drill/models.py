from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum


@dataclass(frozen=True)
class VocabEntry:
    symbol: str
    phonetic: str
    translation: str
    example_source: str
    example_target: str
    part_of_speech: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class HistoryEntry:
    sequence_number: int
    symbol: str
    phonetic: str
    translation: str
    example_target: str
    correct: bool

    @classmethod
    def from_entry(cls, number: int, entry: VocabEntry, correct: bool) -> HistoryEntry:
        return cls(
            sequence_number=number,
            symbol=entry.symbol,
            phonetic=entry.phonetic,
            translation=entry.translation,
            example_target=entry.example_target,
            correct=correct,
        )

    def to_dict(self) -> dict:
        return asdict(self)


class HintLevel(Enum):
    OFF = "off"
    PARTIAL = "partial"  # phonetic revealed
    FULL = "full"  # phonetic and translation revealed

    def next(self) -> HintLevel:
        return _HINT_CYCLE[self]


_HINT_CYCLE = {
    HintLevel.OFF: HintLevel.PARTIAL,
    HintLevel.PARTIAL: HintLevel.FULL,
    HintLevel.FULL: HintLevel.OFF,
}


@dataclass(frozen=True)
class DisplayPrefs:
    """Baseline visibility of the phonetic and translation fields."""

    show_phonetic: bool = False
    show_translation: bool = False

    def to_dict(self) -> dict:
        return asdict(self)
