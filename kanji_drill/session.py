"""Drill session state: current entry, hint level, input buffer and history."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kanji_drill.matching import DEFAULT_THRESHOLD, is_correct
from kanji_drill.models import DisplayPrefs, HintLevel, HistoryEntry

if TYPE_CHECKING:
    from kanji_drill.deck import Deck

_log = logging.getLogger("kanji_drill.session")

HISTORY_SIZE = 5


class DrillSession:
    """Single-owner state machine driven by three events.

    toggle_hint() cycles OFF -> PARTIAL -> FULL -> OFF.
    edit_input() replaces the input buffer.
    confirm() judges the answer, records it and moves to the next entry.
    """

    def __init__(self, deck: Deck, prefs: DisplayPrefs, min_similarity: float = DEFAULT_THRESHOLD):
        self.deck = deck
        self.prefs = prefs
        self.min_similarity = min_similarity
        self.current = deck.get_next()
        self.input_text = ""
        self.hint_level = HintLevel.OFF
        self.history: list[HistoryEntry] = []
        self.sequence_number = 1  # assigned to the next confirmed answer
        self.answered = 0
        self.correct = 0

    @property
    def show_phonetic(self) -> bool:
        if self.hint_level is HintLevel.OFF:
            return self.prefs.show_phonetic
        return True

    @property
    def show_translation(self) -> bool:
        if self.hint_level is HintLevel.FULL:
            return True
        return self.prefs.show_translation

    def toggle_hint(self) -> HintLevel:
        self.hint_level = self.hint_level.next()
        return self.hint_level

    def edit_input(self, text: str) -> None:
        self.input_text = text

    def confirm(self, input_text: str | None = None) -> HistoryEntry:
        """Judge the answer (the input buffer unless text is given) and advance."""
        answer = self.input_text if input_text is None else input_text
        correct = is_correct(answer, self.current.translation, self.min_similarity)

        record = HistoryEntry.from_entry(self.sequence_number, self.current, correct)
        self.sequence_number += 1
        self.history.insert(0, record)
        if len(self.history) > HISTORY_SIZE:
            self.history.pop()

        self.answered += 1
        if correct:
            self.correct += 1
        _log.debug("#%d %s: %r -> %s", record.sequence_number, record.symbol, answer,
                   "correct" if correct else "wrong")

        self.input_text = ""
        self.hint_level = HintLevel.OFF
        self.current = self.deck.get_next()
        return record

    def snapshot(self) -> dict:
        """Read-only view for rendering. Hidden fields are None."""
        entry = self.current
        return {
            "entry": {
                "symbol": entry.symbol,
                "phonetic": entry.phonetic if self.show_phonetic else None,
                "translation": entry.translation if self.show_translation else None,
                "example_source": entry.example_source,
                "part_of_speech": entry.part_of_speech,
            },
            "hint_level": self.hint_level.value,
            "show_phonetic": self.show_phonetic,
            "show_translation": self.show_translation,
            "baseline": self.prefs.to_dict(),
            "input": self.input_text,
            "history": [h.to_dict() for h in self.history],
            "progress": {
                "answered": self.answered,
                "correct": self.correct,
                "deck_size": len(self.deck),
            },
        }
