"""Shared test fixtures."""
from __future__ import annotations

import json
import random

import pytest

from kanji_drill.deck import Deck
from kanji_drill.models import DisplayPrefs, VocabEntry


@pytest.fixture
def sample_source():
    """A vocabulary mapping in the on-disk shape (source-data key names)."""
    return {
        "三": {
            "kana": "さん",
            "translation": "three",
            "sentence_jp": "彼女[かのじょ]は三[さん]人[にん]の子供[こども]の母親[ははおや]だ。",
            "sentence_en": "She's the mother of three children.",
            "pos": "Numeral",
        },
        "食べる": {
            "kana": "たべる",
            "translation": "to eat, to drink",
            "sentence_jp": "朝[あさ]ご飯[はん]を食[た]べる。",
            "sentence_en": "I eat breakfast.",
            "pos": "Verb",
        },
        "山": {
            "kana": "やま",
            "translation": "mountain",
            "sentence_jp": "山[やま]に登[のぼ]った。",
            "sentence_en": "I climbed the mountain.",
            "pos": "Noun",
        },
    }


@pytest.fixture
def sample_entries():
    """VocabEntry objects in a known order, for unshuffled decks."""
    return [
        VocabEntry("三", "さん", "three", "三人の子供", "three children", "Numeral"),
        VocabEntry("食べる", "たべる", "to eat, to drink", "ご飯を食べる", "I eat rice.", "Verb"),
        VocabEntry("山", "やま", "mountain", "山に登った", "I climbed the mountain.", "Noun"),
    ]


@pytest.fixture
def ordered_deck(sample_entries):
    """A deck whose draw order is sample_entries as given."""
    return Deck(sample_entries)


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def baseline_off():
    return DisplayPrefs(show_phonetic=False, show_translation=False)


@pytest.fixture
def vocab_file(tmp_path, sample_source):
    """sample_source written to a JSON file."""
    path = tmp_path / "vocabulary.json"
    path.write_text(json.dumps(sample_source, ensure_ascii=False), encoding="utf-8")
    return path
