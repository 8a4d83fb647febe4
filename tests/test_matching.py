"""Tests for the similarity scorer and answer judge."""
from __future__ import annotations

import pytest

from kanji_drill.matching import DEFAULT_THRESHOLD, is_correct, levenshtein, similarity


class TestLevenshtein:
    def test_identical(self):
        assert levenshtein("kitten", "kitten") == 0

    def test_classic_example(self):
        assert levenshtein("kitten", "sitting") == 3

    def test_against_empty(self):
        assert levenshtein("", "abc") == 3
        assert levenshtein("abc", "") == 3

    def test_single_operations(self):
        assert levenshtein("cat", "cut") == 1  # substitution
        assert levenshtein("cat", "cart") == 1  # insertion
        assert levenshtein("cart", "cat") == 1  # deletion


class TestSimilarity:
    @pytest.mark.parametrize("text", ["three", "to eat", "  Mountain ", "x", "日本"])
    def test_identity(self, text):
        assert similarity(text, text) == 1.0

    def test_case_and_whitespace_insensitive(self):
        assert similarity("  HELLO World ", "hello world") == 1.0

    def test_both_empty(self):
        assert similarity("", "") == 1.0

    def test_whitespace_only_counts_as_empty(self):
        assert similarity("   ", "\t\n") == 1.0
        assert similarity("   ", "x") == 0.0

    def test_one_empty(self):
        assert similarity("x", "") == 0.0
        assert similarity("", "x") == 0.0

    @pytest.mark.parametrize("a,b", [
        ("kitten", "sitting"),
        ("to eat", "to eat, to drink"),
        ("three", "four"),
        ("abc", ""),
    ])
    def test_symmetric(self, a, b):
        assert similarity(a, b) == similarity(b, a)

    def test_score_uses_longer_length(self):
        # distance 3, longest 7
        assert similarity("kitten", "sitting") == pytest.approx(1.0 - 3 / 7)

    def test_completely_different(self):
        assert similarity("abc", "xyz") == 0.0

    def test_range(self):
        for a, b in [("a", "bbbbbbbb"), ("three", "tree"), ("go", "to go")]:
            assert 0.0 <= similarity(a, b) <= 1.0


class TestIsCorrect:
    def test_exact(self):
        assert is_correct("three", "three")

    def test_wrong_word(self):
        assert not is_correct("three", "four")

    def test_typo_accepted(self):
        assert is_correct("mountian", "mountain")

    def test_first_gloss_fallback(self):
        assert is_correct("to eat", "to eat, to drink")

    def test_later_gloss_not_tried(self):
        assert not is_correct("to drink", "to eat, to drink")

    def test_no_comma_no_retry(self):
        assert not is_correct("drink", "to eat")

    def test_fallback_segment_is_stripped(self):
        assert is_correct("big", "  big  , large")

    def test_threshold_is_inclusive(self):
        # "abcd" vs "abce": 1 - 1/4 = 0.75
        assert is_correct("abcd", "abce", threshold=0.75)
        assert not is_correct("abcd", "abce", threshold=0.76)

    def test_default_threshold(self):
        assert DEFAULT_THRESHOLD == 0.6

    def test_empty_input_is_wrong(self):
        assert not is_correct("", "three")
