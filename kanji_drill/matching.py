"""Fuzzy answer matching based on normalized Levenshtein distance."""
from __future__ import annotations

# Minimum similarity for an answer to count as correct.
DEFAULT_THRESHOLD = 0.6


def _normalize(text: str) -> str:
    return text.strip().lower()


def levenshtein(a: str, b: str) -> int:
    """Edit distance between a and b (insert, delete, substitute each cost 1).

    Uses two rolling rows of len(b) + 1 cells.
    """
    previous = list(range(len(b) + 1))
    current = [0] * (len(b) + 1)
    for i in range(1, len(a) + 1):
        current[0] = i
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            current[j] = min(
                previous[j] + 1,  # deletion
                current[j - 1] + 1,  # insertion
                previous[j - 1] + cost,  # substitution
            )
        previous, current = current, previous
    return previous[len(b)]


def similarity(a: str, b: str) -> float:
    """Return a score in [0.0, 1.0]; 1.0 means identical after normalization.

    Both strings are stripped and lower-cased first. Two empty strings are
    identical (1.0); one empty string against a non-empty one scores 0.0.
    """
    a = _normalize(a)
    b = _normalize(b)
    if not a:
        return 1.0 if not b else 0.0
    if not b:
        return 0.0
    return 1.0 - levenshtein(a, b) / max(len(a), len(b))


def is_correct(user_input: str, correct_answer: str, threshold: float = DEFAULT_THRESHOLD) -> bool:
    """Judge user_input against correct_answer.

    Translations often list several glosses ("to eat, to drink"). If the full
    answer does not match, the gloss before the first comma is tried once.
    Later glosses are never tried.
    """
    if similarity(user_input, correct_answer) >= threshold:
        return True
    head, comma, _ = correct_answer.partition(",")
    if not comma:
        return False
    return similarity(user_input, head.strip()) >= threshold
