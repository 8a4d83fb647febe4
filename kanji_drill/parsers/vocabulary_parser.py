"""Read a vocabulary JSON file.

Expected shape, keyed by prompt symbol:

  {
    "三": {
      "kana": "さん",
      "translation": "three",
      "sentence_jp": "彼女[かのじょ]は三[さん]人[にん]の子供[こども]の母親[ははおや]だ。",
      "sentence_en": "She's the mother of three children.",
      "pos": "Noun"
    }
  }

Only the file and the top-level object are checked here; per-entry fields are
validated when the deck is built.
"""
from __future__ import annotations

import json
from pathlib import Path

from kanji_drill.errors import SourceNotFoundError, SourceParseError


def parse_vocabulary_file(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise SourceNotFoundError(path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise SourceParseError(f"{path} ({e})") from e
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; deep nesting exhausts the decoder's recursion
        raise SourceParseError(f"{path} ({e})") from e
    if not isinstance(data, dict):
        raise SourceParseError(f"{path} (expected a JSON object, got {type(data).__name__})")
    return data
