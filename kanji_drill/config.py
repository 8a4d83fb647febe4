from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from kanji_drill.models import DisplayPrefs

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "vocab_file": "data/vocabulary.json",
    "show_phonetic": False,
    "show_translation": False,
    "min_similarity": 0.6,
}

# Set by the CLI so `serve` flags reach the app process.
ENV_VOCAB_FILE = "KANJI_DRILL_VOCAB_FILE"
ENV_SHOW_PHONETIC = "KANJI_DRILL_SHOW_PHONETIC"
ENV_SHOW_TRANSLATION = "KANJI_DRILL_SHOW_TRANSLATION"


@dataclass
class Settings:
    vocab_file: str = DEFAULTS["vocab_file"]
    show_phonetic: bool = DEFAULTS["show_phonetic"]
    show_translation: bool = DEFAULTS["show_translation"]
    min_similarity: float = DEFAULTS["min_similarity"]

    def __post_init__(self):
        if not 0.0 <= self.min_similarity <= 1.0:
            raise ValueError(f"min_similarity must be between 0 and 1, got {self.min_similarity}")

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def vocab_full_path(self) -> Path:
        # An absolute vocab_file replaces the root entirely
        return self.project_root / self.vocab_file

    def display_prefs(self) -> DisplayPrefs:
        return DisplayPrefs(
            show_phonetic=self.show_phonetic,
            show_translation=self.show_translation,
        )

    def to_dict(self) -> dict:
        return {
            "vocab_file": self.vocab_file,
            "show_phonetic": self.show_phonetic,
            "show_translation": self.show_translation,
            "min_similarity": self.min_similarity,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n", encoding="utf-8")


def _env_flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def apply_env_overrides(settings: Settings) -> Settings:
    if os.environ.get(ENV_VOCAB_FILE):
        settings.vocab_file = os.environ[ENV_VOCAB_FILE]
    if ENV_SHOW_PHONETIC in os.environ:
        settings.show_phonetic = _env_flag(os.environ[ENV_SHOW_PHONETIC])
    if ENV_SHOW_TRANSLATION in os.environ:
        settings.show_translation = _env_flag(os.environ[ENV_SHOW_TRANSLATION])
    return settings
