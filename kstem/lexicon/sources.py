"""Lexicon source data loader.

The stemming dictionary is assembled from static word lists shipped in
``kstem/lexicon/data``:

    exception_words.txt        exception-flagged forms
    direct_conflations.json    {"surface": "root", ...} irregular forms
    country_nationality.json   {"italian": "italy", ...}
    headwords/*.txt            plain headwords, one partition per file
    supplement_words.txt       technical vocabulary
    proper_nouns.txt           proper nouns

Word lists hold one word per line; blank lines and ``#`` comments are
skipped. Headword partitions are loaded in file-name order.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from kstem.core.exceptions import LexiconLoadError

# Default path to bundled lexicon data
DEFAULT_LEXICON_DIR: Final[Path] = Path(__file__).parent / "data"

EXCEPTION_WORDS_FILE: Final[str] = "exception_words.txt"
DIRECT_CONFLATIONS_FILE: Final[str] = "direct_conflations.json"
COUNTRY_NATIONALITY_FILE: Final[str] = "country_nationality.json"
HEADWORDS_DIR: Final[str] = "headwords"
SUPPLEMENT_WORDS_FILE: Final[str] = "supplement_words.txt"
PROPER_NOUNS_FILE: Final[str] = "proper_nouns.txt"


@dataclass(frozen=True, slots=True)
class LexiconSources:
    """All source lists the dictionary is built from."""

    exception_words: tuple[str, ...] = ()
    direct_conflations: dict[str, str] = field(default_factory=dict)
    country_nationality: dict[str, str] = field(default_factory=dict)
    headwords: dict[str, tuple[str, ...]] = field(default_factory=dict)
    supplement_words: tuple[str, ...] = ()
    proper_nouns: tuple[str, ...] = ()


def read_word_list(path: Path) -> tuple[str, ...]:
    """Read a one-word-per-line list.

    Raises:
        LexiconLoadError: If the file does not exist.
    """
    if not path.exists():
        raise LexiconLoadError("Lexicon word list not found", str(path))

    words: list[str] = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            word = line.split("#", 1)[0].strip().lower()
            if word:
                words.append(word)
    return tuple(words)


def read_word_map(path: Path) -> dict[str, str]:
    """Read a JSON object mapping surface forms to roots.

    Raises:
        LexiconLoadError: If the file is missing, is not valid JSON, or is
            not a flat string-to-string object.
    """
    if not path.exists():
        raise LexiconLoadError("Lexicon word map not found", str(path))

    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise LexiconLoadError(f"Invalid JSON in lexicon word map: {e.msg}", str(path)) from e

    if not isinstance(raw, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in raw.items()
    ):
        raise LexiconLoadError("Lexicon word map must be a string-to-string object", str(path))

    return {k.strip().lower(): v.strip().lower() for k, v in raw.items()}


def load_lexicon_sources(lexicon_dir: Path | None = None) -> LexiconSources:
    """Load every source list from ``lexicon_dir``.

    Args:
        lexicon_dir: Data directory. Defaults to the bundled lexicon.

    Returns:
        LexiconSources with all lists populated.

    Raises:
        LexiconLoadError: If any file is missing or malformed, or the
            headword directory holds no partitions.
    """
    base = lexicon_dir or DEFAULT_LEXICON_DIR

    headword_dir = base / HEADWORDS_DIR
    partitions = sorted(headword_dir.glob("*.txt")) if headword_dir.is_dir() else []
    if not partitions:
        raise LexiconLoadError("No headword partitions found", str(headword_dir))

    return LexiconSources(
        exception_words=read_word_list(base / EXCEPTION_WORDS_FILE),
        direct_conflations=read_word_map(base / DIRECT_CONFLATIONS_FILE),
        country_nationality=read_word_map(base / COUNTRY_NATIONALITY_FILE),
        headwords={f"headwords_{p.stem}": read_word_list(p) for p in partitions},
        supplement_words=read_word_list(base / SUPPLEMENT_WORDS_FILE),
        proper_nouns=read_word_list(base / PROPER_NOUNS_FILE),
    )
