"""Stemming dictionary: entry model, builder and process-wide instance.

The dictionary maps a lower-cased surface form to exactly one
DictionaryEntry. It is assembled from several disjoint source lists in a
fixed order; a key that is already present is never overwritten. Each such
collision is recorded in the BuildReport returned alongside the dictionary
and the first entry is kept.

Pattern: Hashed Feature lookup (O(1) dict access), frozen after build.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from kstem.core.exceptions import KStemError
from kstem.core.logging import get_logger
from kstem.core.tracing import get_tracer

if TYPE_CHECKING:
    from kstem.lexicon.sources import LexiconSources

logger = get_logger(__name__)
tracer = get_tracer(__name__)

# =============================================================================
# Constants
# =============================================================================

SOURCE_EXCEPTIONS: Final[str] = "exception_words"
SOURCE_CONFLATIONS: Final[str] = "direct_conflations"
SOURCE_NATIONALITIES: Final[str] = "country_nationality"
SOURCE_SUPPLEMENT: Final[str] = "supplement_words"
SOURCE_PROPER_NOUNS: Final[str] = "proper_nouns"


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True, slots=True)
class DictionaryEntry:
    """
    One known surface form.

    Attributes:
        is_exception: The form is its own root, but past-tense and aspect
            rules must keep trying alternatives before accepting it.
        explicit_root: Root to report instead of the surface form
            (e.g. 'aging' -> 'age'). None means the form is its own root.
    """

    is_exception: bool = False
    explicit_root: str | None = None


DEFAULT_ENTRY: Final[DictionaryEntry] = DictionaryEntry()
EXCEPTION_ENTRY: Final[DictionaryEntry] = DictionaryEntry(is_exception=True)


@dataclass(frozen=True, slots=True)
class KeyCollision:
    """A rejected insert of a surface form that was already present."""

    word: str
    source: str
    existing_source: str


@dataclass(slots=True)
class BuildReport:
    """Diagnostics collected while building a Dictionary."""

    collisions: list[KeyCollision] = field(default_factory=list)
    source_counts: dict[str, int] = field(default_factory=dict)

    @property
    def collision_count(self) -> int:
        """Return number of rejected duplicate inserts."""
        return len(self.collisions)

    @property
    def entry_count(self) -> int:
        """Return number of entries actually inserted."""
        return sum(self.source_counts.values())


# =============================================================================
# Dictionary
# =============================================================================


class Dictionary:
    """
    Read-only mapping from surface form to DictionaryEntry.

    Example:
        >>> dictionary, _ = DictionaryBuilder().add_headwords(["run"], "demo").build()
        >>> dictionary.lookup("run")
        DictionaryEntry(is_exception=False, explicit_root=None)
        >>> dictionary.lookup("running") is None
        True
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, DictionaryEntry]) -> None:
        self._entries: Mapping[str, DictionaryEntry] = MappingProxyType(dict(entries))

    def lookup(self, word: str) -> DictionaryEntry | None:
        """Return the entry for ``word`` (already lower-cased), or None."""
        return self._entries.get(word)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: object) -> bool:
        return word in self._entries

    def __repr__(self) -> str:
        return f"Dictionary({len(self._entries)} entries)"


class DictionaryBuilder:
    """
    Accumulates entries from source lists, first writer wins.

    Keys are normalised to lowercase with surrounding whitespace removed;
    blank keys are ignored.
    """

    def __init__(self) -> None:
        self._entries: dict[str, DictionaryEntry] = {}
        self._origins: dict[str, str] = {}
        self._report = BuildReport()

    def _insert(self, word: str, entry: DictionaryEntry, source: str) -> None:
        key = word.strip().lower()
        if not key:
            return
        existing = self._origins.get(key)
        if existing is not None:
            self._report.collisions.append(
                KeyCollision(word=key, source=source, existing_source=existing)
            )
            logger.debug(
                "lexicon_key_collision",
                word=key,
                source=source,
                existing_source=existing,
            )
            return
        self._entries[key] = entry
        self._origins[key] = source
        self._report.source_counts[source] = self._report.source_counts.get(source, 0) + 1

    def add_exceptions(
        self, words: Iterable[str], source: str = SOURCE_EXCEPTIONS
    ) -> DictionaryBuilder:
        """Insert exception-flagged forms that are their own root."""
        for word in words:
            self._insert(word, EXCEPTION_ENTRY, source)
        return self

    def add_conflations(
        self, pairs: Mapping[str, str], source: str = SOURCE_CONFLATIONS
    ) -> DictionaryBuilder:
        """Insert surface -> explicit root pairs."""
        for surface, root in pairs.items():
            self._insert(surface, DictionaryEntry(explicit_root=root.strip().lower()), source)
        return self

    def add_headwords(self, words: Iterable[str], source: str) -> DictionaryBuilder:
        """Insert plain forms that are their own root."""
        for word in words:
            self._insert(word, DEFAULT_ENTRY, source)
        return self

    def build(self) -> tuple[Dictionary, BuildReport]:
        """Freeze the accumulated entries."""
        return Dictionary(self._entries), self._report


def build_dictionary(sources: LexiconSources) -> tuple[Dictionary, BuildReport]:
    """
    Build a Dictionary from lexicon sources in the canonical order.

    1. exception words
    2. direct conflations
    3. nationality -> country conflations
    4. headword partitions, supplementary vocabulary, proper nouns

    Args:
        sources: Loaded lexicon source lists.

    Returns:
        Tuple of (dictionary, build report).
    """
    builder = DictionaryBuilder()
    builder.add_exceptions(sources.exception_words)
    builder.add_conflations(sources.direct_conflations)
    builder.add_conflations(sources.country_nationality, SOURCE_NATIONALITIES)
    for name, words in sources.headwords.items():
        builder.add_headwords(words, name)
    builder.add_headwords(sources.supplement_words, SOURCE_SUPPLEMENT)
    builder.add_headwords(sources.proper_nouns, SOURCE_PROPER_NOUNS)
    return builder.build()


# =============================================================================
# Process-wide dictionary
# =============================================================================

_dictionary: Dictionary | None = None
_report: BuildReport | None = None
_lock = threading.Lock()


def get_dictionary(lexicon_dir: Path | None = None) -> Dictionary:
    """Get or build the process-wide dictionary.

    The first caller loads the lexicon; concurrent first callers block on
    a lock so nobody sees a partially built dictionary. ``lexicon_dir`` is
    only honoured by the call that performs the build.

    Args:
        lexicon_dir: Optional override for the lexicon data directory.

    Returns:
        The shared Dictionary instance.

    Raises:
        LexiconLoadError: If the lexicon data cannot be loaded.
    """
    global _dictionary, _report
    if _dictionary is not None:
        return _dictionary
    with _lock:
        if _dictionary is None:
            from kstem.lexicon.sources import load_lexicon_sources

            with tracer.start_as_current_span("lexicon.build") as span:
                sources = load_lexicon_sources(lexicon_dir)
                dictionary, report = build_dictionary(sources)
                span.set_attribute("lexicon.entries", len(dictionary))
                span.set_attribute("lexicon.collisions", report.collision_count)
            logger.info(
                "lexicon_built",
                entries=len(dictionary),
                collisions=report.collision_count,
                sources=len(report.source_counts),
            )
            _report = report
            _dictionary = dictionary
    return _dictionary


def get_build_report() -> BuildReport:
    """Return the BuildReport of the process-wide dictionary, building it if needed.

    Raises:
        KStemError: If the dictionary was reset before the report could be read.
    """
    get_dictionary()
    report = _report
    if report is None:
        raise KStemError("Lexicon build report is unavailable: dictionary was reset")
    return report


def is_dictionary_loaded() -> bool:
    """Return True once the process-wide dictionary has been built."""
    return _dictionary is not None


def reset_dictionary() -> None:
    """Drop the process-wide dictionary (testing only)."""
    global _dictionary, _report
    with _lock:
        _dictionary = None
        _report = None
