"""Dictionary-validated English stemmer.

Maps an inflected or derived English word to a root that is itself a
word found in the lexicon ("running" -> "run", "calories" -> "calorie",
"happiness" -> "happy"). Unknown or unusual input is returned lower-cased.

Features:
- stem(): single-term stemming against the process-wide lexicon
- KStemmer: stemmer bound to a Dictionary with a bounded result cache
- stem_terms(): batch stemming
- deduplicate_by_stem(): keep the first term of each stem group

Anti-Patterns Avoided:
- S1192: Constants extracted to module level
- S3776: Rule logic kept in kstem.nlp.rules, one function per suffix family
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from functools import lru_cache
from typing import Final

from kstem.core.config import get_settings
from kstem.core.exceptions import ConfigurationError
from kstem.core.logging import get_logger
from kstem.lexicon.dictionary import Dictionary, get_dictionary
from kstem.nlp.rules import apply_cascade
from kstem.nlp.word_buffer import WordBuffer

logger = get_logger(__name__)

# =============================================================================
# Module Constants
# =============================================================================

# Longest input the stemmer will process; longer words pass through
MAX_WORD_LEN: Final[int] = 100

DEFAULT_CACHE_SIZE: Final[int] = 20000


def _is_stemmable(term: str) -> bool:
    # tokens of 99 characters or more are never stemmed
    if len(term) <= 2 or len(term) >= MAX_WORD_LEN - 1:
        return False
    return term.isascii() and term.isalpha()


# =============================================================================
# KStemmer
# =============================================================================


class KStemmer:
    """
    Stemmer bound to one Dictionary.

    Stems are a pure function of the input, so results are memoised in an
    LRU cache of ``cache_size`` entries (0 disables caching). Instances are
    safe to share between threads.

    Example:
        >>> stemmer = KStemmer()
        >>> stemmer.stem("Running")
        'run'
        >>> stemmer.stem_terms(["calories", "happiness"])
        ['calorie', 'happy']
    """

    def __init__(
        self,
        dictionary: Dictionary | None = None,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ) -> None:
        if cache_size < 0:
            raise ConfigurationError(f"cache_size must be >= 0, got {cache_size}")
        self._dictionary = dictionary if dictionary is not None else get_dictionary()
        if cache_size > 0:
            self._cached_stem = lru_cache(maxsize=cache_size)(self._stem_uncached)
        else:
            self._cached_stem = self._stem_uncached

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    def stem(self, term: str) -> str:
        """Return the root of ``term``.

        Args:
            term: Word to stem. Anything of length 2 or less, of length 99
                or more, or containing characters other than ASCII letters
                is returned lower-cased.

        Returns:
            The lower-cased root.
        """
        if not _is_stemmable(term):
            return term.lower()
        return self._cached_stem(term.lower())

    def stem_terms(self, terms: Iterable[str]) -> list[str]:
        """Stem every term, preserving order."""
        return [self.stem(term) for term in terms]

    def cache_info(self) -> str:
        info = getattr(self._cached_stem, "cache_info", None)
        return str(info()) if info is not None else "disabled"

    def _stem_uncached(self, word: str) -> str:
        entry = self._dictionary.lookup(word)
        if entry is not None:
            return entry.explicit_root or word

        result = apply_cascade(WordBuffer(word), self._dictionary)
        if result.entry is not None and result.entry.explicit_root:
            return result.entry.explicit_root
        return result.buffer.chars


# =============================================================================
# Module-level helpers
# =============================================================================

_default_stemmer: KStemmer | None = None
_default_lock = threading.Lock()


def get_stemmer() -> KStemmer:
    """Get the shared KStemmer over the process-wide lexicon."""
    global _default_stemmer
    if _default_stemmer is None:
        with _default_lock:
            if _default_stemmer is None:
                settings = get_settings()
                _default_stemmer = KStemmer(
                    get_dictionary(settings.lexicon_dir),
                    cache_size=settings.stem_cache_size,
                )
                logger.debug("stemmer_created", cache_size=settings.stem_cache_size)
    return _default_stemmer


def reset_stemmer() -> None:
    """Drop the shared KStemmer (testing only)."""
    global _default_stemmer
    with _default_lock:
        _default_stemmer = None


def stem(term: str) -> str:
    """Stem a single term against the process-wide lexicon.

    Examples:
        >>> stem("running")
        'run'
        >>> stem("aging")
        'age'
        >>> stem("IBM's")
        "ibm's"
    """
    return get_stemmer().stem(term)


def stem_terms(terms: Iterable[str]) -> list[str]:
    """Stem every term against the process-wide lexicon."""
    return get_stemmer().stem_terms(terms)


# =============================================================================
# Deduplication
# =============================================================================


def deduplicate_by_stem(terms: list[str]) -> tuple[list[str], int]:
    """Deduplicate terms by their stem.

    Keeps the first occurrence of each stem group.

    Args:
        terms: List of terms.

    Returns:
        Tuple of (deduplicated_terms, removed_count).

    Examples:
        >>> deduplicate_by_stem(["run", "running", "runs"])
        (['run'], 2)
    """
    if not terms:
        return [], 0

    stemmer = get_stemmer()
    seen_stems: set[str] = set()
    result: list[str] = []

    for term in terms:
        root = stemmer.stem(term)
        if root not in seen_stems:
            seen_stems.add(root)
            result.append(term)

    return result, len(terms) - len(result)
