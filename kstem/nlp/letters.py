"""Letter classification primitives for English stemming.

The letter ``y`` is a consonant at the start of a word and otherwise
takes the opposite class of the letter before it: a vowel in "sky", a
consonant in "eye". The definition recurses towards index 0, so its depth
is bounded by the word length.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from kstem.nlp.word_buffer import WordBuffer

VOWELS: Final[frozenset[str]] = frozenset("aeiou")


def is_consonant(word: str, i: int) -> bool:
    """Return True if ``word[i]`` is a consonant."""
    ch = word[i]
    if ch in VOWELS:
        return False
    if ch != "y" or i == 0:
        return True
    return not is_consonant(word, i - 1)


def is_vowel(word: str, i: int) -> bool:
    """Return True if ``word[i]`` is a vowel."""
    return not is_consonant(word, i)


def has_doubled_consonant(word: str, i: int) -> bool:
    """Return True if ``word[i]`` repeats ``word[i - 1]`` and is a consonant.

    Examples:
        >>> has_doubled_consonant("runn", 3)
        True
        >>> has_doubled_consonant("agree", 4)
        False
    """
    if i < 1:
        return False
    if word[i] != word[i - 1]:
        return False
    return is_consonant(word, i)


def has_vowel_in_stem(buffer: WordBuffer) -> bool:
    """Return True if the stem (positions ``0..=j``) contains a vowel.

    Guards rules against all-consonant tokens such as acronyms.
    """
    return any(is_vowel(buffer.chars, i) for i in range(buffer.j + 1))
