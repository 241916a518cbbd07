"""Tests for letter classification and the WordBuffer."""

from __future__ import annotations

import dataclasses

import pytest

from kstem.nlp.letters import (
    VOWELS,
    has_doubled_consonant,
    has_vowel_in_stem,
    is_consonant,
    is_vowel,
)
from kstem.nlp.word_buffer import WordBuffer


class TestIsConsonant:
    """Vowels, plain consonants and the context-dependent y."""

    @pytest.mark.parametrize("letter", sorted(VOWELS))
    def test_vowels_are_not_consonants(self, letter: str) -> None:
        assert is_consonant(letter + "x", 0) is False

    @pytest.mark.parametrize("letter", list("bcdfghjklmnpqrstvwxz"))
    def test_plain_consonants(self, letter: str) -> None:
        assert is_consonant("a" + letter, 1) is True

    def test_leading_y_is_consonant(self) -> None:
        assert is_consonant("yes", 0) is True

    def test_y_after_consonant_is_vowel(self) -> None:
        assert is_consonant("sky", 2) is False
        assert is_vowel("sky", 2) is True

    def test_y_after_vowel_is_consonant(self) -> None:
        assert is_consonant("eye", 1) is True

    def test_y_run_alternates(self) -> None:
        """Each y takes the opposite class of the letter before it."""
        assert [is_consonant("yyy", i) for i in range(3)] == [True, False, True]

    def test_syzygy(self) -> None:
        assert is_vowel("syzygy", 1)
        assert is_vowel("syzygy", 3)
        assert is_vowel("syzygy", 5)

    def test_yoyo(self) -> None:
        assert [is_consonant("yoyo", i) for i in range(4)] == [True, False, True, False]


class TestHasDoubledConsonant:
    def test_doubled_consonant(self) -> None:
        assert has_doubled_consonant("runn", 3) is True
        assert has_doubled_consonant("fizz", 3) is True

    def test_doubled_vowel_is_not_doubled_consonant(self) -> None:
        assert has_doubled_consonant("agree", 4) is False

    def test_different_letters(self) -> None:
        assert has_doubled_consonant("jump", 3) is False

    def test_position_zero(self) -> None:
        assert has_doubled_consonant("llama", 0) is False

    def test_doubled_y_after_vowel(self) -> None:
        """'eyy': the second y follows a consonant y, so it is a vowel."""
        assert has_doubled_consonant("eyy", 2) is False


class TestHasVowelInStem:
    def test_stem_with_vowel(self) -> None:
        assert has_vowel_in_stem(WordBuffer("jumped", 3)) is True

    def test_acronym_stem(self) -> None:
        assert has_vowel_in_stem(WordBuffer("xbmed", 2)) is False

    def test_y_counts_as_vowel_after_consonant(self) -> None:
        assert has_vowel_in_stem(WordBuffer("tryed", 2)) is True

    def test_letters_after_j_are_ignored(self) -> None:
        assert has_vowel_in_stem(WordBuffer("bcdae", 2)) is False


class TestWordBuffer:
    def test_defaults(self) -> None:
        buffer = WordBuffer("running")
        assert buffer.j == -1
        assert buffer.k == 6
        assert len(buffer) == 7
        assert str(buffer) == "running"

    def test_ends_in_sets_boundary(self) -> None:
        match = WordBuffer("running").ends_in("ing")
        assert match is not None
        assert match.j == 3
        assert match.stem == "runn"
        assert match.chars == "running"

    def test_ends_in_mismatch(self) -> None:
        assert WordBuffer("running").ends_in("ed") is None

    def test_ends_in_requires_a_preceding_character(self) -> None:
        assert WordBuffer("ing").ends_in("ing") is None
        match = WordBuffer("sing").ends_in("ing")
        assert match is not None
        assert match.stem == "s"

    def test_with_ending_replaces_suffix(self) -> None:
        match = WordBuffer("running").ends_in("ing")
        assert match is not None
        rewritten = match.with_ending("e")
        assert rewritten.chars == "runne"
        assert rewritten.j == 3

    def test_with_chars_keeps_boundary(self) -> None:
        match = WordBuffer("happier").ends_in("er")
        assert match is not None
        assert match.with_chars("happy") == WordBuffer("happy", 4)

    def test_buffers_are_immutable(self) -> None:
        buffer = WordBuffer("running")
        with pytest.raises(dataclasses.FrozenInstanceError):
            buffer.chars = "run"  # type: ignore[misc]

    def test_rewrites_leave_original_untouched(self) -> None:
        buffer = WordBuffer("running")
        match = buffer.ends_in("ing")
        assert match is not None
        match.with_ending("")
        assert buffer == WordBuffer("running")
