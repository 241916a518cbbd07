"""Tests for the stemming dictionary, its builder and the bundled lexicon."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from pathlib import Path

import pytest

from kstem.core.exceptions import KStemError, LexiconLoadError
from kstem.lexicon.dictionary import (
    DEFAULT_ENTRY,
    EXCEPTION_ENTRY,
    SOURCE_CONFLATIONS,
    SOURCE_EXCEPTIONS,
    SOURCE_NATIONALITIES,
    SOURCE_PROPER_NOUNS,
    SOURCE_SUPPLEMENT,
    Dictionary,
    DictionaryBuilder,
    DictionaryEntry,
    KeyCollision,
    build_dictionary,
    get_build_report,
    get_dictionary,
    is_dictionary_loaded,
    reset_dictionary,
)
from kstem.lexicon.sources import LexiconSources, load_lexicon_sources


@pytest.fixture
def fresh_dictionary() -> Iterator[None]:
    reset_dictionary()
    yield
    reset_dictionary()


# =============================================================================
# DictionaryEntry / Dictionary
# =============================================================================


class TestDictionaryEntry:
    def test_defaults(self) -> None:
        entry = DictionaryEntry()
        assert entry.is_exception is False
        assert entry.explicit_root is None
        assert entry == DEFAULT_ENTRY

    def test_exception_entry(self) -> None:
        assert EXCEPTION_ENTRY.is_exception is True
        assert EXCEPTION_ENTRY.explicit_root is None


class TestDictionary:
    def test_lookup(self) -> None:
        dictionary = Dictionary({"run": DEFAULT_ENTRY})
        assert dictionary.lookup("run") is DEFAULT_ENTRY
        assert dictionary.lookup("running") is None

    def test_lookup_is_case_sensitive(self) -> None:
        """Callers lower-case before lookup."""
        assert Dictionary({"run": DEFAULT_ENTRY}).lookup("Run") is None

    def test_len_contains_repr(self) -> None:
        dictionary = Dictionary({"run": DEFAULT_ENTRY, "walk": DEFAULT_ENTRY})
        assert len(dictionary) == 2
        assert "walk" in dictionary
        assert "jog" not in dictionary
        assert repr(dictionary) == "Dictionary(2 entries)"

    def test_read_only(self) -> None:
        source = {"run": DEFAULT_ENTRY}
        dictionary = Dictionary(source)
        source["walk"] = DEFAULT_ENTRY
        assert "walk" not in dictionary
        with pytest.raises(TypeError):
            dictionary._entries["jog"] = DEFAULT_ENTRY  # type: ignore[index]


# =============================================================================
# DictionaryBuilder
# =============================================================================


class TestDictionaryBuilder:
    def test_entry_kinds(self) -> None:
        dictionary, _ = (
            DictionaryBuilder()
            .add_exceptions(["aide"])
            .add_conflations({"aging": "age"})
            .add_headwords(["run"], "test")
            .build()
        )
        assert dictionary.lookup("aide") == EXCEPTION_ENTRY
        assert dictionary.lookup("aging") == DictionaryEntry(explicit_root="age")
        assert dictionary.lookup("run") == DEFAULT_ENTRY

    def test_keys_normalised(self) -> None:
        dictionary, report = (
            DictionaryBuilder().add_headwords(["  Run ", "", "   "], "test").build()
        )
        assert "run" in dictionary
        assert len(dictionary) == 1
        assert report.source_counts == {"test": 1}

    def test_roots_normalised(self) -> None:
        dictionary, _ = DictionaryBuilder().add_conflations({"Aging": " Age "}).build()
        assert dictionary.lookup("aging") == DictionaryEntry(explicit_root="age")

    def test_first_writer_wins(self) -> None:
        dictionary, report = (
            DictionaryBuilder()
            .add_exceptions(["suite"])
            .add_headwords(["suite"], "headwords_part4")
            .build()
        )
        assert dictionary.lookup("suite") == EXCEPTION_ENTRY
        assert report.collisions == [
            KeyCollision(
                word="suite",
                source="headwords_part4",
                existing_source=SOURCE_EXCEPTIONS,
            )
        ]

    def test_collision_within_one_source(self) -> None:
        _, report = DictionaryBuilder().add_headwords(["run", "run"], "test").build()
        assert report.collision_count == 1
        assert report.entry_count == 1

    def test_conflation_not_overwritten_by_headword(self) -> None:
        dictionary, report = (
            DictionaryBuilder()
            .add_conflations({"used": "use"})
            .add_headwords(["used"], "test")
            .build()
        )
        assert dictionary.lookup("used") == DictionaryEntry(explicit_root="use")
        assert report.collision_count == 1

    def test_empty_build(self) -> None:
        dictionary, report = DictionaryBuilder().build()
        assert len(dictionary) == 0
        assert report.collision_count == 0
        assert report.entry_count == 0


class TestBuildDictionary:
    def test_canonical_order(self) -> None:
        sources = LexiconSources(
            exception_words=("plane",),
            direct_conflations={"aging": "age", "plane": "plan"},
            country_nationality={"italian": "italy", "aging": "agency"},
            headwords={"headwords_a": ("plane", "run"), "headwords_b": ("run",)},
            supplement_words=("capacitor", "italian"),
            proper_nouns=("paris", "capacitor"),
        )
        dictionary, report = build_dictionary(sources)

        assert dictionary.lookup("plane") == EXCEPTION_ENTRY
        assert dictionary.lookup("aging") == DictionaryEntry(explicit_root="age")
        assert dictionary.lookup("italian") == DictionaryEntry(explicit_root="italy")
        assert len(dictionary) == 6
        assert [(c.word, c.source, c.existing_source) for c in report.collisions] == [
            ("plane", SOURCE_CONFLATIONS, SOURCE_EXCEPTIONS),
            ("aging", SOURCE_NATIONALITIES, SOURCE_CONFLATIONS),
            ("plane", "headwords_a", SOURCE_EXCEPTIONS),
            ("run", "headwords_b", "headwords_a"),
            ("italian", SOURCE_SUPPLEMENT, SOURCE_NATIONALITIES),
            ("capacitor", SOURCE_PROPER_NOUNS, SOURCE_SUPPLEMENT),
        ]
        assert report.entry_count == len(dictionary)


# =============================================================================
# Bundled lexicon
# =============================================================================


class TestBundledLexicon:
    @pytest.fixture(scope="class")
    def built(self) -> tuple[Dictionary, object]:
        return build_dictionary(load_lexicon_sources())

    def test_entry_counts(self, built) -> None:
        dictionary, report = built
        assert len(dictionary) == report.entry_count
        assert report.source_counts[SOURCE_EXCEPTIONS] == 41
        assert report.source_counts[SOURCE_CONFLATIONS] == 58
        assert report.source_counts[SOURCE_NATIONALITIES] == 150
        assert report.source_counts[SOURCE_SUPPLEMENT] == 16
        assert report.source_counts[SOURCE_PROPER_NOUNS] == 253
        assert len(dictionary) > 8000

    def test_headword_partitions(self, built) -> None:
        _, report = built
        partitions = [s for s in report.source_counts if s.startswith("headwords_")]
        assert partitions == [
            "headwords_part1",
            "headwords_part2",
            "headwords_part3",
            "headwords_part4",
        ]

    def test_exception_words_collide_with_headwords(self, built) -> None:
        dictionary, report = built
        assert sorted(c.word for c in report.collisions) == ["plane", "quite", "severe", "suite"]
        assert all(c.existing_source == SOURCE_EXCEPTIONS for c in report.collisions)
        assert dictionary.lookup("suite") == EXCEPTION_ENTRY

    @pytest.mark.parametrize(
        ("word", "root"),
        [("aging", "age"), ("theses", "thesis"), ("oxen", "ox"), ("zimbabwean", "zimbabwe")],
    )
    def test_explicit_roots(self, built, word: str, root: str) -> None:
        dictionary, _ = built
        assert dictionary.lookup(word) == DictionaryEntry(explicit_root=root)

    @pytest.mark.parametrize(
        "word", ["run", "calorie", "superconduct", "socrates", "aide", "hop", "zigzag"]
    )
    def test_known_words(self, built, word: str) -> None:
        dictionary, _ = built
        assert word in dictionary

    @pytest.mark.parametrize("word", ["running", "happiness", "teacher", "optimal"])
    def test_inflected_forms_absent(self, built, word: str) -> None:
        dictionary, _ = built
        assert word not in dictionary


# =============================================================================
# Process-wide dictionary
# =============================================================================


@pytest.mark.usefixtures("fresh_dictionary")
class TestProcessWideDictionary:
    def test_not_loaded_until_requested(self) -> None:
        assert is_dictionary_loaded() is False
        get_dictionary()
        assert is_dictionary_loaded() is True

    def test_built_once(self) -> None:
        assert get_dictionary() is get_dictionary()

    def test_build_report(self) -> None:
        report = get_build_report()
        assert is_dictionary_loaded() is True
        assert report.entry_count == len(get_dictionary())

    def test_build_report_missing_after_reset_raises(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("kstem.lexicon.dictionary.get_dictionary", lambda: None)
        with pytest.raises(KStemError, match="build report is unavailable"):
            get_build_report()

    def test_reset(self) -> None:
        first = get_dictionary()
        reset_dictionary()
        assert is_dictionary_loaded() is False
        assert get_dictionary() is not first

    def test_concurrent_first_use_builds_one_dictionary(self) -> None:
        results: list[Dictionary] = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            results.append(get_dictionary())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(d is results[0] for d in results)

    def test_lexicon_dir_override(self, tmp_path: Path) -> None:
        with pytest.raises(LexiconLoadError):
            get_dictionary(tmp_path)
        assert is_dictionary_loaded() is False
