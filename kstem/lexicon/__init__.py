"""Lexicon package: stemming dictionary and its source data."""
from kstem.lexicon.dictionary import (
    BuildReport,
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

__all__ = [
    "BuildReport",
    "Dictionary",
    "DictionaryBuilder",
    "DictionaryEntry",
    "KeyCollision",
    "LexiconSources",
    "build_dictionary",
    "get_build_report",
    "get_dictionary",
    "is_dictionary_loaded",
    "load_lexicon_sources",
    "reset_dictionary",
]
