"""KStem-Service: dictionary-validated English stemming.

This package provides:
- A Krovetz-style stemmer whose output roots are real English words
- The lexicon the stemmer validates candidates against
- A FastAPI service exposing stemming over HTTP
"""

__version__ = "0.1.0"

from kstem.nlp.stemmer import KStemmer, deduplicate_by_stem, stem, stem_terms  # noqa: E402

__all__ = ["KStemmer", "__version__", "deduplicate_by_stem", "stem", "stem_terms"]
