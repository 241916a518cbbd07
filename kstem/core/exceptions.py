"""
KStem Service - Custom Exceptions

Anti-Patterns Avoided:
- Exception shadowing: custom namespaced exceptions rooted at KStemError
  instead of reusing builtins like LookupError or FileNotFoundError
"""


class KStemError(Exception):
    """Base exception for the KStem service.

    All custom exceptions inherit from this base class.
    """
    pass


class LexiconLoadError(KStemError):
    """Raised when lexicon source data is missing or malformed.

    Stemming itself never raises; this only surfaces while the
    dictionary is being built from its data files.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} ({self.path})"
        return self.message


class ConfigurationError(KStemError):
    """Raised when configuration is invalid or missing."""
    pass
