"""Exceptions raised by the translation services."""


class TranslationError(Exception):
    """Base class for translation service errors."""


class ProviderError(TranslationError):
    """The external translation provider failed.

    ``retryable`` is False for failures that will not clear on their own
    (invalid credentials, unsupported language pair).
    """

    def __init__(self, message: str, retryable: bool = True):
        super().__init__(message)
        self.retryable = retryable


class GlossaryUnavailableError(ProviderError):
    """The glossary resource for a language pair is missing or unusable."""


class InvalidTableError(TranslationError):
    """Bulk translation was requested for a table outside the allow-list."""


class RecordNotFoundError(TranslationError):
    """The record to translate does not exist."""


class PersistenceError(TranslationError):
    """Writing translated maps back onto the record failed."""
