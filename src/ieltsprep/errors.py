"""Error types raised by the vocabulary core."""
from typing import Optional


class IELTSPrepError(Exception):
    """Base class for all errors raised by the package."""


class InvalidConfiguration(IELTSPrepError, ValueError):
    """Raised when settings, policy or content make an operation impossible."""


class NotFound(IELTSPrepError, LookupError):
    """Raised when a word id is not present in the catalog."""

    def __init__(self, word_id: str, message: Optional[str] = None):
        self.word_id = word_id
        super().__init__(message or f"Word {word_id!r} not found")


class PersistenceFailure(IELTSPrepError):
    """Raised when the review or config store fails to read or write.

    The underlying driver error is kept as ``__cause__``.
    """
