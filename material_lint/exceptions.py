"""Package-specific exception types."""

from __future__ import annotations


class LintError(ValueError):
    """Base class for linting-related errors.

    Lint findings themselves are reported as diagnostics; these exceptions
    cover the layers around the scanner (files, languages, limits).
    """


class FileTooLargeError(LintError):
    """Raised when a document exceeds the configured maximum size.

    Args:
        size: Size of the document in bytes.
        max_size: Maximum allowed size in bytes.
    """

    def __init__(self, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Document of {self.size} bytes exceeds the maximum allowed size of {self.max_size} bytes"


class UnsupportedLanguageError(LintError):
    """Raised when a file extension does not map to a lintable language.

    Args:
        suffix: File extension that was rejected.
    """

    def __init__(self, suffix: str):
        self.suffix = suffix
        super().__init__(f"No Markdown language is associated with {suffix!r} files")
