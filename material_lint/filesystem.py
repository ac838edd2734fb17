"""Path, size, and encoding guards applied before a document is scanned."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, LANGUAGE_BY_EXTENSION, MARKDOWN_EXTENSIONS
from .exceptions import FileTooLargeError, UnsupportedLanguageError

MAX_FILE_SIZE_ENV_VAR = "MATERIAL_LINT_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the byte limit for linted documents.

    ``MATERIAL_LINT_MAX_FILE_SIZE`` takes precedence over `default`, which
    normally comes from ``LintConfig.max_file_size``.

    Raises:
        ValueError: If the variable is set to anything but a positive integer.

    Examples:
        os.environ["MATERIAL_LINT_MAX_FILE_SIZE"] = "1048576"
        get_max_file_size(default=4096)  # 1048576
    """
    raw_limit = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw_limit is None:
        return default

    try:
        limit = int(raw_limit)
    except ValueError as error:
        raise ValueError(
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {raw_limit!r} is not an integer"
        ) from error

    if limit <= 0:
        raise ValueError(f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {limit} is not positive")
    return limit


def normalize_filepath(raw_path: str) -> Path:
    """Turn a command-line argument into an absolute Markdown path.

    Args:
        raw_path: Path as typed by the user; ``~`` is expanded.

    Returns:
        Path: Resolved path of an existing ``.md``, ``.markdown``, or
            ``.mdx`` file.

    Raises:
        ValueError: If the path is missing, is not a regular file, or has
            another extension.
    """
    candidate = Path(raw_path).expanduser()

    try:
        markdown_path = candidate.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{candidate} was not found.") from error
    except OSError as error:
        raise ValueError(f"Cannot resolve {candidate}: {error}") from error

    if not markdown_path.is_file():
        raise ValueError(f"{markdown_path} must be a regular file.")

    if markdown_path.suffix.lower() not in MARKDOWN_EXTENSIONS:
        accepted = ", ".join(MARKDOWN_EXTENSIONS)
        raise ValueError(f"{markdown_path} is not a Markdown file (expected one of {accepted}).")

    return markdown_path


def language_for_path(filepath: Path) -> str:
    """Map a file extension to the language identifier used for eligibility.

    Raises:
        UnsupportedLanguageError: If the extension is not a Markdown extension.

    Examples:
        language_for_path(Path("guide.mdx"))  # "mdx"
    """
    suffix = filepath.suffix.lower()
    try:
        return LANGUAGE_BY_EXTENSION[suffix]
    except KeyError as error:
        raise UnsupportedLanguageError(suffix) from error


def enforce_file_size(filepath: Path, max_size: int) -> None:
    """Reject documents larger than `max_size` bytes before reading them.

    Raises:
        IOError: If the file cannot be stat'ed.
        FileTooLargeError: If the document is over the limit.
    """
    try:
        size = filepath.stat().st_size
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if size > max_size:
        raise FileTooLargeError(size, max_size)


def safe_read(filepath: Path) -> TextIO:
    """Open a Markdown document as UTF-8 text.

    Line endings are left untouched (``newline=""``) so the scanner sees
    ``\\r\\n`` exactly as written.

    Raises:
        IOError: If the file cannot be opened.

    Examples:
        with safe_read(Path("docs/index.md")) as document:
            text = document.read()
    """
    try:
        return open(filepath, "r", encoding="UTF-8", newline="")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error
