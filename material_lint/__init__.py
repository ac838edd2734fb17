"""
material-lint: structural linter for MkDocs Material Markdown.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    material-lint docs/index.md

Library Usage:
    from material_lint import lint_text

    result = lint_text("!!! note\\n\\n    Body\\n")
    for diagnostic in result.diagnostics:
        print(diagnostic.line, diagnostic.message)
"""

from .blocks import find_block_end, resolve_depths
from .classifiers import classify_document, classify_line
from .config import ConfigError, LintConfig
from .exceptions import FileTooLargeError, LintError, UnsupportedLanguageError
from .models import (
    AdmonitionBlock,
    Annotations,
    Diagnostic,
    LineRange,
    LineRole,
    LintResult,
    Severity,
    TableBlock,
    TabBlock,
)
from .scanner import LintFileError, lint_file, lint_lines, lint_text
from .stylesheet import Stylesheet, Theme, compute_stylesheet

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "lint_text",
    "lint_lines",
    "lint_file",
    "classify_line",
    "classify_document",
    "find_block_end",
    "resolve_depths",
    "compute_stylesheet",
    # Data models
    "AdmonitionBlock",
    "Annotations",
    "Diagnostic",
    "LineRange",
    "LineRole",
    "LintResult",
    "Severity",
    "Stylesheet",
    "TableBlock",
    "TabBlock",
    "Theme",
    # Configuration
    "LintConfig",
    "ConfigError",
    # Exceptions
    "FileTooLargeError",
    "LintError",
    "LintFileError",
    "UnsupportedLanguageError",
    # Version
    "__version__",
]
