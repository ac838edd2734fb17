"""Constants used across the material-lint package."""

from __future__ import annotations

import re

# Markdown dialect patterns
FRONTMATTER_DELIMITER_PATTERN = re.compile(r"^\s*---\s*$")
FRONTMATTER_END_PATTERN = re.compile(r"^\s*\.\.\.\s*$")
CODE_FENCE_PATTERN = re.compile(r"^\s*(?P<fence>`{3,}|~{3,})")
MATH_DELIMITER_PATTERN = re.compile(r"^\s*\$\$\s*$")

ADMONITION_HEADER_PATTERN = re.compile(r"^(?P<indent>\s*)(?P<marker>!!!|\?\?\?\+|\?\?\?)\s*")
ADMONITION_SYNTAX_PATTERN = re.compile(r"^\s*(?:!!!|\?\?\?\+|\?\?\?)(?P<rest>.*)$")
ADMONITION_TYPE_PATTERN = re.compile(r"^[A-Za-z][\w-]*$")

TAB_HEADER_PATTERN = re.compile(r"^\s*===\s+")
TAB_SYNTAX_PATTERN = re.compile(r"^\s*===\s+(?P<title>.+)$")
TAB_MISSING_SPACE_PATTERN = re.compile(r"^\s*===\S")
TAB_TITLE_PATTERN = re.compile(r"""^(['"]).*\1$""")

BLOCKQUOTE_PATTERN = re.compile(r"^\s*>\s*\S")
BLOCKQUOTE_CONTINUATION_PATTERN = re.compile(r"^(?: {2,}|\t)")

UNORDERED_LIST_PATTERN = re.compile(r"^\s*[-+*]\s+")
ORDERED_LIST_PATTERN = re.compile(r"^\s*\d+\.\s+")
TASK_LIST_PATTERN = re.compile(r"^\s*[-+*]\s+\[[ xX]\]\s+")
UNORDERED_MISSING_SPACE_PATTERN = re.compile(r"^\s*[-+*]\S")
ORDERED_MISSING_SPACE_PATTERN = re.compile(r"^\s*\d+\.\S")
TASK_MISSING_SPACE_PATTERN = re.compile(r"^\s*[-+*]\s+\[[ xX]\]\S")

ABBREVIATION_PATTERN = re.compile(r"^\s*\*\[[^\]]+\]:.*$")
SNIPPET_PATTERN = re.compile(r"""^\s*--8<--\s+(["']).+\1\s*$""")

TABLE_SEPARATOR_PATTERN = re.compile(r"^\s*\|?\s*:?-+:?\s*(?:\|\s*:?-+:?\s*)*\|?\s*$")
TABLE_SINGLE_PIPE_PATTERN = re.compile(r"\s\|\s")

HORIZONTAL_RULE_PATTERN = re.compile(r"^\s*(?:-{3,}|\*{3,}|_{3,})\s*$")
HEADING_PATTERN = re.compile(r"^#{1,6}\s")
INLINE_EMPHASIS_PATTERN = re.compile(
    r"^\s*(?:\*\*[^*]+\*\*|__[^_]+__|\*[^*\s][^*]*\*|_[^_\s][^_]*_)"
)

# Indentation
TAB_WIDTH = 4
REQUIRED_INDENT = "    "

# Admonition vocabulary
ADMONITION_CATEGORIES = (
    "note",
    "abstract",
    "info",
    "tip",
    "success",
    "question",
    "warning",
    "danger",
    "bug",
    "example",
    "quote",
    "default",
)
DEFAULT_CATEGORY = "default"
ADMONITION_ALIASES = {
    "failure": "danger",
    "error": "danger",
}
KNOWN_ADMONITION_TYPES = frozenset(
    (*ADMONITION_CATEGORIES[:-1], *ADMONITION_ALIASES)
)
MAX_DEPTH = 4

# Files and languages
DEFAULT_LANGUAGES = ("markdown", "mdx")
LANGUAGE_BY_EXTENSION = {
    ".md": "markdown",
    ".markdown": "markdown",
    ".mdx": "mdx",
}
MARKDOWN_EXTENSIONS = tuple(LANGUAGE_BY_EXTENSION)
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

# Diagnostic messages
MSG_FENCE_UNCLOSED = "Code fence must be closed."
MSG_MATH_UNCLOSED = "Math block must be closed with $$."
MSG_ADMONITION_TYPE_REQUIRED = "Admonition type is required."
MSG_ADMONITION_TYPE_INVALID = "Admonition type must be a simple identifier."
MSG_ADMONITION_TYPE_UNKNOWN = 'Unknown admonition type: "{type}".'
MSG_ADMONITION_UNCLOSED_QUOTE = "Admonition title has an unclosed quote."
MSG_TAB_MISSING_SPACE = "Tab marker must be followed by a space."
MSG_TAB_TITLE_QUOTES = "Tab title must be wrapped in matching quotes."
MSG_UNORDERED_SPACING = "Unordered list markers must be followed by a space."
MSG_ORDERED_SPACING = "Ordered list markers must be followed by a space."
MSG_TASK_SPACING = "Task list checkboxes must be followed by a space."
MSG_TABLE_SEPARATOR_MISSING = "Table header must be followed by a separator row."
MSG_TABLE_COLUMN_MISMATCH = "Table separator column count must match the header."
MSG_LIST_AFTER_PARAGRAPH = "List after paragraph requires a blank line (parsing error)."
MSG_LIST_BLANK_LINE = "List items should be preceded by a blank line."
MSG_ADMONITION_INDENT = "Admonition content must be indented by 4 spaces or a tab."
MSG_TAB_INDENT = "Tab content must be indented by 4 spaces or a tab."
MSG_ADMONITION_BLANK_LINE = "Admonition content must be preceded by a blank line."
