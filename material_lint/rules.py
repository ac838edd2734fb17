"""Rule checks run by the scanner on every line in normal mode.

Each check decides on its own whether it applies to the current line and
appends zero or more diagnostics to `results`.
"""

from __future__ import annotations

import re

from .classifiers import (
    count_table_columns,
    first_non_whitespace,
    has_required_indentation,
    leading_whitespace,
)
from .config import LintConfig
from .constants import (
    ADMONITION_SYNTAX_PATTERN,
    ADMONITION_TYPE_PATTERN,
    KNOWN_ADMONITION_TYPES,
    MSG_ADMONITION_BLANK_LINE,
    MSG_ADMONITION_INDENT,
    MSG_ADMONITION_TYPE_INVALID,
    MSG_ADMONITION_TYPE_REQUIRED,
    MSG_ADMONITION_TYPE_UNKNOWN,
    MSG_ADMONITION_UNCLOSED_QUOTE,
    MSG_LIST_AFTER_PARAGRAPH,
    MSG_LIST_BLANK_LINE,
    MSG_ORDERED_SPACING,
    MSG_TAB_INDENT,
    MSG_TAB_MISSING_SPACE,
    MSG_TAB_TITLE_QUOTES,
    MSG_TABLE_COLUMN_MISMATCH,
    MSG_TABLE_SEPARATOR_MISSING,
    MSG_TASK_SPACING,
    MSG_UNORDERED_SPACING,
    ORDERED_MISSING_SPACE_PATTERN,
    TAB_MISSING_SPACE_PATTERN,
    TAB_SYNTAX_PATTERN,
    TAB_TITLE_PATTERN,
    TASK_MISSING_SPACE_PATTERN,
    UNORDERED_MISSING_SPACE_PATTERN,
)
from .models import Diagnostic, Document, LineRole, Severity

_QUOTE_AFTER_WHITESPACE = re.compile(r"""\s["']""")

LIST_SPACING_EXEMPT = (
    LineRole.EMPHASIS_START
    | LineRole.ABBREVIATION
    | LineRole.SNIPPET
    | LineRole.HORIZONTAL_RULE
    | LineRole.FRONTMATTER_DELIMITER
    | LineRole.TABLE_LINE
)
LIST_CONTEXT = LineRole.BLANK | LineRole.LIST_ITEM | LineRole.BLOCKQUOTE | LineRole.ADMONITION_HEADER
LIST_STRUCTURAL_PREDECESSOR = LineRole.HEADING | LineRole.HORIZONTAL_RULE | LineRole.FENCE
BLOCK_LEVEL = (
    LineRole.ADMONITION_HEADER
    | LineRole.TAB_HEADER
    | LineRole.HEADING
    | LineRole.HORIZONTAL_RULE
    | LineRole.EMPHASIS_START
)


def _whole_line(
    results: list[Diagnostic],
    document: Document,
    index: int,
    message: str,
    severity: Severity = Severity.ERROR,
) -> None:
    results.append(Diagnostic(index, 0, len(document.lines[index]), message, severity))


def has_unclosed_quote(text: str) -> bool:
    """Check an admonition title for an unbalanced quote.

    Only text with a quote following whitespace is considered. Double quotes
    are counted when present, otherwise single quotes.

    Examples:
        has_unclosed_quote('note "Unclosed')  # True
        has_unclosed_quote('note ""')  # False
        has_unclosed_quote("tip Don't")  # False
    """
    if _QUOTE_AFTER_WHITESPACE.search(text) is None:
        return False

    double_count = text.count('"')
    if double_count > 0:
        return double_count % 2 == 1

    return text.count("'") % 2 == 1


def check_admonition_syntax(document: Document, index: int, results: list[Diagnostic]) -> None:
    """Validate the type and title of an admonition header.

    A missing type or a type that is not a simple identifier stops the check;
    an unknown type is a warning and the title is still checked for an
    unclosed quote.

    Args:
        document: Classified document.
        index: Line being checked.
        results: Diagnostics collected so far.
    """
    syntax_match = ADMONITION_SYNTAX_PATTERN.match(document.lines[index])
    if syntax_match is None:
        return

    rest = syntax_match.group("rest").strip()
    if not rest:
        _whole_line(results, document, index, MSG_ADMONITION_TYPE_REQUIRED)
        return

    type_name = rest.split()[0]
    if ADMONITION_TYPE_PATTERN.match(type_name) is None:
        _whole_line(results, document, index, MSG_ADMONITION_TYPE_INVALID)
        return

    if type_name.lower() not in KNOWN_ADMONITION_TYPES:
        _whole_line(
            results,
            document,
            index,
            MSG_ADMONITION_TYPE_UNKNOWN.format(type=type_name),
            Severity.WARNING,
        )

    if has_unclosed_quote(rest):
        _whole_line(results, document, index, MSG_ADMONITION_UNCLOSED_QUOTE)


def check_tab_syntax(document: Document, index: int, results: list[Diagnostic]) -> None:
    """Validate a content tab header.

    A marker glued to its title is reported on the character right after
    ``===`` and suppresses the title check.
    """
    line = document.lines[index]
    if TAB_MISSING_SPACE_PATTERN.match(line):
        error_index = line.index("===") + 3
        results.append(
            Diagnostic(index, error_index, min(error_index + 1, len(line)), MSG_TAB_MISSING_SPACE)
        )
        return

    header_match = TAB_SYNTAX_PATTERN.match(line)
    if header_match is None:
        return

    title = header_match.group("title").strip()
    if TAB_TITLE_PATTERN.match(title) is None:
        _whole_line(results, document, index, MSG_TAB_TITLE_QUOTES)


def check_list_spacing(document: Document, index: int, results: list[Diagnostic]) -> None:
    """Report list markers glued to their content.

    The three marker checks are independent, so one line can produce more
    than one diagnostic. Emphasis, abbreviations, snippets, horizontal rules,
    frontmatter delimiters, and table lines are exempt.
    """
    if document.has(index, LIST_SPACING_EXEMPT):
        return

    line = document.lines[index]
    if UNORDERED_MISSING_SPACE_PATTERN.match(line):
        _whole_line(results, document, index, MSG_UNORDERED_SPACING)
    if ORDERED_MISSING_SPACE_PATTERN.match(line):
        _whole_line(results, document, index, MSG_ORDERED_SPACING)
    if TASK_MISSING_SPACE_PATTERN.match(line):
        _whole_line(results, document, index, MSG_TASK_SPACING)


def check_table_syntax(document: Document, index: int, results: list[Diagnostic]) -> None:
    """Validate a table header against the separator row that follows it.

    Lines whose nearest previous non-blank line is already a row or a
    separator were covered when their header was checked and are skipped.

    Args:
        document: Classified document.
        index: Line being checked.
        results: Diagnostics collected so far.
    """
    if not document.has(index, LineRole.TABLE_LINE) or document.has(index, LineRole.TABLE_SEPARATOR):
        return

    prev_index = document.prev_non_blank[index]
    if prev_index is not None and document.has(
        prev_index, LineRole.TABLE_ROW | LineRole.TABLE_SEPARATOR
    ):
        return

    next_index = document.next_non_blank[index]
    if next_index is None:
        return

    if not document.has(next_index, LineRole.TABLE_SEPARATOR):
        _whole_line(results, document, index, MSG_TABLE_SEPARATOR_MISSING)
        return

    header_columns = count_table_columns(document.lines[index])
    separator_columns = count_table_columns(document.lines[next_index])
    if header_columns != separator_columns:
        _whole_line(results, document, next_index, MSG_TABLE_COLUMN_MISMATCH)


def check_blank_line_before_list(
    document: Document, index: int, config: LintConfig, results: list[Diagnostic]
) -> None:
    """Check the line directly above a list item.

    Only the immediately preceding line is inspected; a blank line there is
    exactly what the rule looks for. A paragraph directly followed by a list
    breaks parsing and is always an error. A heading, horizontal rule, or
    fence directly followed by a list is a warning when
    ``check_blank_line_before_list`` is enabled.

    Args:
        document: Classified document.
        index: Line being checked.
        config: Active configuration.
        results: Diagnostics collected so far.
    """
    if index == 0 or not document.has(index, LineRole.LIST_ITEM):
        return

    prev_index = index - 1
    if document.has(prev_index, LIST_CONTEXT) or document.has(index, LineRole.TABLE_LINE):
        return
    if document.has(prev_index, LineRole.TAB_HEADER):
        return

    if not document.has(prev_index, LIST_STRUCTURAL_PREDECESSOR):
        _whole_line(results, document, index, MSG_LIST_AFTER_PARAGRAPH)
    elif config.check_blank_line_before_list:
        _whole_line(results, document, index, MSG_LIST_BLANK_LINE, Severity.WARNING)


def check_indented_body(
    document: Document,
    header_index: int,
    results: list[Diagnostic],
    message: str,
    skip_role: LineRole,
) -> None:
    """Require the first content line under a header to be indented.

    The nearest following non-blank line is checked unless it carries
    `skip_role`, starts at column zero (it belongs to another block), or is
    itself a block-level construct. Otherwise it must start with the header's
    indentation plus a tab or four spaces.

    Args:
        document: Classified document.
        header_index: Admonition or tab header line.
        results: Diagnostics collected so far.
        message: Diagnostic message to report.
        skip_role: Roles that exempt the content line.
    """
    next_index = document.next_non_blank[header_index]
    if next_index is None or document.has(next_index, skip_role):
        return

    next_line = document.lines[next_index]
    if not leading_whitespace(next_line):
        return
    if document.has(next_index, BLOCK_LEVEL):
        return

    header_indentation = leading_whitespace(document.lines[header_index])
    if has_required_indentation(next_line, header_indentation):
        return

    column = first_non_whitespace(next_line)
    results.append(Diagnostic(next_index, column, min(column + 1, len(next_line)), message))


def check_admonition_body(
    document: Document, header_index: int, config: LintConfig, results: list[Diagnostic]
) -> None:
    if config.check_indentation:
        check_indented_body(
            document, header_index, results, MSG_ADMONITION_INDENT, LineRole.LIST_ITEM
        )


def check_tab_body(
    document: Document, header_index: int, config: LintConfig, results: list[Diagnostic]
) -> None:
    if config.check_indentation:
        check_indented_body(document, header_index, results, MSG_TAB_INDENT, LineRole.TAB_HEADER)


def check_blank_line_before_admonition_content(
    document: Document, header_index: int, config: LintConfig, results: list[Diagnostic]
) -> None:
    """Require a blank line between a header and its first content line.

    Looks at the literal next line, not the nearest non-blank one. List
    items may follow the header directly.
    """
    if not config.check_blank_line_before_admonition_content:
        return

    next_index = header_index + 1
    if next_index >= len(document):
        return
    if document.has(next_index, LineRole.BLANK | LineRole.LIST_ITEM):
        return

    next_line = document.lines[next_index]
    results.append(Diagnostic(next_index, 0, min(1, len(next_line)), MSG_ADMONITION_BLANK_LINE))


def run_line_checks(
    document: Document, index: int, config: LintConfig, results: list[Diagnostic]
) -> None:
    """Run every rule check against one normal-mode line, in a fixed order."""
    check_admonition_syntax(document, index, results)
    check_tab_syntax(document, index, results)
    check_list_spacing(document, index, results)
    check_table_syntax(document, index, results)
    check_blank_line_before_list(document, index, config, results)

    if document.has(index, LineRole.ADMONITION_HEADER):
        check_admonition_body(document, index, config, results)
        check_blank_line_before_admonition_content(document, index, config, results)

    if document.has(index, LineRole.TAB_HEADER):
        check_tab_body(document, index, config, results)
