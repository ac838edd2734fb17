"""Line classifiers for the MkDocs Material Markdown dialect.

Every classifier is a pure function of one line, except the table-line and
neighbour helpers, which look at the nearest non-blank line before or after
the current one.
"""

from __future__ import annotations

import re

from .constants import (
    ABBREVIATION_PATTERN,
    ADMONITION_ALIASES,
    ADMONITION_CATEGORIES,
    ADMONITION_HEADER_PATTERN,
    BLOCKQUOTE_CONTINUATION_PATTERN,
    BLOCKQUOTE_PATTERN,
    CODE_FENCE_PATTERN,
    DEFAULT_CATEGORY,
    FRONTMATTER_DELIMITER_PATTERN,
    FRONTMATTER_END_PATTERN,
    HEADING_PATTERN,
    HORIZONTAL_RULE_PATTERN,
    INLINE_EMPHASIS_PATTERN,
    MATH_DELIMITER_PATTERN,
    ORDERED_LIST_PATTERN,
    REQUIRED_INDENT,
    SNIPPET_PATTERN,
    TAB_HEADER_PATTERN,
    TAB_WIDTH,
    TABLE_SEPARATOR_PATTERN,
    TABLE_SINGLE_PIPE_PATTERN,
    TASK_LIST_PATTERN,
    UNORDERED_LIST_PATTERN,
)
from .models import Document, LineRole

_LEADING_WHITESPACE = re.compile(r"^[\t ]*")


def is_blank(line: str) -> bool:
    return not line.strip()


def leading_whitespace(line: str) -> str:
    """Return the run of spaces and tabs at the start of `line`."""
    return _LEADING_WHITESPACE.match(line).group(0)


def leading_whitespace_width(line: str) -> int:
    """Compute the width of leading whitespace.

    Spaces count as one column and tabs as four, without tab stops.

    Args:
        line: Line whose leading whitespace should be measured.

    Returns:
        int: Width of the leading whitespace.

    Examples:
        leading_whitespace_width("  \\ttext")  # 6
    """
    prefix = leading_whitespace(line)
    return prefix.count(" ") + prefix.count("\t") * TAB_WIDTH


def first_non_whitespace(line: str) -> int:
    """Return the index of the first non-whitespace character, or ``len(line)``."""
    return len(line) - len(line.lstrip())


def has_required_indentation(line: str, header_indentation: str) -> bool:
    """Check that `line` is indented one level deeper than its header.

    The line must start with the header's own leading whitespace followed by
    either a tab or four spaces.

    Args:
        line: Candidate body line.
        header_indentation: Leading whitespace of the header line.

    Returns:
        bool: True when the body indentation is satisfied.

    Examples:
        has_required_indentation("    body", "")  # True
        has_required_indentation("  \\tbody", "  ")  # True
        has_required_indentation("  body", "")  # False
    """
    if not line.startswith(header_indentation):
        return False

    remainder = line[len(header_indentation) :]
    return remainder.startswith("\t") or remainder.startswith(REQUIRED_INDENT)


def is_frontmatter_delimiter(line: str) -> bool:
    return FRONTMATTER_DELIMITER_PATTERN.match(line) is not None


def is_frontmatter_end(line: str) -> bool:
    return FRONTMATTER_END_PATTERN.match(line) is not None


def match_fence(line: str) -> str | None:
    """Return the backtick or tilde run that starts `line`, if any.

    Examples:
        match_fence("  ```python")  # "```"
        match_fence("~~~~")  # "~~~~"
        match_fence("``inline``")  # None
    """
    fence_match = CODE_FENCE_PATTERN.match(line)
    if fence_match is None:
        return None
    return fence_match.group("fence")


def closes_fence(line: str, fence_marker: str) -> bool:
    """Check whether `line` closes a fence opened with `fence_marker`.

    The trimmed line must start with at least the opening run, so a fence
    opened with four backticks is not closed by three.
    """
    return bool(fence_marker) and line.lstrip().startswith(fence_marker)


def is_math_delimiter(line: str) -> bool:
    return MATH_DELIMITER_PATTERN.match(line) is not None


def is_admonition_header(line: str) -> bool:
    return ADMONITION_HEADER_PATTERN.match(line) is not None


def is_tab_header(line: str) -> bool:
    return TAB_HEADER_PATTERN.match(line) is not None


def is_heading(line: str) -> bool:
    return HEADING_PATTERN.match(line) is not None


def is_horizontal_rule(line: str) -> bool:
    return HORIZONTAL_RULE_PATTERN.match(line) is not None


def is_abbreviation(line: str) -> bool:
    """Detect abbreviation definitions such as ``*[HTML]: Hyper Text``."""
    return ABBREVIATION_PATTERN.match(line) is not None


def is_snippet(line: str) -> bool:
    """Detect snippet includes such as ``--8<-- "file.md"``."""
    return SNIPPET_PATTERN.match(line) is not None


def starts_with_inline_emphasis(line: str) -> bool:
    """Detect bold or italic text at the start of a line.

    Used to keep ``**bold**`` and ``*italic*`` from looking like list markers
    without a space.

    Examples:
        starts_with_inline_emphasis("**file/path_name.py:**")  # True
        starts_with_inline_emphasis("*Italic* text")  # True
        starts_with_inline_emphasis("* item")  # False
    """
    return INLINE_EMPHASIS_PATTERN.match(line) is not None


def is_list_line(line: str) -> bool:
    """Detect unordered, ordered, and task list items.

    Abbreviation definitions and snippet includes take precedence and are
    never list items.

    Examples:
        is_list_line("- item")  # True
        is_list_line("12. item")  # True
        is_list_line("*[UML]: Unified Modeling Language")  # False
    """
    if is_abbreviation(line) or is_snippet(line):
        return False

    return (
        UNORDERED_LIST_PATTERN.match(line) is not None
        or ORDERED_LIST_PATTERN.match(line) is not None
        or TASK_LIST_PATTERN.match(line) is not None
    )


def is_blockquote_line(line: str) -> bool:
    return BLOCKQUOTE_PATTERN.match(line) is not None


def is_blockquote_continuation(line: str) -> bool:
    """Check whether a non-quote line continues the current blockquote run.

    Continuations are list items or lines indented by two or more spaces or a
    tab. Blank lines never continue a run.
    """
    if is_blank(line):
        return False
    return BLOCKQUOTE_CONTINUATION_PATTERN.match(line) is not None or is_list_line(line)


def is_table_separator_line(line: str) -> bool:
    """Detect separator rows such as ``| --- | :-: |`` or ``--- | ---``.

    At least one pipe is required so horizontal rules never qualify.
    """
    return "|" in line and TABLE_SEPARATOR_PATTERN.match(line) is not None


def is_table_row_line(line: str) -> bool:
    """Detect candidate table rows.

    A row needs at least one pipe. Rows with an outer pipe need two or more
    pipes, and a row with a single inner pipe needs spaces on both sides.

    Examples:
        is_table_row_line("| A | B |")  # True
        is_table_row_line("A | B")  # True
        is_table_row_line("a|b")  # False
        is_table_row_line("| A")  # False
    """
    pipe_count = line.count("|")
    if pipe_count == 0:
        return False

    trimmed = line.strip()
    if trimmed.startswith("|") or trimmed.endswith("|"):
        return pipe_count >= 2

    if pipe_count == 1:
        return TABLE_SINGLE_PIPE_PATTERN.search(line) is not None

    return True


def count_table_columns(line: str) -> int:
    """Count cells after stripping one leading and one trailing pipe.

    Examples:
        count_table_columns("| A | B |")  # 2
        count_table_columns("--- | --- | ---")  # 3
    """
    content = line.strip()
    if content.startswith("|"):
        content = content[1:]
    if content.endswith("|"):
        content = content[:-1]
    return len(content.split("|"))


def find_next_non_blank(lines: list[str], start: int) -> int | None:
    """Return the first index at or after `start` holding a non-blank line."""
    for index in range(start, len(lines)):
        if not is_blank(lines[index]):
            return index
    return None


def find_prev_non_blank(lines: list[str], index: int) -> int | None:
    """Return the last index before `index` holding a non-blank line."""
    for candidate in range(index - 1, -1, -1):
        if not is_blank(lines[candidate]):
            return candidate
    return None


def is_table_line_at(lines: list[str], index: int) -> bool:
    """Decide whether the line at `index` takes part in a table.

    Separators always do. Rows with two or more pipes do. Rows with fewer
    pipes only count when the nearest non-blank neighbour, before or after,
    is a separator.

    Args:
        lines: All document lines.
        index: Line to classify.

    Returns:
        bool: True when the line belongs to a table.
    """
    line = lines[index]
    if is_table_separator_line(line):
        return True
    if not is_table_row_line(line):
        return False
    if line.count("|") >= 2:
        return True

    prev_index = find_prev_non_blank(lines, index)
    if prev_index is not None and is_table_separator_line(lines[prev_index]):
        return True

    next_index = find_next_non_blank(lines, index + 1)
    return next_index is not None and is_table_separator_line(lines[next_index])


def normalize_admonition_type(type_name: str) -> str:
    """Map an admonition type to its display category.

    Matching is case-insensitive; ``failure`` and ``error`` share the
    ``danger`` category and anything unrecognized falls back to ``default``.

    Examples:
        normalize_admonition_type("Error")  # "danger"
        normalize_admonition_type("caution")  # "default"
    """
    key = type_name.lower()
    key = ADMONITION_ALIASES.get(key, key)
    if key in ADMONITION_CATEGORIES:
        return key
    return DEFAULT_CATEGORY


def admonition_type_of(line: str) -> str:
    """Return the raw type token of an admonition header, or ``""``."""
    header_match = ADMONITION_HEADER_PATTERN.match(line)
    if header_match is None:
        return ""
    tokens = line[header_match.end() :].split()
    return tokens[0] if tokens else ""


def classify_line(line: str) -> LineRole:
    """Compute the context-free roles of a single line.

    ``TABLE_LINE`` depends on neighbouring lines and is only set by
    `classify_document`.

    Args:
        line: Raw line text.

    Returns:
        LineRole: Combined roles; ``LineRole.PLAIN`` when none apply.

    Examples:
        classify_line("!!! note") == LineRole.ADMONITION_HEADER
        LineRole.LIST_ITEM in classify_line("- [x] done")
    """
    if is_blank(line):
        return LineRole.BLANK

    role = LineRole.PLAIN
    checks = (
        (is_frontmatter_delimiter, LineRole.FRONTMATTER_DELIMITER),
        (is_frontmatter_end, LineRole.FRONTMATTER_END),
        (lambda text: match_fence(text) is not None, LineRole.FENCE),
        (is_math_delimiter, LineRole.MATH_DELIMITER),
        (is_admonition_header, LineRole.ADMONITION_HEADER),
        (is_tab_header, LineRole.TAB_HEADER),
        (is_blockquote_line, LineRole.BLOCKQUOTE),
        (is_list_line, LineRole.LIST_ITEM),
        (is_table_row_line, LineRole.TABLE_ROW),
        (is_table_separator_line, LineRole.TABLE_SEPARATOR),
        (is_horizontal_rule, LineRole.HORIZONTAL_RULE),
        (is_heading, LineRole.HEADING),
        (starts_with_inline_emphasis, LineRole.EMPHASIS_START),
        (is_abbreviation, LineRole.ABBREVIATION),
        (is_snippet, LineRole.SNIPPET),
    )
    for predicate, candidate in checks:
        if predicate(line):
            role |= candidate
    return role


def classify_document(lines: list[str]) -> Document:
    """Classify every line once and index non-blank neighbours.

    Two linear sweeps record the nearest non-blank line on each side, so the
    table-line rule and the rule checks never rescan the document.

    Args:
        lines: Document lines without line breaks.

    Returns:
        Document: Lines, roles (including ``TABLE_LINE``), and neighbours.
    """
    roles = [classify_line(line) for line in lines]
    count = len(lines)

    prev_non_blank: list[int | None] = [None] * count
    last: int | None = None
    for index in range(count):
        prev_non_blank[index] = last
        if not roles[index] & LineRole.BLANK:
            last = index

    next_non_blank: list[int | None] = [None] * count
    last = None
    for index in range(count - 1, -1, -1):
        next_non_blank[index] = last
        if not roles[index] & LineRole.BLANK:
            last = index

    for index, role in enumerate(roles):
        if role & LineRole.TABLE_SEPARATOR:
            roles[index] |= LineRole.TABLE_LINE
        elif role & LineRole.TABLE_ROW:
            if lines[index].count("|") >= 2 or any(
                neighbour is not None and roles[neighbour] & LineRole.TABLE_SEPARATOR
                for neighbour in (prev_non_blank[index], next_non_blank[index])
            ):
                roles[index] |= LineRole.TABLE_LINE

    return Document(
        lines=lines,
        roles=roles,
        prev_non_blank=prev_non_blank,
        next_non_blank=next_non_blank,
    )
