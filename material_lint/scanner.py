"""Single-pass scanner producing diagnostics and highlight ranges."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .blocks import (
    build_admonition_ranges,
    build_tab_ranges,
    build_table_ranges,
    find_block_end,
    line_range,
    resolve_depths,
)
from .classifiers import (
    admonition_type_of,
    classify_document,
    closes_fence,
    is_blockquote_continuation,
    leading_whitespace_width,
    match_fence,
    normalize_admonition_type,
)
from .config import ConfigError, LintConfig, validate_config
from .constants import MSG_FENCE_UNCLOSED, MSG_MATH_UNCLOSED
from .exceptions import LintError
from .filesystem import enforce_file_size, get_max_file_size, language_for_path, safe_read
from .models import (
    AdmonitionBlock,
    Diagnostic,
    Document,
    LineRole,
    LintResult,
    ScanState,
    TableBlock,
    TabBlock,
)
from .rules import run_line_checks

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split text on ``\\n`` or ``\\r\\n``; a trailing break yields a final empty line."""
    return _LINE_BREAK.split(text)


def _try_enter_frontmatter(state: ScanState, document: Document, index: int) -> bool:
    if index != 0 or not document.has(0, LineRole.FRONTMATTER_DELIMITER):
        return False
    state.in_frontmatter = True
    return True


def _try_exit_frontmatter(state: ScanState, document: Document, index: int) -> None:
    if document.has(index, LineRole.FRONTMATTER_DELIMITER | LineRole.FRONTMATTER_END):
        state.in_frontmatter = False


def _try_open_fence(state: ScanState, line: str, index: int) -> bool:
    fence_marker = match_fence(line)
    if fence_marker is None:
        return False
    state.in_fence = True
    state.fence_marker = fence_marker
    state.fence_start_line = index
    return True


def _try_close_fence(state: ScanState, line: str) -> bool:
    if not closes_fence(line, state.fence_marker):
        return False
    state.in_fence = False
    state.fence_marker = ""
    state.fence_start_line = -1
    return True


def _try_open_math(state: ScanState, document: Document, index: int) -> bool:
    if not document.has(index, LineRole.MATH_DELIMITER):
        return False
    state.in_math_block = True
    state.math_start_line = index
    return True


def _try_close_math(state: ScanState, document: Document, index: int) -> bool:
    if not document.has(index, LineRole.MATH_DELIMITER):
        return False
    state.in_math_block = False
    state.math_start_line = -1
    return True


def _close_table(state: ScanState, end_line: int, tables: list[TableBlock]) -> None:
    if not state.in_table:
        return
    tables.append(TableBlock(state.table_start_line, end_line))
    state.in_table = False
    state.table_start_line = -1


def _track_table(state: ScanState, document: Document, index: int, tables: list[TableBlock]) -> None:
    if document.has(index, LineRole.TABLE_LINE):
        if not state.in_table:
            state.in_table = True
            state.table_start_line = index
        return
    _close_table(state, index - 1, tables)


def _track_blockquote(state: ScanState, document: Document, index: int, result: LintResult) -> None:
    """Open, continue, or close the current blockquote run.

    Blank lines neither continue nor close a run and are not highlighted.
    """
    lines = document.lines
    if document.has(index, LineRole.BLOCKQUOTE):
        state.in_blockquote = True
        result.annotations.blockquotes.append(line_range(lines, index))
    elif state.in_blockquote and is_blockquote_continuation(lines[index]):
        result.annotations.blockquotes.append(line_range(lines, index))
    elif not document.has(index, LineRole.BLANK):
        state.in_blockquote = False


def _track_headers(
    document: Document,
    index: int,
    admonitions: list[AdmonitionBlock],
    tabs: list[TabBlock],
) -> None:
    lines = document.lines
    if document.has(index, LineRole.ADMONITION_HEADER):
        type_key = normalize_admonition_type(admonition_type_of(lines[index]))
        admonitions.append(
            AdmonitionBlock(
                start_line=index,
                end_line=find_block_end(lines, index),
                type_key=type_key,
                indent_width=leading_whitespace_width(lines[index]),
            )
        )
    if document.has(index, LineRole.TAB_HEADER):
        tabs.append(TabBlock(index, find_block_end(lines, index)))


def lint_lines(lines: list[str], config: LintConfig | None = None) -> LintResult:
    """Scan pre-split document lines.

    Mode precedence per line is frontmatter, fence, math block, then normal
    processing. Normal lines run every rule check and then update block
    bookkeeping. At the end of the document an open fence or math block is
    reported at its opening line and an open table is closed at the last
    line.

    Args:
        lines: Document lines without line breaks.
        config: Configuration snapshot; defaults to `LintConfig()`.

    Returns:
        LintResult: Diagnostics in detection order and highlight ranges.
    """
    config = config or LintConfig()
    document = classify_document(list(lines))
    state = ScanState()
    result = LintResult()
    admonitions: list[AdmonitionBlock] = []
    annotations = result.annotations

    for index, line in enumerate(document.lines):
        if _try_enter_frontmatter(state, document, index):
            continue

        if state.in_frontmatter:
            _try_exit_frontmatter(state, document, index)
            continue

        # Tracks fenced code blocks, delimiters included
        if state.in_fence:
            annotations.code_fences.append(line_range(document.lines, index))
            _try_close_fence(state, line)
            continue

        if state.in_math_block:
            _try_close_math(state, document, index)
            continue

        if _try_open_fence(state, line, index):
            annotations.code_fences.append(line_range(document.lines, index))
            _close_table(state, index - 1, result.table_blocks)
            state.in_blockquote = False
            continue

        if _try_open_math(state, document, index):
            _close_table(state, index - 1, result.table_blocks)
            state.in_blockquote = False
            continue

        run_line_checks(document, index, config, result.diagnostics)

        _track_headers(document, index, admonitions, result.tab_blocks)
        _track_blockquote(state, document, index, result)
        _track_table(state, document, index, result.table_blocks)

    if state.in_fence:
        opening = state.fence_start_line
        result.diagnostics.append(
            Diagnostic(opening, 0, len(document.lines[opening]), MSG_FENCE_UNCLOSED)
        )
    if state.in_math_block:
        opening = state.math_start_line
        result.diagnostics.append(
            Diagnostic(opening, 0, len(document.lines[opening]), MSG_MATH_UNCLOSED)
        )
    _close_table(state, len(document) - 1, result.table_blocks)

    result.admonition_blocks = resolve_depths(admonitions)
    build_admonition_ranges(result.admonition_blocks, document.lines, annotations)
    for table in result.table_blocks:
        build_table_ranges(table, document, annotations)
    for tab in result.tab_blocks:
        build_tab_ranges(tab, document.lines, annotations)

    logger.debug(
        "Scanned %d lines: %d diagnostics, %d admonitions, %d tables",
        len(document),
        len(result.diagnostics),
        len(result.admonition_blocks),
        len(result.table_blocks),
    )
    return result


def lint_text(
    text: str, config: LintConfig | None = None, language_id: str = "markdown"
) -> LintResult:
    """Scan a whole document.

    Documents whose `language_id` is not listed in ``config.languages`` are
    ignored and yield an empty result.

    Args:
        text: Full document text.
        config: Configuration snapshot; defaults to `LintConfig()`.
        language_id: Content type of the document, e.g. ``"markdown"``.

    Returns:
        LintResult: Diagnostics and highlight ranges.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        lint_text("!!! caution\\n").diagnostics[0].message
        # 'Unknown admonition type: "caution".'
    """
    config = config or LintConfig()
    validate_config(config)

    if language_id not in config.languages:
        logger.debug("Skipping document with language %r", language_id)
        return LintResult()

    return lint_lines(split_lines(text), config)


class LintFileError(Exception):
    """Raised when linting a Markdown file fails."""


def lint_file(filepath: Path, config: LintConfig | None = None) -> LintResult:
    """Read and scan a Markdown file.

    Args:
        filepath: Path to a ``.md``, ``.markdown``, or ``.mdx`` file.
        config: Configuration snapshot; defaults to `LintConfig()`.

    Returns:
        LintResult: Diagnostics and highlight ranges for the file.

    Raises:
        LintFileError: If configuration is invalid, the extension is not a
            Markdown extension, the file exceeds the size limit, or it cannot
            be read or decoded.

    Examples:
        result = lint_file(Path("docs/index.md"))
    """
    config = config or LintConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise LintFileError(str(error)) from error

    try:
        language_id = language_for_path(filepath)
        max_file_size = get_max_file_size(default=config.max_file_size)
        enforce_file_size(filepath, max_file_size)
    except LintError as error:
        raise LintFileError(f"{filepath}: {error}") from error
    except ValueError as error:
        raise LintFileError(str(error)) from error
    except IOError as error:
        raise LintFileError(str(error)) from error

    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise LintFileError(error_message) from error
    except IOError as error:
        raise LintFileError(str(error)) from error

    logger.debug("Linting %s as %s", filepath, language_id)
    return lint_text(content, config, language_id)
