"""Block extents, nesting depths, and highlight ranges."""

from __future__ import annotations

from .classifiers import has_required_indentation, is_blank, leading_whitespace
from .constants import MAX_DEPTH
from .models import AdmonitionBlock, Annotations, Document, LineRange, LineRole, TableBlock, TabBlock


def line_range(lines: list[str], index: int) -> LineRange:
    return LineRange(index, 0, len(lines[index]))


def find_block_end(lines: list[str], start: int) -> int:
    """Find the last body line of the block whose header is at `start`.

    Blank lines are skipped; the block ends at the last line before the first
    non-blank line that lacks the header's indentation plus one level.

    Args:
        lines: Document lines.
        start: Index of the header line.

    Returns:
        int: Index of the last body line, or `start` when the body is empty.

    Examples:
        find_block_end(["!!! note", "", "    body", "after"], 0)  # 2
    """
    header_indentation = leading_whitespace(lines[start])
    last_indented = start
    for index in range(start + 1, len(lines)):
        line = lines[index]
        if is_blank(line):
            continue
        if not has_required_indentation(line, header_indentation):
            break
        last_indented = index
    return last_indented


def resolve_depths(blocks: list[AdmonitionBlock]) -> list[AdmonitionBlock]:
    """Assign a nesting depth to every admonition block.

    Blocks are sorted by ``(start_line, end_line)`` and swept once with a
    stack of open blocks. Closed blocks are popped; the first block from the
    top of the stack that contains the current start line and is indented
    strictly less gives the parent depth. Depths are clamped to
    ``MAX_DEPTH - 1``.

    Args:
        blocks: Blocks collected during the scan; updated in place.

    Returns:
        list[AdmonitionBlock]: The same blocks in sorted order.

    Examples:
        blocks = resolve_depths([
            AdmonitionBlock(0, 6, "note", 0),
            AdmonitionBlock(2, 6, "tip", 4),
        ])
        [block.depth for block in blocks]  # [0, 1]
    """
    arena = sorted(blocks, key=lambda block: (block.start_line, block.end_line))
    stack: list[int] = []

    for position, block in enumerate(arena):
        while stack and arena[stack[-1]].end_line < block.start_line:
            stack.pop()

        depth = 0
        for open_position in reversed(stack):
            parent = arena[open_position]
            if (
                parent.start_line <= block.start_line <= parent.end_line
                and parent.indent_width < block.indent_width
            ):
                depth = parent.depth + 1
                break

        block.depth = min(depth, MAX_DEPTH - 1)
        stack.append(position)

    return arena


def build_admonition_ranges(
    blocks: list[AdmonitionBlock], lines: list[str], annotations: Annotations
) -> None:
    """Expand resolved blocks into background and gutter ranges."""
    for block in blocks:
        gutter = annotations.admonition_gutters[block.type_key][block.depth]
        background = annotations.admonition_backgrounds[block.type_key]
        for index in range(block.start_line, block.end_line + 1):
            background.append(line_range(lines, index))
            gutter.append(line_range(lines, index))


def build_table_ranges(table: TableBlock, document: Document, annotations: Annotations) -> None:
    """Expand one table into table, header, row-border, and first-row ranges.

    A header is a row directly followed by a separator row inside the same
    table; row borders are drawn under every line that is not a separator.
    """
    lines = document.lines
    annotations.table_first_rows.append(line_range(lines, table.start_line))
    for index in range(table.start_line, table.end_line + 1):
        annotations.tables.append(line_range(lines, index))
        if document.has(index, LineRole.TABLE_SEPARATOR):
            continue
        annotations.table_rows.append(line_range(lines, index))
        if index < table.end_line and document.has(index + 1, LineRole.TABLE_SEPARATOR):
            annotations.table_headers.append(line_range(lines, index))


def build_tab_ranges(tab: TabBlock, lines: list[str], annotations: Annotations) -> None:
    for index in range(tab.start_line, tab.end_line + 1):
        annotations.tabs.append(line_range(lines, index))
