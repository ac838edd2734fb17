"""Data models for material-lint."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, Flag, auto

from .constants import ADMONITION_CATEGORIES, MAX_DEPTH


class Severity(Enum):
    """Severity attached to a diagnostic.

    Attributes:
        ERROR: Dialect-breaking syntax that renders incorrectly.
        WARNING: Style or heuristic finding.
    """

    ERROR = "error"
    WARNING = "warning"


class ScanMode(Enum):
    """Mutually exclusive scanner modes.

    Attributes:
        NORMAL: Regular content; rule checks run.
        IN_FRONTMATTER: Inside the leading metadata block.
        IN_FENCE: Inside a fenced code block.
        IN_MATH_BLOCK: Inside a ``$$`` math block.
    """

    NORMAL = auto()
    IN_FRONTMATTER = auto()
    IN_FENCE = auto()
    IN_MATH_BLOCK = auto()


class LineRole(Flag):
    """Structural roles a single line can play.

    A line may carry several roles at once (a list item inside a table row,
    for example); ``PLAIN`` is the empty set.
    """

    PLAIN = 0
    FRONTMATTER_DELIMITER = auto()
    FRONTMATTER_END = auto()
    FENCE = auto()
    MATH_DELIMITER = auto()
    ADMONITION_HEADER = auto()
    TAB_HEADER = auto()
    BLOCKQUOTE = auto()
    LIST_ITEM = auto()
    TABLE_ROW = auto()
    TABLE_SEPARATOR = auto()
    TABLE_LINE = auto()
    HORIZONTAL_RULE = auto()
    HEADING = auto()
    EMPHASIS_START = auto()
    ABBREVIATION = auto()
    SNIPPET = auto()
    BLANK = auto()


@dataclass
class ScanState:
    """Mutable state for one scan; discarded when the scan ends.

    Attributes:
        in_frontmatter: Inside the leading ``---`` block.
        in_fence: Inside a fenced code block.
        fence_marker: Backtick or tilde run that opened the fence.
        fence_start_line: Line index of the opening fence.
        in_math_block: Inside a ``$$`` block.
        math_start_line: Line index of the opening ``$$``.
        in_blockquote: Inside a run of blockquote lines.
        in_table: Inside a contiguous run of table lines.
        table_start_line: First line of the current table run.
    """

    in_frontmatter: bool = False
    in_fence: bool = False
    fence_marker: str = ""
    fence_start_line: int = -1
    in_math_block: bool = False
    math_start_line: int = -1
    in_blockquote: bool = False
    in_table: bool = False
    table_start_line: int = -1

    @property
    def mode(self) -> ScanMode:
        if self.in_frontmatter:
            return ScanMode.IN_FRONTMATTER
        if self.in_fence:
            return ScanMode.IN_FENCE
        if self.in_math_block:
            return ScanMode.IN_MATH_BLOCK
        return ScanMode.NORMAL


@dataclass(frozen=True)
class Diagnostic:
    """A single lint finding.

    Attributes:
        line: Zero-based line index.
        start: Zero-based start column.
        end: Zero-based end column (exclusive).
        message: Human readable description.
        severity: Error or warning.
    """

    line: int
    start: int
    end: int
    message: str
    severity: Severity = Severity.ERROR


@dataclass(frozen=True)
class LineRange:
    """A whole-line range record consumed by highlighters."""

    line: int
    start: int
    end: int


@dataclass
class AdmonitionBlock:
    """An admonition and the body lines it covers.

    Attributes:
        start_line: Line index of the header.
        end_line: Last line satisfying the header's indentation.
        type_key: Normalized category (see ``ADMONITION_CATEGORIES``).
        indent_width: Leading whitespace width of the header.
        depth: Nesting depth, resolved after the scan.
    """

    start_line: int
    end_line: int
    type_key: str
    indent_width: int
    depth: int = 0


@dataclass
class TableBlock:
    """A contiguous run of table rows and separators."""

    start_line: int
    end_line: int


@dataclass
class TabBlock:
    """A content tab header and its indented body."""

    start_line: int
    end_line: int


def _category_buckets() -> dict[str, list[LineRange]]:
    return {category: [] for category in ADMONITION_CATEGORIES}


def _depth_buckets() -> dict[str, list[list[LineRange]]]:
    return {category: [[] for _ in range(MAX_DEPTH)] for category in ADMONITION_CATEGORIES}


@dataclass
class Annotations:
    """Line ranges grouped by the highlight they should receive.

    Attributes:
        admonition_backgrounds: Ranges per admonition category.
        admonition_gutters: Ranges per category, bucketed by nesting depth.
        blockquotes: Blockquote lines.
        tables: All table lines.
        table_headers: Rows directly followed by a separator row.
        table_rows: Table lines that are not separator rows.
        table_first_rows: First line of each table, drawn with a top border.
        code_fences: Fenced code lines, delimiters included.
        tabs: Content tab headers and bodies.
    """

    admonition_backgrounds: dict[str, list[LineRange]] = field(default_factory=_category_buckets)
    admonition_gutters: dict[str, list[list[LineRange]]] = field(default_factory=_depth_buckets)
    blockquotes: list[LineRange] = field(default_factory=list)
    tables: list[LineRange] = field(default_factory=list)
    table_headers: list[LineRange] = field(default_factory=list)
    table_rows: list[LineRange] = field(default_factory=list)
    table_first_rows: list[LineRange] = field(default_factory=list)
    code_fences: list[LineRange] = field(default_factory=list)
    tabs: list[LineRange] = field(default_factory=list)


@dataclass
class LintResult:
    """Structured result of scanning one document.

    Attributes:
        diagnostics: Findings in detection order.
        annotations: Highlight ranges.
        admonition_blocks: Admonitions with resolved depths, sorted by position.
        table_blocks: Detected tables.
        tab_blocks: Detected content tabs.
    """

    diagnostics: list[Diagnostic] = field(default_factory=list)
    annotations: Annotations = field(default_factory=Annotations)
    admonition_blocks: list[AdmonitionBlock] = field(default_factory=list)
    table_blocks: list[TableBlock] = field(default_factory=list)
    tab_blocks: list[TabBlock] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for item in self.diagnostics if item.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for item in self.diagnostics if item.severity is Severity.WARNING)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0


@dataclass
class Document:
    """Lines of one document with their precomputed roles.

    Attributes:
        lines: Raw line text, without line breaks.
        roles: Structural roles for each line.
        prev_non_blank: Index of the nearest earlier non-blank line, or None.
        next_non_blank: Index of the nearest later non-blank line, or None.
    """

    lines: list[str]
    roles: list[LineRole]
    prev_non_blank: list[int | None]
    next_non_blank: list[int | None]

    def __len__(self) -> int:
        return len(self.lines)

    def has(self, index: int, role: LineRole) -> bool:
        """Return True when the line at `index` carries any of `role`."""
        return bool(self.roles[index] & role)
