import pytest

from material_lint.classifiers import (
    admonition_type_of,
    classify_document,
    classify_line,
    closes_fence,
    count_table_columns,
    find_next_non_blank,
    find_prev_non_blank,
    has_required_indentation,
    is_abbreviation,
    is_blockquote_continuation,
    is_blockquote_line,
    is_horizontal_rule,
    is_list_line,
    is_snippet,
    is_table_line_at,
    is_table_row_line,
    is_table_separator_line,
    leading_whitespace_width,
    match_fence,
    normalize_admonition_type,
    starts_with_inline_emphasis,
)
from material_lint.models import LineRole


def test_leading_whitespace_width_counts_tabs_as_four():
    assert leading_whitespace_width("text") == 0
    assert leading_whitespace_width("   text") == 3
    assert leading_whitespace_width("\ttext") == 4
    assert leading_whitespace_width("  \ttext") == 6


def test_has_required_indentation():
    assert has_required_indentation("    body", "")
    assert has_required_indentation("\tbody", "")
    assert has_required_indentation("        body", "    ")
    assert has_required_indentation("  \tbody", "  ")
    assert not has_required_indentation("  body", "")
    assert not has_required_indentation("      body", "    ")
    assert not has_required_indentation("\t    body", "    ")


def test_match_fence_captures_marker_run():
    assert match_fence("```") == "```"
    assert match_fence("  ````python") == "````"
    assert match_fence("~~~ title") == "~~~"
    assert match_fence("``inline``") is None
    assert match_fence("text ```") is None


def test_closes_fence_requires_full_marker_run():
    assert closes_fence("```", "```")
    assert closes_fence("  `````", "```")
    assert not closes_fence("```", "````")
    assert not closes_fence("~~~", "```")
    assert not closes_fence("```", "")


@pytest.mark.parametrize(
    "line, expected",
    [
        ("- item", True),
        ("+ item", True),
        ("* item", True),
        ("12. item", True),
        ("- [ ] task", True),
        ("  - nested", True),
        ("-item", False),
        ("1.item", False),
        ("*[UML]: Unified Modeling Language", False),
        ('--8<-- "snippet.md"', False),
        ("plain text", False),
    ],
)
def test_is_list_line(line: str, expected: bool):
    assert is_list_line(line) is expected


def test_abbreviation_and_snippet_forms():
    assert is_abbreviation("*[HTML]: Hyper Text Markup Language")
    assert not is_abbreviation("* [HTML]: list item")
    assert is_snippet('--8<-- "snippet.md:section_1"')
    assert is_snippet("--8<-- 'snippet.md:section_2'")
    assert is_snippet('    --8<-- "snippet.md"')
    assert not is_snippet('--8<-- "mismatched\'')


def test_inline_emphasis_at_line_start():
    assert starts_with_inline_emphasis("**file/path_name.py:**")
    assert starts_with_inline_emphasis("__bold__ text")
    assert starts_with_inline_emphasis("*Italic* text")
    assert starts_with_inline_emphasis("_italic_ text")
    assert not starts_with_inline_emphasis("* item")
    assert not starts_with_inline_emphasis("*unclosed")
    assert not starts_with_inline_emphasis("text **bold**")


def test_horizontal_rules():
    assert is_horizontal_rule("---")
    assert is_horizontal_rule("  *****  ")
    assert is_horizontal_rule("___")
    assert not is_horizontal_rule("--")
    assert not is_horizontal_rule("-*-")
    assert not is_horizontal_rule("--- text")


def test_blockquote_lines_and_continuations():
    assert is_blockquote_line("> quote")
    assert is_blockquote_line("  >quote")
    assert not is_blockquote_line(">")
    assert is_blockquote_continuation("  indented")
    assert is_blockquote_continuation("\tindented")
    assert is_blockquote_continuation("- item")
    assert not is_blockquote_continuation(" one space")
    assert not is_blockquote_continuation("")
    assert not is_blockquote_continuation("plain")


@pytest.mark.parametrize(
    "line, expected",
    [
        ("| --- | --- |", True),
        ("|:---|---:|", True),
        ("--- | ---", True),
        ("| :-: |", True),
        ("---|", True),
        ("---", False),
        ("| a | b |", False),
        ("| --- | x |", False),
    ],
)
def test_is_table_separator_line(line: str, expected: bool):
    assert is_table_separator_line(line) is expected


@pytest.mark.parametrize(
    "line, expected",
    [
        ("| A | B |", True),
        ("A | B", True),
        ("A | B | C", True),
        ("a|b|c", True),
        ("| A", False),
        ("A |", False),
        ("a|b", False),
        ("no pipes", False),
    ],
)
def test_is_table_row_line(line: str, expected: bool):
    assert is_table_row_line(line) is expected


def test_count_table_columns_strips_outer_pipes():
    assert count_table_columns("| A | B |") == 2
    assert count_table_columns("A | B | C") == 3
    assert count_table_columns("| --- |") == 1
    assert count_table_columns("  |a|b|c|  ") == 3


def test_table_line_uses_nearest_non_blank_separator():
    lines = ["A | B", "", "--- | ---", "1 | 2", "", "x | y"]

    assert is_table_line_at(lines, 0)
    assert is_table_line_at(lines, 2)
    assert is_table_line_at(lines, 3)
    assert not is_table_line_at(lines, 5)


def test_table_line_accepts_rows_with_two_pipes():
    assert is_table_line_at(["| A |"], 0)


def test_find_non_blank_neighbours():
    lines = ["a", "", "  ", "b"]

    assert find_next_non_blank(lines, 1) == 3
    assert find_next_non_blank(lines, 4) is None
    assert find_prev_non_blank(lines, 3) == 0
    assert find_prev_non_blank(lines, 0) is None


def test_normalize_admonition_type_aliases_and_defaults():
    assert normalize_admonition_type("Note") == "note"
    assert normalize_admonition_type("failure") == "danger"
    assert normalize_admonition_type("ERROR") == "danger"
    assert normalize_admonition_type("danger") == "danger"
    assert normalize_admonition_type("caution") == "default"
    assert normalize_admonition_type("") == "default"


def test_admonition_type_of_reads_first_token():
    assert admonition_type_of('!!! note "Title"') == "note"
    assert admonition_type_of("???+ tip") == "tip"
    assert admonition_type_of("  ???warning") == "warning"
    assert admonition_type_of("!!! ") == ""
    assert admonition_type_of("plain") == ""


def test_classify_line_combines_roles():
    assert classify_line("") == LineRole.BLANK
    assert classify_line("plain text") == LineRole.PLAIN
    assert classify_line("!!! note") == LineRole.ADMONITION_HEADER
    assert classify_line('=== "Tab"') == LineRole.TAB_HEADER
    assert classify_line("$$") == LineRole.MATH_DELIMITER
    assert classify_line("# Title") == LineRole.HEADING

    rule = classify_line("---")
    assert LineRole.FRONTMATTER_DELIMITER in rule
    assert LineRole.HORIZONTAL_RULE in rule

    task = classify_line("- [x] done")
    assert LineRole.LIST_ITEM in task
    assert LineRole.TABLE_LINE not in task


def test_classify_document_marks_table_lines_and_neighbours():
    document = classify_document(["| A |", "", "| --- |", "x | y", "text"])

    assert document.has(0, LineRole.TABLE_LINE)
    assert document.has(2, LineRole.TABLE_LINE | LineRole.TABLE_SEPARATOR)
    assert document.has(3, LineRole.TABLE_LINE)
    assert not document.has(4, LineRole.TABLE_LINE)
    assert document.prev_non_blank == [None, 0, 0, 2, 3]
    assert document.next_non_blank == [2, 2, 3, 4, None]
