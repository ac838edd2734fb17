from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st
from material_lint.blocks import resolve_depths
from material_lint.constants import MAX_DEPTH
from material_lint.models import AdmonitionBlock
from material_lint.scanner import lint_text, split_lines

# Fragments that exercise every construct the scanner knows about
fragments = st.sampled_from(
    [
        "",
        "    ",
        "\t",
        "---",
        "...",
        "```",
        "````",
        "~~~",
        "$$",
        "!!! ",
        "!!! note",
        '!!! note "Title',
        "???+ tip",
        "=== ",
        '=== "Tab"',
        "===Tab",
        "> ",
        "- ",
        "-",
        "1. ",
        "1.",
        "- [x]",
        "*[HTML]: ",
        '--8<-- "a.md"',
        "| ",
        " | ",
        "| --- |",
        "--- | ---",
        "# ",
        "**bold**",
        "text",
        "'",
        '"',
    ]
)
markdown_lines = st.lists(fragments, min_size=1, max_size=4).map("".join)
markdown_documents = st.lists(markdown_lines, min_size=0, max_size=30).map("\n".join)


@given(markdown_documents)
@settings(max_examples=200)
def test_lint_text_is_deterministic(text: str):
    assert lint_text(text) == lint_text(text)


@given(markdown_documents)
@settings(max_examples=200)
def test_diagnostics_stay_within_document(text: str):
    lines = split_lines(text)

    for diagnostic in lint_text(text).diagnostics:
        assert 0 <= diagnostic.line < len(lines)
        assert 0 <= diagnostic.start <= diagnostic.end <= len(lines[diagnostic.line])


@given(markdown_documents)
@settings(max_examples=200)
def test_blocks_are_well_formed(text: str):
    lines = split_lines(text)
    result = lint_text(text)

    for block in result.admonition_blocks:
        assert 0 <= block.depth < MAX_DEPTH
        assert block.start_line <= block.end_line < len(lines)
    for table in result.table_blocks:
        assert table.start_line <= table.end_line < len(lines)
    for tab in result.tab_blocks:
        assert tab.start_line <= tab.end_line < len(lines)


block_strategy = st.lists(
    st.tuples(
        st.integers(min_value=0, max_value=50),
        st.integers(min_value=0, max_value=20),
        st.integers(min_value=0, max_value=5),
    ),
    max_size=20,
)


@given(block_strategy)
def test_resolve_depths_is_bounded_and_sorted(specs):
    blocks = [
        AdmonitionBlock(start, start + length, "note", indent * 4)
        for start, length, indent in specs
    ]

    ordered = resolve_depths(blocks)

    assert len(ordered) == len(blocks)
    assert all(0 <= block.depth < MAX_DEPTH for block in ordered)
    positions = [(block.start_line, block.end_line) for block in ordered]
    assert positions == sorted(positions)
