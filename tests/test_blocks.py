from material_lint.blocks import find_block_end, resolve_depths
from material_lint.models import AdmonitionBlock


def _depths(blocks: list[AdmonitionBlock]) -> list[int]:
    return [block.depth for block in resolve_depths(blocks)]


def test_find_block_end_skips_blank_lines():
    assert find_block_end(["!!! note", "", "    body", "", "after"], 0) == 2


def test_find_block_end_without_body():
    assert find_block_end(["!!! note", "after"], 0) == 0
    assert find_block_end(["!!! note"], 0) == 0
    assert find_block_end(["!!! note", "", ""], 0) == 0


def test_find_block_end_accepts_tabs():
    assert find_block_end(["!!! note", "\tbody", "\tmore", "x"], 0) == 2


def test_find_block_end_for_indented_header():
    lines = ["    !!! tip", "        inner", "    sibling"]

    assert find_block_end(lines, 0) == 1


def test_resolve_depths_nests_and_clamps():
    blocks = [
        AdmonitionBlock(start_line=2 * level, end_line=10, type_key="note", indent_width=4 * level)
        for level in range(5)
    ]

    assert _depths(blocks) == [0, 1, 2, 3, 3]


def test_resolve_depths_siblings_stay_at_top_level():
    blocks = [
        AdmonitionBlock(0, 2, "note", 0),
        AdmonitionBlock(3, 5, "tip", 0),
    ]

    assert _depths(blocks) == [0, 0]


def test_resolve_depths_requires_strictly_smaller_indent():
    blocks = [
        AdmonitionBlock(0, 10, "note", 0),
        AdmonitionBlock(2, 4, "tip", 0),
    ]

    assert _depths(blocks) == [0, 0]


def test_resolve_depths_pops_closed_blocks():
    blocks = [
        AdmonitionBlock(0, 10, "note", 0),
        AdmonitionBlock(2, 4, "tip", 4),
        AdmonitionBlock(5, 10, "warning", 4),
    ]

    assert _depths(blocks) == [0, 1, 1]


def test_resolve_depths_skips_equal_indent_parent():
    blocks = [
        AdmonitionBlock(0, 10, "note", 0),
        AdmonitionBlock(2, 10, "tip", 4),
        AdmonitionBlock(4, 10, "bug", 4),
    ]

    assert _depths(blocks) == [0, 1, 1]


def test_resolve_depths_sorts_by_position():
    outer = AdmonitionBlock(0, 6, "note", 0)
    inner = AdmonitionBlock(2, 6, "tip", 4)

    ordered = resolve_depths([inner, outer])

    assert ordered == [outer, inner]
    assert inner.depth == 1


def test_resolve_depths_empty():
    assert resolve_depths([]) == []
