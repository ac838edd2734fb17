"""Colours for highlight ranges, derived from configuration and theme."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .config import LintConfig
from .constants import ADMONITION_CATEGORIES, MAX_DEPTH

# Material for MkDocs admonition palette
CATEGORY_COLORS = {
    "note": (68, 138, 255),
    "abstract": (0, 176, 255),
    "info": (0, 184, 212),
    "tip": (0, 191, 165),
    "success": (0, 200, 83),
    "question": (100, 221, 23),
    "warning": (255, 145, 0),
    "danger": (255, 23, 68),
    "bug": (245, 0, 87),
    "example": (124, 77, 255),
    "quote": (158, 158, 158),
    "default": (254, 243, 199),
}


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class Stylesheet:
    """Colours for every highlight category.

    Attributes:
        admonition_backgrounds: Background colour per category.
        admonition_gutters: Gutter colours per category, one per depth.
        blockquote: Blockquote background.
        table: Table background.
        table_border: Row border colour.
        code_fence: Fenced code background.
        tab: Content tab background.
    """

    admonition_backgrounds: dict[str, str]
    admonition_gutters: dict[str, tuple[str, ...]]
    blockquote: str
    table: str
    table_border: str
    code_fence: str
    tab: str


_THEME_SURFACES = {
    Theme.LIGHT: {
        "blockquote": (229, 231, 235),
        "table": (255, 241, 230),
        "table_border": (209, 213, 219),
        "code_fence": (243, 244, 246),
        "tab": (237, 233, 254),
    },
    Theme.DARK: {
        "blockquote": (75, 85, 99),
        "table": (120, 72, 32),
        "table_border": (107, 114, 128),
        "code_fence": (31, 41, 55),
        "tab": (76, 29, 149),
    },
}


def _rgba(color: tuple[int, int, int], alpha: float) -> str:
    red, green, blue = color
    return f"rgba({red}, {green}, {blue}, {round(alpha, 2)})"


def compute_stylesheet(config: LintConfig, theme: Theme) -> Stylesheet:
    """Compute highlight colours for a theme.

    The scan never depends on the theme; callers recompute the stylesheet
    when the theme changes and reuse the scan result. Backgrounds use
    ``config.highlight_opacity`` (halved on dark themes); gutters get more
    opaque with every nesting level.

    Args:
        config: Configuration providing the highlight opacity.
        theme: Active colour theme.

    Returns:
        Stylesheet: Colours keyed like `Annotations`.

    Examples:
        compute_stylesheet(LintConfig(), Theme.LIGHT).blockquote
        # 'rgba(229, 231, 235, 0.7)'
    """
    opacity = config.highlight_opacity
    background_alpha = opacity if theme is Theme.LIGHT else opacity / 2

    backgrounds: dict[str, str] = {}
    gutters: dict[str, tuple[str, ...]] = {}
    for category in ADMONITION_CATEGORIES:
        color = CATEGORY_COLORS[category]
        backgrounds[category] = _rgba(color, background_alpha)
        gutters[category] = tuple(
            _rgba(color, min(1.0, 0.4 + 0.2 * depth)) for depth in range(MAX_DEPTH)
        )

    surfaces = _THEME_SURFACES[theme]
    return Stylesheet(
        admonition_backgrounds=backgrounds,
        admonition_gutters=gutters,
        blockquote=_rgba(surfaces["blockquote"], 0.7),
        table=_rgba(surfaces["table"], 0.7),
        table_border=_rgba(surfaces["table_border"], 1.0),
        code_fence=_rgba(surfaces["code_fence"], 0.5),
        tab=_rgba(surfaces["tab"], 0.4),
    )
