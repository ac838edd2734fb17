"""Linter settings: defaults, TOML discovery, overrides, and validation."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_LANGUAGES, DEFAULT_MAX_FILE_SIZE

TABLE_NAME = "material-lint"

# Files probed in every directory, in order, with the tables read from each
CONFIG_SOURCES = (
    ("pyproject.toml", (("tool", TABLE_NAME),)),
    (f".{TABLE_NAME}.toml", ((TABLE_NAME,), ("tool", TABLE_NAME))),
)


@dataclass(frozen=True)
class LintConfig:
    """Configuration snapshot read once per scan.

    Attributes:
        check_indentation: Require admonition and tab bodies to be indented.
        check_blank_line_before_admonition_content: Require a blank line
            between an admonition header and its first non-list content line.
        check_blank_line_before_list: Warn when a list directly follows a
            heading, horizontal rule, or closing fence.
        languages: Language identifiers eligible for scanning.
        max_file_size: Maximum file size in bytes accepted by ``lint_file``.
        highlight_opacity: Alpha channel of admonition background colours.

    Examples:
        LintConfig(check_indentation=False)
    """

    # Rule toggles
    check_indentation: bool = True
    check_blank_line_before_admonition_content: bool = False
    check_blank_line_before_list: bool = False

    # Eligibility
    languages: tuple[str, ...] = DEFAULT_LANGUAGES

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    # Highlighting
    highlight_opacity: float = 0.6


class ConfigError(ValueError):
    """Raised for unreadable settings tables or out-of-range values.

    Examples:
        raise ConfigError("`highlight_opacity` must be a number")
    """


def load_config(search_path: Path) -> LintConfig:
    """Find the settings that apply to documents under `search_path`.

    Each directory from `search_path` up to the filesystem root is probed
    for ``pyproject.toml`` (``[tool.material-lint]``) and then
    ``.material-lint.toml`` (``[material-lint]`` or ``[tool.material-lint]``).
    The first table found wins, even when empty. Files that are not valid
    TOML are ignored.

    Args:
        search_path: Directory of the document being linted.

    Returns:
        LintConfig: Settings from the nearest table, or the defaults.

    Raises:
        ConfigError: If the winning table is not a table or has unknown keys.

    Examples:
        load_config(Path("docs/guide"))
    """
    directory = search_path.resolve()

    for candidate in (directory, *directory.parents):
        for filename, table_paths in CONFIG_SOURCES:
            config = _read_config_file(candidate / filename, table_paths)
            if config is not None:
                return config

    return LintConfig()


_ABSENT = object()


def _read_config_file(path: Path, table_paths: tuple[tuple[str, ...], ...]) -> LintConfig | None:
    if not path.is_file():
        return None

    try:
        with open(path, "rb") as handle:
            document = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        table = _lookup_table(document, table_path)
        if table is not _ABSENT:
            return _config_from_table(table, path, table_path)

    return None


def _lookup_table(document: object, table_path: tuple[str, ...]) -> object:
    node = document
    for key in table_path:
        if not isinstance(node, dict):
            return _ABSENT
        node = node.get(key, _ABSENT)
        if node is _ABSENT:
            return _ABSENT
    return node


def _config_from_table(table: object, path: Path, table_path: tuple[str, ...]) -> LintConfig:
    """Build a `LintConfig` from one TOML table.

    Keys may use hyphens (``check-indentation``) or underscores, and
    ``languages`` may be given as a TOML array.
    """
    location = f"`[{'.'.join(table_path)}]` in {path}"

    if table is None:
        return LintConfig()
    if not isinstance(table, dict):
        raise ConfigError(f"Invalid {location}: expected a table")

    settings = {key.replace("-", "_"): value for key, value in table.items()}
    if isinstance(settings.get("languages"), list):
        settings["languages"] = tuple(settings["languages"])

    known = {option.name for option in fields(LintConfig)}
    unknown = sorted(set(settings) - known)
    if unknown:
        raise ConfigError(f"Invalid {location}: unknown key(s) {', '.join(unknown)}")

    return LintConfig(**settings)


def validate_config(config: LintConfig) -> None:
    """Validate a `LintConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If a rule toggle is not a boolean, the language list is
            empty or holds non-strings, the size limit is not a positive
            integer, or the highlight opacity is outside ``(0, 1]``.

    Examples:
        validate_config(LintConfig(check_blank_line_before_list=True))
    """
    for option in fields(LintConfig):
        if option.name.startswith("check_"):
            value = getattr(config, option.name)
            if not isinstance(value, bool):
                raise ConfigError(f"`{option.name}` must be a boolean")

    if not isinstance(config.languages, tuple) or not config.languages:
        raise ConfigError("`languages` must be a non-empty list of language identifiers")
    if not all(isinstance(language, str) and language for language in config.languages):
        raise ConfigError("`languages` entries must be non-empty strings")

    max_file_size = config.max_file_size
    if isinstance(max_file_size, bool) or not isinstance(max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")

    opacity = config.highlight_opacity
    if isinstance(opacity, bool) or not isinstance(opacity, (int, float)):
        raise ConfigError("`highlight_opacity` must be a number")
    if not 0 < opacity <= 1:
        raise ConfigError("`highlight_opacity` must be greater than 0 and at most 1")


def apply_overrides(config: LintConfig, **overrides: object) -> LintConfig:
    """Layer command-line values over file settings.

    ``None`` means the flag was not given and leaves the setting alone; the
    same instance is returned when nothing changes.

    Examples:
        apply_overrides(config, check_indentation=False, check_blank_line_before_list=None)
    """
    given = {name: value for name, value in overrides.items() if value is not None}
    return replace(config, **given) if given else config


def build_config(search_path: Path, **overrides: object) -> LintConfig:
    """Resolve the settings for one document.

    Loads the nearest settings table, applies `overrides`, then validates the
    result.

    Raises:
        ConfigError: If the table is malformed or a value is out of range.

    Examples:
        config = build_config(Path.cwd(), check_blank_line_before_list=True)
    """
    config = apply_overrides(load_config(search_path), **overrides)
    validate_config(config)
    return config
