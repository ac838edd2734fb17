from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from material_lint.config import (
    ConfigError,
    LintConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".material-lint.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.material-lint]
        check-indentation = false
        check-blank-line-before-admonition-content = true
        check_blank_line_before_list = true
        languages = ["markdown"]
        max_file_size = 2048
        highlight_opacity = 0.3
        """,
    )

    config = load_config(tmp_path)

    assert config == LintConfig(
        check_indentation=False,
        check_blank_line_before_admonition_content=True,
        check_blank_line_before_list=True,
        languages=("markdown",),
        max_file_size=2048,
        highlight_opacity=0.3,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [material-lint]
        check-blank-line-before-list = true
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.check_blank_line_before_list is True
    assert config.check_indentation is True


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.material-lint]
        check-indentation = false
        """,
    )

    assert load_config(tmp_path).check_indentation is False


def test_pyproject_wins_over_dotfile_in_same_directory(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.material-lint]
        highlight-opacity = 0.2
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [material-lint]
        highlight-opacity = 0.9
        """,
    )

    assert load_config(tmp_path).highlight_opacity == 0.2


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.material-lint]
        check-blank-line-before-list = true
        """,
    )
    nested = tmp_path / "docs" / "guide" / "api"
    nested.mkdir(parents=True)

    config = load_config(nested)

    assert config.check_blank_line_before_list is True


def test_pyproject_without_table_is_skipped(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.material-lint]
        check-indentation = false
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [project]
        name = "docs"
        """,
    )

    assert load_config(child).check_indentation is False


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.material-lint]
        check-indentation = false
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [tool.material-lint]
        """,
    )

    config = load_config(child)

    assert config == LintConfig()


def test_load_config_returns_defaults_when_missing(tmp_path: Path):
    config = load_config(tmp_path)

    assert config == LintConfig()


def test_load_config_skips_invalid_toml(tmp_path: Path):
    invalid_dir = tmp_path / "invalid"
    invalid_dir.mkdir()
    _write_pyproject(invalid_dir, "not = {valid")
    _write_pyproject(
        tmp_path,
        """
        [tool.material-lint]
        languages = ["mdx"]
        """,
    )

    nested = invalid_dir / "child"
    nested.mkdir()
    config = load_config(nested)

    assert config.languages == ("mdx",)


def test_load_config_errors_on_unknown_key(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.material-lint]
        check-indentation = true
        unexpected = true
        """,
    )

    with pytest.raises(ConfigError, match=r"unknown key\(s\) unexpected"):
        load_config(tmp_path)


def test_load_config_errors_on_non_table(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        material-lint = "strict"
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "config",
    [
        LintConfig(check_indentation="yes"),  # type: ignore[arg-type]
        LintConfig(check_blank_line_before_list=1),  # type: ignore[arg-type]
        LintConfig(check_blank_line_before_admonition_content=None),  # type: ignore[arg-type]
        LintConfig(languages=()),
        LintConfig(languages=["markdown"]),  # type: ignore[arg-type]
        LintConfig(languages=("markdown", "")),
        LintConfig(max_file_size=0),
        LintConfig(max_file_size="big"),  # type: ignore[arg-type]
        LintConfig(max_file_size=True),
        LintConfig(highlight_opacity=0),
        LintConfig(highlight_opacity=1.5),
        LintConfig(highlight_opacity="0.5"),  # type: ignore[arg-type]
    ],
)
def test_validate_config_rejects_invalid_values(config: LintConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


def test_validate_config_accepts_defaults():
    validate_config(LintConfig())
    validate_config(LintConfig(highlight_opacity=1))


def test_apply_overrides_ignores_none():
    config = LintConfig()

    assert apply_overrides(config, check_indentation=None) is config
    assert apply_overrides(config, check_indentation=False).check_indentation is False


def test_build_config_applies_overrides_over_file(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.material-lint]
        check-indentation = false
        """,
    )

    config = build_config(tmp_path, check_indentation=True, check_blank_line_before_list=None)

    assert config.check_indentation is True
    assert config.check_blank_line_before_list is False


def test_build_config_validates_file_values(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.material-lint]
        max-file-size = -5
        """,
    )

    with pytest.raises(ConfigError, match="max_file_size"):
        build_config(tmp_path)
