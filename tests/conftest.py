import pytest
from click.testing import CliRunner

from material_lint.config import LintConfig
from material_lint.scanner import lint_text


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def messages():
    """Lints the given lines and returns the diagnostic messages."""

    def _messages(*lines: str, **options: object) -> list[str]:
        result = lint_text("\n".join(lines), LintConfig(**options))
        return [diagnostic.message for diagnostic in result.diagnostics]

    return _messages
