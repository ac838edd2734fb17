"""
Lints Markdown files written for MkDocs Material.
Prints one line per diagnostic and exits with status 1 when errors are found.
"""

from __future__ import annotations

import logging

import click
from .config import ConfigError, build_config
from .filesystem import normalize_filepath
from .reporter import render_json_report, render_text_report
from .scanner import LintFileError, lint_file
from .stylesheet import Theme, compute_stylesheet

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@click.command()
@click.version_option()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Report format",
)
@click.option("--annotations", is_flag=True, help="Include highlight ranges in JSON output")
@click.option(
    "--theme",
    type=click.Choice([theme.value for theme in Theme]),
    help="Include a stylesheet for this theme in JSON output",
)
@click.option(
    "--check-indentation/--no-check-indentation",
    default=None,
    help="Require indented admonition and tab bodies",
)
@click.option(
    "--blank-line-before-admonition-content/--no-blank-line-before-admonition-content",
    default=None,
    help="Require a blank line after admonition headers",
)
@click.option(
    "--blank-line-before-list/--no-blank-line-before-list",
    default=None,
    help="Warn about lists directly after headings, rules, and fences",
)
@click.option("--verbose", is_flag=True, help="Log debug output to stderr")
@click.argument("filepaths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def cli(
    filepaths: tuple[str, ...],
    output_format: str = "text",
    annotations: bool = False,
    theme: str | None = None,
    check_indentation: bool | None = None,
    blank_line_before_admonition_content: bool | None = None,
    blank_line_before_list: bool | None = None,
    verbose: bool = False,
):
    """
    Entry point for linting one or more Markdown files.

    Args:
        filepaths: Paths to the Markdown files to lint.
        output_format: ``text`` or ``json``.
        annotations: Include highlight ranges in JSON output.
        theme: Include a stylesheet for this theme in JSON output.
        check_indentation: Override for `check_indentation`.
        blank_line_before_admonition_content: Override for
            `check_blank_line_before_admonition_content`.
        blank_line_before_list: Override for `check_blank_line_before_list`.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If a path is not a Markdown file or the
            configuration is invalid.
        click.ClickException: If a file cannot be read or exceeds limits.
        SystemExit: With status 1 when any error diagnostic is reported.

    Examples:
        material-lint docs/index.md --blank-line-before-list
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    reports = []
    stylesheets = {}
    for raw_path in filepaths:
        try:
            filepath = normalize_filepath(raw_path)
        except ValueError as error:
            raise click.BadParameter(str(error)) from error

        try:
            config = build_config(
                filepath.parent,
                check_indentation=check_indentation,
                check_blank_line_before_admonition_content=blank_line_before_admonition_content,
                check_blank_line_before_list=blank_line_before_list,
            )
        except ConfigError as error:
            raise click.BadParameter(str(error)) from error
        logger.debug("Using %s for %s", config, filepath)

        try:
            result = lint_file(filepath, config)
        except LintFileError as error:
            raise click.ClickException(str(error)) from error

        reports.append((raw_path, result))
        if theme is not None:
            stylesheets[raw_path] = compute_stylesheet(config, Theme(theme))

    if output_format == "json":
        click.echo(render_json_report(reports, annotations, stylesheets))
    else:
        click.echo("".join(render_text_report(reports)), nl=False)
        if annotations or theme is not None:
            click.echo("Warning: --annotations and --theme only apply to JSON output", err=True)

    if any(result.has_errors for _, result in reports):
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
