"""Text and JSON rendering of lint results."""

from __future__ import annotations

import json
from dataclasses import asdict

from .models import Diagnostic, LintResult
from .stylesheet import Stylesheet


def format_diagnostic(display_path: str, diagnostic: Diagnostic) -> str:
    """Render one diagnostic as ``path:line:column: severity: message``.

    Line and column are one-based.

    Examples:
        format_diagnostic("doc.md", Diagnostic(0, 0, 5, "Admonition type is required."))
        # 'doc.md:1:1: error: Admonition type is required.'
    """
    return (
        f"{display_path}:{diagnostic.line + 1}:{diagnostic.start + 1}: "
        f"{diagnostic.severity.value}: {diagnostic.message}"
    )


def render_text_report(reports: list[tuple[str, LintResult]]) -> list[str]:
    """Render results for several files as output lines.

    Args:
        reports: Display path and result for each linted file.

    Returns:
        list[str]: One line per diagnostic followed by a summary line, each
            ending with a newline.
    """
    output = []
    errors = 0
    warnings = 0
    for display_path, result in reports:
        for diagnostic in result.diagnostics:
            output.append(f"{format_diagnostic(display_path, diagnostic)}\n")
        errors += result.error_count
        warnings += result.warning_count

    file_label = "file" if len(reports) == 1 else "files"
    output.append(f"{len(reports)} {file_label} checked: {errors} error(s), {warnings} warning(s)\n")
    return output


def diagnostic_to_dict(diagnostic: Diagnostic) -> dict[str, object]:
    return {
        "line": diagnostic.line,
        "start": diagnostic.start,
        "end": diagnostic.end,
        "severity": diagnostic.severity.value,
        "message": diagnostic.message,
    }


def render_json_report(
    reports: list[tuple[str, LintResult]],
    include_annotations: bool = False,
    stylesheets: dict[str, Stylesheet] | None = None,
) -> str:
    """Render results as a JSON document.

    Args:
        reports: Display path and result for each linted file.
        include_annotations: Add highlight ranges and admonition blocks.
        stylesheets: Optional stylesheet per display path.

    Returns:
        str: Indented JSON text.
    """
    files = []
    for display_path, result in reports:
        entry: dict[str, object] = {
            "path": display_path,
            "diagnostics": [diagnostic_to_dict(item) for item in result.diagnostics],
            "errors": result.error_count,
            "warnings": result.warning_count,
        }
        if include_annotations:
            entry["annotations"] = asdict(result.annotations)
            entry["admonitions"] = [asdict(block) for block in result.admonition_blocks]
            entry["tables"] = [asdict(block) for block in result.table_blocks]
            entry["tabs"] = [asdict(block) for block in result.tab_blocks]
        if stylesheets and display_path in stylesheets:
            entry["stylesheet"] = asdict(stylesheets[display_path])
        files.append(entry)

    return json.dumps({"files": files}, indent=2, ensure_ascii=False)
