"""Render analysis results as a pull request comment."""

from typing import List, Sequence, Tuple

from semantic_linter.core.config import SeverityConfig
from semantic_linter.llm.models import FileAnalysisResult, Issue

REPORT_TITLE = "## Semantic Linting Results"
ERROR_ICON = "🔴"
WARNING_ICON = "⚠️"


def severity_icon(issue: Issue, severity: SeverityConfig) -> str:
    """Error glyph for error-class types; everything else is a warning."""
    return ERROR_ICON if severity.is_error(issue.type) else WARNING_ICON


def has_blocking_issues(
    results: Sequence[FileAnalysisResult], severity: SeverityConfig
) -> bool:
    """Return True if any issue in any file has an error-class type."""
    return any(
        severity.is_error(issue.type) for result in results for issue in result.issues
    )


def _format_issue(issue: Issue, severity: SeverityConfig) -> List[str]:
    lines = [f"{severity_icon(issue, severity)} **{issue.type}**: {issue.message}"]
    if issue.suggestion:
        lines.append(f"> Suggestion: {issue.suggestion}")
    lines.append("")
    return lines


def build_report(
    results: Sequence[FileAnalysisResult], severity: SeverityConfig
) -> Tuple[str, bool]:
    """
    Build the Markdown comment body and the blocking flag.

    Files without issues get no section, so a clean run renders only the
    title.

    Args:
        results: Per-file findings in analysis order
        severity: Issue-type classification

    Returns:
        Tuple of (report markdown, whether any error-class issue exists)
    """
    lines = [REPORT_TITLE, ""]

    for result in results:
        if not result.issues:
            continue
        lines.extend([f"### {result.filename}", ""])
        for issue in result.issues:
            lines.extend(_format_issue(issue, severity))

    report = "\n".join(lines) + "\n"
    return report, has_blocking_issues(results, severity)
