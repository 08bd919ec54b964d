"""File selection, per-file analysis and report rendering."""

from semantic_linter.review.analyzer import analyze_changed_file, analyze_files, build_prompt
from semantic_linter.review.filters import filter_files
from semantic_linter.review.patterns import PatternError, match
from semantic_linter.review.report import build_report, has_blocking_issues

__all__ = [
    "PatternError",
    "analyze_changed_file",
    "analyze_files",
    "build_prompt",
    "build_report",
    "filter_files",
    "has_blocking_issues",
    "match",
]
