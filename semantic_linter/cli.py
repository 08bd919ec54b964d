"""Command line entry point for the semantic linter."""

import argparse
import asyncio
import sys
from typing import Iterable, Optional

import httpx
from pydantic import ValidationError

from semantic_linter.core.config import (
    ConfigurationError,
    Settings,
    load_lint_config,
    load_settings,
    read_rules,
    resolve_pr_number,
    resolve_repository,
)
from semantic_linter.core.logging import get_logger, setup_logging
from semantic_linter.github.client import GitHubClient
from semantic_linter.llm.errors import UnsupportedProviderError
from semantic_linter.llm.factory import get_llm_provider
from semantic_linter.review.analyzer import analyze_files
from semantic_linter.review.filters import filter_files
from semantic_linter.review.patterns import PatternError
from semantic_linter.review.report import build_report

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

FATAL_ERRORS = (
    ConfigurationError,
    UnsupportedProviderError,
    PatternError,
    PermissionError,
    ValueError,
    httpx.HTTPError,
)


async def run(
    settings: Settings,
    github_client: Optional[GitHubClient] = None,
    llm_client: Optional[httpx.AsyncClient] = None,
) -> int:
    """
    Lint one pull request end to end.

    Args:
        settings: Run settings built by the entry point
        github_client: Optional client to use instead of creating one
        llm_client: Optional HTTP client handed to the LLM provider

    Returns:
        EXIT_FAILURE if any error-class issue was found, else EXIT_OK

    Raises:
        ConfigurationError, UnsupportedProviderError, PatternError,
        PermissionError, ValueError, httpx.HTTPError: on fatal setup,
        fetch or post failures
    """
    logger.info("Starting semantic linter...")

    settings.require_credentials()
    config = load_lint_config(settings.config_path)
    rules = read_rules(settings.rules_path)
    provider = get_llm_provider(config.ai, client=llm_client, timeout=settings.request_timeout)
    logger.info(f"Config and rules loaded successfully, provider: {config.ai.provider}")

    github_client = github_client or GitHubClient(
        token=settings.github_token, api_base=settings.github_api_url
    )

    async with github_client, provider:
        pr_number = resolve_pr_number(settings)
        owner, repo = resolve_repository(settings)

        logger.info(f"[STEP 1] Fetching changed files for PR #{pr_number} in {owner}/{repo}")
        changed_files = await github_client.list_changed_files(owner, repo, pr_number)
        logger.info(f"[STEP 1] Found {len(changed_files)} raw changed files")

        files_to_analyze = filter_files(
            changed_files, config.included_files, config.excluded_files
        )
        logger.info(f"[STEP 2] Found {len(files_to_analyze)} files to analyze")

        results = await analyze_files(
            files_to_analyze, config, rules, settings.ai_api_key, provider
        )
        logger.info(
            f"[STEP 3] Analyzed {len(results)}/{len(files_to_analyze)} files",
            skipped=len(files_to_analyze) - len(results),
        )

        report, blocking = build_report(results, config.severity)

        if settings.dry_run:
            logger.info("[STEP 4] Dry run, printing report instead of posting")
            print(report)
        else:
            logger.info(f"[STEP 4] Posting results to PR #{pr_number}")
            await github_client.post_comment(owner, repo, pr_number, report)

    if blocking:
        logger.warning("Blocking issues found")
        return EXIT_FAILURE

    logger.info("No blocking issues found")
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="semantic-linter",
        description="Review pull request diffs with an LLM against a rules document",
    )
    parser.add_argument("--config", dest="config_path", help="Path to the lint config JSON")
    parser.add_argument("--rules", dest="rules_path", help="Path to the rules document")
    parser.add_argument("--pr-number", dest="pr_number", help="Pull request number")
    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_const",
        const=True,
        help="Print the report instead of posting it",
    )
    parser.add_argument("--log-level", dest="log_level", help="Logging level (default: INFO)")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    """Parse arguments, run the linter and return the process exit code."""
    args = _build_parser().parse_args(list(argv) if argv is not None else None)

    try:
        settings = load_settings(**vars(args))
    except ValidationError as e:
        setup_logging()
        logger.error(f"Invalid settings: {e}")
        return EXIT_FAILURE

    setup_logging(settings.log_level)

    try:
        return asyncio.run(run(settings))
    except FATAL_ERRORS as e:
        logger.error(str(e), error_type=type(e).__name__)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
