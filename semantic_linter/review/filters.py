"""Select the changed files that should be analyzed."""

from typing import List, Sequence

from semantic_linter.core.logging import get_logger
from semantic_linter.llm.models import ChangedFile
from semantic_linter.review.patterns import compile_pattern, match

logger = get_logger(__name__)


def match_any(path: str, patterns: Sequence[str]) -> bool:
    """Return True if the path matches at least one pattern."""
    return any(match(path, pattern) for pattern in patterns)


def filter_files(
    files: Sequence[ChangedFile],
    include: Sequence[str],
    exclude: Sequence[str],
) -> List[ChangedFile]:
    """
    Keep files matching an include pattern and no exclude pattern.

    Input order is preserved. An empty include list selects nothing.

    Raises:
        PatternError: If any pattern is malformed
    """
    logger.info(
        f"Filtering {len(files)} files, included: {list(include)}, "
        f"excluded: {list(exclude)}"
    )

    # surface malformed patterns even when no file would reach them
    for pattern in [*include, *exclude]:
        compile_pattern(pattern)

    selected = []
    for file in files:
        included = match_any(file.filename, include)
        excluded = match_any(file.filename, exclude)
        if included and not excluded:
            logger.debug(f"File included: {file.filename}")
            selected.append(file)
        else:
            logger.debug(
                f"File excluded: {file.filename} "
                f"(included={included}, excluded={excluded})"
            )

    return selected
