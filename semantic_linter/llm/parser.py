"""Parser for LLM answers into structured analysis results."""

from pydantic import ValidationError

from semantic_linter.core.logging import get_logger
from semantic_linter.llm.errors import InvalidResponseError, ProviderStage
from semantic_linter.llm.models import AnalysisResult

logger = get_logger(__name__)

FENCE_OPEN = "```json"
FENCE_CLOSE = "```"


def strip_code_fence(text: str) -> str:
    """
    Remove a leading ```json and a trailing ``` marker, then trim whitespace.

    Only the literal markers at the very start and end are removed; the
    text is not otherwise searched for code blocks.
    """
    if text.startswith(FENCE_OPEN):
        text = text[len(FENCE_OPEN) :]
    if text.endswith(FENCE_CLOSE):
        text = text[: -len(FENCE_CLOSE)]
    return text.strip()


def parse_analysis_result(response_text: str, provider_name: str = "llm") -> AnalysisResult:
    """
    Parse the LLM answer text into an AnalysisResult.

    Expected format (optionally wrapped in a ```json fence):
        {"issues": [{"type": "...", "message": "...", "suggestion": "..."}]}

    Args:
        response_text: Raw answer text extracted from the provider response
        provider_name: Provider name used in error messages

    Returns:
        AnalysisResult with the reported issues

    Raises:
        InvalidResponseError: If the text is not a valid analysis document
    """
    json_string = strip_code_fence(response_text)

    try:
        result = AnalysisResult.model_validate_json(json_string)
    except ValidationError as e:
        logger.debug(f"Unparseable {provider_name} answer: {json_string[:200]}")
        raise InvalidResponseError(
            f"failed to unmarshal analysis result from {provider_name} response: {e}",
            raw_response=response_text,
            stage=ProviderStage.PARSE,
        ) from e

    logger.debug(f"Parsed {len(result.issues)} issues from {provider_name} answer")
    return result
