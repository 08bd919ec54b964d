"""Run the LLM over each selected file."""

from typing import List, Sequence

from semantic_linter.core.config import LintConfig
from semantic_linter.core.logging import get_logger
from semantic_linter.llm.base import BaseLLMProvider
from semantic_linter.llm.errors import LLMProviderError
from semantic_linter.llm.models import AnalysisResult, ChangedFile, FileAnalysisResult

logger = get_logger(__name__)


def build_prompt(template: str, rules: str, patch: str) -> str:
    """
    Render the prompt template.

    Only the first ``{rules}`` and the first ``{code}`` placeholder are
    replaced; later occurrences are left as they are.
    """
    prompt = template.replace("{rules}", rules, 1)
    return prompt.replace("{code}", patch, 1)


async def analyze_changed_file(
    file: ChangedFile,
    config: LintConfig,
    rules: str,
    api_key: str,
    provider: BaseLLMProvider,
) -> AnalysisResult:
    """
    Analyze one file's patch with the configured provider.

    Raises:
        LLMProviderError: If the provider call fails at any stage
    """
    prompt = build_prompt(config.ai.prompt_template, rules, file.patch)
    return await provider.analyze(file.patch, prompt, api_key)


async def analyze_files(
    files: Sequence[ChangedFile],
    config: LintConfig,
    rules: str,
    api_key: str,
    provider: BaseLLMProvider,
) -> List[FileAnalysisResult]:
    """
    Analyze files one at a time, in order.

    A file whose analysis fails is logged and left out of the results;
    the remaining files are still analyzed.
    """
    results = []
    for file in files:
        try:
            analysis = await analyze_changed_file(file, config, rules, api_key, provider)
        except LLMProviderError as e:
            logger.warning(
                f"Error analyzing patch for {file.filename}",
                stage=e.stage.value if e.stage else None,
                error=str(e),
            )
            continue

        logger.info(f"Analyzed {file.filename}: {len(analysis.issues)} issues")
        results.append(FileAnalysisResult(filename=file.filename, issues=analysis.issues))

    return results
