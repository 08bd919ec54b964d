"""Factory for creating LLM provider instances."""

from typing import Dict, Optional, Type

import httpx

from semantic_linter.core.config import AIConfig
from semantic_linter.core.logging import get_logger
from semantic_linter.llm.anthropic_provider import AnthropicProvider
from semantic_linter.llm.base import DEFAULT_TIMEOUT, BaseLLMProvider
from semantic_linter.llm.errors import UnsupportedProviderError
from semantic_linter.llm.gemini_provider import GeminiProvider
from semantic_linter.llm.openai_provider import OpenAIProvider

logger = get_logger(__name__)

PROVIDERS: Dict[str, Type[BaseLLMProvider]] = {
    "gemini": GeminiProvider,
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}


def get_llm_provider(
    ai_config: AIConfig,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> BaseLLMProvider:
    """
    Create the provider selected by ``ai.provider``.

    Args:
        ai_config: The ``ai`` section of the lint configuration
        client: Optional HTTP client shared with the provider
        timeout: Request timeout in seconds when the provider owns its client

    Returns:
        Configured LLM provider instance

    Raises:
        UnsupportedProviderError: If the provider tag is unknown
    """
    provider_name = ai_config.provider
    provider_class = PROVIDERS.get(provider_name)
    if provider_class is None:
        raise UnsupportedProviderError(provider_name)

    provider_config = getattr(ai_config, provider_name)
    logger.info(
        f"Initializing LLM provider: {provider_name} with model: {provider_config.model}"
    )
    return provider_class(provider_config, client=client, timeout=timeout)
