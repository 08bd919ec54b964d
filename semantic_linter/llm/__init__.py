"""LLM provider abstraction for semantic linting."""

from semantic_linter.llm.base import BaseLLMProvider
from semantic_linter.llm.errors import (
    APIError,
    InvalidResponseError,
    LLMProviderError,
    NetworkError,
    ProviderStage,
    RequestBuildError,
    UnsupportedProviderError,
)
from semantic_linter.llm.factory import get_llm_provider
from semantic_linter.llm.models import AnalysisResult, ChangedFile, FileAnalysisResult, Issue

__all__ = [
    "APIError",
    "AnalysisResult",
    "BaseLLMProvider",
    "ChangedFile",
    "FileAnalysisResult",
    "InvalidResponseError",
    "Issue",
    "LLMProviderError",
    "NetworkError",
    "ProviderStage",
    "RequestBuildError",
    "UnsupportedProviderError",
    "get_llm_provider",
]
