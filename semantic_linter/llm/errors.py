"""Custom exceptions for LLM providers."""

from enum import Enum


class ProviderStage(str, Enum):
    """Step of a provider call at which a failure happened."""

    REQUEST_BUILD = "request-build"
    NETWORK = "network"
    HTTP_STATUS = "http-status"
    DECODE = "decode"
    PARSE = "parse"


class LLMProviderError(Exception):
    """Base exception for LLM provider errors."""

    def __init__(self, message: str, stage: ProviderStage | None = None, detail: str = ""):
        super().__init__(message)
        self.stage = stage
        self.detail = detail or message


class UnsupportedProviderError(LLMProviderError):
    """Raised when the configured provider tag has no adapter."""

    def __init__(self, provider: str):
        super().__init__(f"Unsupported AI provider: {provider}")
        self.provider = provider


class RequestBuildError(LLMProviderError):
    """Raised when the outbound request cannot be constructed."""

    def __init__(self, message: str):
        super().__init__(message, stage=ProviderStage.REQUEST_BUILD)


class NetworkError(LLMProviderError):
    """Raised when the request cannot be sent or times out."""

    def __init__(self, message: str):
        super().__init__(message, stage=ProviderStage.NETWORK)


class APIError(LLMProviderError):
    """Raised when LLM API returns a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message, stage=ProviderStage.HTTP_STATUS, detail=body or message)
        self.status_code = status_code
        self.body = body


class InvalidResponseError(LLMProviderError):
    """Raised when LLM returns a response without usable content."""

    def __init__(
        self,
        message: str,
        raw_response: str | None = None,
        stage: ProviderStage = ProviderStage.DECODE,
    ):
        super().__init__(message, stage=stage)
        self.raw_response = raw_response
