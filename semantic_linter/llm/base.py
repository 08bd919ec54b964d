"""Base abstract class for LLM providers."""

import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from semantic_linter.core.config import API_KEY_PLACEHOLDER, ProviderConfig
from semantic_linter.core.logging import get_logger
from semantic_linter.llm.errors import (
    APIError,
    InvalidResponseError,
    NetworkError,
    RequestBuildError,
)
from semantic_linter.llm.models import AnalysisResult
from semantic_linter.llm.parser import parse_analysis_result

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 60.0


def substitute_api_key(template: str, api_key: str) -> str:
    """Replace every credential placeholder in a header value or URL."""
    return template.replace(API_KEY_PLACEHOLDER, api_key)


def render_headers(headers: Dict[str, str], api_key: str) -> Dict[str, str]:
    """Render configured header templates with the credential filled in."""
    return {key: substitute_api_key(value, api_key) for key, value in headers.items()}


class BaseLLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    Subclasses describe one wire protocol: how to build the request body
    and where the answer text lives in the response. Sending, status
    handling and parsing of the answer are shared.
    """

    provider_name = "llm"

    def __init__(
        self,
        config: ProviderConfig,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize LLM provider.

        Args:
            config: Endpoint, model and header templates for this backend
            client: Optional HTTP client to use instead of creating one
            timeout: Request timeout in seconds for an owned client
        """
        self.config = config
        self.model = config.model
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    @abstractmethod
    def build_payload(self, prompt: str) -> Dict[str, Any]:
        """Build the JSON request body for a prompt."""
        pass

    @abstractmethod
    def extract_text(self, data: Any) -> str:
        """
        Pull the answer text out of a decoded response body.

        Raises:
            InvalidResponseError: If the response carries no answer text
        """
        pass

    def build_url(self, api_key: str) -> str:
        """Return the endpoint URL for a call."""
        return self.config.api_endpoint

    def build_request(self, prompt: str, api_key: str) -> httpx.Request:
        """
        Build the outbound HTTP request.

        Raises:
            RequestBuildError: If the URL, headers or body are invalid
        """
        try:
            return self.client.build_request(
                "POST",
                self.build_url(api_key),
                headers=render_headers(self.config.headers, api_key),
                json=self.build_payload(prompt),
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise RequestBuildError(f"failed to create request: {e}") from e

    async def analyze(self, patch: str, prompt: str, api_key: str) -> AnalysisResult:
        """
        Send the prompt to the backend and parse its answer.

        Args:
            patch: Unified diff the prompt was built from
            prompt: Fully rendered prompt
            api_key: Credential substituted into the header templates

        Returns:
            AnalysisResult with the reported issues

        Raises:
            RequestBuildError: If the request cannot be built
            NetworkError: If sending fails or times out
            APIError: If the API returns a non-2xx status
            InvalidResponseError: If the body has no answer or it cannot be parsed
        """
        request = self.build_request(prompt, api_key)

        logger.info(
            f"Calling {self.provider_name} API with model {self.model}, "
            f"patch length: {len(patch)} chars, prompt length: {len(prompt)} chars"
        )

        start_time = time.time()
        try:
            response = await self.client.send(request)
        except httpx.RequestError as e:
            raise NetworkError(f"failed to send request: {e}") from e

        logger.info(
            f"{self.provider_name} API call completed: status {response.status_code}, "
            f"time: {time.time() - start_time:.2f}s"
        )

        if not response.is_success:
            raise APIError(
                f"API request failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"failed to decode {self.provider_name} response: {e}",
                raw_response=response.text,
            ) from e

        answer = self.extract_text(data)
        return parse_analysis_result(answer, self.provider_name)

    def _no_content(self) -> InvalidResponseError:
        return InvalidResponseError(f"no content found in {self.provider_name} response")

    async def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

