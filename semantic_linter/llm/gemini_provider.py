"""Google Gemini provider implementation (REST generateContent)."""

from typing import Any, Dict

from semantic_linter.llm.base import BaseLLMProvider, substitute_api_key
from semantic_linter.llm.errors import InvalidResponseError


class GeminiProvider(BaseLLMProvider):
    """Gemini provider for code review.

    The credential placeholder may appear in the endpoint (``?key=``) or in
    a header; ``{model}`` in the endpoint is replaced with the model id.
    """

    provider_name = "gemini"

    def build_url(self, api_key: str) -> str:
        url = self.config.api_endpoint.replace("{model}", self.model)
        return substitute_api_key(url, api_key)

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    def extract_text(self, data: Any) -> str:
        try:
            part = data["candidates"][0]["content"]["parts"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise self._no_content() from e

        text = part.get("text") if isinstance(part, dict) else None
        if not isinstance(text, str):
            raise InvalidResponseError(
                f"unexpected part type in gemini response: {part!r}",
                raw_response=str(data),
            )
        return text
