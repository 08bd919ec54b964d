"""OpenAI-compatible chat completions provider implementation."""

from typing import Any, Dict

from semantic_linter.llm.base import BaseLLMProvider
from semantic_linter.llm.errors import InvalidResponseError


class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT provider for code review.

    Works with any endpoint speaking the chat completions format.
    """

    provider_name = "openai"

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": prompt,
                },
            ],
        }

    def extract_text(self, data: Any) -> str:
        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices:
            raise self._no_content()

        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise InvalidResponseError(
                "Empty content in openai response", raw_response=str(data)
            )
        return content
