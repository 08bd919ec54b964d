"""Anthropic Claude provider implementation (messages API)."""

from typing import Any, Dict

from semantic_linter.llm.base import BaseLLMProvider
from semantic_linter.llm.errors import InvalidResponseError

MAX_TOKENS = 4096


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude provider for code review."""

    provider_name = "anthropic"

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": prompt,
                },
            ],
            "max_tokens": MAX_TOKENS,
        }

    def extract_text(self, data: Any) -> str:
        blocks = data.get("content") if isinstance(data, dict) else None
        if not isinstance(blocks, list) or not blocks:
            raise self._no_content()

        text = blocks[0].get("text") if isinstance(blocks[0], dict) else None
        if not isinstance(text, str):
            raise InvalidResponseError(
                "Empty content in anthropic response", raw_response=str(data)
            )
        return text
