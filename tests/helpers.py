"""Helpers for building mocked HTTP clients and provider payloads."""

import httpx


def make_async_client(handler, base_url: str = "") -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=base_url)


def gemini_answer(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def openai_answer(text: str) -> dict:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": text}}]}


def anthropic_answer(text: str) -> dict:
    return {"id": "msg_1", "content": [{"type": "text", "text": text}], "role": "assistant"}
