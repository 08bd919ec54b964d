"""LLM-backed semantic linting for pull requests."""

__version__ = "0.1.0"
