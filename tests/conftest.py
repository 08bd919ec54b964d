"""Shared fixtures."""

import json

import pytest

from semantic_linter.core.config import LintConfig
from semantic_linter.llm.models import ChangedFile

CONFIG_DOCUMENT = {
    "includedFiles": ["*.go"],
    "excludedFiles": ["*_test.go"],
    "ai": {
        "provider": "openai",
        "promptTemplate": "Rules:\n{rules}\nCode:\n{code}",
        "openai": {
            "apiEndpoint": "https://llm.example.com/v1/chat/completions",
            "model": "gpt-test",
            "headers": {"Authorization": "Bearer {{AI_API_KEY}}"},
        },
    },
    "severity": {"error": ["bug"], "warning": ["style"]},
}


@pytest.fixture
def config_document() -> dict:
    return json.loads(json.dumps(CONFIG_DOCUMENT))


@pytest.fixture
def lint_config(config_document) -> LintConfig:
    return LintConfig.model_validate(config_document)


@pytest.fixture
def changed_files() -> list:
    return [
        ChangedFile(filename="main.go", patch="@@ -1 +1 @@\n-a\n+b"),
        ChangedFile(filename="main_test.go", patch="@@ -1 +1 @@\n-c\n+d"),
        ChangedFile(filename="README.md", patch="@@ -1 +1 @@\n-e\n+f"),
    ]


@pytest.fixture
def github_env(tmp_path, monkeypatch, config_document):
    """A GitHub Actions-like environment with config, rules and event payload on disk."""
    config_path = tmp_path / "semantic-lint.config.json"
    config_path.write_text(json.dumps(config_document))
    rules_path = tmp_path / "rules.md"
    rules_path.write_text("R1: no bugs")
    event_path = tmp_path / "event.json"
    event_path.write_text(json.dumps({"pull_request": {"number": 7}}))

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("INPUT_GITHUB-TOKEN", "gh-token")
    monkeypatch.setenv("INPUT_AI-API-KEY", "ai-key")
    monkeypatch.setenv("INPUT_CONFIG-PATH", str(config_path))
    monkeypatch.setenv("INPUT_RULES-PATH", str(rules_path))
    monkeypatch.delenv("INPUT_PR-NUMBER", raising=False)
    monkeypatch.delenv("INPUT_DRY-RUN", raising=False)
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_path))
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo/widgets")
    return tmp_path
