"""End-to-end tests of the linter run with mocked GitHub and LLM APIs."""

import json

import httpx
import pytest

from semantic_linter import cli
from semantic_linter.core.config import Settings
from semantic_linter.github.client import GitHubClient
from tests.helpers import make_async_client, openai_answer

API = "https://api.github.com"

PR_FILES = [
    {"filename": "main.go", "patch": "PATCH-main"},
    {"filename": "util.go", "patch": "PATCH-util"},
    {"filename": "main_test.go", "patch": "PATCH-test"},
    {"filename": "README.md", "patch": "PATCH-readme"},
]


class FakeGitHub:
    """Mock GitHub API recording posted comments."""

    def __init__(self, files=PR_FILES, status_code=200):
        self.files = files
        self.status_code = status_code
        self.comments = []

    def __call__(self, request):
        if request.method == "GET":
            return httpx.Response(self.status_code, json=self.files)
        self.comments.append(json.loads(request.content)["body"])
        return httpx.Response(201, json={"id": len(self.comments)})


class FakeLLM:
    """Mock OpenAI-compatible endpoint answering per patch."""

    def __init__(self, answers):
        self.answers = answers
        self.prompts = []

    def __call__(self, request):
        prompt = json.loads(request.content)["messages"][0]["content"]
        self.prompts.append(prompt)
        for patch, (status, text) in self.answers.items():
            if prompt.endswith(patch):
                if status != 200:
                    return httpx.Response(status, text=text)
                return httpx.Response(200, json=openai_answer(text))
        raise AssertionError(f"unexpected prompt {prompt!r}")


async def _run(github, llm):
    github_client = GitHubClient(token="gh-token", client=make_async_client(github, base_url=API))
    return await cli.run(Settings(), github_client=github_client, llm_client=make_async_client(llm))


@pytest.mark.asyncio
async def test_failed_file_skipped_and_error_issue_blocks(github_env):
    github = FakeGitHub(files=PR_FILES[:2])
    llm = FakeLLM(
        {
            "PATCH-main": (500, "internal error"),
            "PATCH-util": (200, '```json\n{"issues": [{"type": "bug", "message": "nil deref"}]}\n```'),
        }
    )

    exit_code = await _run(github, llm)

    assert exit_code == cli.EXIT_FAILURE
    assert len(github.comments) == 1
    comment = github.comments[0]
    assert "### util.go" in comment
    assert "🔴 **bug**: nil deref" in comment
    assert "main.go" not in comment


@pytest.mark.asyncio
async def test_only_filtered_files_are_analyzed(github_env):
    github = FakeGitHub()
    llm = FakeLLM(
        {
            "PATCH-main": (200, '{"issues": [{"type": "style", "message": "long line"}]}'),
            "PATCH-util": (200, '{"issues": []}'),
        }
    )

    exit_code = await _run(github, llm)

    assert exit_code == cli.EXIT_OK
    assert llm.prompts == [
        "Rules:\nR1: no bugs\nCode:\nPATCH-main",
        "Rules:\nR1: no bugs\nCode:\nPATCH-util",
    ]
    assert "⚠️ **style**: long line" in github.comments[0]


@pytest.mark.asyncio
async def test_clean_run_still_posts_title(github_env):
    github = FakeGitHub(files=PR_FILES[:1])
    llm = FakeLLM({"PATCH-main": (200, '{"issues": []}')})

    exit_code = await _run(github, llm)

    assert exit_code == cli.EXIT_OK
    assert github.comments == ["## Semantic Linting Results\n\n"]


@pytest.mark.asyncio
async def test_dry_run_prints_instead_of_posting(github_env, monkeypatch, capsys):
    monkeypatch.setenv("INPUT_DRY-RUN", "true")
    github = FakeGitHub(files=PR_FILES[:1])
    llm = FakeLLM({"PATCH-main": (200, '{"issues": [{"type": "bug", "message": "x"}]}')})

    exit_code = await _run(github, llm)

    assert exit_code == cli.EXIT_FAILURE
    assert github.comments == []
    assert "🔴 **bug**: x" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_fetch_failure_is_fatal(github_env):
    github = FakeGitHub(status_code=404)

    with pytest.raises(ValueError, match="not found"):
        await _run(github, FakeLLM({}))


def test_main_returns_failure_on_missing_token(github_env, monkeypatch):
    monkeypatch.delenv("INPUT_GITHUB-TOKEN")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)

    assert cli.main([]) == cli.EXIT_FAILURE


def test_main_returns_failure_on_unsupported_provider(github_env, config_document):
    config_document["ai"]["provider"] = "llama"
    (github_env / "semantic-lint.config.json").write_text(json.dumps(config_document))

    assert cli.main([]) == cli.EXIT_FAILURE


def test_main_returns_failure_on_malformed_pattern(github_env, config_document, monkeypatch):
    config_document["includedFiles"] = ["[broken"]
    (github_env / "semantic-lint.config.json").write_text(json.dumps(config_document))

    real_run = cli.run

    async def fake_run(settings):
        return await real_run(
            settings,
            github_client=GitHubClient(
                token="t", client=make_async_client(FakeGitHub(), base_url=API)
            ),
            llm_client=make_async_client(FakeLLM({})),
        )

    monkeypatch.setattr(cli, "run", fake_run)

    assert cli.main([]) == cli.EXIT_FAILURE


def test_main_config_flag_overrides_environment(github_env, monkeypatch):
    seen = {}

    async def fake_run(settings):
        seen["config_path"] = settings.config_path
        seen["pr_number"] = settings.pr_number
        return cli.EXIT_OK

    monkeypatch.setattr(cli, "run", fake_run)

    assert cli.main(["--config", "custom.json", "--pr-number", "5"]) == cli.EXIT_OK
    assert seen == {"config_path": "custom.json", "pr_number": "5"}


@pytest.mark.asyncio
async def test_null_fields_in_answer_keep_blocking_issue(github_env):
    github = FakeGitHub(files=PR_FILES[:1])
    llm = FakeLLM(
        {
            "PATCH-main": (
                200,
                '{"issues": [{"type": "bug", "message": "nil deref"}, '
                '{"type": "style", "message": null}]}',
            ),
        }
    )

    exit_code = await _run(github, llm)

    assert exit_code == cli.EXIT_FAILURE
    assert "🔴 **bug**: nil deref" in github.comments[0]
