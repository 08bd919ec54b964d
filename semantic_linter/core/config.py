"""Application configuration."""

import json
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

API_KEY_PLACEHOLDER = "{{AI_API_KEY}}"

DEFAULT_CONFIG_PATH = ".github/semantic-lint.config.json"
DEFAULT_RULES_PATH = ".github/SemanticLintingRules.md"

DEFAULT_PROMPT_TEMPLATE = (
    "You are a code reviewer enforcing the following rules:\n"
    "{rules}\n\n"
    "Review this diff and report every rule violation:\n"
    "{code}\n\n"
    'Respond only with JSON of the form {"issues": [{"type": "...", '
    '"message": "...", "suggestion": "..."}]}. '
    'Use {"issues": []} when nothing is wrong.'
)


class ConfigurationError(Exception):
    """Raised when the run cannot be set up (credentials, config, rules, PR)."""

    pass


class _ConfigModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class ProviderConfig(_ConfigModel):
    """Endpoint, model and header templates of one LLM backend."""

    api_endpoint: str = Field(default="", alias="apiEndpoint")
    model: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)

    @field_validator("headers", mode="before")
    @classmethod
    def _null_headers(cls, value):
        return {} if value is None else value


class GeminiConfig(ProviderConfig):
    """Google Gemini REST API (the key may go in the URL or a header)."""

    api_endpoint: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
        alias="apiEndpoint",
    )
    model: str = "gemini-2.0-flash"
    headers: Dict[str, str] = Field(
        default_factory=lambda: {"x-goog-api-key": API_KEY_PLACEHOLDER}
    )


class OpenAIConfig(ProviderConfig):
    """OpenAI-compatible chat completions API."""

    api_endpoint: str = Field(
        default="https://api.openai.com/v1/chat/completions", alias="apiEndpoint"
    )
    model: str = "gpt-4o"
    headers: Dict[str, str] = Field(
        default_factory=lambda: {"Authorization": f"Bearer {API_KEY_PLACEHOLDER}"}
    )


class AnthropicConfig(ProviderConfig):
    """Anthropic messages API."""

    api_endpoint: str = Field(
        default="https://api.anthropic.com/v1/messages", alias="apiEndpoint"
    )
    model: str = "claude-sonnet-4-5-20250929"
    headers: Dict[str, str] = Field(
        default_factory=lambda: {
            "x-api-key": API_KEY_PLACEHOLDER,
            "anthropic-version": "2023-06-01",
        }
    )


class AIConfig(_ConfigModel):
    """Provider selection and prompt template."""

    provider: str = ""
    prompt_template: str = Field(default=DEFAULT_PROMPT_TEMPLATE, alias="promptTemplate")
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    anthropic: AnthropicConfig = Field(default_factory=AnthropicConfig)


class SeverityConfig(_ConfigModel):
    """Issue-type labels grouped by severity."""

    error: List[str] = Field(default_factory=list)
    warning: List[str] = Field(default_factory=list)

    @field_validator("error", "warning", mode="before")
    @classmethod
    def _null_labels(cls, value):
        return [] if value is None else value

    @model_validator(mode="after")
    def _check_disjoint(self) -> "SeverityConfig":
        overlap = set(self.error) & set(self.warning)
        if overlap:
            raise ValueError(
                f"Issue types listed as both error and warning: {', '.join(sorted(overlap))}"
            )
        return self

    def is_error(self, issue_type: str) -> bool:
        """Return True if the issue type blocks the pull request."""
        return issue_type in self.error


class LintConfig(_ConfigModel):
    """The lint configuration document (camelCase keys)."""

    included_files: List[str] = Field(default_factory=list, alias="includedFiles")
    excluded_files: List[str] = Field(default_factory=list, alias="excludedFiles")
    ai: AIConfig = Field(default_factory=AIConfig)
    severity: SeverityConfig = Field(default_factory=SeverityConfig)

    @field_validator("included_files", "excluded_files", mode="before")
    @classmethod
    def _null_patterns(cls, value):
        return [] if value is None else value


class Settings(BaseSettings):
    """Run settings, read from the GitHub Actions environment."""

    # Credentials
    github_token: str = Field(
        default="", validation_alias=AliasChoices("INPUT_GITHUB-TOKEN", "GITHUB_TOKEN")
    )
    ai_api_key: str = Field(default="", validation_alias="INPUT_AI-API-KEY")

    # Inputs
    config_path: str = Field(default=DEFAULT_CONFIG_PATH, validation_alias="INPUT_CONFIG-PATH")
    rules_path: str = Field(default=DEFAULT_RULES_PATH, validation_alias="INPUT_RULES-PATH")
    pr_number: str = Field(default="", validation_alias="INPUT_PR-NUMBER")
    dry_run: bool = Field(default=False, validation_alias="INPUT_DRY-RUN")
    request_timeout: float = Field(default=60.0, validation_alias="INPUT_REQUEST-TIMEOUT")

    # GitHub Actions runtime
    github_event_path: str = Field(default="", validation_alias="GITHUB_EVENT_PATH")
    github_repository: str = Field(default="", validation_alias="GITHUB_REPOSITORY")
    github_api_url: str = Field(default="https://api.github.com", validation_alias="GITHUB_API_URL")

    # App Settings
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    def require_credentials(self) -> None:
        """
        Check that both credentials are present.

        Raises:
            ConfigurationError: If the GitHub token or the AI API key is missing
        """
        if not self.github_token:
            raise ConfigurationError("GitHub token is not set.")
        if not self.ai_api_key:
            raise ConfigurationError("AI API key is not set.")


def load_lint_config(path: str) -> LintConfig:
    """
    Load the lint configuration document.

    Args:
        path: Path to the JSON configuration file

    Returns:
        Parsed, immutable LintConfig

    Raises:
        ConfigurationError: If the file is unreadable or invalid
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Error loading config {path}: {e}") from e

    try:
        return LintConfig.model_validate_json(content)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {path}: {e}") from e


def read_rules(path: str) -> str:
    """Read the rules document the LLM is asked to enforce."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Error reading rules file {path}: {e}") from e


def resolve_pr_number(settings: Settings) -> int:
    """
    Get the pull request number.

    An explicit ``INPUT_PR-NUMBER`` wins when it is an integer; otherwise the
    number is read from ``pull_request.number`` in the event payload.

    Raises:
        ConfigurationError: If no pull request number can be found
    """
    if settings.pr_number:
        try:
            return int(settings.pr_number)
        except ValueError:
            pass

    if not settings.github_event_path:
        raise ConfigurationError("GITHUB_EVENT_PATH is not set")

    try:
        with open(settings.github_event_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Failed to read event file: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed to parse event payload: {e}") from e

    pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
    number = pull_request.get("number") if isinstance(pull_request, dict) else None
    if not isinstance(number, int) or number == 0:
        raise ConfigurationError("Pull request number not found in event payload")

    return number


def resolve_repository(settings: Settings) -> Tuple[str, str]:
    """Split ``GITHUB_REPOSITORY`` into (owner, repo)."""
    owner, _, repo = settings.github_repository.partition("/")
    if not owner or not repo or "/" in repo:
        raise ConfigurationError(
            f"Invalid GITHUB_REPOSITORY: {settings.github_repository!r} (expected owner/repo)"
        )
    return owner, repo


def load_settings(**overrides: Optional[object]) -> Settings:
    """Build settings from the environment, applying non-None overrides."""
    values = {key: value for key, value in overrides.items() if value is not None}
    return Settings(**values)
