"""Data models for LLM analysis."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ChangedFile(BaseModel):
    """A file touched by the pull request, with its unified diff."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., description="Path of the file in the repository")
    patch: str = Field(..., description="Unified diff of the change")


class Issue(BaseModel):
    """A single finding reported by the LLM."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field(default="", description="Issue label, matched against severity sets")
    message: str = Field(default="", description="What is wrong")
    suggestion: Optional[str] = Field(default=None, description="Optional proposed fix")

    @field_validator("type", "message", mode="before")
    @classmethod
    def _null_text(cls, value):
        return "" if value is None else value


class AnalysisResult(BaseModel):
    """Normalized output of every provider."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "issues": [
                    {
                        "type": "naming",
                        "message": "bad name",
                        "suggestion": "rename to camelCase",
                    }
                ]
            }
        },
    )

    issues: List[Issue] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _null_document(cls, data):
        # a bare null answer means nothing was found
        return {} if data is None else data

    @field_validator("issues", mode="before")
    @classmethod
    def _null_issues(cls, value):
        if value is None:
            return []
        if isinstance(value, list):
            return [{} if item is None else item for item in value]
        return value


class FileAnalysisResult(BaseModel):
    """Issues found in one file."""

    filename: str
    issues: List[Issue] = Field(default_factory=list)
