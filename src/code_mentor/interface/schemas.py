"""Pydantic argument models for the tool surface."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from code_mentor.services.architecture_advisor import ProjectType

_NAME = r"^[A-Za-z0-9\-_.]+$"
_BRANCH = r"^[A-Za-z0-9\-_./]+$"
_PATH = r"^[A-Za-z0-9\-_./@\[\]() ]*$"


class ToolArguments(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class ConfigureAccessArgs(ToolArguments):
    """Arguments for ``configure-access``."""

    token: str = Field(min_length=1, description="GitHub personal access token (ghp_... or github_pat_...)")


class RepositoryArgs(ToolArguments):
    owner: str = Field(min_length=1, max_length=100, pattern=_NAME, description="Repository owner (user or organisation)")
    repo: str = Field(min_length=1, max_length=100, pattern=_NAME, description="Repository name")


class ListSourceFilesArgs(RepositoryArgs):
    """Arguments for ``list-source-files``."""

    path: str = Field(default="", max_length=500, pattern=_PATH, description="Directory to start from")


class AnalyzeFileArgs(RepositoryArgs):
    """Arguments for ``analyze-file``."""

    path: str = Field(min_length=1, max_length=500, pattern=_PATH, description="File path inside the repository")
    branch: str = Field(default="main", max_length=100, pattern=_BRANCH)


class AnalyzeRepositoryArgs(RepositoryArgs):
    """Arguments for ``analyze-repository``."""

    branch: str = Field(
        default="main",
        max_length=100,
        pattern=_BRANCH,
        description="Branch to analyse; 'main' means the repository's default branch",
    )


class SuggestArchitectureArgs(RepositoryArgs):
    """Arguments for ``suggest-architecture``."""

    model_config = ConfigDict(populate_by_name=True)

    project_type: ProjectType = Field(default=ProjectType.WEB, alias="projectType")


class ExplainPatternArgs(ToolArguments):
    """Arguments for ``explain-pattern``."""

    model_config = ConfigDict(populate_by_name=True)

    pattern_name: str = Field(min_length=1, max_length=100, alias="patternName")


class ErrorBody(BaseModel):
    message: str
    code: str
    retryable: bool


class ToolResponse(BaseModel):
    """Envelope returned by every tool invocation."""

    status: Literal["ok", "error"]
    result: Any | None = None
    error: ErrorBody | None = None
