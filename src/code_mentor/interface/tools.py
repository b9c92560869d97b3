"""Tool registry — names, argument models and handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from pydantic import ValidationError as PydanticValidationError

from code_mentor.domain.exceptions import CodeMentorError, ValidationError
from code_mentor.interface.schemas import (
    AnalyzeFileArgs,
    AnalyzeRepositoryArgs,
    ConfigureAccessArgs,
    ExplainPatternArgs,
    ListSourceFilesArgs,
    SuggestArchitectureArgs,
    ToolArguments,
)
from code_mentor.services.code_mentor_tools import CodeMentorTools

logger = logging.getLogger(__name__)

Handler = Callable[[CodeMentorTools, Any], Awaitable[dict[str, Any]]]


@dataclass(frozen=True, slots=True)
class ToolSpec:
    name: str
    description: str
    arguments: type[ToolArguments]
    handler: Handler

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.arguments.model_json_schema(by_alias=True),
        }


TOOLS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            "configure-access",
            "Configure the GitHub access token used by every other tool",
            ConfigureAccessArgs,
            lambda t, a: t.configure_access(a.token),
        ),
        ToolSpec(
            "list-source-files",
            "List the JavaScript/TypeScript source files of a repository, grouped by directory",
            ListSourceFilesArgs,
            lambda t, a: t.list_source_files(a.owner, a.repo, a.path),
        ),
        ToolSpec(
            "analyze-file",
            "Analyse one file against Clean Architecture, SOLID and design pattern rules",
            AnalyzeFileArgs,
            lambda t, a: t.analyze_file(a.owner, a.repo, a.path, a.branch),
        ),
        ToolSpec(
            "analyze-repository",
            "Analyse the most important files of a repository and fold them into one report",
            AnalyzeRepositoryArgs,
            lambda t, a: t.analyze_repository(a.owner, a.repo, a.branch),
        ),
        ToolSpec(
            "suggest-architecture",
            "Suggest a Clean Architecture layout for the repository's project type",
            SuggestArchitectureArgs,
            lambda t, a: t.suggest_architecture(a.owner, a.repo, a.project_type),
        ),
        ToolSpec(
            "explain-pattern",
            "Explain a design pattern with a practical example",
            ExplainPatternArgs,
            lambda t, a: t.explain_pattern(a.pattern_name),
        ),
    )
}


class UnknownToolError(CodeMentorError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f"Unknown tool '{name}'. Available tools: {', '.join(TOOLS)}",
            "UNKNOWN_TOOL",
            details={"tool": name},
        )


def catalogue() -> list[dict[str, Any]]:
    return [spec.describe() for spec in TOOLS.values()]


async def invoke(tools: CodeMentorTools, name: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Validate ``payload`` against the tool's model and run the handler."""
    spec = TOOLS.get(name)
    if spec is None:
        raise UnknownToolError(name)

    try:
        args = spec.arguments.model_validate(payload)
    except PydanticValidationError as exc:
        problems = [
            f"{'.'.join(str(p) for p in err.get('loc', ())) or 'arguments'}: {err.get('msg')}"
            for err in exc.errors()
        ]
        raise ValidationError(
            f"Invalid arguments for {name}: {'; '.join(problems)}",
            details={"errors": problems},
        ) from exc

    logger.info("Executing tool %s", name)
    return await spec.handler(tools, args)
