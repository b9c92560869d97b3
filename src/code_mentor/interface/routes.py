"""API routes — thin controllers that delegate to the tool registry."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from code_mentor.interface.dependencies import get_tools
from code_mentor.interface.tools import catalogue, invoke
from code_mentor.services.code_mentor_tools import CodeMentorTools

router = APIRouter()


@router.get("/tools")
async def list_tools() -> dict[str, Any]:
    """Describe every tool and its argument schema."""
    return {"tools": catalogue()}


@router.post(
    "/tools/{name}",
    responses={
        404: {"description": "Unknown tool or remote resource not found"},
        409: {"description": "GitHub access not configured"},
        422: {"description": "Invalid arguments"},
        429: {"description": "GitHub API rate limit exceeded"},
        502: {"description": "GitHub API error"},
    },
)
async def call_tool(
    name: str,
    arguments: dict[str, Any] = Body(default_factory=dict),
    tools: CodeMentorTools = Depends(get_tools),
) -> dict[str, Any]:
    """Invoke one tool with a flat JSON argument object."""
    result = await invoke(tools, name, arguments)
    return {"status": "ok", "result": result}
