"""Global exception handlers — translate domain errors to the error envelope.

Every failure leaves the API as
``{"status": "error", "error": {"message", "code", "retryable"}}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from code_mentor.domain.exceptions import (
    AnalysisError,
    CodeMentorError,
    ConfigurationError,
    RemoteAPIError,
    ValidationError,
)
from code_mentor.interface.schemas import ErrorBody, ToolResponse

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[CodeMentorError], int]] = [
    (ValidationError, 422),
    (ConfigurationError, 409),
    (AnalysisError, 500),
]

_CODE_STATUS: dict[str, int] = {"UNKNOWN_TOOL": 404}


def status_for(exc: CodeMentorError) -> int:
    if isinstance(exc, RemoteAPIError):
        if exc.status_code in (401, 403, 404, 429):
            return exc.status_code
        return 502
    for exc_type, status in _EXCEPTION_STATUS:
        if isinstance(exc, exc_type):
            return status
    return _CODE_STATUS.get(exc.code, 500)


def error_json(status_code: int, message: str, code: str, retryable: bool = False) -> JSONResponse:
    body = ToolResponse(
        status="error",
        error=ErrorBody(message=message, code=code, retryable=retryable),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    @app.exception_handler(CodeMentorError)
    async def domain_handler(request: Request, exc: CodeMentorError) -> JSONResponse:
        status = status_for(exc)
        log = logger.error if status >= 500 else logger.warning
        log("%s (%s): %s", type(exc).__name__, exc.code, exc.message)
        body = exc.to_dict()
        return error_json(status, body["message"], body["code"], body["retryable"])

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return error_json(422, "; ".join(messages), "VALIDATION_ERROR")

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return error_json(500, f"Unexpected error: {exc}", "UNEXPECTED_ERROR")
