"""Domain exception hierarchy.

Every error carries a stable ``code`` and a ``retryable`` flag fixed at
construction time.  Inner layers raise these; the tool dispatcher turns them
into the ``{"message", "code", "retryable"}`` failure envelope.
"""

from __future__ import annotations

from typing import Any

from code_mentor.domain.entities import RateLimitInfo


class CodeMentorError(Exception):
    """Base exception for the entire application."""

    def __init__(
        self,
        message: str,
        code: str = "UNEXPECTED_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details: dict[str, Any] = dict(details or {})
        self.retryable = retryable
        self.context: str | None = None

    def add_context(self, context: str) -> None:
        """Record the operation that surfaced this error."""
        self.context = context
        self.details.setdefault("operation", context)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "retryable": self.retryable,
        }


# ── Input validation ────────────────────────────────────────────────────────


class ValidationError(CodeMentorError):
    """Bad input shape — never retried."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", details, retryable=False)


# ── Remote host errors ──────────────────────────────────────────────────────


class RemoteAPIError(CodeMentorError):
    """The repository host answered with an error, or could not be reached.

    Retryable iff the status is 5xx or 429.  Without a status (network-level
    failure) the caller decides via ``retryable``.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
        rate_limit: RateLimitInfo | None = None,
        retryable: bool | None = None,
    ) -> None:
        if retryable is None:
            retryable = status_code is not None and (
                status_code >= 500 or status_code == 429
            )
        super().__init__(message, "GITHUB_API_ERROR", details, retryable)
        self.status_code = status_code
        self.rate_limit = rate_limit

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.status_code is not None:
            data["statusCode"] = self.status_code
        if self.rate_limit is not None:
            data["rateLimit"] = self.rate_limit.to_dict()
        return data


# ── Configuration ───────────────────────────────────────────────────────────


class ConfigurationError(CodeMentorError):
    """Invalid or missing configuration — never retried."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "CONFIGURATION_ERROR", details, retryable=False)


# ── Analysis ────────────────────────────────────────────────────────────────


class AnalysisError(CodeMentorError):
    """A single rule or file failed to analyse."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message, "ANALYSIS_ERROR", details, retryable)
        self.file_path = file_path
