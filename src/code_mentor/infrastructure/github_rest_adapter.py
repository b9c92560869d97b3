"""GitHub REST API adapter — implements the RepositoryHost port."""

from __future__ import annotations

import base64
import logging
import time
from typing import Any

import httpx

from code_mentor.domain.entities import (
    EntryType,
    FileContent,
    FileEntry,
    RateLimitInfo,
    RepoInfo,
)
from code_mentor.domain.exceptions import RemoteAPIError, ValidationError

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"
USER_AGENT = "code-mentor/2.1.0"


def _int_header(headers: httpx.Headers, name: str) -> int:
    try:
        return int(headers.get(name, "0"))
    except ValueError:
        return 0


def rate_limit_from_headers(headers: httpx.Headers) -> RateLimitInfo | None:
    if "x-ratelimit-remaining" not in headers:
        return None
    return RateLimitInfo(
        remaining=_int_header(headers, "x-ratelimit-remaining"),
        reset_epoch=_int_header(headers, "x-ratelimit-reset"),
        limit=_int_header(headers, "x-ratelimit-limit"),
    )


class GitHubRestAdapter:
    """Concrete RepositoryHost backed by the GitHub v3 REST API.

    Transport failures (``httpx.TransportError``) are not translated here;
    the retry executor decides what to do with them.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        base_url: str = GITHUB_API,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    async def get_repository(self, owner: str, repo: str) -> RepoInfo:
        """GET /repos/{owner}/{repo} → RepoInfo."""
        data = await self._get_json(f"/repos/{owner}/{repo}", f"{owner}/{repo}")
        return RepoInfo(
            name=data.get("name", repo),
            full_name=data.get("full_name", f"{owner}/{repo}"),
            default_branch=data.get("default_branch") or "main",
            description=data.get("description") or "",
            language=data.get("language") or "Unknown",
            visibility=data.get("visibility") or ("private" if data.get("private") else "public"),
            is_private=bool(data.get("private", False)),
            stars=int(data.get("stargazers_count", 0)),
            forks=int(data.get("forks_count", 0)),
            topics=tuple(data.get("topics") or ()),
        )

    async def list_directory(
        self, owner: str, repo: str, path: str, ref: str
    ) -> list[FileEntry]:
        """GET /repos/{owner}/{repo}/contents/{path}?ref= → [FileEntry]."""
        data = await self._get_contents(owner, repo, path, ref)
        items = data if isinstance(data, list) else [data]
        return [
            FileEntry(
                name=item["name"],
                path=item["path"],
                type=EntryType.DIR if item.get("type") == "dir" else EntryType.FILE,
                size=item.get("size") or 0,
                sha=item.get("sha", ""),
            )
            for item in items
        ]

    async def get_file_content(
        self, owner: str, repo: str, path: str, ref: str
    ) -> FileContent:
        """Fetch one file through the contents API and decode it."""
        data = await self._get_contents(owner, repo, path, ref)
        if isinstance(data, list) or data.get("type") != "file":
            raise ValidationError(f"Path {path} is not a file", {"path": path})

        raw = data.get("content") or ""
        if data.get("encoding") == "base64":
            content = base64.b64decode(raw).decode("utf-8", errors="replace")
        else:
            content = raw

        return FileContent(
            name=data.get("name", path.rsplit("/", 1)[-1]),
            path=data.get("path", path),
            content=content,
            size=data.get("size") or len(content),
            sha=data.get("sha", ""),
        )

    async def get_rate_limit(self) -> RateLimitInfo:
        """GET /rate_limit → core counters."""
        data = await self._get_json("/rate_limit", "rate_limit")
        core = data.get("resources", {}).get("core", {})
        return RateLimitInfo(
            remaining=int(core.get("remaining", 0)),
            reset_epoch=int(core.get("reset", 0)),
            limit=int(core.get("limit", 0)),
        )

    # ── HTTP helpers ────────────────────────────────────────────────────

    async def _get_contents(self, owner: str, repo: str, path: str, ref: str) -> Any:
        return await self._get_json(
            f"/repos/{owner}/{repo}/contents/{path}",
            f"{owner}/{repo}:{path}",
            params={"ref": ref},
        )

    async def _get_json(
        self,
        endpoint: str,
        context: str,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._base_url}{endpoint}"
        started = time.perf_counter()
        resp = await self._client.get(url, headers=self._headers, params=params)
        logger.debug(
            "GET %s -> %d (%.0f ms)",
            endpoint,
            resp.status_code,
            (time.perf_counter() - started) * 1000,
        )

        if resp.status_code == 200:
            return resp.json()

        status = resp.status_code
        if status == 404:
            message = f"Resource not found: {context}"
        elif status == 403:
            message = f"Access denied or rate limit exceeded: {context}"
        elif status == 401:
            message = f"Authentication failed: {context}"
        else:
            message = f"GitHub API returned HTTP {status} for {context}"

        raise RemoteAPIError(
            message,
            status_code=status,
            details={"endpoint": endpoint},
            rate_limit=rate_limit_from_headers(resp.headers),
        )
