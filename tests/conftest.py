"""Pytest configuration and fixtures."""

from __future__ import annotations

import base64
from typing import Any

import httpx
import pytest

from code_mentor.infrastructure.config import Settings
from code_mentor.infrastructure.retry import RetryExecutor

VALID_TOKEN = "ghp_" + "a1B2c3D4e5" * 4

# Sample sources for analysis tests

SAMPLE_BLAND = """\
export const greeting = (name) => `Hi ${name}`;
"""

SAMPLE_SRP_CLASS = """\
class UserService {
  load(id) {
    console.log(id);
    return fetch(`/api/users/${id}`);
  }
}
"""

SAMPLE_HOOK = """\
export function useUsers() {
  return [];
}
"""


class FakeGitHub:
    """Routes GitHub REST paths to canned JSON answers through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, Any]] = {}
        self.calls: list[str] = []
        self.rate_limit_headers = {
            "x-ratelimit-remaining": "4999",
            "x-ratelimit-reset": "1700000000",
            "x-ratelimit-limit": "5000",
        }

    def add(self, path: str, body: Any, status: int = 200) -> None:
        self.routes[path.rstrip("/")] = (status, body)

    def repo(
        self,
        owner: str = "acme",
        repo: str = "shop",
        default_branch: str = "main",
        language: str = "TypeScript",
    ) -> None:
        self.add(
            f"/repos/{owner}/{repo}",
            {
                "name": repo,
                "full_name": f"{owner}/{repo}",
                "default_branch": default_branch,
                "description": "Demo shop",
                "language": language,
                "private": False,
                "stargazers_count": 3,
                "forks_count": 1,
                "topics": ["react"],
            },
        )

    def directory(self, path: str, entries: list[tuple[str, str]], owner="acme", repo="shop") -> None:
        """``entries`` are ``(name, "file" | "dir")`` pairs inside ``path``."""
        prefix = f"{path}/" if path else ""
        self.add(
            f"/repos/{owner}/{repo}/contents/{path}",
            [
                {"name": name, "path": prefix + name, "type": kind, "size": 10, "sha": "abc"}
                for name, kind in entries
            ],
        )

    def file(self, path: str, content: str, owner="acme", repo="shop") -> None:
        self.add(
            f"/repos/{owner}/{repo}/contents/{path}",
            {
                "name": path.rsplit("/", 1)[-1],
                "path": path,
                "type": "file",
                "size": len(content),
                "sha": "def",
                "encoding": "base64",
                "content": base64.b64encode(content.encode()).decode(),
            },
        )

    def rate_limit(self, remaining: int = 4999, limit: int = 5000, reset: int = 1700000000) -> None:
        self.add(
            "/rate_limit",
            {"resources": {"core": {"remaining": remaining, "limit": limit, "reset": reset}}},
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.rstrip("/")
        self.calls.append(path)
        status, body = self.routes.get(path, (404, {"message": "Not Found"}))
        return httpx.Response(status, json=body, headers=self.rate_limit_headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def retry(sleeps) -> RetryExecutor:
    """Retry executor that records its backoff delays instead of sleeping."""

    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    return RetryExecutor(retries=3, base_delay=1.0, sleep=fake_sleep)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        github_token=None,
        retry_count=0,
        retry_base_delay_seconds=0,
        cache_enabled=True,
    )
