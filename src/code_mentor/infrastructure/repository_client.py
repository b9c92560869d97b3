"""Cache-first, retrying facade over a RepositoryHost plus source discovery."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Iterable, TypeVar

import httpx

from code_mentor.domain.entities import (
    EntryType,
    FileContent,
    FileEntry,
    RateLimitInfo,
    RepoInfo,
    SourceInventory,
)
from code_mentor.domain.exceptions import ConfigurationError, RemoteAPIError
from code_mentor.domain.ports.repository_host import RepositoryHost
from code_mentor.domain.result import Failure, Result, Success
from code_mentor.infrastructure.cache import CacheKeys, MemoryCache
from code_mentor.infrastructure.config import DEFAULT_IGNORED_DIRECTORIES
from code_mentor.infrastructure.github_rest_adapter import GitHubRestAdapter
from code_mentor.infrastructure.retry import RetryExecutor

logger = logging.getLogger(__name__)

T = TypeVar("T")

SOURCE_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")
TEST_MARKERS: tuple[str, ...] = (".test.", ".spec.")


def is_source_file(name: str) -> bool:
    return name.endswith(SOURCE_EXTENSIONS)


def is_test_file(name: str) -> bool:
    return any(marker in name for marker in TEST_MARKERS)


class ResilientRepositoryClient:
    """Wraps the three remote reads with caching and retry.

    Every read first checks the cache; on a miss the call goes through the
    retry executor and a successful result is stored for ``cache_ttl``
    seconds.
    """

    def __init__(
        self,
        host: RepositoryHost,
        cache: MemoryCache,
        retry: RetryExecutor,
        *,
        cache_enabled: bool = True,
        cache_ttl: float = 300.0,
        ignored_directories: Iterable[str] = DEFAULT_IGNORED_DIRECTORIES,
        max_depth: int = 10,
        max_files: int = 500,
    ) -> None:
        self._host = host
        self._cache = cache
        self._retry = retry
        self._cache_enabled = cache_enabled
        self._cache_ttl = cache_ttl
        self._ignored = frozenset(ignored_directories)
        self._max_depth = max_depth
        self._max_files = max_files

    # ── Cached reads ────────────────────────────────────────────────────

    async def get_repository(self, owner: str, repo: str) -> RepoInfo:
        return await self._cached(
            CacheKeys.repo_info(owner, repo),
            lambda: self._host.get_repository(owner, repo),
            f"get_repository({owner}/{repo})",
        )

    async def list_files(
        self, owner: str, repo: str, path: str = "", branch: str = "main"
    ) -> list[FileEntry]:
        return await self._cached(
            CacheKeys.file_list(owner, repo, path, branch),
            lambda: self._host.list_directory(owner, repo, path, branch),
            f"list_files({owner}/{repo}:{path})",
        )

    async def get_file_content(
        self, owner: str, repo: str, path: str, branch: str = "main"
    ) -> FileContent:
        return await self._cached(
            CacheKeys.file_content(owner, repo, path, branch),
            lambda: self._host.get_file_content(owner, repo, path, branch),
            f"get_file_content({owner}/{repo}:{path})",
        )

    async def find_file(
        self, owner: str, repo: str, path: str, branch: str = "main"
    ) -> Result[FileContent]:
        """Like :meth:`get_file_content`, but a missing file is a Failure."""
        try:
            return Success(await self.get_file_content(owner, repo, path, branch))
        except RemoteAPIError as exc:
            if exc.is_not_found:
                return Failure(exc)
            raise

    async def get_rate_limit(self) -> RateLimitInfo:
        return await self._retry.run(self._host.get_rate_limit, "get_rate_limit")

    # ── Discovery ───────────────────────────────────────────────────────

    async def list_source_files(
        self, owner: str, repo: str, base_path: str = "", branch: str = "main"
    ) -> SourceInventory:
        """Depth-first walk collecting ``.js/.jsx/.ts/.tsx`` files.

        Ignored directory names are never entered, test files are reported
        separately, directories deeper than ``max_depth`` are skipped and the
        walk stops once ``max_files`` files were collected.
        """
        files: list[FileEntry] = []
        tests: list[str] = []
        skipped: list[str] = []
        truncated = False

        async def scan(path: str, depth: int) -> None:
            nonlocal truncated
            try:
                entries = await self.list_files(owner, repo, path, branch)
            except Exception as exc:
                logger.warning("Failed to scan directory %r in %s/%s: %s", path, owner, repo, exc)
                skipped.append(path)
                return

            for entry in entries:
                if truncated:
                    return
                if entry.type is EntryType.DIR:
                    if entry.name in self._ignored:
                        continue
                    if depth + 1 > self._max_depth:
                        skipped.append(entry.path)
                        continue
                    await scan(entry.path, depth + 1)
                elif is_source_file(entry.name):
                    if is_test_file(entry.name):
                        tests.append(entry.path)
                    elif len(files) >= self._max_files:
                        truncated = True
                    else:
                        files.append(entry)

        await scan(base_path, 0)

        logger.info(
            "Found %d source files in %s/%s (%d tests, %d skipped dirs%s)",
            len(files),
            owner,
            repo,
            len(tests),
            len(skipped),
            ", truncated" if truncated else "",
        )
        return SourceInventory(
            files=tuple(files),
            test_files=tuple(tests),
            skipped_directories=tuple(skipped),
            truncated=truncated,
        )

    # ── Cache management ────────────────────────────────────────────────

    @property
    def cache(self) -> MemoryCache:
        return self._cache

    @property
    def cache_enabled(self) -> bool:
        return self._cache_enabled

    def cache_stats(self) -> dict[str, Any]:
        if not self._cache_enabled:
            return {"enabled": False}
        stats = self._cache.stats()
        return {"enabled": True, "size": stats["size"], "entries": len(stats["entries"])}

    async def _cached(
        self, key: str, operation: Callable[[], Awaitable[T]], context: str
    ) -> T:
        if self._cache_enabled:
            hit = self._cache.get(key)
            if hit is not None:
                return hit
        value = await self._retry.run(operation, context)
        if self._cache_enabled:
            self._cache.set(key, value, self._cache_ttl)
        return value


class RepositoryClientProvider:
    """Holds the currently configured client, if any.

    ``get`` returns a Failure until a token has been installed, so callers
    must handle the unconfigured case explicitly.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        cache: MemoryCache,
        retry: RetryExecutor,
        *,
        base_url: str | None = None,
        **client_options: Any,
    ) -> None:
        self._http_client = http_client
        self._cache = cache
        self._retry = retry
        self._base_url = base_url
        self._options = client_options
        self._client: ResilientRepositoryClient | None = None

    def build(self, token: str | None) -> ResilientRepositoryClient:
        kwargs = {"base_url": self._base_url} if self._base_url else {}
        adapter = GitHubRestAdapter(self._http_client, token=token, **kwargs)
        return ResilientRepositoryClient(adapter, self._cache, self._retry, **self._options)

    def install(self, client: ResilientRepositoryClient) -> None:
        self._client = client
        logger.info("Repository client configured")

    def get(self) -> Result[ResilientRepositoryClient]:
        if self._client is None:
            return Failure(
                ConfigurationError(
                    "GitHub access is not configured. Call configure-access first."
                )
            )
        return Success(self._client)

    @property
    def configured(self) -> bool:
        return self._client is not None
