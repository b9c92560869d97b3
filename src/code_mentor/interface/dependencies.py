"""Service container — builds and disposes every shared component."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from fastapi import Request

from code_mentor.infrastructure.cache import MemoryCache
from code_mentor.infrastructure.config import Settings
from code_mentor.infrastructure.repository_client import RepositoryClientProvider
from code_mentor.infrastructure.retry import RetryExecutor
from code_mentor.services.analyzer import CodeAnalyzer
from code_mentor.services.code_mentor_tools import CodeMentorTools
from code_mentor.services.scheduler import BatchScheduler

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Explicitly constructed object graph with a start/stop lifecycle."""

    settings: Settings
    http_client: httpx.AsyncClient
    cache: MemoryCache
    provider: RepositoryClientProvider
    tools: CodeMentorTools

    @classmethod
    def build(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ServiceContainer:
        http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout_seconds),
            transport=transport,
        )
        cache = MemoryCache(
            default_ttl=settings.cache_ttl_seconds,
            sweep_interval=settings.cache_sweep_interval_seconds,
        )
        retry = RetryExecutor(
            retries=settings.retry_count,
            base_delay=settings.retry_base_delay_seconds,
        )
        provider = RepositoryClientProvider(
            http_client,
            cache,
            retry,
            cache_enabled=settings.cache_enabled,
            cache_ttl=settings.cache_ttl_seconds,
            ignored_directories=settings.ignored_directories,
            max_depth=settings.max_scan_depth,
            max_files=settings.max_discovered_files,
        )
        tools = CodeMentorTools(
            provider=provider,
            analyzer=CodeAnalyzer(),
            scheduler=BatchScheduler(settings.max_concurrent_files),
            max_file_size=settings.max_file_size_bytes,
            max_files_to_analyze=settings.max_files_to_analyze,
        )
        return cls(
            settings=settings,
            http_client=http_client,
            cache=cache,
            provider=provider,
            tools=tools,
        )

    async def startup(self) -> None:
        """Start the cache sweep and install the token from settings, if any."""
        if self.settings.cache_enabled:
            self.cache.start()
        token = self.settings.token
        if token:
            self.provider.install(self.provider.build(token))
        logger.info(
            "Code mentor started (cache=%s, ttl=%ss, retries=%d, batch=%d)",
            self.settings.cache_enabled,
            self.settings.cache_ttl_seconds,
            self.settings.retry_count,
            self.settings.max_concurrent_files,
        )

    async def shutdown(self) -> None:
        """Release shared resources."""
        await self.cache.stop()
        self.cache.clear()
        await self.http_client.aclose()
        logger.info("Code mentor stopped")


def get_tools(request: Request) -> CodeMentorTools:
    """FastAPI dependency returning the use cases of the running app."""
    container: ServiceContainer = request.app.state.container
    return container.tools
