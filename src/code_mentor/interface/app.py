"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from code_mentor.infrastructure.config import Settings, get_settings
from code_mentor.interface.dependencies import ServiceContainer
from code_mentor.interface.error_handlers import register_error_handlers
from code_mentor.interface.routes import router


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build and wire the FastAPI application."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Construct the container at startup and dispose it at shutdown."""
        container = ServiceContainer.build(settings, transport=transport)
        await container.startup()
        app.state.container = container
        try:
            yield
        finally:
            await container.shutdown()

    app = FastAPI(
        title="Code Mentor",
        version="2.1.0",
        description=(
            "Analyses JavaScript/TypeScript repositories on GitHub against Clean "
            "Architecture, SOLID and design pattern rules, and suggests how to "
            "improve them."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, object]:
        container: ServiceContainer | None = getattr(app.state, "container", None)
        configured = bool(container and container.provider.configured)
        body: dict[str, object] = {"status": "ok", "configured": configured}
        if configured:
            body["cache"] = container.provider.get().value.cache_stats()
        return body

    return app
