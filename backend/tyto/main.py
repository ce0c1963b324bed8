"""
Tyto Backend - FastAPI Application Factory
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from tyto import __version__
from tyto.api import content, sync, webhook
from tyto.config import Settings
from tyto.engine.orchestrator import SyncOrchestrator
from tyto.engine.protocols import Fetcher, Renderer
from tyto.engine.store import SnapshotStore
from tyto.services.git import GitFetcher
from tyto.services.renderer import MarkdownRenderer

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings,
    *,
    fetcher: Fetcher | None = None,
    renderer: Renderer | None = None,
    store: SnapshotStore | None = None,
) -> FastAPI:
    """
    Build the application and its sync pipeline.

    Args:
        settings: Service settings
        fetcher: Fetch collaborator (defaults to GitFetcher)
        renderer: Render collaborator (defaults to MarkdownRenderer)
        store: Snapshot store to serve from (defaults to an empty one)

    Returns:
        FastAPI app whose lifespan runs the background sync worker
    """
    store = store or SnapshotStore()
    orchestrator = SyncOrchestrator(
        store=store,
        fetcher=fetcher or GitFetcher(timeout=settings.fetch_timeout_seconds),
        renderer=renderer or MarkdownRenderer(),
        remote=settings.git_repo_url,
        local_path=settings.repository_dir,
        cooldown_seconds=settings.sync_cooldown_seconds,
        uncategorized_label=settings.uncategorized_label,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        orchestrator.start()
        if settings.sync_on_startup:
            orchestrator.request_sync()
        try:
            yield
        finally:
            await orchestrator.stop()
            logger.info("Sync worker stopped")

    app = FastAPI(
        title="Tyto",
        description="Markdown knowledge base synced from a git repository",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.orchestrator = orchestrator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware)

    app.include_router(content.router, prefix="/api", tags=["content"])
    app.include_router(webhook.router, prefix="/api", tags=["webhook"])
    app.include_router(sync.router, prefix="/api/sync", tags=["sync"])

    @app.get("/api/healthcheck")
    async def healthcheck():
        """Health check endpoint"""
        return {"status": "ok"}

    return app
