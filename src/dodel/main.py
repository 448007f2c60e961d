# src/dodel/main.py
"""Main entry point for the Dodel application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from dodel.api.v1 import posts_router, system_router, users_router, votes_router
from dodel.api.v1.dependencies import get_snapshot_store, get_store
from dodel.api.v1.errors import register_error_handlers
from dodel.core.settings import settings
from dodel.services.checkpoint import CheckpointWorker

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load the snapshot on boot and save it again on shutdown.

    A snapshot that cannot be loaded aborts startup. A failed final save is
    logged and does not raise.
    """
    store = get_store()
    snapshots = get_snapshot_store()
    snapshots.load(store)
    stats = store.stats()
    logger.info(
        "Serving %d posts (%d comments) and %d votes with %s voting",
        stats.posts,
        stats.comments,
        stats.votes,
        store.policy.value,
    )

    worker = CheckpointWorker(store, snapshots, settings.checkpoint_interval_seconds)
    await worker.start()
    app.state.checkpoint_worker = worker
    try:
        yield
    finally:
        try:
            await worker.stop()
        finally:
            snapshots.checkpoint(store)


# Initialize FastAPI app
app = FastAPI(
    title="Dodel API",
    description="Ranked social feed API",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_error_handlers(app)

# Include API routers
app.include_router(system_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("dodel.main:app", host="0.0.0.0", port=8080, reload=settings.debug)
