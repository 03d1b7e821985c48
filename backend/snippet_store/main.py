"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from snippet_store.api.routes import snippets
from snippet_store.config import get_settings
from snippet_store.exceptions import StorageIOError
from snippet_store.services.managed_folders import ensure_managed_folders

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    try:
        ensure_managed_folders(settings)
    except StorageIOError as e:
        logger.error(f"failed to create managed folders: {e}")
    if not settings.snippets_configured:
        logger.warning("SNIPPETS_MANAGEMENT_FOLDER not set, snippet endpoints disabled")
    yield
    # Shutdown


app = FastAPI(
    title="Snippet Store API",
    description="SQL snippets and folders stored as plain .sql files",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(
    snippets.router,
    prefix=f"{settings.api_prefix}/platform/projects/{{ref}}/content",
    tags=["Snippets"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": "0.1.0",
        "snippets_configured": settings.snippets_configured,
    }
