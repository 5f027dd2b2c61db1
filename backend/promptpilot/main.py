"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from promptpilot import __version__
from promptpilot.config import settings
from promptpilot.core.auth import TokenVerifier
from promptpilot.core.enhancement import SessionRegistry
from promptpilot.models.database.base import engine, init_db
from promptpilot.api.v1.routes import auth, enhance, history

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: Initialize database
    await init_db()

    app.state.session_registry = SessionRegistry.from_settings(settings)
    app.state.token_verifier = TokenVerifier.from_settings(settings)
    if not app.state.token_verifier.enabled:
        logger.warning(
            "AUTH_JWT_SECRET is not set; requests are anonymous"
            + (f" except dev user {settings.dev_user_id}" if settings.dev_user_id else "")
        )

    yield
    # Shutdown: release pooled database connections
    logger.info(f"Shutting down with {len(app.state.session_registry)} active sessions")
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Prompt enhancement API with LLM support",
    version=__version__,
    lifespan=lifespan,
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
app.include_router(enhance.router, prefix="/api/v1", tags=["enhance"])
app.include_router(history.router, prefix="/api/v1", tags=["history"])
app.include_router(auth.router, prefix="/api/v1", tags=["auth"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "PromptPilot API", "version": __version__}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
