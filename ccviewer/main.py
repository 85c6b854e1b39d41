"""ccviewer FastAPI backend: main application entry point."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ccviewer import config
from ccviewer.routers.projects import files_router, projects_router

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
logger = logging.getLogger("ccviewer")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    logger.info("ccviewer backend starting up")
    yield
    logger.info("ccviewer backend shutting down")


app = FastAPI(
    title="ccviewer API",
    description="Read-only backend for browsing Claude Code session logs",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS: allow the desktop shell webview and the Vite dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        config.FRONTEND_ORIGIN,
        "http://localhost:1420",
        "http://127.0.0.1:1420",
        "tauri://localhost",
    ],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Register routers
app.include_router(projects_router)
app.include_router(files_router)


@app.get("/api/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}
