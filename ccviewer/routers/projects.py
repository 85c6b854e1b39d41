"""API routers for the project index and session files."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from ccviewer.errors import (
    ConfigError,
    FileReadError,
    IndexerError,
    NotDirectoryError,
    NotFoundError,
)
from ccviewer.models import (
    DefaultRootResponse,
    FileContentResponse,
    ParsedMessage,
    ProjectSummary,
    SessionStats,
)
from ccviewer.parsers.sessions import parse_session_file
from ccviewer.project_indexer import project_indexer
from ccviewer.search import filter_projects, search_messages
from ccviewer.session_stats import calculate_stats

projects_router = APIRouter(prefix="/api/projects", tags=["projects"])
files_router = APIRouter(prefix="/api/files", tags=["files"])


def _http_error(exc: IndexerError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        status = 404
    elif isinstance(exc, NotDirectoryError):
        status = 400
    elif isinstance(exc, FileReadError) and isinstance(exc.os_error, FileNotFoundError):
        status = 404
    elif isinstance(exc, (FileReadError, ConfigError)):
        status = 500
    else:
        status = 400
    return HTTPException(status_code=status, detail=exc.message)


@projects_router.get("", response_model=list[ProjectSummary])
def list_projects(
    directory: str = Query(..., description="Log root whose subdirectories are projects"),
    search: str = Query("", description="Substring filter for project and file names"),
):
    """List projects under a log root, most recently active first."""
    try:
        projects = project_indexer.list_projects(directory)
    except IndexerError as exc:
        raise _http_error(exc) from exc
    return filter_projects(projects, search)


@projects_router.get("/default-root", response_model=DefaultRootResponse)
def get_default_root():
    """Resolve the default Claude Code log root for this user."""
    try:
        return DefaultRootResponse(path=project_indexer.default_log_root())
    except IndexerError as exc:
        raise _http_error(exc) from exc


@files_router.get("/content", response_model=FileContentResponse)
def read_file_content(path: str = Query(..., description="Absolute path of the file")):
    try:
        return FileContentResponse(path=path, content=project_indexer.read_file(path))
    except IndexerError as exc:
        raise _http_error(exc) from exc


@files_router.get("/messages", response_model=list[ParsedMessage])
def get_file_messages(
    path: str = Query(..., description="Absolute path of a .jsonl session log"),
    search: str = Query("", description="Substring filter over message text and tools"),
):
    """Parse a session log into display messages."""
    try:
        messages = parse_session_file(path)
    except IndexerError as exc:
        raise _http_error(exc) from exc
    return search_messages(messages, search)


@files_router.get("/stats", response_model=SessionStats)
def get_file_stats(path: str = Query(..., description="Absolute path of a .jsonl session log")):
    try:
        messages = parse_session_file(path)
    except IndexerError as exc:
        raise _http_error(exc) from exc
    return calculate_stats(messages)
