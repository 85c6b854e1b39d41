"""Errors raised by the session-log indexer.

Every error carries a human-readable message; the HTTP layer passes it to the
front end verbatim.
"""
from __future__ import annotations


class IndexerError(Exception):
    """Base class for indexer failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(IndexerError):
    """Raised when a requested directory does not exist."""


class NotDirectoryError(IndexerError):
    """Raised when a path exists but is not a directory."""


class FileReadError(IndexerError):
    """Raised when file contents or metadata cannot be read."""

    def __init__(self, message: str, path: str = "", os_error: Exception | None = None):
        super().__init__(message)
        self.path = path
        self.os_error = os_error


class EmptyProjectError(IndexerError):
    """Raised when a project directory holds no session logs."""


class ConfigError(IndexerError):
    """Raised when the home directory cannot be resolved from the environment."""


class WorkingDirectoryError(IndexerError):
    """Raised when a session log's first record has no usable ``cwd``."""
