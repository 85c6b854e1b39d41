"""Project indexer for locally stored Claude Code session logs.

Each immediate subdirectory of a log root is a project; the `.jsonl` files
directly inside it are that project's sessions.
"""
from __future__ import annotations

import json
import logging
import os
import re
import stat
from pathlib import Path
from typing import Mapping, Optional, Union

from ccviewer import config
from ccviewer.date_utils import mtime_millis
from ccviewer.errors import (
    ConfigError,
    EmptyProjectError,
    FileReadError,
    IndexerError,
    NotDirectoryError,
    NotFoundError,
    WorkingDirectoryError,
)
from ccviewer.models import FileEntry, ProjectSummary

logger = logging.getLogger("ccviewer.indexer")

PathLike = Union[str, Path]

_PATH_SEPARATORS = re.compile(r"[\\/]")


def basename_from_path(path: str) -> str:
    """Last component of a path written with either `/` or `\\` separators."""
    return _PATH_SEPARATORS.split(path)[-1]


def _first_line(content: str) -> str:
    line = content.split("\n", 1)[0]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class ProjectIndexer:
    """Builds project summaries from a directory of session logs."""

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        # None means the live process environment, read on every call.
        self._env = env

    @property
    def env(self) -> Mapping[str, str]:
        return os.environ if self._env is None else self._env

    def list_projects(self, root_directory: PathLike) -> list[ProjectSummary]:
        """Scan every immediate subdirectory of *root_directory*.

        Subdirectories that hold no session logs, or whose logs cannot be
        read, are left out of the result instead of failing the call.
        """
        root = Path(root_directory)
        if not root.exists():
            raise NotFoundError(f"Directory does not exist: {root_directory}")
        if not root.is_dir():
            raise NotDirectoryError(f"Path is not a directory: {root_directory}")

        projects: list[ProjectSummary] = []
        try:
            children = list(root.iterdir())
        except OSError as exc:
            raise FileReadError(
                f"Unable to list directory {root_directory}: {exc}",
                path=str(root_directory),
                os_error=exc,
            ) from exc

        for child in children:
            if not child.is_dir():
                continue
            try:
                projects.append(self.scan_project(child))
            except IndexerError as exc:
                if config.LOG_SKIPPED_PROJECTS:
                    logger.debug(f"Skipping project directory {child}: {exc.message}")

        projects.sort(key=lambda p: p.last_modified, reverse=True)
        return projects

    def scan_project(self, project_dir: PathLike) -> ProjectSummary:
        """Summarize one project directory.

        The working directory comes from the first log, in directory
        enumeration order, whose opening record carries a `cwd`.
        """
        project_dir = Path(project_dir)
        files: list[FileEntry] = []
        last_modified = 0
        cwd = ""

        try:
            entries = list(project_dir.iterdir())
        except OSError as exc:
            raise FileReadError(
                f"Unable to list directory {project_dir}: {exc}",
                path=str(project_dir),
                os_error=exc,
            ) from exc

        for path in entries:
            if path.suffix != config.SESSION_FILE_SUFFIX:
                continue
            try:
                stats = path.stat()
            except OSError as exc:
                raise FileReadError(
                    f"Unable to read metadata for {path}: {exc}",
                    path=str(path),
                    os_error=exc,
                ) from exc

            if stat.S_ISDIR(stats.st_mode):
                continue

            modified = mtime_millis(stats)
            last_modified = max(last_modified, modified)

            if not cwd:
                try:
                    cwd = self.extract_working_directory(path)
                except WorkingDirectoryError:
                    pass

            files.append(
                FileEntry(
                    path=str(path),
                    name=path.name,
                    size=stats.st_size,
                    modified=modified,
                )
            )

        if not files:
            raise EmptyProjectError(f"No jsonl files found in {project_dir}")

        files.sort(key=lambda f: f.modified, reverse=True)

        folder_name = project_dir.name
        return ProjectSummary(
            display_name=basename_from_path(cwd) if cwd else folder_name,
            folder_name=folder_name,
            working_directory=cwd,
            files=files,
            last_modified=last_modified,
        )

    def extract_working_directory(self, file_path: PathLike) -> str:
        """Return the `cwd` recorded in the first line of a session log."""
        try:
            content = self.read_file(file_path)
        except FileReadError as exc:
            raise WorkingDirectoryError(exc.message) from exc

        try:
            record = json.loads(_first_line(content))
        except (ValueError, RecursionError) as exc:
            raise WorkingDirectoryError(f"First line of {file_path} is not valid JSON") from exc

        cwd = record.get("cwd") if isinstance(record, dict) else None
        if not isinstance(cwd, str):
            raise WorkingDirectoryError(f"No cwd field found in {file_path}")
        return cwd

    def read_file(self, path: PathLike) -> str:
        """Return the full text of *path* with line endings left untouched."""
        try:
            with open(path, encoding="utf-8", newline="") as handle:
                return handle.read()
        except (OSError, ValueError) as exc:
            raise FileReadError(
                f"Unable to read file {path}: {exc}",
                path=str(path),
                os_error=exc,
            ) from exc

    def default_log_root(self) -> str:
        """Return `~/.claude/projects`, resolved from the configured environment."""
        env = self.env
        home = next((env[name] for name in config.HOME_ENV_VARS if env.get(name)), None)
        if home is None:
            names = " or ".join(config.HOME_ENV_VARS)
            raise ConfigError(f"Unable to resolve home directory: {names} is not set")

        log_root = Path(home).joinpath(*config.LOG_ROOT_PARTS)
        if not log_root.exists():
            raise NotFoundError(f"Claude Code directory does not exist: {log_root}")
        return str(log_root)


# Global instance bound to the process environment
project_indexer = ProjectIndexer()
