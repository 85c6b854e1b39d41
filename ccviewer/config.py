"""ccviewer Backend Configuration."""
import os


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Session-log discovery
HOME_ENV_VARS = ("HOME", "USERPROFILE")
LOG_ROOT_PARTS = (".claude", "projects")
SESSION_FILE_SUFFIX = ".jsonl"

# Logging
LOG_LEVEL = os.getenv("CCVIEWER_LOG_LEVEL", "INFO").upper()
LOG_SKIPPED_PROJECTS = _env_bool("CCVIEWER_LOG_SKIPPED_PROJECTS", True)

# CORS
FRONTEND_ORIGIN = os.getenv("CCVIEWER_FRONTEND_ORIGIN", "http://localhost:1420")
