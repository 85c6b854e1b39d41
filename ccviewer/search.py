"""Case-insensitive filtering for the project sidebar and the message view."""
from __future__ import annotations

from typing import Iterable

from ccviewer.models import ParsedMessage, ProjectSummary


def _contains(value: str | None, query: str) -> bool:
    return bool(value) and query in value.lower()


def filter_projects(projects: list[ProjectSummary], query: str) -> list[ProjectSummary]:
    """Keep projects whose name matches, or narrow them to matching files.

    A project matched by display name is returned whole. Otherwise only its
    files whose names match are kept, and projects with none are dropped.
    """
    if not query.strip():
        return projects

    needle = query.lower()
    filtered: list[ProjectSummary] = []
    for project in projects:
        if _contains(project.display_name, needle):
            filtered.append(project)
            continue
        matched = [entry for entry in project.files if _contains(entry.name, needle)]
        if matched:
            filtered.append(project.model_copy(update={"files": matched}))
    return filtered


def _message_matches(message: ParsedMessage, needle: str) -> bool:
    if _contains(message.text_content, needle):
        return True
    if _contains(message.thinking_content, needle):
        return True
    return any(
        _contains(tool.name, needle) or _contains(tool.result, needle)
        for tool in message.tool_calls
    )


def search_messages(messages: Iterable[ParsedMessage], query: str) -> list[ParsedMessage]:
    messages = list(messages)
    if not query.strip():
        return messages
    needle = query.lower()
    return [message for message in messages if _message_matches(message, needle)]
