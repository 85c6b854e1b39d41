"""Parse JSONL session log content into display-ready messages."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from ccviewer.date_utils import parse_record_timestamp
from ccviewer.models import ParsedMessage, TokenUsage, ToolCall
from ccviewer.project_indexer import project_indexer

logger = logging.getLogger("ccviewer.parser")

# Snapshot records are only shown as a placeholder.
_SNAPSHOT_PLACEHOLDER = "..."


def _pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def _json_block(value: Any) -> str:
    return "```json\n" + _pretty_json(value) + "\n```"


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _display_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return str(value)


def _token_usage(usage: Any) -> TokenUsage | None:
    if not isinstance(usage, dict):
        return None
    try:
        return TokenUsage.model_validate(usage)
    except ValidationError:
        logger.debug(f"Ignoring malformed usage block: {usage!r}")
        return None


def _tool_use_segment(item: dict[str, Any]) -> str:
    name = item.get("name")
    header = name if isinstance(name, str) else "tool"
    tool_input = item.get("input")
    if not isinstance(tool_input, dict) or not tool_input:
        return header
    param_lines = [f"- {key}: {_display_value(value)}" for key, value in tool_input.items()]
    return f"{header}\n\n" + "\n".join(param_lines)


def parse_jsonl(content: str) -> list[dict[str, Any]]:
    """Decode one JSON object per non-blank line, skipping malformed lines."""
    records: list[dict[str, Any]] = []
    for line in content.split("\n"):
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except (ValueError, RecursionError):
            logger.debug(f"Failed to parse line: {line[:200]}")
            continue
        if not isinstance(record, dict):
            logger.debug(f"Skipping non-object record: {line[:200]}")
            continue
        records.append(record)
    return records


def _user_fields(message: dict[str, Any]) -> dict[str, Any]:
    content = message.get("content")

    if isinstance(content, str):
        return {"text_content": content, "markdown_segments": [content]}

    if isinstance(content, list):
        segments: list[str] = []
        for item in content:
            if item in (None, "", 0, False):
                continue
            if isinstance(item, str):
                segments.append(item)
            elif isinstance(item, dict) and item.get("type") == "text" and isinstance(item.get("text"), str):
                segments.append(item["text"])
            elif isinstance(item, dict) and item.get("type") == "tool_result":
                result = item.get("content")
                segments.append(result if isinstance(result, str) else _json_block(item))
            else:
                segments.append(_json_block(item))
        return {"text_content": "\n\n".join(segments), "markdown_segments": segments}

    return {"text_content": _pretty_json(message), "markdown_segments": [_json_block(message)]}


def _assistant_fields(message: dict[str, Any]) -> dict[str, Any]:
    segments: list[str] = []
    tool_calls: list[ToolCall] = []
    thinking: str | None = None

    content = message.get("content")
    for item in content if isinstance(content, list) else []:
        item_type = item.get("type") if isinstance(item, dict) else None
        if item_type == "text":
            segments.append(_optional_str(item.get("text")) or "")
        elif item_type == "thinking":
            thinking = _optional_str(item.get("thinking")) or ""
            segments.append(thinking)
        elif item_type == "tool_use":
            tool_input = item.get("input")
            tool_calls.append(
                ToolCall(
                    id=str(item.get("id") or ""),
                    name=str(item.get("name") or ""),
                    input=tool_input if isinstance(tool_input, dict) else {},
                    status="success",
                )
            )
            segments.append(_tool_use_segment(item))
        else:
            segments.append(_json_block(item))

    usage = message.get("usage")
    return {
        "text_content": "\n\n".join(segments),
        "markdown_segments": segments,
        "thinking_content": thinking,
        "tool_calls": tool_calls,
        "token_usage": _token_usage(usage),
    }


def transform_record(record: dict[str, Any], index: int) -> ParsedMessage:
    """Convert one raw record into a ParsedMessage; every record yields one."""
    record_type = _optional_str(record.get("type"))
    snapshot = record.get("snapshot")
    raw_timestamp = record.get("timestamp") or (
        snapshot.get("timestamp") if isinstance(snapshot, dict) else None
    )

    base: dict[str, Any] = {
        "id": (
            _optional_str(record.get("uuid"))
            or _optional_str(record.get("messageId"))
            or _optional_str(record.get("leafUuid"))
            or f"{record_type or 'unknown'}-{index}"
        ),
        "type": record_type,
        "session_index": index,
        "timestamp": parse_record_timestamp(raw_timestamp),
        "parent_id": _optional_str(record.get("parentUuid")),
        "is_sidechain": bool(record.get("isSidechain")),
        "git_branch": _optional_str(record.get("gitBranch")),
        "cwd": _optional_str(record.get("cwd")),
        "raw": record,
    }

    message = record.get("message")
    if "message" not in record:
        if record_type == "file-history-snapshot":
            return ParsedMessage(**base, role="system", text_content=_SNAPSHOT_PLACEHOLDER)
        return ParsedMessage(**base, role="system", text_content=_pretty_json(record))

    if record_type == "user" and isinstance(message, dict):
        return ParsedMessage(**base, role="user", **_user_fields(message))
    if record_type == "assistant" and isinstance(message, dict):
        return ParsedMessage(**base, role="assistant", **_assistant_fields(message))

    return ParsedMessage(**base, role="system", text_content=_pretty_json(record))


def parse_session_content(content: str) -> list[ParsedMessage]:
    return [transform_record(record, index) for index, record in enumerate(parse_jsonl(content))]


def parse_session_file(path: Union[str, Path]) -> list[ParsedMessage]:
    """Read a JSONL session log and parse it into messages.

    Raises FileReadError when the file cannot be read.
    """
    return parse_session_content(project_indexer.read_file(path))
