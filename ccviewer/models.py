"""Pydantic models matching the frontend TypeScript types."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# ── Project index models ────────────────────────────────────────────

class FileEntry(BaseModel):
    """Filesystem metadata for one session log, captured at scan time."""

    model_config = ConfigDict(frozen=True)

    path: str
    name: str
    size: int = Field(ge=0)
    modified: int = Field(ge=0)  # ms since Unix epoch


class ProjectSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    display_name: str
    folder_name: str
    working_directory: str = ""
    files: list[FileEntry] = Field(default_factory=list)
    last_modified: int = 0


class DefaultRootResponse(BaseModel):
    path: str


class FileContentResponse(BaseModel):
    path: str
    content: str

# ── Session view models ─────────────────────────────────────────────

class TokenUsage(BaseModel):
    model_config = ConfigDict(extra="allow")

    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: Optional[int] = None
    cache_read_input_tokens: Optional[int] = None


class ToolCall(BaseModel):
    id: str = ""
    name: str = ""
    input: dict[str, Any] = Field(default_factory=dict)
    result: Optional[str] = None
    status: Literal["success", "error"] = "success"


class ParsedMessage(BaseModel):
    id: str
    type: Optional[str] = None
    role: Literal["user", "assistant", "system"]
    timestamp: datetime
    session_index: int
    parent_id: Optional[str] = None
    is_sidechain: bool = False
    text_content: Optional[str] = None
    markdown_segments: list[str] = Field(default_factory=list)
    thinking_content: Optional[str] = None
    tool_calls: list[ToolCall] = Field(default_factory=list)
    token_usage: Optional[TokenUsage] = None
    git_branch: Optional[str] = None
    cwd: Optional[str] = None
    raw: dict[str, Any] = Field(default_factory=dict)


class TokenTotals(BaseModel):
    input: int = 0
    output: int = 0
    cached: int = 0


class SessionStats(BaseModel):
    total_messages: int = 0
    user_messages: int = 0
    assistant_messages: int = 0
    system_messages: int = 0
    total_tokens: TokenTotals = Field(default_factory=TokenTotals)
    tool_usage: dict[str, int] = Field(default_factory=dict)
    duration: int = 0  # ms between first and last message
