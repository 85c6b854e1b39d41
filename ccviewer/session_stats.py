"""Per-session statistics for the stats panel."""
from __future__ import annotations

from collections import Counter
from typing import Iterable

from ccviewer.date_utils import duration_millis
from ccviewer.models import ParsedMessage, SessionStats, TokenTotals


def calculate_stats(messages: Iterable[ParsedMessage]) -> SessionStats:
    messages = list(messages)
    role_counts: Counter[str] = Counter()
    tool_usage: Counter[str] = Counter()
    totals = TokenTotals()

    for message in messages:
        role_counts[message.role] += 1
        if message.role != "assistant":
            continue

        usage = message.token_usage
        if usage is not None:
            totals.input += usage.input_tokens
            totals.output += usage.output_tokens
            totals.cached += (usage.cache_read_input_tokens or 0) + (usage.cache_creation_input_tokens or 0)

        for tool in message.tool_calls:
            tool_usage[tool.name] += 1

    duration = 0
    if messages:
        duration = duration_millis(messages[0].timestamp, messages[-1].timestamp)

    return SessionStats(
        total_messages=len(messages),
        user_messages=role_counts["user"],
        assistant_messages=role_counts["assistant"],
        system_messages=role_counts["system"],
        total_tokens=totals,
        tool_usage=dict(tool_usage),
        duration=duration,
    )


def format_token_count(count: int) -> str:
    """Compact token count: 1.2M, 3.4K, or the plain number."""
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return str(count)
