"""Builders for Claude Code JSONL records used across the tests."""

import json
from pathlib import Path

from wrapped.models import AssistantEntry, Dataset, TextBlock, ToolUse, UserEntry


def user_record(uuid, timestamp, content, session_id="s1", **extra) -> dict:
    record = {
        "type": "user",
        "uuid": uuid,
        "timestamp": timestamp,
        "sessionId": session_id,
        "cwd": "/home/dev/project",
        "message": {"role": "user", "content": content},
    }
    record.update(extra)
    return record


def assistant_record(uuid, timestamp, blocks, session_id="s1", usage=None) -> dict:
    message = {"role": "assistant", "content": blocks}
    if usage is not None:
        message["usage"] = usage
    return {
        "type": "assistant",
        "uuid": uuid,
        "timestamp": timestamp,
        "sessionId": session_id,
        "message": message,
    }


def text_block(text) -> dict:
    return {"type": "text", "text": text}


def tool_block(name, tool_input, tool_id="toolu_1") -> dict:
    return {"type": "tool_use", "id": tool_id, "name": name, "input": tool_input}


def summary_record(summary, leaf_uuid="leaf") -> dict:
    return {"type": "summary", "summary": summary, "leafUuid": leaf_uuid}


def write_jsonl(path: Path, records) -> Path:
    """Write records one per line; strings are written verbatim."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [r if isinstance(r, str) else json.dumps(r) for r in records]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def make_user(content, timestamp="2025-03-05T10:00:00Z", uuid=None, session_id="s1") -> UserEntry:
    return UserEntry(
        uuid=uuid or f"u-{timestamp}-{len(content)}",
        timestamp=timestamp,
        content=content,
        session_id=session_id,
    )


def make_assistant(blocks, timestamp="2025-03-05T10:00:05Z", uuid=None, usage=None) -> AssistantEntry:
    return AssistantEntry(
        uuid=uuid or f"a-{timestamp}-{len(blocks)}",
        timestamp=timestamp,
        content=list(blocks),
        session_id="s1",
        usage=usage,
    )


def make_dataset(user_entries=(), assistant_entries=(), summaries=()) -> Dataset:
    return Dataset(
        user_entries=list(user_entries),
        assistant_entries=list(assistant_entries),
        summaries=list(summaries),
    )


def tool(name, **tool_input) -> ToolUse:
    return ToolUse(name=name, input=tool_input)


def text(value) -> TextBlock:
    return TextBlock(text=value)
