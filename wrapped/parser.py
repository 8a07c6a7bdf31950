"""Parse Claude Code conversation logs."""

import json
import logging
import re
from datetime import datetime, timezone, tzinfo
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .config import YEAR
from .models import (
    AssistantEntry,
    BashInput,
    EditInput,
    Entry,
    GenericInput,
    SummaryEntry,
    TextBlock,
    ToolInput,
    ToolUse,
    Usage,
    UserEntry,
    WriteInput,
)

logger = logging.getLogger(__name__)


class ShapeError(ValueError):
    """A record does not match the shape declared by its type."""


_FRACTION_RE = re.compile(r"(:\d{2})\.(\d+)")


def _normalize_fraction(value: str) -> str:
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    return _FRACTION_RE.sub(lambda m: f"{m.group(1)}.{(m.group(2) + '000000')[:6]}", value, count=1)


def parse_timestamp(value, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into an aware datetime in ``tz``.

    ``tz=None`` means the machine's local zone. Naive timestamps are read as
    already being in that zone. Returns None if the value can't be parsed.
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        dt = datetime.fromisoformat(_normalize_fraction(value.replace("Z", "+00:00")))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz) if tz else dt.astimezone()
    return dt.astimezone(tz)


def to_local(entry, tz: Optional[tzinfo] = None) -> datetime:
    """Timestamp of a parsed user/assistant entry in the analysis zone."""
    dt = parse_timestamp(entry.timestamp, tz)
    if dt is None:
        raise ValueError(f"Unparsable timestamp on entry {entry.uuid}: {entry.timestamp!r}")
    return dt


def parse_conversation_file(
    file_path: Path,
    year: int = YEAR,
    tz: Optional[tzinfo] = None,
) -> Iterator[Entry]:
    """Yield validated entries from one JSONL conversation file.

    Unreadable files are logged and yield nothing.
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read %s: %s", file_path, e)
        return

    yield from parse_lines(content.split("\n"), year=year, tz=tz)


def parse_lines(
    lines: Iterable[str],
    year: int = YEAR,
    tz: Optional[tzinfo] = None,
) -> Iterator[Entry]:
    """Yield validated entries from raw JSONL lines.

    Blank lines, malformed JSON, records from other years, unknown record
    types and records that fail validation are all skipped.
    """
    for line in lines:
        if not line.strip():
            continue

        try:
            data = json.loads(line)
        except json.JSONDecodeError:
            continue

        if not isinstance(data, dict):
            continue

        # Records without a timestamp are not year-filtered
        if data.get("timestamp"):
            dt = parse_timestamp(data["timestamp"], tz)
            if dt is None or dt.year != year:
                continue

        try:
            entry = _parse_record(data)
        except ShapeError as e:
            logger.debug("Dropping %s record: %s", data.get("type"), e)
            continue

        if entry is not None:
            yield entry


def parse_file(
    file_path: Path,
    year: int = YEAR,
    tz: Optional[tzinfo] = None,
) -> tuple:
    """Parse a file into (user_entries, assistant_entries, summaries)."""
    user_entries = []
    assistant_entries = []
    summaries = []

    for entry in parse_conversation_file(file_path, year=year, tz=tz):
        if isinstance(entry, UserEntry):
            user_entries.append(entry)
        elif isinstance(entry, AssistantEntry):
            assistant_entries.append(entry)
        elif isinstance(entry, SummaryEntry):
            summaries.append(entry)

    return user_entries, assistant_entries, summaries


def _parse_record(data: dict) -> Optional[Entry]:
    """Dispatch on the record type. Unknown types return None."""
    record_type = data.get("type")
    if record_type == "user":
        return _parse_user(data)
    if record_type == "assistant":
        return _parse_assistant(data)
    if record_type == "summary":
        return _parse_summary(data)
    # file-history-snapshot, system, etc.
    return None


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ShapeError(f"{key} must be a string")
    return value


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ShapeError(f"{key} must be a string when present")
    return value


def _require_timestamp(data: dict) -> str:
    value = _require_str(data, "timestamp")
    if parse_timestamp(value) is None:
        raise ShapeError(f"timestamp is not ISO-8601: {value!r}")
    return value


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _message(data: dict, role: str) -> dict:
    message = data.get("message")
    if not isinstance(message, dict):
        raise ShapeError("message must be an object")
    if message.get("role") != role:
        raise ShapeError(f"message.role must be {role!r}")
    return message


def _parse_user(data: dict) -> UserEntry:
    message = _message(data, "user")
    content = message.get("content")
    # Tool results arrive as user records with list content; they are not prompts
    if not isinstance(content, str):
        raise ShapeError("message.content must be a string")

    return UserEntry(
        uuid=_require_str(data, "uuid"),
        timestamp=_require_timestamp(data),
        content=content,
        session_id=_optional_str(data, "sessionId"),
        cwd=_optional_str(data, "cwd"),
        parent_uuid=_optional_str(data, "parentUuid"),
    )


def _parse_assistant(data: dict) -> AssistantEntry:
    message = _message(data, "assistant")
    content = message.get("content")
    if not isinstance(content, list):
        raise ShapeError("message.content must be a list")

    blocks = []
    for block in content:
        parsed = _parse_block(block)
        if parsed is not None:
            blocks.append(parsed)

    usage = None
    raw_usage = message.get("usage")
    if raw_usage is not None:
        if not isinstance(raw_usage, dict):
            raise ShapeError("message.usage must be an object")
        tokens_in = raw_usage.get("input_tokens")
        tokens_out = raw_usage.get("output_tokens")
        if not _is_number(tokens_in) or not _is_number(tokens_out):
            raise ShapeError("usage token counts must be numbers")
        usage = Usage(input_tokens=tokens_in, output_tokens=tokens_out)

    return AssistantEntry(
        uuid=_require_str(data, "uuid"),
        timestamp=_require_timestamp(data),
        content=blocks,
        session_id=_optional_str(data, "sessionId"),
        usage=usage,
        parent_uuid=_optional_str(data, "parentUuid"),
    )


def _parse_block(block) -> Optional[object]:
    """Validate one assistant content block.

    Block kinds other than text and tool_use (thinking, images) are skipped.
    """
    if not isinstance(block, dict):
        raise ShapeError("content block must be an object")

    block_type = block.get("type")
    if block_type == "text":
        return TextBlock(text=_require_str(block, "text"))
    if block_type == "tool_use":
        tool_input = block.get("input")
        if not isinstance(tool_input, dict):
            raise ShapeError("tool_use.input must be an object")
        return ToolUse(
            name=_require_str(block, "name"),
            input=tool_input,
            id=_optional_str(block, "id"),
        )
    return None


def _parse_summary(data: dict) -> SummaryEntry:
    return SummaryEntry(
        summary=_require_str(data, "summary"),
        leaf_uuid=_optional_str(data, "leafUuid"),
    )


def get_assistant_text(entry: AssistantEntry) -> str:
    """Newline-joined text blocks of an assistant message."""
    return "\n".join(block.text for block in entry.content if isinstance(block, TextBlock))


def get_tool_uses(entry: AssistantEntry) -> list:
    """Tool invocations of an assistant message, in content order."""
    return [block for block in entry.content if isinstance(block, ToolUse)]


def tool_input(tool: ToolUse) -> ToolInput:
    """Typed view of a tool invocation's input, selected by tool name."""
    data = tool.input
    file_path = data.get("file_path")
    if not isinstance(file_path, str):
        file_path = None

    if tool.name == "Write" and isinstance(data.get("content"), str):
        return WriteInput(content=data["content"], file_path=file_path)
    if tool.name == "Edit" and isinstance(data.get("new_string"), str):
        return EditInput(new_string=data["new_string"], file_path=file_path)
    if tool.name == "Bash" and isinstance(data.get("command"), str):
        return BashInput(command=data["command"])
    return GenericInput(name=tool.name, input=data)


def parse_history_file(
    file_path: Path,
    year: int = YEAR,
    tz: Optional[tzinfo] = None,
) -> list:
    """Parse ~/.claude/history.jsonl into synthetic user entries.

    History lines look like ``{"display": ..., "timestamp": <unix ms>,
    "project": ...}``. They only carry prompt text, so each becomes a
    UserEntry with a synthetic uuid and the session id "history".
    """
    entries = []

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            lines = f.read().split("\n")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read history file %s: %s", file_path, e)
        return entries

    for line in lines:
        if not line.strip():
            continue

        try:
            data = json.loads(line)
        except json.JSONDecodeError:
            continue

        if not isinstance(data, dict):
            continue

        millis = data.get("timestamp")
        display = data.get("display")
        if not _is_number(millis) or not millis or not isinstance(display, str) or not display:
            continue

        try:
            moment = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            continue
        if moment.astimezone(tz).year != year:
            continue

        project = data.get("project")
        entries.append(UserEntry(
            uuid=f"history-{int(millis)}",
            timestamp=moment.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            content=display,
            session_id="history",
            cwd=project if isinstance(project, str) else None,
        ))

    return entries
