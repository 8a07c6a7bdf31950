"""Compute usage statistics from a dataset."""

import math
from collections import Counter
from datetime import date, tzinfo
from typing import Optional

from .models import BashInput, Dataset, EditInput, TextBlock, WrappedMetrics, WriteInput
from .parser import get_tool_uses, to_local, tool_input

WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def get_extension(file_path: str) -> str:
    """Lowercased extension without the dot, or "unknown"."""
    name = file_path.replace("\\", "/").rsplit("/", 1)[-1]
    stem, dot, ext = name.rpartition(".")
    # Dotfiles like ".bashrc" have no extension
    if not dot or not stem or not ext:
        return "unknown"
    return ext.lower()


def get_bash_command(command: str) -> Optional[str]:
    """The program a shell command runs.

    Leading ``VAR=value`` assignments are skipped, so
    ``"FOO=bar python x.py"`` gives ``"python"``.
    """
    parts = command.split()
    if not parts:
        return None

    if "=" in parts[0]:
        for part in parts[1:]:
            if "=" not in part:
                return part
        return None

    return parts[0]


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def count_lines(text: str) -> int:
    return text.count("\n") + 1


def weekday_index(moment) -> int:
    """Day of week with 0 = Sunday."""
    return (moment.weekday() + 1) % 7


def first_max_index(values: list) -> int:
    """Index of the largest value, lowest index on ties."""
    if not values:
        return 0
    return values.index(max(values))


def longest_streak(active_days) -> int:
    """Longest run of consecutive calendar days in a set of ISO dates."""
    days = sorted(date.fromisoformat(d) for d in set(active_days))
    if not days:
        return 0

    current = 1
    longest = 1
    for prev, curr in zip(days, days[1:]):
        if (curr - prev).days == 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def calculate_metrics(dataset: Dataset, tz: Optional[tzinfo] = None) -> WrappedMetrics:
    """Calculate all metrics from the dataset.

    Args:
        dataset: Aggregated entries.
        tz: Zone for hour/day bucketing. None means local time.

    Returns:
        A fresh WrappedMetrics.
    """
    sessions = set()
    active_days = set()
    hour_counts = [0] * 24
    weekday_counts = [0] * 7
    languages = Counter()
    tool_counts = Counter()
    bash_commands = Counter()

    total_user_chars = 0
    total_assistant_chars = 0
    tokens_in = 0
    tokens_out = 0
    lines_written = 0
    lines_edited = 0
    files_created = 0
    files_modified = 0

    for entry in dataset.user_entries:
        if entry.session_id:
            sessions.add(entry.session_id)

        total_user_chars += len(entry.content)

        moment = to_local(entry, tz)
        active_days.add(moment.date().isoformat())
        hour_counts[moment.hour] += 1
        weekday_counts[weekday_index(moment)] += 1

    for entry in dataset.assistant_entries:
        if entry.usage:
            tokens_in += entry.usage.input_tokens
            tokens_out += entry.usage.output_tokens

        for block in entry.content:
            if isinstance(block, TextBlock):
                total_assistant_chars += len(block.text)

        for tool in get_tool_uses(entry):
            tool_counts[tool.name] += 1

            shape = tool_input(tool)
            if isinstance(shape, WriteInput):
                lines_written += count_lines(shape.content)
                files_created += 1
                if shape.file_path is not None:
                    languages[get_extension(shape.file_path)] += 1
            elif isinstance(shape, EditInput):
                lines_edited += count_lines(shape.new_string)
                files_modified += 1
                if shape.file_path is not None:
                    languages[get_extension(shape.file_path)] += 1
            elif isinstance(shape, BashInput):
                command = get_bash_command(shape.command)
                if command:
                    bash_commands[command] += 1

    total_prompts = len(dataset.user_entries)
    has_activity = total_prompts > 0

    return WrappedMetrics(
        total_prompts=total_prompts,
        total_responses=len(dataset.assistant_entries),
        total_conversations=len(sessions),
        total_tokens_in=tokens_in,
        total_tokens_out=tokens_out,
        lines_written=lines_written,
        lines_edited=lines_edited,
        files_created=files_created,
        files_modified=files_modified,
        languages=dict(languages),
        tool_counts=dict(tool_counts),
        bash_commands=dict(bash_commands),
        busiest_day=WEEKDAYS[first_max_index(weekday_counts)],
        busiest_hour=first_max_index(hour_counts),
        longest_streak=longest_streak(active_days),
        total_sessions=len(sessions),
        avg_session_minutes=0,
        total_user_chars=total_user_chars,
        total_assistant_chars=total_assistant_chars,
        avg_prompt_length=round_half_up(total_user_chars / total_prompts) if has_activity else 0,
    )
