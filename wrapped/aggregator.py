"""Combine and de-duplicate entries from several .claude directories."""

import logging
from datetime import tzinfo
from pathlib import Path
from typing import Callable, Optional

from .config import YEAR
from .models import Dataset
from .parser import parse_file, parse_history_file, parse_timestamp
from .scanner import walk_files

logger = logging.getLogger(__name__)

HISTORY_FILE = "history.jsonl"


def find_jsonl_files(directory: Path) -> list:
    """All .jsonl files under a directory in a stable depth-first order.

    Hidden directories are skipped; unreadable directories contribute nothing.
    """
    return [Path(f.path) for f in walk_files(Path(directory)) if f.name.endswith(".jsonl")]


def aggregate(
    dirs: list,
    on_progress: Optional[Callable[[str], None]] = None,
    year: int = YEAR,
    tz: Optional[tzinfo] = None,
    include_history: bool = False,
) -> Dataset:
    """Aggregate entries from multiple Claude directories.

    User and assistant entries are de-duplicated by uuid across every file
    of every directory: the first occurrence in enumeration order wins.
    Summaries are kept as-is. Both entry lists are then sorted by timestamp
    (stable, so equal timestamps keep enumeration order).

    Args:
        dirs: SourceDirectory descriptors, in the order to read them.
        on_progress: Optional callback receiving status messages.
        year: Calendar year to keep.
        tz: Zone used for the year filter. None means local time.
        include_history: Also merge history.jsonl prompt logs.

    Returns:
        The merged Dataset.
    """
    def progress(message: str) -> None:
        logger.debug(message)
        if on_progress:
            on_progress(message)

    all_user_entries = []
    all_assistant_entries = []
    all_summaries = []
    seen_uuids = set()
    history_files = []
    total_files = 0

    for directory in dirs:
        progress(f"Scanning {directory.project_name}...")

        files = []
        for path in find_jsonl_files(directory.path):
            if path.name == HISTORY_FILE:
                history_files.append(path)
            else:
                files.append(path)
        total_files += len(files)

        progress(f"  Found {len(files)} conversation files")

        for path in files:
            user_entries, assistant_entries, summaries = parse_file(path, year=year, tz=tz)

            for entry in user_entries:
                if entry.uuid not in seen_uuids:
                    seen_uuids.add(entry.uuid)
                    all_user_entries.append(entry)

            for entry in assistant_entries:
                if entry.uuid not in seen_uuids:
                    seen_uuids.add(entry.uuid)
                    all_assistant_entries.append(entry)

            all_summaries.extend(summaries)

    if include_history:
        for path in history_files:
            history_entries = parse_history_file(path, year=year, tz=tz)
            progress(f"  Read {len(history_entries)} prompts from {path}")
            for entry in history_entries:
                if entry.uuid not in seen_uuids:
                    seen_uuids.add(entry.uuid)
                    all_user_entries.append(entry)

    all_user_entries.sort(key=lambda e: parse_timestamp(e.timestamp))
    all_assistant_entries.sort(key=lambda e: parse_timestamp(e.timestamp))

    progress(
        f"Collected {len(all_user_entries)} prompts and {len(all_assistant_entries)} responses"
    )

    return Dataset(
        user_entries=all_user_entries,
        assistant_entries=all_assistant_entries,
        summaries=all_summaries,
        total_files=total_files,
        directories=list(dirs),
    )
