"""Find .claude directories with conversation logs."""

import logging
import os
from pathlib import Path
from typing import Optional

from .models import SourceDirectory

logger = logging.getLogger(__name__)


def get_global_claude_dir(home: Optional[Path] = None) -> Path:
    """Get the global Claude Code directory."""
    return (home or Path.home()) / ".claude"


def walk_files(root: Path):
    """Yield files under root, skipping hidden directories.

    Directories that can't be listed are treated as empty.
    """
    try:
        children = sorted(os.scandir(root), key=lambda e: e.name)
    except OSError as e:
        logger.debug("Cannot list %s: %s", root, e)
        return

    for child in children:
        try:
            if child.is_dir(follow_symlinks=False):
                if not child.name.startswith("."):
                    yield from walk_files(Path(child.path))
            elif child.is_file():
                yield child
        except OSError:
            continue


def count_jsonl_files(directory: Path) -> int:
    return sum(1 for f in walk_files(directory) if f.name.endswith(".jsonl"))


def get_dir_size(directory: Path) -> int:
    size = 0
    for f in walk_files(directory):
        try:
            size += f.stat().st_size
        except OSError:
            continue
    return size


def is_path_safe(path: Path, home: Optional[Path] = None) -> bool:
    """Check that a directory resolves to somewhere inside the home directory."""
    home = (home or Path.home()).resolve()
    try:
        resolved = path.resolve(strict=True)
    except (OSError, RuntimeError):
        return False
    return resolved == home or home in resolved.parents


def get_project_name(path: Path, home: Optional[Path] = None) -> str:
    """Human-readable project name for a .claude directory."""
    if path == get_global_claude_dir(home):
        return "Global (~/.claude)"

    project_dir = path.parent.name
    # Path-encoded names like "-Users-name-project"
    if project_dir.startswith("-"):
        parts = [p for p in project_dir.split("-") if p]
        return parts[-1] if parts else project_dir

    return project_dir


def describe_directory(path: Path, is_global: bool = False, home: Optional[Path] = None) -> SourceDirectory:
    """Build a SourceDirectory descriptor with file count and size."""
    path = Path(path)
    return SourceDirectory(
        path=str(path),
        project_name=get_project_name(path, home),
        conversation_count=count_jsonl_files(path),
        total_size_bytes=get_dir_size(path),
        is_global=is_global,
    )


def scan_for_claude_dirs(
    home: Optional[Path] = None,
    global_only: bool = False,
    search_paths: Optional[list] = None,
) -> list:
    """Scan for .claude directories in common locations.

    Checks the global ~/.claude first, then ``<search_path>/<child>/.claude``
    for each search path (default: the home directory).

    Returns:
        List of SourceDirectory, global first, then most conversations first.
    """
    home = Path(home) if home else Path.home()
    dirs = []
    seen = set()

    global_dir = get_global_claude_dir(home)
    if global_dir.is_dir():
        if is_path_safe(global_dir, home):
            dirs.append(describe_directory(global_dir, is_global=True, home=home))
            seen.add(global_dir)
        else:
            logger.warning("Skipping unsafe path: %s", global_dir)

    if global_only:
        return dirs

    for search_path in search_paths or [home]:
        try:
            children = sorted(Path(search_path).iterdir())
        except OSError:
            continue

        for child in children:
            if child.name.startswith(".") or not child.is_dir():
                continue

            claude_dir = child / ".claude"
            if claude_dir in seen or not claude_dir.is_dir():
                continue

            if not is_path_safe(claude_dir, home):
                logger.warning("Skipping unsafe path: %s", claude_dir)
                continue

            info = describe_directory(claude_dir, home=home)
            if info.conversation_count > 0:
                dirs.append(info)
                seen.add(claude_dir)

    dirs.sort(key=lambda d: (not d.is_global, -d.conversation_count))
    return dirs


def format_bytes(size: int) -> str:
    """Format bytes for display."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"
