"""Configuration and environment checks for wrapped."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

VERSION = "1.0.0"
YEAR = 2025

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_OUTPUT_DIR = f"./output/wrapped-{YEAR}"

# Output may never land in these
SENSITIVE_DIRS = ("/etc", "/usr", "/var", "/bin", "/sbin", "/root", "/System", "/Library")


@dataclass
class Config:
    """Run configuration for one report."""
    year: int = YEAR
    output_dir: str = DEFAULT_OUTPUT_DIR
    use_judge: bool = True
    assume_yes: bool = False
    global_only: bool = False
    include_history: bool = False
    model: str = DEFAULT_MODEL
    open_browser: bool = False
    directories: list = field(default_factory=list)


def load_config(args=None) -> Config:
    """Build a Config from parsed CLI arguments and the environment.

    WRAPPED_YEAR and WRAPPED_MODEL override the built-in defaults; explicit
    CLI flags override both.
    """
    config = Config()

    env_year = os.environ.get("WRAPPED_YEAR")
    if env_year and env_year.isdigit():
        config.year = int(env_year)
        config.output_dir = f"./output/wrapped-{config.year}"
    if os.environ.get("WRAPPED_MODEL"):
        config.model = os.environ["WRAPPED_MODEL"]

    if args is None:
        return config

    if getattr(args, "year", None):
        config.year = args.year
        config.output_dir = f"./output/wrapped-{config.year}"
    if getattr(args, "output", None):
        config.output_dir = args.output
    if getattr(args, "model", None):
        config.model = args.model
    config.use_judge = not getattr(args, "no_judge", False)
    config.assume_yes = getattr(args, "yes", False)
    config.global_only = getattr(args, "global_only", False)
    config.include_history = getattr(args, "history", False)
    config.open_browser = getattr(args, "open", False)
    config.directories = list(getattr(args, "dir", None) or [])

    return config


def check_environment() -> dict:
    """Report which API keys are available."""
    return {
        "anthropic_key": bool(os.environ.get("ANTHROPIC_API_KEY")),
    }


def _is_within(path: str, base: str) -> bool:
    return path == base or path.startswith(base.rstrip("/") + "/")


def validate_output_path(output_path: str, home: Optional[Path] = None) -> tuple:
    """Check that an output directory is safe to write to.

    Returns:
        (valid, resolved_path, error_message_or_None)
    """
    home = str(home or Path.home())
    resolved = str(Path(output_path).expanduser().resolve())
    cwd = os.getcwd()

    if ".." in Path(output_path).parts:
        return False, resolved, "Path traversal (..) not allowed in output path"

    if not _is_within(resolved, home) and not _is_within(resolved, cwd):
        return False, resolved, "Output path must be within home directory or current directory"

    for prefix in SENSITIVE_DIRS:
        # root's home lives under /root
        if _is_within(home, prefix):
            continue
        if _is_within(resolved, prefix):
            return False, resolved, f"Cannot write to system directory: {prefix}"

    return True, resolved, None
