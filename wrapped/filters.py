"""Filters for picking and cleaning user prompts before they leave the machine."""

import random
import re

from .models import Dataset

# Prefixes of messages the client injects on the user's behalf
SYSTEM_PREFIXES = (
    "<command-",
    "<local-command",
    "Caveat:",
    "This session is being continued",
)

MIN_SAMPLE_LENGTH = 30
MIN_JUDGE_PROMPT_LENGTH = 20
MAX_JUDGE_PROMPTS = 500
MAX_SAMPLE_PROMPTS = 200
SAMPLE_PROMPT_CHARS = 500
SANITIZED_PROMPT_CHARS = 300

# (pattern, replacement) pairs, applied in order
REDACTIONS = [
    # API keys and tokens
    (re.compile(r"sk-[a-zA-Z0-9]{20,}"), "[REDACTED_API_KEY]"),
    (re.compile(r"sk_[a-zA-Z0-9]{20,}"), "[REDACTED_API_KEY]"),
    (re.compile(r"AIza[a-zA-Z0-9_-]{35}"), "[REDACTED_GOOGLE_KEY]"),
    (re.compile(r"ghp_[a-zA-Z0-9]{36}"), "[REDACTED_GITHUB_TOKEN]"),
    (re.compile(r"gho_[a-zA-Z0-9]{36}"), "[REDACTED_GITHUB_TOKEN]"),
    (re.compile(r"xox[baprs]-[a-zA-Z0-9-]{10,}"), "[REDACTED_SLACK_TOKEN]"),
    # Long hex/base64 runs that look like secrets
    (re.compile(r"[0-9a-f]{32,}", re.I), "[REDACTED_HEX]"),
    (re.compile(r"[A-Za-z0-9+/]{40,}={0,2}"), "[REDACTED_BASE64]"),
    # key=value credentials
    (re.compile(r"password\s*[=:]\s*\S+", re.I), "password=[REDACTED]"),
    (re.compile(r"passwd\s*[=:]\s*\S+", re.I), "passwd=[REDACTED]"),
    (re.compile(r"secret\s*[=:]\s*\S+", re.I), "secret=[REDACTED]"),
    (re.compile(r"token\s*[=:]\s*\S+", re.I), "token=[REDACTED]"),
    (re.compile(r"api_key\s*[=:]\s*\S+", re.I), "api_key=[REDACTED]"),
    (re.compile(r"apikey\s*[=:]\s*\S+", re.I), "apikey=[REDACTED]"),
    (re.compile(r"AKIA[A-Z0-9]{16}"), "[REDACTED_AWS_KEY]"),
    (re.compile(r"-----BEGIN [A-Z ]+ PRIVATE KEY-----[\s\S]*?-----END [A-Z ]+ PRIVATE KEY-----"),
     "[REDACTED_PRIVATE_KEY]"),
]


def is_noise_prompt(text: str) -> bool:
    """Check if a user message is too short or was injected by the client."""
    if not text or len(text) < MIN_SAMPLE_LENGTH:
        return True

    if text.startswith(SYSTEM_PREFIXES):
        return True

    return "<system-reminder>" in text


def sanitize_prompt(text: str) -> str:
    """Redact anything that looks like a secret and cap the length."""
    for pattern, replacement in REDACTIONS:
        text = pattern.sub(replacement, text)
    return text[:SANITIZED_PROMPT_CHARS]


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def select_judge_prompts(dataset: Dataset) -> list:
    """Prompts worth showing the persona judge, in chronological order."""
    prompts = [e.content for e in dataset.user_entries if len(e.content) > MIN_JUDGE_PROMPT_LENGTH]
    return prompts[:MAX_JUDGE_PROMPTS]


def select_sample_prompts(dataset: Dataset, limit: int = MAX_SAMPLE_PROMPTS, rng=None) -> list:
    """A random sample of real user prompts, whitespace collapsed.

    Args:
        dataset: Aggregated entries.
        limit: Maximum number of prompts.
        rng: random.Random to shuffle with; the module RNG by default.
    """
    prompts = [e.content for e in dataset.user_entries if not is_noise_prompt(e.content)]
    (rng or random).shuffle(prompts)
    return [collapse_whitespace(p[:SAMPLE_PROMPT_CHARS]) for p in prompts[:limit]]


def format_sample_prompts(prompts: list) -> str:
    """Numbered list, one blank line between prompts."""
    return "\n\n".join(f"{i}. {p}" for i, p in enumerate(prompts, 1))
