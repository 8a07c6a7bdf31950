"""Wrapped - Your year in review with Claude Code.

Wrapped reads the Claude Code conversation logs under ~/.claude and
project .claude directories, computes a year of usage statistics,
classifies you into a coding persona and renders a story-style HTML report.

Basic usage:
    from wrapped import scan_for_claude_dirs, aggregate, calculate_metrics

    dataset = aggregate(scan_for_claude_dirs())
    metrics = calculate_metrics(dataset)
    print(metrics.total_prompts, metrics.busiest_day)

Persona without the LLM:
    from wrapped import analyze_patterns, build_timeline, create_fallback_persona

    persona = create_fallback_persona(metrics, build_timeline(dataset), analyze_patterns(dataset))
    print(persona.persona, persona.roast)

With the LLM judge:
    from wrapped import evaluate_persona

    result = evaluate_persona(metrics, patterns, timeline, prompts)  # Requires ANTHROPIC_API_KEY
"""

__version__ = "1.0.0"

from .models import (
    Dataset,
    SourceDirectory,
    UserEntry,
    AssistantEntry,
    SummaryEntry,
    WrappedMetrics,
    PatternAnalysis,
    Timeline,
    Persona,
    DeterministicPersonas,
    PersonaResult,
    WrappedReport,
)
from .config import Config, load_config
from .parser import parse_conversation_file, parse_history_file
from .scanner import scan_for_claude_dirs
from .aggregator import aggregate
from .metrics import calculate_metrics
from .patterns import analyze_patterns
from .timeline import build_timeline
from .classifier import detect_all_personas, create_fallback_persona
from .judge import evaluate_persona, generate_summary
from .report import build_report, save_report_json
from .renderer import render_html, render_summary
from .cli import main

__all__ = [
    # Models
    "Dataset",
    "SourceDirectory",
    "UserEntry",
    "AssistantEntry",
    "SummaryEntry",
    "WrappedMetrics",
    "PatternAnalysis",
    "Timeline",
    "Persona",
    "DeterministicPersonas",
    "PersonaResult",
    "WrappedReport",
    # Config
    "Config",
    "load_config",
    # Collection
    "parse_conversation_file",
    "parse_history_file",
    "scan_for_claude_dirs",
    "aggregate",
    # Analysis
    "calculate_metrics",
    "analyze_patterns",
    "build_timeline",
    # Personas
    "detect_all_personas",
    "create_fallback_persona",
    "evaluate_persona",
    "generate_summary",
    # Output
    "build_report",
    "save_report_json",
    "render_html",
    "render_summary",
    # CLI
    "main",
]
