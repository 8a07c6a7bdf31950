"""Assemble the final report and save it as JSON."""

import json
import random
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .config import VERSION, YEAR
from .metrics import round_half_up
from .models import PatternAnalysis, PersonaResult, Timeline, WrappedMetrics, WrappedReport
from .personas import get_persona

MAX_REPORT_SUMMARIES = 20
DEFAULT_FUN_FACT = "You had a great year coding with Claude!"


def _iso_now(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_report(
    metrics: WrappedMetrics,
    patterns: PatternAnalysis,
    timeline: Timeline,
    persona_result: PersonaResult,
    year_summary: str,
    summaries: list,
    year: int = YEAR,
    now: Optional[datetime] = None,
) -> WrappedReport:
    """Merge analysis results and the persona verdict into one report.

    Persona display fields come from the named persona catalogue, so an
    unknown id renders as The Builder.
    """
    persona = get_persona(persona_result.persona)

    return WrappedReport(
        persona=persona_result.persona,
        persona_emoji=persona.emoji,
        persona_name=persona.name,
        persona_tagline=persona.tagline,
        persona_description=persona.description,
        secondary_persona=persona_result.secondary_persona,
        roast=persona_result.roast,
        compliment=persona_result.compliment,
        metrics=metrics,
        patterns=patterns,
        timeline=timeline,
        year_summary=year_summary,
        summaries=list(summaries[:MAX_REPORT_SUMMARIES]),
        persona_image_path=None,
        share_card_path=None,
        generated_at=_iso_now(now),
        version=VERSION,
        year=year,
    )


def report_to_json(report: WrappedReport) -> str:
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def save_report_json(report: WrappedReport, output_path) -> Path:
    """Write the report as pretty-printed JSON and return the path."""
    path = Path(output_path)
    path.write_text(report_to_json(report), encoding="utf-8")
    return path


def load_report_json(path) -> WrappedReport:
    return WrappedReport.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))


def format_number(n: int) -> str:
    """Compact display form: 1234567 -> "1.2M", 3400 -> "3.4K", 999 -> "999"."""
    if n >= 1000000:
        return f"{n / 1000000:.1f}M"
    if n >= 1000:
        return f"{n / 1000:.1f}K"
    return f"{n:,}"


def get_fun_facts(report: WrappedReport) -> list:
    """Every fun fact the report qualifies for."""
    facts = []
    metrics = report.metrics

    if metrics.lines_written > 100000:
        facts.append(f"You wrote enough code to fill {round_half_up(metrics.lines_written / 50)} pages!")
    elif metrics.lines_written > 10000:
        facts.append(f"{metrics.lines_written:,} lines is like writing a small novel in code.")

    late_nights = report.timeline.late_night_count
    if late_nights > 100:
        facts.append(f"You coded past midnight {late_nights} times. Sleep is for the weak!")
    elif late_nights > 20:
        facts.append(f"{late_nights} late night sessions. The night owl life chose you.")

    tool_uses = sum(metrics.tool_counts.values())
    if tool_uses > 10000:
        facts.append(f"Claude used tools {tool_uses:,} times for you. That's dedication.")

    right_count = report.patterns.claude_phrases.get("youre_right", 0)
    if right_count > 100:
        facts.append(f"Claude agreed with you {right_count} times. You're basically always right.")
    elif right_count > 10:
        facts.append(f'"You\'re absolutely right" - Claude, {right_count} times this year.')

    return facts


def get_fun_fact(report: WrappedReport, rng=None) -> str:
    """One random fun fact, or a generic line when nothing stands out."""
    facts = get_fun_facts(report)
    if not facts:
        return DEFAULT_FUN_FACT
    return (rng or random).choice(facts)
