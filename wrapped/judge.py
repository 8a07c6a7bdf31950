"""Ask Claude to judge the user's persona and write the year summary."""

import json
import logging
import os
import re
from typing import Optional

from .config import DEFAULT_MODEL, YEAR
from .filters import sanitize_prompt
from .models import PatternAnalysis, PersonaResult, Timeline, WrappedMetrics
from .patterns import category_total
from .personas import PERSONAS
from .timeline import format_hour

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY = "Your year with Claude was one for the books."

# Persona judge prompt template
PERSONA_JUDGE_PROMPT = '''You are analyzing a developer's interaction patterns with Claude Code to determine their coding persona.

## Developer Data

- **Total prompts sent:** {{total_prompts}}
- **Average prompt length:** {{avg_prompt_length}} characters
- **Total lines of code written:** {{lines_written}}
- **Files created:** {{files_created}}

### How They Communicate (THE IMPORTANT PART)

**Frustration & Yelling:**
- Times they used ALL CAPS or "!!" or swore: {{yell_count}}
- Said things like "please just..." or "why doesn't this work": part of above

**Politeness & Gratitude:**
- Times they said "please", "thanks", "appreciate": {{polite_count}}

**Nitpicking & Perfectionism:**
- Times they said "actually", "not quite", "tweak", "adjust", "instead": {{nitpick_count}}

**Questions Asked:**
- Total question marks used: {{question_count}}

### Languages Used
{{languages}}

### Time Patterns
- Busiest hour: {{busiest_hour}}
- Busiest day: {{busiest_day}}
- Late night sessions (midnight-5am): {{late_night_count}}
- Longest streak: {{longest_streak}} consecutive days

### Sample Prompts (READ THESE - they reveal personality)
{{sample_prompts}}

## Available Personas

{{persona_list}}

## Your Task

Based on the data above, select the ONE persona that best matches this developer. Focus especially on:
- **HOW they talk to Claude** (polite? impatient? nitpicky? curious?)
- Their sample prompts, which reveal true personality
- Time patterns (night owl? early bird?)
- Volume and pace of work

DO NOT focus on which tools Claude uses. That's Claude's behavior, not the user's.

Respond with ONLY a JSON object in this exact format:
{
  "persona": "THE_X",
  "confidence": 0.85,
  "reasoning": "2-3 sentences explaining why this persona fits, referencing their COMMUNICATION STYLE",
  "secondaryPersona": "THE_Y",
  "roast": "A playful, funny roast about HOW THEY TALK to Claude. Make it specific to their behavior patterns. Be witty!",
  "compliment": "A genuine compliment about their communication style or work ethic"
}'''

# Year summary prompt template
YEAR_SUMMARY_PROMPT = '''You're writing a HYPE year-end pep talk for a developer. This is their {{year}} Compiled, like Spotify Wrapped but for coding. Make it FUN, ENERGETIC, and PERSONAL.

## Their Stats
- Total prompts: {{total_prompts}}
- Lines of code Claude wrote for them: {{lines_written}}
- Files created: {{files_created}}
- Top language: {{top_language}}
- Busiest day: {{busiest_day}}
- Their persona: {{persona}}

## Their Vibe When Talking to Claude
- Yelled/swore/got heated: {{yell_count}} times (this is personality, not bad!)
- Said please/thanks: {{polite_count}} times
- Nitpicked and refined: {{nitpick_count}} times
- Questions asked: {{question_count}}

## What They Worked On
{{summaries}}

## YOUR MISSION

Write a SHORT (3-4 sentences MAX) hype pep talk that:

1. SOUNDS LIKE A FRIEND hyping them up, not a corporate report
2. Uses their actual numbers but makes them EXCITING
3. Roasts them a LITTLE (playfully) if they yell a lot or nitpick constantly
4. Celebrates what makes THEM unique
5. Ends with a quick, punchy line about {{next_year}}

TONE: Think best friend at a bar telling you about your year. Casual, fun, maybe a little irreverent. NOT robotic. NOT corporate.

FORBIDDEN PHRASES (do NOT use these):
- "What a year"
- "shall we say"
- "Here's to {{next_year}}"
- "staggering"
- "Your communication style was"
- Anything that sounds like a LinkedIn post

Respond with ONLY the pep talk text. No quotes, no formatting, no preamble.'''

MAX_JUDGE_PROMPTS = 500
MAX_SUMMARIES = 10


def fill_template(template: str, values: dict) -> str:
    """Replace every {{key}} placeholder with str(value)."""
    for key, value in values.items():
        template = template.replace("{{" + key + "}}", str(value))
    return template


def get_style_counts(patterns: PatternAnalysis) -> dict:
    return {
        "yell_count": category_total(patterns, "yelling"),
        "polite_count": category_total(patterns, "polite"),
        "nitpick_count": category_total(patterns, "nitpicky"),
        "command_count": category_total(patterns, "commanding"),
        "curious_count": category_total(patterns, "curious"),
    }


def _top_languages(metrics: WrappedMetrics, limit: int = 5) -> list:
    return sorted(metrics.languages.items(), key=lambda item: item[1], reverse=True)[:limit]


def _persona_list() -> str:
    return "\n".join(
        f"{i}. **{p.id}** - {p.tagline}"
        for i, p in enumerate(PERSONAS.values(), 1)
    )


def build_persona_prompt(
    metrics: WrappedMetrics,
    patterns: PatternAnalysis,
    timeline: Timeline,
    sample_prompts: list,
) -> str:
    """Fill the persona judge template. Sample prompts are sanitized here."""
    languages = "\n".join(f"- .{ext}: {count} files" for ext, count in _top_languages(metrics))
    samples = "\n".join(
        f'{i}. "{sanitize_prompt(p)}"'
        for i, p in enumerate(sample_prompts[:MAX_JUDGE_PROMPTS], 1)
    )

    return fill_template(PERSONA_JUDGE_PROMPT, {
        "total_prompts": metrics.total_prompts,
        "avg_prompt_length": metrics.avg_prompt_length,
        "lines_written": metrics.lines_written,
        "files_created": metrics.files_created,
        **get_style_counts(patterns),
        "question_count": patterns.question_count,
        "languages": languages or "None recorded",
        "busiest_hour": format_hour(timeline.peak_hour),
        "busiest_day": timeline.peak_day,
        "late_night_count": timeline.late_night_count,
        "longest_streak": metrics.longest_streak,
        "sample_prompts": samples or "No samples available",
        "persona_list": _persona_list(),
    })


def build_summary_prompt(
    metrics: WrappedMetrics,
    timeline: Timeline,
    persona: str,
    summaries: list,
    patterns: PatternAnalysis,
    year: int = YEAR,
) -> str:
    top = _top_languages(metrics, limit=1)
    summaries_text = "\n".join(f"{i}. {s}" for i, s in enumerate(summaries[:MAX_SUMMARIES], 1))

    return fill_template(YEAR_SUMMARY_PROMPT, {
        "year": year,
        "next_year": year + 1,
        "total_prompts": metrics.total_prompts,
        "lines_written": metrics.lines_written,
        "files_created": metrics.files_created,
        "top_language": f".{top[0][0]}" if top else ".various",
        "busiest_day": timeline.peak_day,
        "persona": persona,
        **get_style_counts(patterns),
        "question_count": patterns.question_count,
        "summaries": summaries_text or "No summaries available",
    })


def _get_client():
    """Anthropic client, or None when the SDK or API key is missing."""
    try:
        import anthropic
    except ImportError:
        logger.error("Error: anthropic package not installed. Run: pip install anthropic")
        return None

    api_key = os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        logger.error("Error: ANTHROPIC_API_KEY environment variable not set")
        return None

    return anthropic.Anthropic(api_key=api_key)


def _response_text(response) -> str:
    block = response.content[0] if response.content else None
    if block is None or getattr(block, "type", "text") != "text":
        return ""
    return block.text


def evaluate_persona(
    metrics: WrappedMetrics,
    patterns: PatternAnalysis,
    timeline: Timeline,
    sample_prompts: list,
    model: str = DEFAULT_MODEL,
) -> Optional[PersonaResult]:
    """Use Claude API to pick the user's persona.

    Args:
        metrics: Usage statistics.
        patterns: Communication style counts.
        timeline: Activity distributions.
        sample_prompts: Raw user prompts; sanitized before sending.
        model: Claude model to use.

    Returns:
        PersonaResult, or None on any error (the caller falls back to the
        deterministic classifier).

    Requires:
        ANTHROPIC_API_KEY environment variable.
    """
    client = _get_client()
    if client is None:
        return None

    prompt = build_persona_prompt(metrics, patterns, timeline, sample_prompts)

    try:
        logger.info("Claude is judging you...")
        response = client.messages.create(
            model=model,
            max_tokens=1024,
            messages=[{"role": "user", "content": prompt}]
        )
        return _parse_persona_response(_response_text(response))

    except Exception as e:
        logger.warning(f"Error during persona evaluation: {e}")
        return None


def generate_summary(
    metrics: WrappedMetrics,
    timeline: Timeline,
    persona: str,
    summaries: list,
    patterns: PatternAnalysis,
    model: str = DEFAULT_MODEL,
    year: int = YEAR,
) -> Optional[str]:
    """Use Claude API to write a short year-in-review pep talk.

    Returns:
        The summary text, DEFAULT_SUMMARY if the reply had no text, or None
        on error.
    """
    client = _get_client()
    if client is None:
        return None

    prompt = build_summary_prompt(metrics, timeline, persona, summaries, patterns, year=year)

    try:
        logger.info("Writing your year summary...")
        response = client.messages.create(
            model=model,
            max_tokens=512,
            messages=[{"role": "user", "content": prompt}]
        )
        return _response_text(response).strip() or DEFAULT_SUMMARY

    except Exception as e:
        logger.warning(f"Error during summary generation: {e}")
        return None


def _parse_persona_response(response_text: str) -> Optional[PersonaResult]:
    """Parse the JSON object in Claude's reply into a PersonaResult."""
    json_match = re.search(r'\{[\s\S]*\}', response_text)
    if not json_match:
        return None

    try:
        result = json.loads(json_match.group())
    except json.JSONDecodeError:
        return None

    if not isinstance(result, dict):
        return None

    persona = result.get("persona")
    if persona not in PERSONAS:
        logger.warning(f"Judge picked an unknown persona: {persona!r}")
        return None

    confidence = result.get("confidence")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        return None

    text_fields = [result.get(key) for key in ("reasoning", "roast", "compliment")]
    if not all(isinstance(value, str) for value in text_fields):
        return None

    secondary = result.get("secondaryPersona", result.get("secondary_persona"))
    if secondary not in PERSONAS:
        secondary = None

    reasoning, roast, compliment = text_fields
    return PersonaResult(
        persona=persona,
        confidence=float(confidence),
        reasoning=reasoning,
        secondary_persona=secondary,
        roast=roast,
        compliment=compliment,
    )
