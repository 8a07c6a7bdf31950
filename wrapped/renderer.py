"""Render a wrapped report to HTML and to a terminal summary."""

import json
from datetime import date, timedelta
from html import escape

from .metrics import WEEKDAYS
from .models import WrappedReport
from .patterns import get_communication_stats, get_most_common_claude_phrase
from .report import format_number, get_fun_fact
from .timeline import format_hour, get_streak_info, get_time_of_day

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

STYLE = """
* { box-sizing: border-box; margin: 0; padding: 0; }
body { background: #0a0a0a; color: #fff; font-family: "JetBrains Mono", ui-monospace, monospace; }
.slide { min-height: 100vh; padding: 8vh 8vw; border-bottom: 4px solid #fff; display: flex; flex-direction: column; justify-content: center; gap: 1.5rem; }
.kicker { text-transform: uppercase; letter-spacing: 0.3em; opacity: 0.6; font-size: 0.8rem; }
.huge { font-size: clamp(3rem, 12vw, 9rem); font-weight: 900; line-height: 0.9; }
.big { font-size: clamp(1.5rem, 5vw, 3rem); font-weight: 800; }
.dim { opacity: 0.6; }
.grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(12rem, 1fr)); gap: 1rem; }
.stat { border: 2px solid #fff; padding: 1rem; }
.stat .value { font-size: 2rem; font-weight: 800; }
.bars { display: flex; align-items: flex-end; gap: 2px; height: 12rem; }
.bar { flex: 1; background: #fff; min-height: 2px; }
.bar.peak { background: #ff3b30; }
.heatmap { display: grid; grid-auto-flow: column; grid-template-rows: repeat(7, 0.8rem); gap: 2px; }
.day { width: 0.8rem; height: 0.8rem; background: #fff; }
.l0 { opacity: 0.08; } .l1 { opacity: 0.3; } .l2 { opacity: 0.5; } .l3 { opacity: 0.75; } .l4 { opacity: 1; }
.empty { visibility: hidden; }
table { border-collapse: collapse; }
td { padding: 0.25rem 1rem 0.25rem 0; }
blockquote { border-left: 4px solid #fff; padding-left: 1rem; font-size: 1.25rem; }
"""


def render_html(report: WrappedReport) -> str:
    """Render the report as a self-contained story-slide HTML page.

    Every piece of user-derived text is HTML-escaped. The full report is
    embedded as JSON for anything that wants to post-process the page.

    Args:
        report: Assembled report.

    Returns:
        HTML document as a string.
    """
    lines = []

    lines.append("<!DOCTYPE html>")
    lines.append('<html lang="en">')
    lines.append("<head>")
    lines.append('<meta charset="utf-8">')
    lines.append('<meta name="viewport" content="width=device-width, initial-scale=1">')
    lines.append(f"<title>{report.year} Compiled: {escape(report.persona_name)}</title>")
    lines.append(f"<style>{STYLE}</style>")
    lines.append("</head>")
    lines.append("<body>")

    _render_intro(lines, report)
    _render_persona(lines, report)
    _render_numbers(lines, report)
    _render_hours(lines, report)
    _render_calendar(lines, report)
    _render_weekdays(lines, report)
    _render_style(lines, report)
    _render_verdict(lines, report)

    # Escape "</" so prompt text can never close the script element
    data = json.dumps(report.to_dict(), ensure_ascii=False).replace("</", "<\\/")
    lines.append(f'<script id="wrapped-data" type="application/json">{data}</script>')
    lines.append("</body>")
    lines.append("</html>")

    return "\n".join(lines)


def _slide(lines: list, slide_id: str) -> None:
    lines.append(f'<section class="slide" id="{slide_id}">')


def _render_intro(lines: list, report: WrappedReport) -> None:
    _slide(lines, "intro")
    lines.append('<p class="kicker">Your year in code</p>')
    lines.append(f'<h1 class="huge">{report.year}<br>COMPILED</h1>')
    lines.append(f'<p class="dim">{escape(report.timeline.first_activity)} to {escape(report.timeline.last_activity)}</p>')
    lines.append("</section>")


def _render_persona(lines: list, report: WrappedReport) -> None:
    _slide(lines, "persona")
    lines.append('<p class="kicker">You are</p>')
    lines.append(f'<h2 class="huge">{escape(report.persona_emoji)} {escape(report.persona_name.upper())}</h2>')
    lines.append(f'<p class="big">{escape(report.persona_tagline)}</p>')
    lines.append(f"<p>{escape(report.persona_description)}</p>")
    if report.secondary_persona:
        lines.append(f'<p class="dim">With a streak of {escape(report.secondary_persona)}</p>')
    lines.append("</section>")


def _render_numbers(lines: list, report: WrappedReport) -> None:
    metrics = report.metrics
    streak = get_streak_info(report.timeline)

    stats = [
        ("Prompts", format_number(metrics.total_prompts)),
        ("Responses", format_number(metrics.total_responses)),
        ("Sessions", format_number(metrics.total_sessions)),
        ("Lines written", format_number(metrics.lines_written)),
        ("Lines edited", format_number(metrics.lines_edited)),
        ("Files created", format_number(metrics.files_created)),
        ("Longest streak", f"{metrics.longest_streak} days"),
        ("Active days", str(streak["total_active_days"])),
        ("Prompts per day", str(streak["average_per_day"])),
        ("Avg prompt", f"{metrics.avg_prompt_length} chars"),
    ]

    _slide(lines, "numbers")
    lines.append('<p class="kicker">By the numbers</p>')
    lines.append('<div class="grid">')
    for label, value in stats:
        lines.append(f'<div class="stat"><div class="value">{escape(value)}</div><div class="dim">{label}</div></div>')
    lines.append("</div>")

    top_languages = sorted(metrics.languages.items(), key=lambda item: item[1], reverse=True)[:5]
    if top_languages:
        lines.append("<table>")
        for ext, count in top_languages:
            lines.append(f"<tr><td>.{escape(ext)}</td><td>{count} files</td></tr>")
        lines.append("</table>")

    lines.append(f'<p class="dim">{escape(get_fun_fact(report))}</p>')
    lines.append("</section>")


def _render_hours(lines: list, report: WrappedReport) -> None:
    """Hourly bar chart, peak hour highlighted."""
    timeline = report.timeline
    peak = max(max(timeline.hourly_heatmap, default=0), 1)

    _slide(lines, "hours")
    lines.append('<p class="kicker">When you code</p>')
    lines.append(
        f'<p class="big">Peak hour: {format_hour(timeline.peak_hour)} '
        f'<span class="dim">({get_time_of_day(timeline.peak_hour)})</span></p>'
    )
    lines.append('<div class="bars">')
    for hour, count in enumerate(timeline.hourly_heatmap):
        height = round(count / peak * 100)
        css = "bar peak" if hour == timeline.peak_hour else "bar"
        lines.append(f'<div class="{css}" style="height:{height}%" title="{format_hour(hour)}: {count} prompts"></div>')
    lines.append("</div>")
    lines.append(f"<p>{timeline.late_night_count} prompts between midnight and 5am.</p>")
    lines.append("</section>")


def _activity_level(count: int, peak: int) -> int:
    if count <= 0:
        return 0
    ratio = count / peak
    if ratio < 0.25:
        return 1
    if ratio < 0.5:
        return 2
    if ratio < 0.75:
        return 3
    return 4


def _render_calendar(lines: list, report: WrappedReport) -> None:
    """GitHub-style daily heatmap covering the report year."""
    activity = report.timeline.daily_activity
    peak = max(list(activity.values()) + [1])

    day = date(report.year, 1, 1)
    end = date(report.year, 12, 31)

    _slide(lines, "calendar")
    lines.append('<p class="kicker">Every day of the year</p>')
    lines.append('<div class="heatmap">')

    # Pad the first column so rows line up with Sunday..Saturday
    for _ in range((day.weekday() + 1) % 7):
        lines.append('<div class="day empty"></div>')

    while day <= end:
        key = day.isoformat()
        count = activity.get(key, 0)
        level = _activity_level(count, peak)
        lines.append(f'<div class="day l{level}" title="{MONTHS[day.month - 1]} {day.day}: {count} prompts"></div>')
        day += timedelta(days=1)

    lines.append("</div>")
    lines.append(f"<p>{len(activity)} active days. Longest streak: {report.metrics.longest_streak} days.</p>")
    lines.append("</section>")


def _render_weekdays(lines: list, report: WrappedReport) -> None:
    timeline = report.timeline
    total = sum(timeline.weekday_totals)

    _slide(lines, "weekdays")
    lines.append('<p class="kicker">Your week</p>')
    lines.append(f'<p class="big">{escape(timeline.peak_day)} is your day.</p>')
    lines.append("<table>")
    for name, count in zip(WEEKDAYS, timeline.weekday_totals):
        share = round(count / total * 100) if total else 0
        lines.append(f"<tr><td>{name}</td><td>{count}</td><td>{share}%</td></tr>")
    lines.append("</table>")
    lines.append(f'<p class="dim">{round(timeline.weekend_percent)}% of your prompts landed on a weekend.</p>')
    lines.append("</section>")


def _render_style(lines: list, report: WrappedReport) -> None:
    patterns = report.patterns
    stats = get_communication_stats(patterns)

    _slide(lines, "style")
    lines.append('<p class="kicker">How you talk to Claude</p>')
    lines.append('<div class="grid">')
    for label, value in [
        ("Times you yelled", stats["yell_count"]),
        ("Pleases and thanks", stats["polite_count"]),
        ("Nitpicks", stats["nitpick_count"]),
        ("Questions", patterns.question_count),
        ("Code blocks", patterns.code_block_count),
        ("Links pasted", patterns.url_count),
    ]:
        lines.append(f'<div class="stat"><div class="value">{format_number(value)}</div><div class="dim">{label}</div></div>')
    lines.append("</div>")

    right_count = patterns.claude_phrases.get("youre_right", 0)
    lines.append(f"<p>Claude said \"You're absolutely right\" {right_count} times.</p>")
    lines.append(f'<p class="dim">Claude\'s favorite line: {escape(get_most_common_claude_phrase(patterns))}</p>')

    if patterns.longest_prompt.length:
        lines.append(f'<p class="kicker">Your longest prompt ({patterns.longest_prompt.length} chars)</p>')
        lines.append(f"<blockquote>{escape(patterns.longest_prompt.text)}</blockquote>")
    lines.append("</section>")


def _render_verdict(lines: list, report: WrappedReport) -> None:
    _slide(lines, "verdict")
    lines.append('<p class="kicker">The roast</p>')
    lines.append(f'<p class="big">{escape(report.roast)}</p>')
    lines.append('<p class="kicker">The compliment</p>')
    lines.append(f'<p class="big">{escape(report.compliment)}</p>')
    lines.append(f"<blockquote>{escape(report.year_summary)}</blockquote>")
    if report.summaries:
        lines.append('<p class="kicker">Things you built</p>')
        lines.append("<ul>")
        for summary in report.summaries:
            lines.append(f"<li>{escape(summary)}</li>")
        lines.append("</ul>")
    lines.append(f'<p class="dim">Generated {escape(report.generated_at)} · v{escape(report.version)}</p>')
    lines.append("</section>")


def render_summary(report: WrappedReport) -> str:
    """Plain-text banner for the terminal."""
    rule = "═" * 43
    lines = []

    lines.append(rule)
    lines.append("")
    lines.append(f"  {report.persona_emoji} You are {report.persona_name.upper()}")
    lines.append(f"  {report.persona_tagline}")
    lines.append("")
    lines.append(f"  Prompts: {report.metrics.total_prompts:,}")
    lines.append(f"  Lines of code: {report.metrics.lines_written:,}")
    lines.append(f"  You're absolutely right: {report.patterns.claude_phrases.get('youre_right', 0)}")
    lines.append("")
    lines.append(rule)

    return "\n".join(lines)
