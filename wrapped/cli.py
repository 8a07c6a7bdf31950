"""Command-line interface for wrapped."""

import argparse
import logging
import sys
import webbrowser
from pathlib import Path

from .aggregator import aggregate
from .classifier import create_fallback_persona
from .config import DEFAULT_MODEL, VERSION, YEAR, check_environment, load_config, validate_output_path
from .filters import format_sample_prompts, select_judge_prompts, select_sample_prompts
from .judge import DEFAULT_SUMMARY, evaluate_persona, generate_summary
from .metrics import calculate_metrics
from .patterns import analyze_patterns
from .renderer import render_html, render_summary
from .report import build_report, save_report_json
from .scanner import describe_directory, format_bytes, get_global_claude_dir, scan_for_claude_dirs
from .timeline import build_timeline


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="wrapped",
        description="Your year in review with Claude Code",
        epilog=f"""
Examples:
  wrapped gen                    Analyze every .claude directory found
  wrapped gen -g                 Only analyze ~/.claude
  wrapped gen -d ~/work/.claude  Analyze a specific directory
  wrapped gen --no-judge         Skip the LLM judge, use the built-in persona rules
  wrapped list                   Show directories that would be analyzed
  wrapped help                   Show detailed help

Output lands in ./output/wrapped-{YEAR}/ (index.html, data.json, sample_prompts.txt).
The LLM judge requires the ANTHROPIC_API_KEY environment variable.
""",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # gen command
    gen_parser = subparsers.add_parser(
        "gen",
        help="Generate your wrapped"
    )
    gen_parser.add_argument(
        "-d", "--dir",
        metavar="PATH",
        action="append",
        help="Analyze this .claude directory (repeatable; skips scanning)"
    )
    gen_parser.add_argument(
        "-g", "--global",
        dest="global_only",
        action="store_true",
        help="Only analyze ~/.claude"
    )
    gen_parser.add_argument(
        "--year",
        type=int,
        help=f"Year to analyze (default: {YEAR})"
    )
    gen_parser.add_argument(
        "-o", "--output",
        metavar="DIR",
        help="Output directory (default: ./output/wrapped-<year>)"
    )
    gen_parser.add_argument(
        "--no-judge",
        action="store_true",
        help="Skip LLM persona evaluation"
    )
    gen_parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Don't ask before sending sample prompts to the API"
    )
    gen_parser.add_argument(
        "--history",
        action="store_true",
        help="Also read history.jsonl prompt logs"
    )
    gen_parser.add_argument(
        "--model",
        help=f"Claude model for the judge (default: {DEFAULT_MODEL})"
    )
    gen_parser.add_argument(
        "--open",
        action="store_true",
        help="Open the report in a browser when done"
    )
    gen_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging"
    )

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List .claude directories with conversations"
    )
    list_parser.add_argument(
        "-g", "--global",
        dest="global_only",
        action="store_true",
        help="Only check ~/.claude"
    )

    # help command
    subparsers.add_parser(
        "help",
        help="Show detailed help"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO,
        format="%(message)s",
    )

    # Handle subcommands
    if args.command == "gen":
        return cmd_gen(args)
    elif args.command == "list":
        return cmd_list(args)
    elif args.command == "help":
        return cmd_help()
    else:
        parser.print_help()
        return 0


def _progress(message: str) -> None:
    print(message, file=sys.stderr)


def _confirm(question: str) -> bool:
    try:
        answer = input(f"{question} [Y/n] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("", "y", "yes")


def find_directories(config) -> list:
    """Directories to analyze: explicit -d paths, or a scan of the home directory."""
    if config.directories:
        dirs = []
        global_dir = get_global_claude_dir()
        for raw in config.directories:
            path = Path(raw).expanduser()
            if not path.is_dir():
                print(f"Warning: {raw} is not a directory, skipping", file=sys.stderr)
                continue
            dirs.append(describe_directory(path, is_global=path == global_dir))
        return dirs

    return scan_for_claude_dirs(global_only=config.global_only)


def judge_persona(config, dataset, metrics, patterns, timeline) -> tuple:
    """Pick the persona and year summary, falling back to the built-in rules.

    Returns:
        (PersonaResult, year_summary)
    """
    env = check_environment()
    fallback = (create_fallback_persona(metrics, timeline, patterns), DEFAULT_SUMMARY)

    if not config.use_judge:
        return fallback

    if not env["anthropic_key"]:
        print("ANTHROPIC_API_KEY not set - using fallback persona", file=sys.stderr)
        return fallback

    if not config.assume_yes:
        print("Warning: sample prompts will be sent to the Anthropic API for persona analysis", file=sys.stderr)
        if not _confirm("Continue with LLM analysis?"):
            print("Using deterministic persona instead", file=sys.stderr)
            return fallback

    persona_result = evaluate_persona(
        metrics, patterns, timeline, select_judge_prompts(dataset), model=config.model
    )
    if persona_result is None:
        print("LLM judge failed - using fallback", file=sys.stderr)
        return fallback

    summaries = [s.summary for s in dataset.summaries]
    year_summary = generate_summary(
        metrics, timeline, persona_result.persona, summaries, patterns,
        model=config.model, year=config.year,
    )
    print("Judgment complete", file=sys.stderr)
    return persona_result, year_summary or DEFAULT_SUMMARY


def cmd_gen(args) -> int:
    """Generate the wrapped report."""
    config = load_config(args)

    # Fail before doing any work if we can't write the result
    valid, output_dir, error = validate_output_path(config.output_dir)
    if not valid:
        print(f"Error: Invalid output path: {error}", file=sys.stderr)
        return 1

    # Find directories
    print("Scanning for Claude directories...", file=sys.stderr)
    dirs = find_directories(config)
    if not dirs:
        print("Error: Could not find any .claude directories with conversations.", file=sys.stderr)
        print("Searched in:", file=sys.stderr)
        print("  - ~/.claude (global)", file=sys.stderr)
        print("  - ~/*/.claude (project directories)", file=sys.stderr)
        print(f"Make sure you have used Claude Code in {config.year}.", file=sys.stderr)
        return 1

    for d in dirs:
        print(f"  {d.project_name}: {d.conversation_count} convos | {format_bytes(d.total_size_bytes)}", file=sys.stderr)

    # Read conversations
    dataset = aggregate(dirs, on_progress=_progress, year=config.year, include_history=config.include_history)
    if not dataset.user_entries:
        print(f"Error: No conversations found for {config.year}.", file=sys.stderr)
        return 1

    # Analyze
    print("Analyzing your year...", file=sys.stderr)
    metrics = calculate_metrics(dataset)
    patterns = analyze_patterns(dataset)
    timeline = build_timeline(dataset)

    persona_result, year_summary = judge_persona(config, dataset, metrics, patterns, timeline)

    report = build_report(
        metrics, patterns, timeline, persona_result, year_summary,
        [s.summary for s in dataset.summaries],
        year=config.year,
    )

    # Write output
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    html_path = out / "index.html"
    html_path.write_text(render_html(report), encoding="utf-8")
    save_report_json(report, out / "data.json")
    (out / "sample_prompts.txt").write_text(
        format_sample_prompts(select_sample_prompts(dataset)), encoding="utf-8"
    )
    print(f"Written to {out}", file=sys.stderr)

    print()
    print(render_summary(report))
    print()
    print(f"Open {html_path} to see your full wrapped!")

    if config.open_browser:
        webbrowser.open(html_path.resolve().as_uri())

    return 0


def cmd_list(args) -> int:
    """List directories with conversations."""
    dirs = scan_for_claude_dirs(global_only=getattr(args, "global_only", False))

    if not dirs:
        print("No .claude directories found", file=sys.stderr)
        return 1

    print("Directories:\n")
    for i, d in enumerate(dirs, 1):
        print(f"  {i}. {d.project_name}")
        print(f"     {d.path} | {d.conversation_count} convos | {format_bytes(d.total_size_bytes)}")

    return 0


def cmd_help() -> int:
    """Show detailed help."""
    help_text = f"""
WRAPPED - Your year in review with Claude Code

COMMANDS
  wrapped gen [options]     Generate your wrapped
  wrapped list [options]    List .claude directories with conversations
  wrapped help              Show this help

GEN OPTIONS
  -d, --dir PATH       Analyze a specific .claude directory (repeatable)
  -g, --global         Only analyze ~/.claude
  --year YEAR          Year to analyze (default: {YEAR})
  -o, --output DIR     Output directory (default: ./output/wrapped-<year>)
  --no-judge           Skip the LLM judge, use the built-in persona rules
  -y, --yes            Don't ask before sending sample prompts to the API
  --history            Also read history.jsonl prompt logs
  --model MODEL        Claude model (default: {DEFAULT_MODEL})
  --open               Open the report in a browser when done
  -v, --verbose        Debug logging

LIST OPTIONS
  -g, --global         Only check ~/.claude

OUTPUT
  index.html           Story-style report
  data.json            Everything in the report, as JSON
  sample_prompts.txt   200 random prompts of yours

PERSONAS
  Without the judge, your persona is picked from four axes: the language
  you write most, when you code, how you talk, and which tools dominate.
  With the judge, Claude reads a sample of your prompts and decides.

PRIVACY
  Nothing leaves your machine unless the judge runs. Prompts sent to the
  API are stripped of anything that looks like a key, token or password
  and cut to 300 characters.

ENVIRONMENT
  ANTHROPIC_API_KEY    Enables the LLM judge.
  WRAPPED_YEAR         Default year to analyze.
  WRAPPED_MODEL        Default Claude model.
"""
    print(help_text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
