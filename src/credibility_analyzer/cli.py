"""
Credibility Analyzer CLI
========================

Command-line interface for analyzing content and browsing history.

Usage:
    python -m credibility_analyzer analyze "TEXT" [OPTIONS]
    python -m credibility_analyzer history [OPTIONS]

Examples:
    python -m credibility_analyzer analyze "Scientists confirm the moon is made of cheese"
    python -m credibility_analyzer analyze --lang hi "..."
    python -m credibility_analyzer history --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from credibility_analyzer import __version__
from credibility_analyzer.domain.errors import AnalysisError, RateLimitedError
from credibility_analyzer.domain.results import HistoryEntry
from credibility_analyzer.infrastructure.config import get_settings
from credibility_analyzer.infrastructure.dependencies import lifespan_container
from credibility_analyzer.infrastructure.logging import configure_logging

HISTORY_PREVIEW_CHARS = 200


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the analyzer CLI."""
    parser = argparse.ArgumentParser(
        prog="credibility-analyzer",
        description="Check the credibility of a piece of content",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  SCORING_ENDPOINT_URL      Scoring backend URL
  SCORING_RELAY_URL         Relay URL (used when SCORING_USE_RELAY=true)
  SCORING_TIMEOUT_SECONDS   Request budget (default: 15)
  HISTORY_BACKEND           memory | file | redis (default: file)
  HISTORY_FILE_PATH         JSON file for the 'file' backend
  LOG_LEVEL                 DEBUG | INFO | WARNING | ERROR
        """,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze a piece of text")
    analyze.add_argument("text", type=str, help="Text to analyze ('-' reads stdin)")
    analyze.add_argument(
        "--lang",
        "-l",
        choices=("en", "hi", "mr"),
        default=None,
        help="Locale tag recorded with the result (default: LOCALE or en)",
    )
    analyze.add_argument("--json", action="store_true", help="Print the result as JSON")

    history = subparsers.add_parser("history", help="Show recent analyses")
    history.add_argument("--json", action="store_true", help="Print entries as JSON")
    history.add_argument("--clear", action="store_true", help="Delete all stored entries")

    return parser


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = create_parser()
    return parser.parse_args(args)


def _score_style(score: int) -> str:
    if score >= 70:
        return "green"
    if score >= 40:
        return "yellow"
    return "red"


def preview_content(text: str, limit: int = HISTORY_PREVIEW_CHARS) -> str:
    """Truncate analyzed text for display."""
    if len(text) > limit:
        return f"{text[:limit]}..."
    return text


def render_entry(console: Console, entry: HistoryEntry) -> None:
    """Render a single analysis result."""
    style = _score_style(entry.credibility_score)
    lines = [f"[bold {style}]Credibility score: {entry.credibility_score}/100[/bold {style}]"]
    if entry.is_synthetic:
        lines.append("[dim]Preliminary assessment (analysis service unavailable)[/dim]")
    if entry.red_flags:
        lines.append("")
        lines.append("[bold]Red flags[/bold]")
        lines.extend(f"  • {flag}" for flag in entry.red_flags)
    lines.append("")
    lines.append(entry.explanation)

    console.print(Panel("\n".join(lines), title="Analysis Result", border_style=style))


def render_history(console: Console, entries: list[HistoryEntry]) -> None:
    """Render history as a table, newest first."""
    if not entries:
        console.print("[dim]No analyses yet.[/dim]")
        return

    table = Table(title="Recent Analyses", show_lines=True)
    table.add_column("When", style="dim", no_wrap=True)
    table.add_column("Score", justify="right")
    table.add_column("Flags", justify="right")
    table.add_column("Lang", justify="center")
    table.add_column("Content")

    for entry in entries:
        score = f"[{_score_style(entry.credibility_score)}]{entry.credibility_score}[/]"
        if entry.is_synthetic:
            score += "*"
        table.add_row(
            entry.created_at.astimezone().strftime("%Y-%m-%d %H:%M"),
            score,
            str(len(entry.red_flags)),
            entry.locale_tag,
            preview_content(entry.source_content),
        )

    console.print(table)
    if any(entry.is_synthetic for entry in entries):
        console.print("[dim]* preliminary assessment[/dim]")


async def main_async(args: argparse.Namespace) -> int:
    """Async main entry point."""
    console = Console()
    settings = get_settings()

    async with lifespan_container(settings) as container:
        if args.command == "history":
            if args.clear:
                await container.history.clear()
                console.print("[green]History cleared.[/green]")
                return 0
            entries = await container.history.list()
            if args.json:
                print(json.dumps([e.model_dump(mode="json") for e in entries], indent=2))
            else:
                render_history(console, entries)
            return 0

        text = sys.stdin.read() if args.text == "-" else args.text
        try:
            entry = await container.submitter.submit(
                text, locale_tag=args.lang or settings.locale
            )
        except RateLimitedError as e:
            console.print(f"[yellow]{e.message}[/yellow]")
            return 1
        except AnalysisError as e:
            console.print(f"[red]Error: {e.message}[/red]")
            return 1

        if args.json:
            print(entry.model_dump_json(indent=2))
        else:
            render_entry(console, entry)
        return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed_args = parse_args(args)
    settings = get_settings()
    configure_logging("DEBUG" if parsed_args.verbose else settings.log_level)

    try:
        return asyncio.run(main_async(parsed_args))
    except KeyboardInterrupt:
        return 130
