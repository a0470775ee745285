"""
Tests for the CLI
=================
"""

from __future__ import annotations

from rich.console import Console

from credibility_analyzer.cli import parse_args, preview_content, render_entry, render_history
from credibility_analyzer.domain.results import HistoryEntry


def _console() -> Console:
    return Console(record=True, width=120)


class TestParseArgs:
    def test_analyze_command(self) -> None:
        args = parse_args(["analyze", "some text", "--lang", "hi", "--json"])

        assert args.command == "analyze"
        assert args.text == "some text"
        assert args.lang == "hi"
        assert args.json is True

    def test_history_command(self) -> None:
        args = parse_args(["history", "--clear"])

        assert args.command == "history"
        assert args.clear is True


class TestRendering:
    def test_render_entry(self, make_entry) -> None:
        console = _console()

        render_entry(console, make_entry(1))

        output = console.export_text()
        assert "35/100" in output
        assert "Low overall credibility score" in output

    def test_render_synthetic_entry(self, make_entry) -> None:
        console = _console()
        entry = make_entry(1).model_copy(update={"is_synthetic": True})

        render_entry(console, entry)

        assert "Preliminary assessment" in console.export_text()

    def test_render_history(self, make_entry) -> None:
        console = _console()
        entries: list[HistoryEntry] = [make_entry(2, content="second"), make_entry(1)]

        render_history(console, entries)

        output = console.export_text()
        assert "second" in output
        assert "claim number 1" in output

    def test_preview_truncates_long_content(self) -> None:
        preview = preview_content("x" * 500)

        assert preview == "x" * 200 + "..."
        assert preview_content("short") == "short"

    def test_render_empty_history(self) -> None:
        console = _console()

        render_history(console, [])

        assert "No analyses yet" in console.export_text()
