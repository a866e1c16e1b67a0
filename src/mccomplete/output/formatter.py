"""Dual-mode output: Rich for humans, JSON for scripts and editor plugins."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console, RenderableType
from rich.markup import escape
from rich.table import Table

from mccomplete.models.completion import CompletionCandidate, ParseResult

# Human output goes to stdout; in JSON mode, human messages go to stderr
_console = Console()
_err_console = Console(stderr=True)

_KIND_STYLES = {
    "keyword": "bold cyan",
    "enum_value": "green",
    "literal_value": "yellow",
}


class OutputFormatter:
    """Routes output to Rich (human) or JSON (machine) depending on mode."""

    def __init__(self, json_mode: bool = False) -> None:
        self.json_mode = json_mode

    # ── JSON output ──────────────────────────────────────────────

    def json(self, data: Any, status: str = "success") -> None:
        """Print structured JSON to stdout."""
        envelope = {"status": status, "data": data}
        print(json.dumps(envelope, indent=2, default=str))

    def json_error(self, message: str, code: int = 1) -> None:
        """Print a JSON error envelope to stdout."""
        envelope = {"status": "error", "error": {"message": message, "code": code}}
        print(json.dumps(envelope, indent=2))

    # ── Human output ─────────────────────────────────────────────

    def print(self, message: RenderableType = "", **kwargs: Any) -> None:
        """Print a message or renderable, routing to stderr in JSON mode."""
        console = _err_console if self.json_mode else _console
        console.print(message, **kwargs)

    def success(self, message: str) -> None:
        if self.json_mode:
            return
        _console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        console = _err_console if self.json_mode else _console
        console.print(f"[yellow]![/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Print an error, as a JSON envelope in JSON mode."""
        if self.json_mode:
            self.json_error(message)
            return
        _err_console.print(f"[red]✗[/red] {escape(message)}")

    def info(self, message: str) -> None:
        if self.json_mode:
            return
        _console.print(f"[dim]ℹ[/dim] {escape(message)}")

    def table(
        self,
        title: str,
        columns: list[tuple[str, str]],
        rows: list[list[str]],
        data_for_json: list[dict[str, Any]] | None = None,
    ) -> None:
        """Print a table (Rich for humans, JSON for machines).

        columns: list of (header, style) tuples
        rows: list of row data (strings)
        data_for_json: if provided, used as the JSON payload instead of rows
        """
        if self.json_mode:
            self.json(data_for_json or [dict(zip([c[0] for c in columns], r)) for r in rows])
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header, style in columns:
            table.add_column(header, style=style)
        for row in rows:
            table.add_row(*row)
        _console.print(table)

    # ── Domain output ────────────────────────────────────────────

    def candidates(self, line: str, candidates: list[CompletionCandidate]) -> None:
        """Print completion candidates for ``line``."""
        if self.json_mode:
            self.json([c.model_dump(mode="json") for c in candidates])
            return
        if not candidates:
            self.info(f"No completions for {line!r}.")
            return

        rows = [
            [
                f"[{_KIND_STYLES.get(c.kind.value, '')}]{escape(c.label)}[/]",
                c.kind.value,
                escape(c.documentation or ""),
            ]
            for c in candidates
        ]
        self.table(
            title=f"Completions for {line!r}",
            columns=[("Label", ""), ("Kind", "dim"), ("Documentation", "")],
            rows=rows,
        )

    def parse_result(self, line: str, result: ParseResult) -> None:
        """Print where ``line`` stopped in the grammar."""
        data = {
            "line": line,
            "path": list(result.path),
            "tip": result.tip.kind.value,
            "executable": result.tip.executable,
            "remainder": result.remainder,
            "properties": result.properties,
        }
        if self.json_mode:
            self.json(data)
            return

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(style="bold cyan")
        table.add_column()
        table.add_row("Path", escape(" ".join(result.path)) or "[dim]<root>[/dim]")
        table.add_row("Tip", f"{result.tip.kind.value}{' (executable)' if result.tip.executable else ''}")
        table.add_row("Remainder", escape(repr(result.remainder)))
        for name, value in result.properties.items():
            table.add_row(f"<{name}>", escape(value))
        _console.print(table)
