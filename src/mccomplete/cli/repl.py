"""Interactive REPL: prompt_toolkit session with grammar-driven completion."""

from __future__ import annotations

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory
from rich.console import Console
from rich.panel import Panel

from mccomplete.cli.completer import CommandCompleter
from mccomplete.cli.main import MCContext
from mccomplete.core.config import get_history_path, load_config
from mccomplete.core.exceptions import MCCompleteError

console = Console()

# REPL commands handled locally, never parsed against the grammar
LOCAL_COMMANDS = {
    "/help": "Show help",
    "/tree": "Show top-level commands",
    "/quit": "Exit REPL",
    "/exit": "Exit REPL",
}


def _show_help() -> None:
    """Display REPL help."""
    help_text = (
        "[bold cyan]USAGE[/bold cyan]\n"
        "  Type a command; completions appear as you type (Tab to cycle).\n"
        "  Press Enter to see how the line parses. Nothing is executed.\n"
        "\n"
        "[bold cyan]COMMANDS[/bold cyan]\n"
        "  /tree   — Show top-level commands\n"
        "  /help   — This help message\n"
        "  /quit   — Exit"
    )
    console.print(Panel(help_text, title="mccomplete Help", border_style="cyan"))


def _show_commands(ctx: MCContext) -> None:
    tree = ctx.get_service().tree
    names = sorted(tree.root.children)
    console.print(", ".join(f"[cyan]{name}[/cyan]" for name in names) or "[dim]No commands.[/dim]")


def _handle_line(ctx: MCContext, text: str) -> None:
    """Parse a finished line and report where it landed."""
    service = ctx.get_service()
    result = service.parse(text)
    ctx.formatter.parse_result(text, result)
    if result.remainder:
        ctx.formatter.warning(f"Unrecognized input from {result.remainder!r}")
    elif result.tip.executable:
        ctx.formatter.success("Complete command.")
    else:
        expected = ", ".join(c.label for c in service.candidates(result)[:8])
        ctx.formatter.info(f"Incomplete command. Next: {expected or 'argument'}")


def launch_repl(ctx: MCContext) -> None:
    """Launch the interactive REPL session."""
    try:
        settings = load_config()
        service = ctx.get_service()
    except MCCompleteError as e:
        ctx.fail(str(e))

    console.print()
    console.print(
        Panel(
            "[bold cyan]mccomplete[/bold cyan] — Brigadier command completion\n"
            f"{len(service.tree.root.children)} commands loaded. Type [bold]/help[/bold] for help.",
            border_style="cyan",
        )
    )
    console.print()

    repl_settings = settings.get("repl", {})
    history = FileHistory(str(get_history_path())) if repl_settings.get("history", True) else InMemoryHistory()
    session: PromptSession[str] = PromptSession(
        completer=CommandCompleter(service, LOCAL_COMMANDS),
        complete_while_typing=True,
        history=history,
        enable_history_search=False,
    )
    prompt = repl_settings.get("prompt", "> ")

    while True:
        try:
            text = session.prompt(prompt).strip()
            if not text:
                continue

            if text in ("/quit", "/exit"):
                raise EOFError()
            if text == "/help":
                _show_help()
            elif text == "/tree":
                _show_commands(ctx)
            elif text.startswith("/"):
                ctx.formatter.error(f"Unknown command: {text}. Type /help for available commands.")
            else:
                _handle_line(ctx, text)

            console.print()  # blank line between outputs

        except MCCompleteError as e:
            ctx.formatter.error(str(e))
        except (EOFError, KeyboardInterrupt):
            console.print("\n[dim]Goodbye![/dim]")
            break
