"""Grammar query commands: complete, parse, tree."""

from __future__ import annotations

import click
from rich.markup import escape
from rich.tree import Tree

from mccomplete.cli.main import MCContext, pass_context
from mccomplete.core.exceptions import MCCompleteError
from mccomplete.models.grammar import GrammarNode


@click.command("complete")
@click.argument("line", required=False, default="")
@pass_context
def complete_cmd(ctx: MCContext, line: str) -> None:
    """Show completions for LINE (the text before the cursor).

    Quote LINE to keep trailing spaces: mccomplete complete "gamemode "
    """
    try:
        candidates = ctx.get_service().complete(line)
    except MCCompleteError as e:
        ctx.fail(str(e))
    ctx.formatter.candidates(line, candidates)


@click.command("parse")
@click.argument("line", required=False, default="")
@pass_context
def parse_cmd(ctx: MCContext, line: str) -> None:
    """Show how far LINE gets through the grammar and what it binds."""
    try:
        result = ctx.get_service().parse(line)
    except MCCompleteError as e:
        ctx.fail(str(e))
    ctx.formatter.parse_result(line, result)


@click.command("tree")
@click.argument("path", nargs=-1)
@click.option("--depth", type=click.IntRange(min=1), default=2, show_default=True, help="Levels to show.")
@pass_context
def tree_cmd(ctx: MCContext, path: tuple[str, ...], depth: int) -> None:
    """Show the grammar below PATH (e.g. `tree execute as`)."""
    try:
        tree = ctx.get_service().tree
        node = tree.find(path)
        if node is not None:
            node = tree.resolve(node)
    except MCCompleteError as e:
        ctx.fail(str(e))
    if node is None:
        ctx.fail(f"No such command path: {' '.join(path)}")

    if ctx.json_mode:
        ctx.formatter.json(node.model_dump(mode="json", by_alias=True, exclude_defaults=True))
        return

    root = Tree(f"[bold]{escape(' '.join(path)) or '<root>'}[/bold]")
    _add_children(root, node, depth)
    ctx.formatter.print(root)


def _label(name: str, node: GrammarNode) -> str:
    if node.is_argument:
        text = f"[green]<{escape(name)}>[/green] [dim]{escape(node.parser or '?')}[/dim]"
    else:
        text = f"[cyan]{escape(name)}[/cyan]"
    if node.executable:
        text += " [yellow]*[/yellow]"
    if node.redirect is not None:
        text += f" [magenta]→ {escape(' '.join(node.redirect)) or '<root>'}[/magenta]"
    return text


def _add_children(branch: Tree, node: GrammarNode, depth: int) -> None:
    """Add ``node``'s own children; redirects are shown, not followed."""
    for name, child in node.children.items():
        sub = branch.add(_label(name, child))
        if depth > 1:
            _add_children(sub, child, depth - 1)
        elif child.children:
            sub.add(f"[dim]… {len(child.children)} more[/dim]")
