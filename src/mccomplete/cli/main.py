"""Root CLI group: entry point for all mccomplete commands."""

from __future__ import annotations

from typing import NoReturn

import click

from mccomplete import __version__
from mccomplete.output.formatter import OutputFormatter
from mccomplete.services.completion_service import CompletionService


class MCContext:
    """Shared context passed through Click commands."""

    def __init__(
        self,
        json_mode: bool = False,
        commands_path: str | None = None,
        registries_path: str | None = None,
    ) -> None:
        self.json_mode = json_mode
        self.formatter = OutputFormatter(json_mode=json_mode)
        self.commands_path = commands_path
        self.registries_path = registries_path
        self._service: CompletionService | None = None

    def get_service(self) -> CompletionService:
        """Lazy-load the grammar and registries and return the completion service.

        Paths given on the command line win over the config file; with neither,
        the bundled sample data is used.
        """
        if self._service is None:
            from mccomplete.core.config import load_config
            from mccomplete.services.loader_service import (
                load_default_grammar,
                load_default_registries,
                load_grammar,
                load_registries,
            )

            data = load_config().get("data", {})
            commands_path = self.commands_path or data.get("commands_path")
            registries_path = self.registries_path or data.get("registries_path")

            tree = load_grammar(commands_path) if commands_path else load_default_grammar()
            registries = load_registries(registries_path) if registries_path else load_default_registries()
            self._service = CompletionService(tree, registries)
        return self._service

    def fail(self, message: str) -> NoReturn:
        """Report an error and exit with status 1."""
        self.formatter.error(message)
        raise click.exceptions.Exit(1)


pass_context = click.make_pass_decorator(MCContext, ensure=True)


@click.group(invoke_without_command=True)
@click.option("--json", "json_mode", is_flag=True, help="Output JSON for editor plugins and scripts.")
@click.option(
    "--commands",
    "commands_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Grammar tree (commands.json). Defaults to the configured or bundled one.",
)
@click.option(
    "--registries",
    "registries_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Registries (registries.json). Defaults to the configured or bundled one.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (overrides the config file).",
)
@click.version_option(__version__, prog_name="mccomplete")
@click.pass_context
def cli(
    ctx: click.Context,
    json_mode: bool,
    commands_path: str | None,
    registries_path: str | None,
    log_level: str | None,
) -> None:
    """mccomplete: completion for Minecraft/Brigadier command grammars.

    Run without a subcommand to launch the interactive REPL.
    """
    from mccomplete.core.config import load_config
    from mccomplete.core.exceptions import ConfigError
    from mccomplete.core.logging import configure_logging

    ctx.obj = MCContext(json_mode=json_mode, commands_path=commands_path, registries_path=registries_path)

    if log_level is None:
        try:
            log_level = load_config()["logging"]["level"]
        except ConfigError as e:
            ctx.obj.fail(str(e))
    configure_logging(log_level)

    if ctx.invoked_subcommand is None:
        # No subcommand → launch interactive REPL
        from mccomplete.cli.repl import launch_repl
        launch_repl(ctx.obj)


# ── Register subcommands ──────────────────────────────────────────

from mccomplete.cli.grammar_cmd import complete_cmd, parse_cmd, tree_cmd
cli.add_command(complete_cmd, "complete")
cli.add_command(parse_cmd, "parse")
cli.add_command(tree_cmd, "tree")

from mccomplete.cli.config_cmd import config
cli.add_command(config)
