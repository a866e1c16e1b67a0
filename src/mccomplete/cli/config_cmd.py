"""Configuration commands."""

from __future__ import annotations

import click
from rich.markup import escape

from mccomplete.cli.main import MCContext, pass_context
from mccomplete.core.exceptions import ConfigError


@click.group()
def config() -> None:
    """View and change settings (show, set, path)."""
    pass


@config.command("show")
@pass_context
def config_show(ctx: MCContext) -> None:
    """Show the effective configuration."""
    from mccomplete.core.config import load_config

    try:
        settings = load_config()
    except ConfigError as e:
        ctx.fail(str(e))

    if ctx.json_mode:
        ctx.formatter.json(settings)
        return

    rows = [
        [f"{section}.{key}", escape(repr(value))]
        for section, values in settings.items()
        if isinstance(values, dict)
        for key, value in values.items()
    ]
    ctx.formatter.table(title="Configuration", columns=[("Setting", "bold"), ("Value", "green")], rows=rows)


@config.command("set")
@click.argument("key")
@click.argument("value")
@pass_context
def config_set(ctx: MCContext, key: str, value: str) -> None:
    """Set KEY (section.name, e.g. data.commands_path) to VALUE."""
    from mccomplete.core.config import set_value

    try:
        settings = set_value(key, value)
    except ConfigError as e:
        ctx.fail(str(e))

    section, _, name = key.partition(".")
    if ctx.json_mode:
        ctx.formatter.json({key: settings[section][name]})
    else:
        ctx.formatter.success(f"{key} = {settings[section][name]!r}")


@config.command("path")
@pass_context
def config_path(ctx: MCContext) -> None:
    """Print the config file location."""
    from mccomplete.core.config import get_config_path

    path = get_config_path()
    if ctx.json_mode:
        ctx.formatter.json({"path": str(path)})
    else:
        ctx.formatter.print(str(path), soft_wrap=True)
