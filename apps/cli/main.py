"""CLI entrypoint."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from fanscore.config import get_settings

from .config import DEFAULT_CONFIG_PATH, load_config
from .errors import CliError, ConfigError
from .commands.config_cmd import config_group
from .commands.fan import fan_cmd
from .commands.ranking import ranking_cmd
from .commands.settings_cmd import settings_cmd
from .commands.tiers import tiers_cmd


@click.group()
@click.option("--config-path", type=click.Path(exists=False, dir_okay=False, path_type=Path), help="Path to config file (default: ~/.fanscore/config)")
@click.option("--snapshot", help="Snapshot file (JSON or YAML) exported from the data store")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], snapshot: Optional[str], verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        resolved_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        config = load_config(resolved_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc))

    ctx.obj = {
        "config": config,
        "config_path": resolved_path,
        "settings": get_settings(),
        "snapshot": snapshot,
        "verbose": verbose,
    }


cli.add_command(ranking_cmd)
cli.add_command(fan_cmd)
cli.add_command(tiers_cmd)
cli.add_command(settings_cmd)
cli.add_command(config_group)


@cli.command("help")
@click.argument("command", required=False)
@click.argument("subcommand", required=False)
@click.pass_context
def help_cmd(ctx: click.Context, command: Optional[str], subcommand: Optional[str]) -> None:
    """Show help for the CLI or a specific (sub)command."""
    target = cli
    target_name = "fanscore"

    if command:
        cmd = cli.commands.get(command)
        if not cmd:
            raise click.ClickException(f"Unknown command: {command}")
        target = cmd
        target_name = command
        if subcommand and isinstance(cmd, click.Group):
            sub = cmd.commands.get(subcommand)
            if not sub:
                raise click.ClickException(f"Unknown subcommand for {command}: {subcommand}")
            target = sub
            target_name = f"{command} {subcommand}"
        elif subcommand:
            raise click.ClickException(f"Command {command} has no subcommands")

    with click.Context(target, info_name=target_name, parent=ctx) as help_ctx:
        click.echo(target.get_help(help_ctx))


def main() -> None:
    try:
        cli(obj={})
    except CliError as exc:
        raise click.ClickException(str(exc))


if __name__ == "__main__":  # pragma: no cover
    main()
