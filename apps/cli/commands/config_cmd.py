"""Config command implementations."""
from __future__ import annotations

from pathlib import Path

import click

from fanscore.config.constants import RANKING_MODES

from ..config import CliConfig, save_config
from ..context import dispatch_errors
from ..errors import ValidationError


@click.group("config")
@click.pass_context
def config_group(ctx: click.Context) -> None:
    """Config utilities."""
    pass


@config_group.command("set-snapshot")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
@dispatch_errors
def set_snapshot(ctx: click.Context, path: Path) -> None:
    """Store the default snapshot path in the config file."""
    config: CliConfig = ctx.obj["config"]
    config_path: Path = ctx.obj["config_path"]

    resolved = path.expanduser().resolve()
    if not resolved.exists():
        raise ValidationError(f"Snapshot file does not exist: {resolved}")

    config.snapshot_path = str(resolved)
    save_config(config, config_path)
    click.echo(f"snapshot_path set to {config.snapshot_path}")


@config_group.command("set-mode")
@click.argument("mode", type=click.Choice(RANKING_MODES))
@click.pass_context
@dispatch_errors
def set_mode(ctx: click.Context, mode: str) -> None:
    """Store the default ranking mode in the config file."""
    config: CliConfig = ctx.obj["config"]
    config.mode = mode
    save_config(config, ctx.obj["config_path"])
    click.echo(f"mode set to {mode}")
