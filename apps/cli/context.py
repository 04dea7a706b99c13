"""Shared helpers for commands: snapshot resolution and error surfacing."""
from __future__ import annotations

from functools import wraps
from typing import Optional

import click

from fanscore.config import Settings
from fanscore.errors import FanScoreError
from fanscore.schemas import Snapshot
from fanscore.services.snapshot import load_snapshot

from .config import CliConfig
from .errors import CliError, ValidationError


def resolve_snapshot_path(ctx: click.Context) -> str:
    """--snapshot flag, then config file, then FANSCORE_SNAPSHOT_PATH."""
    override: Optional[str] = ctx.obj.get("snapshot")
    config: CliConfig = ctx.obj["config"]
    settings: Settings = ctx.obj["settings"]
    value = override or config.snapshot_path or settings.snapshot_path
    if not value:
        raise ValidationError(
            "snapshot path is required; pass --snapshot, set `snapshot_path` in config "
            "or export FANSCORE_SNAPSHOT_PATH"
        )
    return value


def load_snapshot_for(ctx: click.Context) -> Snapshot:
    return load_snapshot(resolve_snapshot_path(ctx))


def dispatch_errors(func):
    """Decorator to surface CliError / engine boundary errors as ClickException."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (CliError, FanScoreError) as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper
