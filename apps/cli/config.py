"""Configuration loader for the CLI."""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from fanscore.config.constants import RANKING_MODE_MONTHLY, RANKING_MODES

from .errors import ConfigError


DEFAULT_CONFIG_PATH = Path.home() / ".fanscore" / "config"


@dataclass
class CliConfig:
    snapshot_path: Optional[str] = None
    mode: str = RANKING_MODE_MONTHLY

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "CliConfig":
        mode = data.get("mode") or RANKING_MODE_MONTHLY
        if mode not in RANKING_MODES:
            raise ConfigError(f"Invalid `mode` in config: {mode} (expected one of {', '.join(RANKING_MODES)})")
        snapshot_path = data.get("snapshot_path")
        return cls(
            snapshot_path=str(snapshot_path) if snapshot_path else None,
            mode=mode,
        )


def load_config(path: Optional[Path] = None) -> CliConfig:
    """Missing config file means defaults; a broken one is an error."""
    cfg_path = path or DEFAULT_CONFIG_PATH
    cfg_path = cfg_path.expanduser()
    if not cfg_path.exists():
        return CliConfig()

    try:
        raw = cfg_path.read_text(encoding="utf-8")
    except OSError as exc:  # pragma: no cover
        raise ConfigError(f"Failed to read config file: {exc}") from exc

    data: Dict[str, Any]

    # Try JSON first; fall back to YAML.
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse config as YAML: {exc}") from exc

    if data is None:
        return CliConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping")

    return CliConfig.from_mapping(data)


def save_config(config: CliConfig, path: Path) -> None:
    cfg_path = path.expanduser()
    payload = {key: value for key, value in asdict(config).items() if value is not None}
    try:
        cfg_path.parent.mkdir(parents=True, exist_ok=True)
        cfg_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to write config file: {exc}") from exc
