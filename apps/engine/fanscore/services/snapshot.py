"""Snapshot loading: the read-only hand-off from the data store to the engine."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from fanscore.errors import SnapshotError
from fanscore.schemas import AreaMultiplierTable, Snapshot
from fanscore.services.distance import build_multiplier_table

logger = logging.getLogger(__name__)


def parse_snapshot(data: Dict[str, Any], path: Optional[Path] = None) -> Snapshot:
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a mapping", path=path)
    try:
        return Snapshot.model_validate(data)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid snapshot: {exc}", path=path) from exc


def load_snapshot(path: Union[str, Path]) -> Snapshot:
    snapshot_path = Path(path).expanduser()
    if not snapshot_path.exists():
        raise SnapshotError("Snapshot file not found", path=snapshot_path)

    try:
        raw = snapshot_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(f"Failed to read snapshot: {exc}", path=snapshot_path) from exc

    # JSON first; YAML is a superset but slower and looser.
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise SnapshotError(f"Failed to parse snapshot as JSON or YAML: {exc}", path=snapshot_path) from exc

    snapshot = parse_snapshot(data, path=snapshot_path)

    logger.debug(
        f"Loaded snapshot {snapshot_path}: {len(snapshot.fans)} fans, "
        f"{len(snapshot.records)} records, {len(snapshot.tiers)} tiers"
    )
    return snapshot


def multiplier_table_for(snapshot: Snapshot) -> AreaMultiplierTable:
    return build_multiplier_table(snapshot.area_multipliers)
