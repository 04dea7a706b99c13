"""Errors raised at the engine's boundaries (the scoring functions themselves never raise)."""
from pathlib import Path
from typing import Optional


class FanScoreError(Exception):
    """Base error."""


class SnapshotError(FanScoreError):
    """Snapshot file could not be read or does not match the expected shape."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class FanNotFoundError(FanScoreError):
    def __init__(self, fan_id: str):
        self.fan_id = fan_id
        super().__init__(f"Fan not found: {fan_id}")
