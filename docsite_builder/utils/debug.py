"""Helpers to persist build reports for debugging."""
from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any

from docsite_builder.model.build_report import BuildReport


class DebugDumper:
    """Writes the build report onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, report: BuildReport) -> Path:
        """Persist the report as JSON and return the written file."""
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / "build_report.json"
        payload = self._serialize(report)
        target.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        return target

    def _serialize(self, value: Any) -> Any:
        if is_dataclass(value):
            return {f.name: self._serialize(getattr(value, f.name)) for f in fields(value)}
        if isinstance(value, Path):
            return value.as_posix()
        if isinstance(value, dict):
            return {k: self._serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._serialize(v) for v in value]
        return value
