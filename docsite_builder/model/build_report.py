"""Results produced by the assembly and render stages."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

ORIGIN_BUNDLE = "bundle"
ORIGIN_SOURCE = "source"
ORIGIN_RESOURCES = "resources"


@dataclass(slots=True)
class StagingManifest:
    """What the staging directory contains after a sync."""

    staging_dir: Path
    origins: Dict[str, str] = field(default_factory=dict)
    written: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)

    @property
    def files(self) -> List[str]:
        return sorted(self.origins)

    def origin_of(self, relative_path: str) -> Optional[str]:
        return self.origins.get(relative_path)


@dataclass(slots=True)
class RenderOutcome:
    """Result of rendering a single root document."""

    source: Path
    output: Path
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class BuildReport:
    """Aggregate of a full prepare + render run."""

    manifest: StagingManifest
    outcomes: List[RenderOutcome] = field(default_factory=list)

    @property
    def rendered(self) -> List[Path]:
        return [outcome.output for outcome in self.outcomes if outcome.ok]

    @property
    def failures(self) -> List[RenderOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]
