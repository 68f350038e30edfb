"""Local directory trees copied on top of the bundle content."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from docsite_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class LocalOverlay:
    """Regular files below ``root`` keyed by their POSIX relative path."""

    origin: str
    root: Optional[Path] = None
    files: Dict[str, Path] = field(default_factory=dict)

    @classmethod
    def collect(cls, root: Path, origin: str) -> "LocalOverlay":
        overlay = cls(origin=origin, root=root)
        if not root.is_dir():
            LOGGER.debug("No %s directory at %s; treating it as empty", origin, root)
            return overlay
        for path in sorted(root.rglob("*")):
            if path.is_file():
                overlay.files[path.relative_to(root).as_posix()] = path
        LOGGER.debug("Collected %d %s files from %s", len(overlay.files), origin, root)
        return overlay
