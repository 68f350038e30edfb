"""Bundle loader responsible for unpacking the shared documentation resources."""
from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional

from docsite_builder.utils.errors import BundleExtractionError
from docsite_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_EXCLUDED_SEGMENT = "highlight"


@dataclass(slots=True)
class ResourceBundle:
    """Files extracted from a resource bundle archive, keyed by POSIX path."""

    entries: Dict[str, bytes] = field(default_factory=dict)
    excluded: List[str] = field(default_factory=list)
    source: Optional[Path] = None

    @classmethod
    def load(cls, archive_path: Path, excluded_segment: Optional[str] = DEFAULT_EXCLUDED_SEGMENT) -> "ResourceBundle":
        """Open a bundle archive, dropping every entry below ``excluded_segment``."""
        bundle = cls(source=archive_path)
        try:
            with zipfile.ZipFile(archive_path) as archive:
                for info in archive.infolist():
                    if info.is_dir():
                        continue
                    name = _normalise_entry(info.filename)
                    if excluded_segment and excluded_segment in PurePosixPath(name).parts[:-1]:
                        bundle.excluded.append(name)
                        continue
                    bundle.entries[name] = archive.read(info)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as exc:
            raise BundleExtractionError(f"Cannot extract bundle {archive_path}: {exc}") from exc

        LOGGER.debug(
            "Loaded %d entries from %s (%d excluded)", len(bundle.entries), archive_path.name, len(bundle.excluded)
        )
        return bundle

    def names(self) -> List[str]:
        return sorted(self.entries)

    def get(self, name: str) -> Optional[bytes]:
        return self.entries.get(name)


def _normalise_entry(name: str) -> str:
    path = PurePosixPath(name.replace("\\", "/"))
    if path.is_absolute() or ".." in path.parts or (path.parts and ":" in path.parts[0]):
        raise BundleExtractionError(f"Unsafe path in bundle: {name}")
    return path.as_posix()
