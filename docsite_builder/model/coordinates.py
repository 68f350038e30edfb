"""Maven-style coordinates identifying the shared resource bundle."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_EXTENSION = "zip"


@dataclass(frozen=True)
class BundleCoordinates:
    """``group:artifact:version[:classifier][@extension]`` of a bundle archive."""

    group: str
    artifact: str
    version: str
    classifier: Optional[str] = None
    extension: str = DEFAULT_EXTENSION

    @classmethod
    def parse(cls, notation: str) -> "BundleCoordinates":
        """Parse Gradle dependency notation, e.g. ``org.example:docs:1.0@zip``."""
        text = notation.strip()
        extension = DEFAULT_EXTENSION
        if "@" in text:
            text, extension = text.rsplit("@", 1)
        parts = text.split(":")
        if len(parts) not in (3, 4) or not all(parts) or not extension:
            raise ValueError(f"Invalid bundle coordinates: {notation!r}")
        classifier = parts[3] if len(parts) == 4 else None
        return cls(parts[0], parts[1], parts[2], classifier, extension)

    @property
    def file_name(self) -> str:
        suffix = f"-{self.classifier}" if self.classifier else ""
        return f"{self.artifact}-{self.version}{suffix}.{self.extension}"

    def relative_path(self) -> str:
        """Location of the archive inside a Maven repository layout."""
        group_path = self.group.replace(".", "/")
        return f"{group_path}/{self.artifact}/{self.version}/{self.file_name}"

    def __str__(self) -> str:
        base = f"{self.group}:{self.artifact}:{self.version}"
        if self.classifier:
            base = f"{base}:{self.classifier}"
        return f"{base}@{self.extension}"
