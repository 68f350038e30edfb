"""Build settings: where inputs live, where output goes, and how to render."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from docsite_builder.model.coordinates import BundleCoordinates

DEFAULT_BUNDLE = "io.spring.docresources:spring-doc-resources:0.1.3.RELEASE@zip"
DEFAULT_REPOSITORY = "https://repo.spring.io/libs-release-local"
DEFAULT_CACHE_DIR = Path("~/.cache/docsite-builder")

AttributeValue = Union[str, bool]


def _default_options() -> Dict[str, str]:
    return {"doctype": "book"}


def _default_attributes() -> Dict[str, AttributeValue]:
    return {
        "docinfo": "shared",
        "stylesdir": "css/",
        "stylesheet": "spring.css",
        "linkcss": True,
        "icons": "font",
        "source-highlighter": "highlight.js",
        "highlightjsdir": "js/highlight",
        "highlightjs-theme": "github",
    }


@dataclass(slots=True)
class RenderConfiguration:
    """Options and document attributes applied to every render root."""

    options: Dict[str, str] = field(default_factory=_default_options)
    attributes: Dict[str, AttributeValue] = field(default_factory=_default_attributes)
    backend: str = "html5"

    @property
    def doctype(self) -> Optional[str]:
        return self.options.get("doctype")


@dataclass(slots=True)
class BuildConfig:
    """Paths and bundle settings for one documentation build.

    Relative directories are interpreted against ``project_dir``; use the
    ``*_path`` properties to get the resolved locations.
    """

    project_dir: Path = field(default_factory=Path.cwd)
    source_dir: Path = Path("src/main/asciidoc")
    resources_dir: Path = Path("src/resources")
    build_dir: Path = Path("build")

    bundle: BundleCoordinates = field(default_factory=lambda: BundleCoordinates.parse(DEFAULT_BUNDLE))
    repository_url: str = DEFAULT_REPOSITORY
    bundle_file: Optional[Path] = None
    cache_dir: Path = DEFAULT_CACHE_DIR
    refresh_bundle: bool = False

    excluded_segment: str = "highlight"
    attributes_file: str = "attributes.adoc"
    resource_dirs: Tuple[str, ...] = ("images", "css", "js")

    render: RenderConfiguration = field(default_factory=RenderConfiguration)
    log_documents: bool = True

    def _resolve(self, path: Path) -> Path:
        path = path.expanduser()
        if path.is_absolute():
            return path
        return self.project_dir / path

    @property
    def source_path(self) -> Path:
        return self._resolve(self.source_dir)

    @property
    def resources_path(self) -> Path:
        return self._resolve(self.resources_dir)

    @property
    def build_path(self) -> Path:
        return self._resolve(self.build_dir)

    @property
    def staging_path(self) -> Path:
        return self.build_path / "asciidoc" / "build"

    @property
    def output_path(self) -> Path:
        return self.build_path / "asciidoc" / self.render.backend

    @property
    def debug_path(self) -> Path:
        return self.build_path / "asciidoc" / "debug"

    @property
    def cache_path(self) -> Path:
        return self._resolve(self.cache_dir)

    @property
    def bundle_file_path(self) -> Optional[Path]:
        if self.bundle_file is None:
            return None
        return self._resolve(self.bundle_file)
