"""Render the staged Asciidoc sources into HTML documents."""
from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional

from asciidoc.api import AsciiDocAPI, AsciiDocError

from docsite_builder.model.build_config import BuildConfig
from docsite_builder.model.build_report import RenderOutcome
from docsite_builder.renderer.html5_support import Html5Support
from docsite_builder.renderer.utils import copy_resource_dirs
from docsite_builder.utils.errors import RenderError
from docsite_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)

ASCIIDOC_SUFFIX = ".adoc"


def select_render_roots(staging_dir: Path, attributes_file: Optional[str] = "attributes.adoc") -> List[Path]:
    """Top-level ``.adoc`` files, minus the shared attributes include."""
    roots = [
        path
        for path in staging_dir.iterdir()
        if path.is_file() and path.suffix == ASCIIDOC_SUFFIX and path.name != attributes_file
    ]
    return sorted(roots, key=lambda path: path.name)


class AsciidocHtmlRenderer:
    """Render every root document with one shared attribute set."""

    def __init__(self, config: BuildConfig, api_factory: Optional[Callable[[], AsciiDocAPI]] = None) -> None:
        self.config = config
        self._api_factory = api_factory or AsciiDocAPI

    def render(self, staging_dir: Path, output_dir: Path) -> List[RenderOutcome]:
        """Render all roots, then raise ``RenderError`` if any of them failed."""
        if not staging_dir.is_dir():
            raise RenderError(f"Staging directory not found: {staging_dir}")

        output_dir.mkdir(parents=True, exist_ok=True)
        copied = copy_resource_dirs(staging_dir, output_dir, self.config.resource_dirs)
        LOGGER.debug("Copied resource directories %s into %s", copied, output_dir)
        support = Html5Support(self.config.render.attributes, staging_dir, output_dir)
        support.stage_assets()

        roots = select_render_roots(staging_dir, self.config.attributes_file)
        if not roots:
            LOGGER.warning("No documents to render in %s", staging_dir)

        outcomes = [self._render_document(source, output_dir, support) for source in roots]
        failures = [outcome for outcome in outcomes if not outcome.ok]
        if failures:
            raise RenderError.from_failures(failures)
        return outcomes

    def _render_document(self, source: Path, output_dir: Path, support: Html5Support) -> RenderOutcome:
        output = output_dir / f"{source.stem}.html"
        if self.config.log_documents:
            LOGGER.info("Rendering %s", source.name)

        api = self._api_factory()
        for name, value in self.config.render.options.items():
            api.options(f"--{name}", value)
        for conf_file in support.conf_files():
            api.options("--conf-file", str(conf_file))
        api.attributes.update(support.attributes_for(source))

        outcome = RenderOutcome(source=source, output=output)
        try:
            api.execute(str(source), str(output), backend=self.config.render.backend)
            html = output.read_text(encoding="utf-8")
            output.write_text(support.post_process(source, html), encoding="utf-8")
        except (AsciiDocError, OSError) as exc:
            outcome.error = str(exc) or exc.__class__.__name__
            LOGGER.error("Failed to render %s: %s", source.name, outcome.error)
        outcome.warnings = list(api.messages)
        for message in outcome.warnings:
            LOGGER.warning("%s: %s", source.name, message)
        return outcome
