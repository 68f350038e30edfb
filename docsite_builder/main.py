"""Entry-point for the documentation build pipeline."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from docsite_builder.assembler.resource_assembler import ResourceAssembler
from docsite_builder.model.build_config import BuildConfig
from docsite_builder.model.build_report import BuildReport, RenderOutcome, StagingManifest
from docsite_builder.model.coordinates import BundleCoordinates
from docsite_builder.renderer.html_renderer import AsciidocHtmlRenderer
from docsite_builder.utils.debug import DebugDumper
from docsite_builder.utils.errors import DocsiteError
from docsite_builder.utils.logger import get_logger, set_level

LOGGER = get_logger(__name__)


def prepare_staging(config: BuildConfig) -> StagingManifest:
    """Merge the resource bundle and local files into the staging directory."""
    return ResourceAssembler(config).assemble()


def render_site(config: BuildConfig) -> List[RenderOutcome]:
    """Render the staged documents into the output directory."""
    return AsciidocHtmlRenderer(config).render(config.staging_path, config.output_path)


def build_site(config: BuildConfig) -> BuildReport:
    """Run the full bundle → staging → HTML pipeline."""
    LOGGER.info("Preparing staging directory %s", config.staging_path)
    manifest = prepare_staging(config)
    LOGGER.info("Rendering documents into %s", config.output_path)
    outcomes = render_site(config)
    return BuildReport(manifest=manifest, outcomes=outcomes)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Assemble and render an Asciidoc documentation site")
    parser.add_argument(
        "task",
        nargs="?",
        choices=["prepare", "build"],
        default="build",
        help="'prepare' only assembles the staging directory; 'build' also renders HTML",
    )
    parser.add_argument("--project-dir", type=Path, default=Path("."), help="Directory holding src/ and build/")
    parser.add_argument("--build-dir", type=Path, default=Path("build"), help="Build directory, relative to the project")
    parser.add_argument("--bundle", help="Resource bundle coordinates, group:artifact:version[:classifier][@ext]")
    parser.add_argument("--repository", help="Maven repository URL the bundle is fetched from")
    parser.add_argument("--bundle-file", type=Path, help="Use a local bundle archive instead of fetching one")
    parser.add_argument("--cache-dir", type=Path, help="Directory for downloaded bundles")
    parser.add_argument("--refresh-bundle", action="store_true", help="Download the bundle even if it is cached")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--debug", action="store_true", help="Write a JSON build report next to the output")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> BuildConfig:
    config = BuildConfig(project_dir=args.project_dir.resolve(), build_dir=args.build_dir)
    if args.bundle:
        config.bundle = BundleCoordinates.parse(args.bundle)
    if args.repository:
        config.repository_url = args.repository
    if args.bundle_file:
        config.bundle_file = args.bundle_file
    if args.cache_dir:
        config.cache_dir = args.cache_dir
    config.refresh_bundle = args.refresh_bundle
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    set_level(args.log_level)
    try:
        config = config_from_args(args)
        if args.task == "prepare":
            report = BuildReport(manifest=prepare_staging(config))
        else:
            report = build_site(config)
    except ValueError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 1
    except DocsiteError as exc:
        LOGGER.error("%s", exc)
        return 1

    if args.debug:
        path = DebugDumper(config.debug_path).dump(report)
        LOGGER.info("Build report written to %s", path)
    LOGGER.info("Done: %d staged files, %d rendered documents", len(report.manifest.files), len(report.rendered))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
