"""Assemble the renderer-ready staging directory."""
from __future__ import annotations

from docsite_builder.assembler.bundle_fetcher import BundleResolver
from docsite_builder.assembler.bundle_loader import ResourceBundle
from docsite_builder.assembler.overlay import LocalOverlay
from docsite_builder.assembler.staging import StagingSynchronizer
from docsite_builder.model.build_config import BuildConfig
from docsite_builder.model.build_report import (
    ORIGIN_BUNDLE,
    ORIGIN_RESOURCES,
    ORIGIN_SOURCE,
    StagingManifest,
)
from docsite_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)


class ResourceAssembler:
    """Fetch the bundle, filter it, and overlay local sources and resources.

    Ordering is fixed: bundle content first, then the source documents, then
    the resource overrides.
    """

    def __init__(self, config: BuildConfig, resolver: BundleResolver | None = None) -> None:
        self.config = config
        self.resolver = resolver or BundleResolver(
            config.bundle,
            config.repository_url,
            config.cache_path,
            bundle_file=config.bundle_file_path,
            refresh=config.refresh_bundle,
        )

    def assemble(self) -> StagingManifest:
        archive = self.resolver.resolve()
        bundle = ResourceBundle.load(archive, self.config.excluded_segment)
        if bundle.excluded:
            LOGGER.info("Skipped %d bundle entries below %s/", len(bundle.excluded), self.config.excluded_segment)

        sources = LocalOverlay.collect(self.config.source_path, ORIGIN_SOURCE)
        resources = LocalOverlay.collect(self.config.resources_path, ORIGIN_RESOURCES)

        manifest = StagingSynchronizer(self.config.staging_path).sync(
            [
                (ORIGIN_BUNDLE, bundle.entries),
                (ORIGIN_SOURCE, sources.files),
                (ORIGIN_RESOURCES, resources.files),
            ]
        )
        manifest.excluded = list(bundle.excluded)
        return manifest
