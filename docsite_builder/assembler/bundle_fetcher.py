"""Resolve bundle coordinates to an archive on the local filesystem."""
from __future__ import annotations

import os
import shutil
import tempfile
import urllib.error
import urllib.request
from pathlib import Path
from typing import Optional

from docsite_builder.model.coordinates import BundleCoordinates
from docsite_builder.utils.errors import BundleFetchError
from docsite_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)

DOWNLOAD_TIMEOUT = 60


class BundleResolver:
    """Locate the resource bundle, downloading it into the cache when needed.

    Released bundles never change, so a cached archive is reused as-is unless
    ``refresh`` is requested. An explicit ``bundle_file`` bypasses the
    repository entirely.
    """

    def __init__(
        self,
        coordinates: BundleCoordinates,
        repository_url: str,
        cache_dir: Path,
        *,
        bundle_file: Optional[Path] = None,
        refresh: bool = False,
    ) -> None:
        self.coordinates = coordinates
        self.repository_url = repository_url.rstrip("/")
        self.cache_dir = cache_dir
        self.bundle_file = bundle_file
        self.refresh = refresh

    @property
    def url(self) -> str:
        return f"{self.repository_url}/{self.coordinates.relative_path()}"

    @property
    def cache_path(self) -> Path:
        return self.cache_dir / self.coordinates.relative_path()

    def resolve(self) -> Path:
        """Return the path of a local copy of the bundle archive."""
        if self.bundle_file is not None:
            if not self.bundle_file.is_file():
                raise BundleFetchError(f"Bundle file not found: {self.bundle_file}")
            LOGGER.info("Using local bundle %s", self.bundle_file)
            return self.bundle_file

        target = self.cache_path
        if target.is_file() and not self.refresh:
            LOGGER.debug("Bundle %s found in cache at %s", self.coordinates, target)
            return target

        LOGGER.info("Downloading %s from %s", self.coordinates, self.url)
        self._download(target)
        return target

    def _download(self, target: Path) -> None:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise BundleFetchError(f"Cannot create bundle cache {target.parent}: {exc}") from exc

        fd, tmp_name = tempfile.mkstemp(prefix=".download-", dir=target.parent)
        try:
            with os.fdopen(fd, "wb") as sink, urllib.request.urlopen(self.url, timeout=DOWNLOAD_TIMEOUT) as response:
                shutil.copyfileobj(response, sink)
            os.replace(tmp_name, target)
        except (urllib.error.URLError, OSError, ValueError) as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise BundleFetchError(f"Could not fetch {self.coordinates} from {self.url}: {exc}") from exc

        LOGGER.debug("Stored %s (%d bytes)", target, target.stat().st_size)
