"""Synchronise the staging directory with the merged bundle and overlays."""
from __future__ import annotations

import os
import shutil
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List, Mapping, Sequence, Set, Tuple, Union

from docsite_builder.model.build_report import StagingManifest
from docsite_builder.utils.errors import StagingError
from docsite_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)

Content = Union[bytes, Path]
Layer = Tuple[str, Mapping[str, Content]]


class StagingSynchronizer:
    """Make ``staging_dir`` contain exactly the union of the given layers.

    Layers are applied in order and later layers win on path collisions.
    Files already holding the planned bytes are not rewritten; anything in
    the staging directory that no layer provides is deleted.
    """

    def __init__(self, staging_dir: Path) -> None:
        self.staging_dir = staging_dir

    def plan(self, layers: Iterable[Layer]) -> Dict[str, Tuple[str, Content]]:
        planned: Dict[str, Tuple[str, Content]] = {}
        for origin, files in layers:
            for name, content in files.items():
                previous = planned.get(name)
                if previous is not None:
                    LOGGER.debug("%s overrides %s from %s", name, previous[0], origin)
                planned[name] = (origin, content)
        self._check_conflicts(planned)
        return planned

    @staticmethod
    def _check_conflicts(planned: Mapping[str, Tuple[str, Content]]) -> None:
        for name, (origin, _) in planned.items():
            for parent in PurePosixPath(name).parents:
                clash = planned.get(parent.as_posix())
                if clash is not None:
                    raise StagingError(
                        f"{parent} from {clash[0]} is a file but {name} from {origin} needs it as a directory"
                    )

    def sync(self, layers: Sequence[Layer]) -> StagingManifest:
        planned = self.plan(layers)
        manifest = StagingManifest(staging_dir=self.staging_dir)
        try:
            self.staging_dir.mkdir(parents=True, exist_ok=True)
            manifest.removed = self._remove_stale(set(planned))
            for name in sorted(planned):
                origin, content = planned[name]
                manifest.origins[name] = origin
                if self._write(self.staging_dir / name, content):
                    manifest.written.append(name)
        except OSError as exc:
            raise StagingError(f"Cannot synchronise {self.staging_dir}: {exc}") from exc

        LOGGER.info(
            "Staged %d files in %s (%d written, %d removed)",
            len(manifest.origins),
            self.staging_dir,
            len(manifest.written),
            len(manifest.removed),
        )
        return manifest

    def _remove_stale(self, keep: Set[str]) -> List[str]:
        removed: List[str] = []
        for dirpath, dirnames, filenames in os.walk(self.staging_dir, topdown=False):
            current = Path(dirpath)
            for filename in filenames:
                path = current / filename
                name = path.relative_to(self.staging_dir).as_posix()
                if name not in keep:
                    path.unlink()
                    removed.append(name)
            for dirname in dirnames:
                child = current / dirname
                if child.is_symlink():
                    child.unlink()
                elif not any(child.iterdir()):
                    child.rmdir()
        return sorted(removed)

    @staticmethod
    def _write(target: Path, content: Content) -> bool:
        data = content.read_bytes() if isinstance(content, Path) else content
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        elif target.is_file() and target.read_bytes() == data:
            return False
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return True
