"""Tests for the bundle + overlays assembly stage."""
import tempfile
import unittest
import zipfile
from pathlib import Path

from docsite_builder.assembler.resource_assembler import ResourceAssembler
from docsite_builder.model.build_config import BuildConfig
from docsite_builder.utils.errors import BundleExtractionError, BundleFetchError


class ResourceAssemblerTest(unittest.TestCase):
    """End-to-end assembly of a staging directory from a local bundle."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.project = Path(self._tmp.name)
        self.bundle = self.project / "bundle.zip"
        self.config = BuildConfig(project_dir=self.project, bundle_file=self.bundle)

    def _write_bundle(self, entries: dict) -> None:
        with zipfile.ZipFile(self.bundle, "w") as archive:
            for name, data in entries.items():
                archive.writestr(name, data)

    def _write(self, relative: str, data: bytes) -> None:
        path = self.project / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def _staged(self, relative: str) -> Path:
        return self.config.staging_path / relative

    def test_override_scenario(self) -> None:
        self._write_bundle({"css/spring.css": "bundle css", "highlight/foo.js": "hl"})
        self._write("src/resources/css/spring.css", b"local css")
        self._write("src/resources/images/logo.png", b"\x89PNG")

        manifest = ResourceAssembler(self.config).assemble()

        self.assertEqual(self._staged("css/spring.css").read_bytes(), b"local css")
        self.assertTrue(self._staged("images/logo.png").is_file())
        self.assertFalse(self._staged("highlight/foo.js").exists())
        self.assertEqual(manifest.excluded, ["highlight/foo.js"])
        self.assertEqual(manifest.files, ["css/spring.css", "images/logo.png"])

    def test_resources_override_sources_which_override_bundle(self) -> None:
        self._write_bundle({"index.adoc": "bundle", "docinfo.html": "bundle"})
        self._write("src/main/asciidoc/index.adoc", b"source")
        self._write("src/main/asciidoc/docinfo.html", b"source")
        self._write("src/resources/docinfo.html", b"resources")

        manifest = ResourceAssembler(self.config).assemble()

        self.assertEqual(self._staged("index.adoc").read_bytes(), b"source")
        self.assertEqual(self._staged("docinfo.html").read_bytes(), b"resources")
        self.assertEqual(manifest.origin_of("index.adoc"), "source")
        self.assertEqual(manifest.origin_of("docinfo.html"), "resources")

    def test_missing_local_directories_are_empty(self) -> None:
        self._write_bundle({"css/spring.css": "bundle css"})

        manifest = ResourceAssembler(self.config).assemble()

        self.assertEqual(manifest.files, ["css/spring.css"])

    def test_local_highlight_assets_are_kept(self) -> None:
        self._write_bundle({"js/highlight/highlight.min.js": "bundle"})
        self._write("src/resources/js/highlight/highlight.min.js", b"ours")

        ResourceAssembler(self.config).assemble()

        self.assertEqual(self._staged("js/highlight/highlight.min.js").read_bytes(), b"ours")

    def test_new_bundle_version_drops_stale_files_but_keeps_overlays(self) -> None:
        self._write_bundle({"css/old.css": "old", "css/spring.css": "v1"})
        self._write("src/main/asciidoc/index.adoc", b"= Doc")
        ResourceAssembler(self.config).assemble()

        self._write_bundle({"css/spring.css": "v2"})
        manifest = ResourceAssembler(self.config).assemble()

        self.assertFalse(self._staged("css/old.css").exists())
        self.assertEqual(self._staged("css/spring.css").read_bytes(), b"v2")
        self.assertTrue(self._staged("index.adoc").is_file())
        self.assertEqual(manifest.removed, ["css/old.css"])

    def test_two_runs_are_byte_identical(self) -> None:
        self._write_bundle({"css/spring.css": "css", "js/toc.js": "toc"})
        self._write("src/main/asciidoc/index.adoc", b"= Doc")

        def snapshot() -> dict:
            root = self.config.staging_path
            return {p.relative_to(root).as_posix(): p.read_bytes() for p in root.rglob("*") if p.is_file()}

        ResourceAssembler(self.config).assemble()
        first = snapshot()
        ResourceAssembler(self.config).assemble()

        self.assertEqual(snapshot(), first)

    def test_malformed_bundle_leaves_staging_untouched(self) -> None:
        self._write_bundle({"css/spring.css": "css"})
        ResourceAssembler(self.config).assemble()
        self.bundle.write_bytes(b"broken")

        with self.assertRaises(BundleExtractionError):
            ResourceAssembler(self.config).assemble()
        self.assertEqual(self._staged("css/spring.css").read_bytes(), b"css")

    def test_fetch_failure_aborts(self) -> None:
        self.config.bundle_file = None
        self.config.repository_url = (self.project / "no-repo").as_uri()
        self.config.cache_dir = self.project / "cache"

        with self.assertRaises(BundleFetchError):
            ResourceAssembler(self.config).assemble()
        self.assertFalse(self.config.staging_path.exists())


if __name__ == "__main__":
    unittest.main()
