"""Tests for the staging directory synchronisation."""
import tempfile
import unittest
from pathlib import Path

from docsite_builder.assembler.staging import StagingSynchronizer
from docsite_builder.utils.errors import StagingError


class StagingSynchronizerTest(unittest.TestCase):
    """Layer precedence, stale file removal and determinism."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self.staging = self.root / "staging"
        self.sync = StagingSynchronizer(self.staging)

    def _snapshot(self) -> dict:
        return {
            p.relative_to(self.staging).as_posix(): p.read_bytes() for p in self.staging.rglob("*") if p.is_file()
        }

    def test_later_layers_win(self) -> None:
        local = self.root / "spring.css"
        local.write_bytes(b"local")

        manifest = self.sync.sync(
            [
                ("bundle", {"css/spring.css": b"bundle", "js/toc.js": b"toc"}),
                ("resources", {"css/spring.css": local}),
            ]
        )

        self.assertEqual((self.staging / "css/spring.css").read_bytes(), b"local")
        self.assertEqual(manifest.origin_of("css/spring.css"), "resources")
        self.assertEqual(manifest.origin_of("js/toc.js"), "bundle")
        self.assertEqual(manifest.files, ["css/spring.css", "js/toc.js"])

    def test_stale_files_are_removed(self) -> None:
        self.sync.sync([("bundle", {"old/gone.css": b"x", "index.adoc": b"= A"})])

        manifest = self.sync.sync([("bundle", {"index.adoc": b"= A"})])

        self.assertEqual(manifest.removed, ["old/gone.css"])
        self.assertFalse((self.staging / "old").exists())
        self.assertEqual(self._snapshot(), {"index.adoc": b"= A"})

    def test_repeated_sync_is_identical_and_writes_nothing(self) -> None:
        layers = [("bundle", {"a.adoc": b"1", "css/x.css": b"2"}), ("source", {"a.adoc": b"3"})]

        first = self.sync.sync(layers)
        before = self._snapshot()
        second = self.sync.sync(layers)

        self.assertEqual(first.written, ["a.adoc", "css/x.css"])
        self.assertEqual(second.written, [])
        self.assertEqual(second.removed, [])
        self.assertEqual(self._snapshot(), before)

    def test_directory_replaced_by_file(self) -> None:
        self.sync.sync([("bundle", {"images/logo.png": b"png"})])

        self.sync.sync([("bundle", {"images": b"now a file"})])

        self.assertTrue((self.staging / "images").is_file())
        self.assertEqual((self.staging / "images").read_bytes(), b"now a file")

    def test_hand_made_files_do_not_survive(self) -> None:
        self.staging.mkdir(parents=True)
        (self.staging / "notes.txt").write_text("scratch")

        manifest = self.sync.sync([("source", {"index.adoc": b"= Doc"})])

        self.assertIn("notes.txt", manifest.removed)
        self.assertFalse((self.staging / "notes.txt").exists())

    def test_file_and_directory_of_the_same_name_conflict(self) -> None:
        self.sync.sync([("bundle", {"index.adoc": b"= A"})])

        with self.assertRaises(StagingError) as raised:
            self.sync.sync([("bundle", {"images": b"not a directory"}), ("resources", {"images/logo.png": b"png"})])

        self.assertIn("images/logo.png", str(raised.exception))
        self.assertEqual(self._snapshot(), {"index.adoc": b"= A"})


if __name__ == "__main__":
    unittest.main()
