"""Tests for bundle coordinate parsing and repository layout."""
import unittest

from docsite_builder.model.coordinates import BundleCoordinates


class BundleCoordinatesTest(unittest.TestCase):
    """Validate dependency notation handling."""

    def test_parse_with_extension(self) -> None:
        coords = BundleCoordinates.parse("io.spring.docresources:spring-doc-resources:0.1.3.RELEASE@zip")

        self.assertEqual(coords.group, "io.spring.docresources")
        self.assertEqual(coords.artifact, "spring-doc-resources")
        self.assertEqual(coords.version, "0.1.3.RELEASE")
        self.assertIsNone(coords.classifier)
        self.assertEqual(coords.extension, "zip")

    def test_relative_path_follows_maven_layout(self) -> None:
        coords = BundleCoordinates.parse("io.spring.docresources:spring-doc-resources:0.1.3.RELEASE@zip")

        self.assertEqual(
            coords.relative_path(),
            "io/spring/docresources/spring-doc-resources/0.1.3.RELEASE/spring-doc-resources-0.1.3.RELEASE.zip",
        )

    def test_classifier_is_part_of_file_name(self) -> None:
        coords = BundleCoordinates.parse("org.example:docs:2.0:resources@jar")

        self.assertEqual(coords.classifier, "resources")
        self.assertEqual(coords.file_name, "docs-2.0-resources.jar")
        self.assertEqual(str(coords), "org.example:docs:2.0:resources@jar")

    def test_extension_defaults_to_zip(self) -> None:
        coords = BundleCoordinates.parse("org.example:docs:1.0")

        self.assertEqual(coords.extension, "zip")
        self.assertEqual(str(coords), "org.example:docs:1.0@zip")

    def test_invalid_notation_is_rejected(self) -> None:
        for notation in ["org.example:docs", "org.example::1.0", "a:b:c:d:e", "org.example:docs:1.0@"]:
            with self.subTest(notation=notation):
                with self.assertRaises(ValueError):
                    BundleCoordinates.parse(notation)


if __name__ == "__main__":
    unittest.main()
