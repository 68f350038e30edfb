"""Exceptions raised by the assembly and render stages."""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from docsite_builder.model.build_report import RenderOutcome


class DocsiteError(Exception):
    """Base class for every failure that aborts a documentation build."""


class BundleFetchError(DocsiteError):
    """The resource bundle could not be resolved or downloaded."""


class BundleExtractionError(DocsiteError):
    """The resource bundle is not a readable, safe zip archive."""


class StagingError(DocsiteError):
    """The staging directory could not be synchronised."""


class RenderError(DocsiteError):
    """One or more documents failed to render."""

    def __init__(self, message: str, failures: Sequence["RenderOutcome"] = ()) -> None:
        super().__init__(message)
        self.failures: List["RenderOutcome"] = list(failures)

    @classmethod
    def from_failures(cls, failures: Sequence["RenderOutcome"]) -> "RenderError":
        lines = [f"{len(failures)} document(s) failed to render:"]
        lines.extend(f"  {outcome.source}: {outcome.error}" for outcome in failures)
        return cls("\n".join(lines), failures)
