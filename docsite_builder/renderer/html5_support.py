"""Adapt the Asciidoctor-style attribute set to asciidoc's html5 backend.

asciidoc knows nothing about ``docinfo=shared``, highlight.js or font icons,
and with ``linkcss`` it links its own ``asciidoc.css``/``asciidoc.js``. This
module translates the configured attributes, stages the assets the backend
links to, and finishes each page with what the backend cannot emit itself:
the highlight.js wiring in ``<head>`` and the shared docinfo footer.
"""
from __future__ import annotations

import shutil
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Set, Union

from asciidoc.asciidoc import CONF_DIR

from docsite_builder.renderer.utils import to_asciidoc_attributes
from docsite_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)

HIGHLIGHTJS = "highlight.js"
HIGHLIGHTJS_CONF = Path(__file__).parent / "conf" / "highlightjs.conf"
ASCIIDOC_RESOURCES = Path(CONF_DIR)

SHARED_DOCINFO = "docinfo.html"
SHARED_DOCINFO_FOOTER = "docinfo-footer.html"
DEFAULT_SCRIPTSDIR = "js"
DEFAULT_ICONSDIR = "images/icons"


def _is_local(path: str) -> bool:
    return "://" not in path and not path.startswith("/")


def insert_before(html: str, marker: str, snippet: str) -> str:
    """Insert ``snippet`` in front of the last ``marker``; no marker, no change."""
    if not snippet:
        return html
    head, found, tail = html.rpartition(marker)
    if not found:
        return html
    return f"{head}{snippet.rstrip()}\n{found}{tail}"


class Html5Support:
    """Per-invocation translation shared by every render root."""

    def __init__(self, attributes: Mapping[str, Union[str, bool]], staging_dir: Path, output_dir: Path) -> None:
        self.staging_dir = staging_dir
        self.output_dir = output_dir
        self.docinfo: Set[str] = self._docinfo_modes(attributes.get("docinfo"))
        self.highlighter = attributes.get("source-highlighter")
        self.highlightjs_dir = str(attributes.get("highlightjsdir", "highlight")).rstrip("/")
        self.highlightjs_theme = str(attributes.get("highlightjs-theme", "github"))
        self._base = self._translate(attributes)

    @staticmethod
    def _docinfo_modes(value: Union[str, bool, None]) -> Set[str]:
        if value in (None, False):
            return set()
        if value is True or value == "":
            return {"private"}
        return {mode.strip() for mode in str(value).split(",") if mode.strip()}

    def _translate(self, attributes: Mapping[str, Union[str, bool]]) -> Dict[str, Optional[str]]:
        converted = to_asciidoc_attributes(attributes)
        converted.pop("docinfo", None)
        converted.pop("highlightjsdir", None)
        converted.pop("highlightjs-theme", None)

        if converted.get("stylesdir"):
            converted["stylesdir"] = converted["stylesdir"].rstrip("/") or "."
        converted.setdefault("scriptsdir", DEFAULT_SCRIPTSDIR)

        # asciidoc only has image icons; "font" falls back to its bundled PNGs.
        if converted.get("icons") is not None:
            if converted["icons"] not in ("", "image"):
                LOGGER.debug("icons=%s rendered with asciidoc image icons", converted["icons"])
            converted["icons"] = ""
            converted.setdefault("iconsdir", DEFAULT_ICONSDIR)
        return converted

    @property
    def uses_highlightjs(self) -> bool:
        return self.highlighter == HIGHLIGHTJS

    def conf_files(self) -> List[Path]:
        return [HIGHLIGHTJS_CONF] if self.uses_highlightjs else []

    def attributes_for(self, source: Path) -> Dict[str, Optional[str]]:
        attributes = dict(self._base)
        if self._wants("head", "shared") and (self.staging_dir / SHARED_DOCINFO).is_file():
            attributes["docinfo1"] = ""
        if self._wants("head", "private") and (source.parent / f"{source.stem}-docinfo.html").is_file():
            attributes["docinfo"] = ""
        return attributes

    def _wants(self, part: str, scope: str) -> bool:
        return scope in self.docinfo or f"{scope}-{part}" in self.docinfo

    def stage_assets(self) -> List[str]:
        """Copy the backend's own css/js/icons where the staged tree lacks them."""
        staged: List[str] = []
        attributes = self._base
        if attributes.get("linkcss") is not None:
            stylesdir = attributes.get("stylesdir") or "."
            if "theme" not in attributes and _is_local(stylesdir):
                staged += self._provide(Path(stylesdir) / "asciidoc.css", ASCIIDOC_RESOURCES / "stylesheets" / "asciidoc.css")
            stylesheet = attributes.get("stylesheet")
            if stylesheet and _is_local(stylesdir) and not (self.output_dir / stylesdir / stylesheet).is_file():
                LOGGER.warning("Stylesheet %s/%s is not part of the staged resources", stylesdir, stylesheet)
            scriptsdir = attributes.get("scriptsdir") or "."
            if "disable-javascript" not in attributes and _is_local(scriptsdir):
                staged += self._provide(Path(scriptsdir) / "asciidoc.js", ASCIIDOC_RESOURCES / "javascripts" / "asciidoc.js")
        iconsdir = attributes.get("iconsdir")
        if attributes.get("icons") is not None and iconsdir and _is_local(iconsdir):
            target = self.output_dir / iconsdir
            if not target.exists():
                shutil.copytree(ASCIIDOC_RESOURCES / "icons", target)
                staged.append(Path(iconsdir).as_posix())
        if staged:
            LOGGER.debug("Staged backend assets %s", staged)
        return staged

    def _provide(self, relative: Path, fallback: Path) -> List[str]:
        target = self.output_dir / relative
        if target.exists():
            return []
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(fallback, target)
        return [relative.as_posix()]

    def head_snippet(self) -> str:
        if not self.uses_highlightjs:
            return ""
        script = f"{self.highlightjs_dir}/highlight.min.js"
        theme = f"{self.highlightjs_dir}/styles/{self.highlightjs_theme}.min.css"
        if not (self.output_dir / script).is_file():
            LOGGER.warning("source-highlighter=%s but %s was not staged; skipping", HIGHLIGHTJS, script)
            return ""
        lines = []
        if (self.output_dir / theme).is_file():
            lines.append(f'<link rel="stylesheet" href="{theme}">')
        else:
            LOGGER.warning("highlight.js theme %s was not staged", theme)
        lines.append(f'<script src="{script}"></script>')
        lines.append("<script>if (hljs.highlightAll) { hljs.highlightAll(); } else { hljs.initHighlightingOnLoad(); }</script>")
        return "\n".join(lines)

    def footer_snippet(self, source: Path) -> str:
        parts = []
        if self._wants("footer", "shared"):
            parts.append(self.staging_dir / SHARED_DOCINFO_FOOTER)
        if self._wants("footer", "private"):
            parts.append(source.parent / f"{source.stem}-docinfo-footer.html")
        return "\n".join(path.read_text(encoding="utf-8").rstrip() for path in parts if path.is_file())

    def post_process(self, source: Path, html: str) -> str:
        html = insert_before(html, "</head>", self.head_snippet())
        return insert_before(html, "</body>", self.footer_snippet(source))
