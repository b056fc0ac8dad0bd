"""Markup converters that turn page bodies into HTML.

Each converter handles one source format and is chosen by the extension of the
file that backs a page. Markdown is always looked up before AsciiDoc.
"""

from __future__ import annotations

import functools
import logging
import re
import tempfile
import threading
import typing as typ
from pathlib import Path

import asciidoc.asciidoc as asciidoc_engine
from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from workshop_pages._constants import ASCIIDOC_EXTENSION, MARKDOWN_EXTENSION

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

logger = logging.getLogger(__name__)

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
IFEVAL_BLOCK_PATTERN = re.compile(
    r"^ifeval::\[[^\n]*\]\n.*?^endif::\[\]\n?", re.DOTALL | re.MULTILINE
)

# asciidoc keeps its document and configuration in module globals.
_ASCIIDOC_LOCK = threading.Lock()


class ConversionError(ValueError):
    """Raised when a page body cannot be converted to HTML."""


class MarkupConverter(typ.Protocol):
    """Capability shared by the per-format converters."""

    def convert(self, text: str) -> str:
        """Return ``text`` converted to an HTML fragment."""
        ...


class MarkdownConverter:
    """Convert Markdown with tables and highlighted fenced code blocks."""

    def __init__(
        self,
        pygments_style: str = "default",
        extensions: typ.Sequence[Extension | str] = (),
    ) -> None:
        """Initialize the converter.

        Parameters
        ----------
        pygments_style : str, optional
            Pygments style used for fenced code blocks.
        extensions : Sequence[Extension | str], optional
            Extra python-markdown extensions appended after the defaults.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        self._extra_extensions = list(extensions)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def convert(self, text: str) -> str:
        """Render Markdown into HTML; blank input yields an empty string."""
        normalized = FENCED_INDENT_PATTERN.sub(r"\1", text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            "tables",
            "fenced_code",
            "codehilite",
            "sane_lists",
            *self._extra_extensions,
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(normalized)


class AsciiDocConverter:
    """Convert AsciiDoc in safe mode, emitting the document body only.

    The source is written into a private scratch directory so asciidoc's safe
    mode confines ``include::`` to that directory, and system macros
    (``sys::``, ``eval::``, ``{sys:...}``) are refused outright. Configuration
    is assembled from the bundled ``asciidoc.conf``, the backend conf with its
    ``ifeval`` blocks removed, and the English language conf; filters are
    never loaded, so no external highlighter commands run.
    """

    backend = "html5"
    lang_conf = "lang-en.conf"

    def convert(self, text: str) -> str:
        """Render AsciiDoc into HTML without includes or system macros.

        Raises
        ------
        ConversionError
            If asciidoc reports an error, including any attempt to use an
            unsafe macro.
        """
        if not text.strip():
            return ""
        with tempfile.TemporaryDirectory(prefix="workshop-pages-") as tmp:
            workdir = Path(tmp)
            source = workdir / "page.adoc"
            target = workdir / "page.html"
            backend_conf = workdir / f"{self.backend}.conf"
            source.write_text(text, encoding="utf-8")
            backend_conf.write_text(_safe_backend_conf(self.backend), encoding="utf-8")
            conf_dir = Path(asciidoc_engine.CONF_DIR)
            conf_files = (
                conf_dir / "asciidoc.conf",
                backend_conf,
                conf_dir / self.lang_conf,
            )
            options = [
                ("--safe", None),
                ("--no-conf", None),
                ("--no-header-footer", None),
                ("--backend", self.backend),
                *(("--conf-file", str(path)) for path in conf_files),
                ("--out-file", str(target)),
            ]
            with _ASCIIDOC_LOCK:
                status = _run_asciidoc(options, source)
                messages = list(asciidoc_engine.message.messages)
            for message in messages:
                logger.debug("asciidoc: %s", message)
            if status:
                detail = "; ".join(messages) or f"exit status {status}"
                msg = f"AsciiDoc conversion failed: {detail}"
                raise ConversionError(msg)
            return target.read_text(encoding="utf-8")


def _run_asciidoc(
    options: list[tuple[str, str | None]], source: Path
) -> int | str | None:
    """Run asciidoc and return its exit status instead of exiting."""
    try:
        asciidoc_engine.execute("asciidoc", options, [str(source)])
    except SystemExit as exc:
        return exc.code
    return 0


@functools.cache
def _safe_backend_conf(backend: str) -> str:
    """Return the bundled backend conf without its ``ifeval`` blocks.

    Safe mode rejects any configuration containing ``ifeval``. The bundled
    HTML backends only use it inside the header and footer templates, which
    body-only output never renders.
    """
    bundled = Path(asciidoc_engine.CONF_DIR, f"{backend}.conf")
    return IFEVAL_BLOCK_PATTERN.sub("", bundled.read_text(encoding="utf-8"))


DEFAULT_CONVERTERS: dict[str, typ.Callable[[], MarkupConverter]] = {
    MARKDOWN_EXTENSION: MarkdownConverter,
    ASCIIDOC_EXTENSION: AsciiDocConverter,
}


__all__ = [
    "DEFAULT_CONVERTERS",
    "AsciiDocConverter",
    "ConversionError",
    "MarkdownConverter",
    "MarkupConverter",
]
