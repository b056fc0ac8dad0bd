"""Render a single workshop page to HTML on demand.

The pipeline locates the page source (Markdown first, then AsciiDoc), drops
its metadata block, applies the configured variable substitution, and hands
the result to the converter registered for the source's extension.

Example
-------
>>> import asyncio
>>> from workshop_pages.config import WorkshopConfig
>>> from workshop_pages.content import FileSystemContentStore
>>> from workshop_pages.rendering import RenderingPipeline, Variable
>>> config = WorkshopConfig()
>>> pipeline = RenderingPipeline(config, FileSystemContentStore(config.content_dir))
>>> asyncio.run(
...     pipeline.render("index", [Variable("name", "World")])
... )  # doctest: +SKIP
'<p>Hello World</p>'
"""

from __future__ import annotations

import logging
import typing as typ

from workshop_pages.metadata import parse_page

from .converters import DEFAULT_CONVERTERS
from .substitution import build_substitutor

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from workshop_pages.config import WorkshopConfig
    from workshop_pages.content import ContentStore

    from .converters import MarkupConverter
    from .models import Variable
    from .substitution import VariableSubstitutor

logger = logging.getLogger(__name__)


class RenderingPipeline:
    """Turn page paths into HTML using the configured strategies."""

    def __init__(
        self,
        config: WorkshopConfig,
        store: ContentStore,
        *,
        substitutor: VariableSubstitutor | None = None,
        converters: cabc.Mapping[str, MarkupConverter] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Parameters
        ----------
        config : WorkshopConfig
            Workshop settings; ``template_engine`` selects the substitutor.
        store : ContentStore
            Content lookup used to locate and read page sources.
        substitutor : VariableSubstitutor, optional
            Override for the configured substitution strategy.
        converters : Mapping[str, MarkupConverter], optional
            Converters keyed by file extension, in lookup order. Defaults to
            Markdown followed by AsciiDoc.
        """
        self.config = config
        self.store = store
        self.substitutor = substitutor or build_substitutor(config.template_engine)
        if converters is None:
            converters = {ext: factory() for ext, factory in DEFAULT_CONVERTERS.items()}
        self.converters = dict(converters)

    async def locate(self, path: str) -> str | None:
        """Return the extension of the first existing source for ``path``."""
        for extension in self.converters:
            if await self.store.exists(f"{path}{extension}"):
                return extension
        return None

    async def render(
        self, path: str, variables: cabc.Sequence[Variable] = ()
    ) -> str | None:
        """Render the page at ``path`` into HTML.

        Parameters
        ----------
        path : str
            Content-relative page path without an extension.
        variables : Sequence[Variable], optional
            Values substituted into the page body before conversion.

        Returns
        -------
        str or None
            HTML for the page, or ``None`` when no source file exists.

        Raises
        ------
        MetadataError
            If the page source has a malformed metadata block.
        SubstitutionError
            If the Jinja engine is configured and the body is not a valid
            template.
        ConversionError
            If the converter rejects the body, for example an AsciiDoc page
            using an include or system macro.
        """
        extension = await self.locate(path)
        if extension is None:
            logger.debug("no source found for page %r", path)
            return None

        source = await self.store.read_text(f"{path}{extension}")
        _, body = parse_page(source)
        body = await self.substitutor.substitute(body, variables)
        return self.converters[extension].convert(body)


__all__ = ["RenderingPipeline"]
