"""Resolve the ordered workshop page sequence and its prev/next links.

Two sources of ordering are supported. An explicit manifest in the workshop
configuration wins; otherwise the resolver starts at the default page and
follows the ``next_page`` field of each page's metadata block until the chain
ends, points at a missing file, or loops back to a page already visited.

Example
-------
>>> import asyncio
>>> from workshop_pages.config import PageEntry, WorkshopConfig
>>> from workshop_pages.navigation import PageResolver, build_page_index
>>> config = WorkshopConfig(pages=[PageEntry("intro"), PageEntry("setup/install")])
>>> pages = asyncio.run(PageResolver(config, store=None).resolve_pages())
>>> [(page.path, page.title, page.next_page) for page in pages]
[('intro', 'Intro', 'setup/install'), ('setup/install', 'Install', None)]
>>> build_page_index(pages)["setup/install"].prev_page
'intro'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import posixpath
import typing as typ

from ._casing import path_to_title
from ._constants import MARKDOWN_EXTENSION
from .metadata import extract_metadata

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import PageEntry, WorkshopConfig
    from .content import ContentStore

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class Page:
    """A page in the resolved workshop sequence.

    Attributes
    ----------
    path : str
        Content-relative page path without a file extension.
    title : str
        Display title.
    prev_page : str or None
        Path of the preceding page, ``None`` for the first page.
    next_page : str or None
        Path of the following page, ``None`` for the last page.
    exit_sign : str or None
        Label of the exit button shown on this page, if any.
    exit_link : str or None
        Target URL of the exit button, if any.
    """

    path: str
    title: str
    prev_page: str | None = None
    next_page: str | None = None
    exit_sign: str | None = None
    exit_link: str | None = None


class PageResolver:
    """Build the ordered page list from a manifest or by following links."""

    def __init__(self, config: WorkshopConfig, store: ContentStore | None) -> None:
        """Initialize the resolver.

        Parameters
        ----------
        config : WorkshopConfig
            Workshop settings naming the manifest and default page.
        store : ContentStore or None
            Content lookup used in discovery mode. Only consulted when the
            configuration has no manifest.
        """
        self.config = config
        self.store = store

    async def resolve_pages(self) -> list[Page]:
        """Return the workshop pages in reading order with links filled in.

        Returns
        -------
        list[Page]
            Pages in manifest order, or in discovery order starting at the
            default page. Empty when there is no manifest and the default page
            does not exist.

        Raises
        ------
        MetadataError
            If a page visited during discovery has a malformed metadata block.
        """
        if self.config.pages:
            return _link_manifest(self.config.pages)
        if self.store is None:
            return []
        return await self._discover()

    async def _discover(self) -> list[Page]:
        store = typ.cast("ContentStore", self.store)
        pathname = self.config.default_page
        if not await store.exists(_markdown_file(pathname)):
            logger.debug("default page %r has no markdown source", pathname)
            return []

        meta = await self._read_metadata(pathname)
        pages = [_page_from_metadata(pathname, meta)]
        visited = {pathname}

        while next_field := meta.get("next_page"):
            candidate = _resolve_next_path(pathname, next_field)
            if candidate in visited:
                logger.warning(
                    "page %r links back to %r; stopping navigation", pathname, candidate
                )
                break
            if not await store.exists(_markdown_file(candidate)):
                logger.warning(
                    "page %r links to missing page %r; stopping navigation",
                    pathname,
                    candidate,
                )
                break

            meta = await self._read_metadata(candidate)
            pages[-1].next_page = candidate
            pages.append(_page_from_metadata(candidate, meta, prev_page=pathname))
            visited.add(candidate)
            pathname = candidate
        else:
            logger.debug("navigation ends at %r", pathname)
        return pages

    async def _read_metadata(self, pathname: str) -> dict[str, str]:
        store = typ.cast("ContentStore", self.store)
        text = await store.read_text(_markdown_file(pathname))
        return extract_metadata(text)


def _markdown_file(pathname: str) -> str:
    return f"{pathname}{MARKDOWN_EXTENSION}"


def _resolve_next_path(current: str, target: str) -> str:
    """Resolve a ``next_page`` value against the current page's directory."""
    joined = posixpath.join(posixpath.dirname(current), target.lstrip("/"))
    return posixpath.normpath(joined).lstrip("/")


def _page_from_metadata(
    pathname: str, meta: cabc.Mapping[str, str], *, prev_page: str | None = None
) -> Page:
    return Page(
        path=pathname,
        title=meta.get("title") or path_to_title(pathname),
        prev_page=prev_page,
        exit_sign=meta.get("exit_sign") or None,
        exit_link=meta.get("exit_link") or None,
    )


def _link_manifest(entries: cabc.Sequence[PageEntry]) -> list[Page]:
    """Turn manifest entries into pages linked in list order."""
    pages = [
        Page(
            path=entry.path,
            title=entry.title or path_to_title(entry.path),
            exit_sign=entry.exit_sign,
            exit_link=entry.exit_link,
        )
        for entry in entries
    ]
    for current, following in zip(pages, pages[1:]):
        current.next_page = following.path
        following.prev_page = current.path
    return pages


def build_page_index(pages: cabc.Iterable[Page]) -> dict[str, Page]:
    """Map each page path to its page; later duplicates replace earlier ones."""
    return {page.path: page for page in pages}


__all__ = ["Page", "PageResolver", "build_page_index"]
