"""Resolve and render workshop content pages.

This package orders a workshop's pages (from an explicit manifest or by
following ``next_page`` links in each page's metadata block) and renders single
pages from Markdown or AsciiDoc into HTML with variable substitution.

Exports
-------
- ``PageResolver`` / ``build_page_index``: page ordering and lookup.
- ``RenderingPipeline`` / ``Variable``: on-demand page rendering.
- ``app`` / ``main``: the ``workshop-pages`` command line.

Examples
--------
>>> import asyncio
>>> from workshop_pages import PageResolver, WorkshopConfig
>>> from workshop_pages.config import PageEntry
>>> config = WorkshopConfig(pages=[PageEntry("index"), PageEntry("finish")])
>>> [page.title for page in asyncio.run(PageResolver(config, None).resolve_pages())]
['Index', 'Finish']
"""

from __future__ import annotations

from .cli import app, main
from .config import WorkshopConfig
from .navigation import Page, PageResolver, build_page_index
from .rendering import RenderingPipeline, Variable

__all__ = [
    "Page",
    "PageResolver",
    "RenderingPipeline",
    "Variable",
    "WorkshopConfig",
    "app",
    "main",
    "build_page_index",
]
