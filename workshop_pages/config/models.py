"""Typed dataclasses describing workshop configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from workshop_pages._constants import DEFAULT_CONTENT_DIR, DEFAULT_PAGE, ENGINE_NAIVE


class ConfigError(ValueError):
    """Raised when the workshop configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class PageEntry:
    """One entry of an explicit page manifest.

    Attributes
    ----------
    path : str
        Content-relative page path without a file extension.
    title : str or None
        Display title; derived from ``path`` when omitted.
    exit_sign : str or None
        Label of the button that leaves the workshop from this page.
    exit_link : str or None
        Target URL of the exit button.
    """

    path: str
    title: str | None = None
    exit_sign: str | None = None
    exit_link: str | None = None


@dc.dataclass(slots=True)
class WorkshopConfig:
    """Settings shared by the page resolver and the rendering pipeline.

    Attributes
    ----------
    content_dir : Path
        Root of the content tree.
    default_page : str
        First page followed when no manifest is given.
    pages : list[PageEntry] or None
        Explicit page manifest; takes precedence over link discovery.
    template_engine : str
        ``"naive"`` for ``%name%`` replacement or ``"jinja2"`` for a
        template pass.
    """

    content_dir: Path = Path(DEFAULT_CONTENT_DIR)
    default_page: str = DEFAULT_PAGE
    pages: list[PageEntry] | None = None
    template_engine: str = ENGINE_NAIVE


__all__ = ["ConfigError", "PageEntry", "WorkshopConfig"]
