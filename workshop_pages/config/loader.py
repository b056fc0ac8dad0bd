"""Load workshop configuration YAML into typed dataclasses."""

from __future__ import annotations

from pathlib import Path

from ruamel.yaml import YAML

from workshop_pages._constants import DEFAULT_CONTENT_DIR, DEFAULT_PAGE, ENGINE_NAIVE

from .helpers import (
    _as_mapping,
    _build_page_entries,
    _optional_str,
    _resolve_content_dir,
    _validate_engine,
)
from .models import WorkshopConfig


def load_workshop_config(path: Path) -> WorkshopConfig:
    """Load the YAML file describing the workshop content and page order.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``workshop.yaml``).

    Returns
    -------
    WorkshopConfig
        Parsed configuration. Keys missing from the file fall back to the
        defaults declared on :class:`WorkshopConfig`; a relative
        ``content_dir`` is resolved against the config file's directory.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigError
        If the file is not a mapping, a ``pages`` entry is invalid, or
        ``template_engine`` names an unsupported engine.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from workshop_pages.config import load_workshop_config
    >>> config = load_workshop_config(Path("workshop.yaml"))  # doctest: +SKIP
    >>> config.template_engine  # doctest: +SKIP
    'naive'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        raw = _as_mapping(loader.load(handle))

    content_dir = _resolve_content_dir(
        raw.get("content_dir") or DEFAULT_CONTENT_DIR, path.parent
    )
    default_page = _optional_str(raw.get("default_page")) or DEFAULT_PAGE
    return WorkshopConfig(
        content_dir=content_dir,
        default_page=default_page.lstrip("/"),
        pages=_build_page_entries(raw.get("pages")),
        template_engine=_validate_engine(raw.get("template_engine") or ENGINE_NAIVE),
    )


__all__ = ["load_workshop_config"]
