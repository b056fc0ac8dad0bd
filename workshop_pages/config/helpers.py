"""Utility helpers shared by the workshop configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from workshop_pages._constants import TEMPLATE_ENGINES

from .models import ConfigError, PageEntry


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalize_page_path(value: object) -> str:
    """Return a content-relative page path without a leading slash."""
    text = str(value).strip().lstrip("/")
    if not text:
        msg = "Page manifest entries require a non-empty 'path'."
        raise ConfigError(msg)
    return text


def _build_page_entry(payload: object) -> PageEntry:
    """Build a PageEntry from a mapping or a bare path string."""
    match payload:
        case str():
            return PageEntry(path=_normalize_page_path(payload))
        case dict():
            if "path" not in payload:
                msg = f"Page manifest entry is missing 'path': {payload!r}"
                raise ConfigError(msg)
            return PageEntry(
                path=_normalize_page_path(payload["path"]),
                title=_optional_str(payload.get("title")),
                exit_sign=_optional_str(payload.get("exit_sign")),
                exit_link=_optional_str(payload.get("exit_link")),
            )
        case _:
            msg = f"Unsupported page manifest entry: {payload!r}"
            raise ConfigError(msg)


def _build_page_entries(payload: object) -> list[PageEntry] | None:
    """Return the manifest entries, or None when no manifest is configured."""
    if payload is None:
        return None
    if not isinstance(payload, list):
        msg = "'pages' must be a list of page entries."
        raise ConfigError(msg)
    return [_build_page_entry(item) for item in payload] or None


def _validate_engine(value: object) -> str:
    """Return the template engine name after checking it is supported."""
    engine = str(value).strip().lower()
    if engine not in TEMPLATE_ENGINES:
        choices = ", ".join(TEMPLATE_ENGINES)
        msg = f"Unknown template engine '{value}'. Expected one of: {choices}"
        raise ConfigError(msg)
    return engine


def _resolve_content_dir(value: object, base_dir: Path) -> Path:
    """Resolve ``value`` against the directory holding the config file."""
    path = Path(str(value))
    if path.is_absolute():
        return path
    return base_dir / path


def _as_mapping(loaded: object) -> dict[str, typ.Any]:
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg)
    return dict(loaded)


__all__ = [
    "_as_mapping",
    "_build_page_entries",
    "_build_page_entry",
    "_optional_str",
    "_resolve_content_dir",
    "_validate_engine",
]
