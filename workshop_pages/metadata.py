r"""Split raw page content into a YAML metadata block and a body.

Workshop pages may open with a block fenced by ``---`` lines (optionally
preceded by a byte-order mark). The block carries page settings such as the
title and the path of the following page; everything after it is the body
that gets rendered.

Example
-------
>>> from workshop_pages.metadata import extract_content, extract_metadata
>>> source = "---\ntitle: Setup\nNext Page: install\n---\n# Setup\n"
>>> extract_metadata(source)
{'title': 'Setup', 'next_page': 'install'}
>>> extract_content(source)
'# Setup'
"""

from __future__ import annotations

import datetime as dt
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._casing import dasherize, underscored

METADATA_PATTERN = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(.*?)^---[ \t]*\r?$", re.DOTALL | re.MULTILINE
)


class MetadataError(ValueError):
    """Raised when a page's metadata block cannot be parsed."""


def normalize_field_name(field: str, *, use_underscore: bool = True) -> str:
    """Return the canonical form of a metadata field name.

    Parameters
    ----------
    field : str
        Field name as written in the page (``Next Page``, ``exit/link``...).
    use_underscore : bool, optional
        Join words with underscores (default) rather than dashes.

    Returns
    -------
    str
        Lowercase field name with words joined by ``_`` or ``-``.
    """
    cleaned = field.replace("/", " ").strip()
    if use_underscore:
        return underscored(cleaned)
    return dasherize(cleaned).strip("-")


def _coerce_value(value: object) -> str:
    """Render a parsed YAML scalar (or sequence) as a trimmed string."""
    match value:
        case None:
            text = ""
        case bool():
            text = "true" if value else "false"
        case dt.date():
            text = value.isoformat()
        case list() | tuple():
            text = ",".join(_coerce_value(item) for item in value)
        case _:
            text = str(value)
    return text.strip()


def _load_block(block: str) -> typ.Any:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        return loader.load(block)
    except YAMLError as exc:
        msg = f"Malformed metadata block: {exc}"
        raise MetadataError(msg) from exc


def extract_metadata(text: str, *, use_underscore: bool = True) -> dict[str, str]:
    """Parse the leading metadata block of ``text`` into normalised fields.

    Parameters
    ----------
    text : str
        Raw page source.
    use_underscore : bool, optional
        Field-name joining style passed to :func:`normalize_field_name`.

    Returns
    -------
    dict[str, str]
        Normalised field names mapped to trimmed string values; empty when the
        page has no metadata block.

    Raises
    ------
    MetadataError
        If the block is not valid YAML or does not hold a mapping.
    """
    match = METADATA_PATTERN.match(text)
    if match is None:
        return {}
    loaded = _load_block(match.group(1).strip())
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = "Metadata block must contain key/value pairs."
        raise MetadataError(msg)
    return {
        normalize_field_name(str(key), use_underscore=use_underscore): _coerce_value(
            value
        )
        for key, value in loaded.items()
    }


def extract_content(text: str) -> str:
    """Return ``text`` without its metadata block, trimmed of outer whitespace.

    A leading byte-order mark is dropped whether or not a block follows it.
    """
    body = METADATA_PATTERN.sub("", text, count=1)
    return body.removeprefix("\ufeff").strip()


def parse_page(text: str) -> tuple[dict[str, str], str]:
    """Return the metadata fields and the trimmed body of ``text``.

    Raises
    ------
    MetadataError
        If the metadata block is malformed.
    """
    return extract_metadata(text), extract_content(text)


__all__ = [
    "METADATA_PATTERN",
    "MetadataError",
    "extract_content",
    "extract_metadata",
    "normalize_field_name",
    "parse_page",
]
