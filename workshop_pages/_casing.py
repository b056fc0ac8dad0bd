r"""String casing helpers for page titles and metadata field names.

Examples
--------
>>> from workshop_pages._casing import path_to_title, underscored
>>> path_to_title("setup/getting-started")
'Getting Started'
>>> underscored("Next Page")
'next_page'
"""

from __future__ import annotations

import posixpath
import re

_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z]+)")
_UPPER_LETTER = re.compile(r"([A-Z])")
_UNDERSCORE_RUN = re.compile(r"[-\s]+")
_DASH_RUN = re.compile(r"[-_\s]+")
_WORD_START = re.compile(r"(?:^|\s|-)\S")


def underscored(text: str) -> str:
    """Return ``text`` lowercased with words joined by underscores."""
    joined = _CAMEL_BOUNDARY.sub(r"\1_\2", text.strip())
    return _UNDERSCORE_RUN.sub("_", joined).lower()


def dasherize(text: str) -> str:
    """Return ``text`` lowercased with words joined by dashes.

    Capital letters start a new word, so ``MozTransform`` becomes
    ``-moz-transform``. Callers strip the leading dash when they need to.
    """
    split = _UPPER_LETTER.sub(r"-\1", text.strip())
    return _DASH_RUN.sub("-", split).lower()


def humanize(text: str) -> str:
    """Turn an identifier into a capitalised phrase.

    ``getting-started`` becomes ``Getting started``.
    """
    words = underscored(text)
    words = words.removesuffix("_id").replace("_", " ").strip()
    return words[:1].upper() + words[1:]


def titleize(text: str) -> str:
    """Capitalise every word of ``text``."""
    return _WORD_START.sub(lambda match: match.group(0).upper(), text.lower())


def path_to_title(path: str) -> str:
    """Derive a display title from the final segment of a page path."""
    return titleize(humanize(posixpath.basename(path)))


__all__ = ["dasherize", "humanize", "path_to_title", "titleize", "underscored"]
