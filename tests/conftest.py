"""Shared fixtures for workshop_pages tests.

The resolver and the rendering pipeline only need a content-lookup capability,
so most tests run against :class:`MemoryContentStore`, an in-memory stand-in
for the filesystem store that also records which files were read.
"""

from __future__ import annotations

import typing as typ

import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class MemoryContentStore:
    """Content store serving files from a dict of relative path -> text."""

    def __init__(self, files: cabc.Mapping[str, str] | None = None) -> None:
        self.files = dict(files or {})
        self.reads: list[str] = []

    async def exists(self, relpath: str) -> bool:
        return relpath in self.files

    async def read_text(self, relpath: str) -> str:
        self.reads.append(relpath)
        try:
            return self.files[relpath]
        except KeyError as exc:
            raise FileNotFoundError(relpath) from exc


def page_source(body: str = "Body text.", **fields: str) -> str:
    """Return page text with a metadata block built from ``fields``."""
    if not fields:
        return body
    lines = "\n".join(f"{key}: {value}" for key, value in fields.items())
    return f"---\n{lines}\n---\n{body}\n"


@pytest.fixture
def memory_store() -> cabc.Callable[[cabc.Mapping[str, str]], MemoryContentStore]:
    """Return a factory building in-memory content stores."""

    def _build(files: cabc.Mapping[str, str]) -> MemoryContentStore:
        return MemoryContentStore(files)

    return _build


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create an empty content directory under ``tmp_path``."""
    path = tmp_path / "content"
    path.mkdir()
    return path
