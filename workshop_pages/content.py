"""Access to the workshop content tree.

The resolver and the rendering pipeline only ever ask two questions of the
content tree: does a file exist, and what text does it hold. Both are
coroutines so a store backed by slower I/O can suspend the caller; the
filesystem store off-loads its calls to a worker thread.

Example
-------
>>> import asyncio
>>> from pathlib import Path
>>> from workshop_pages.content import FileSystemContentStore
>>> store = FileSystemContentStore(Path("workshop/content"))
>>> asyncio.run(store.exists("index.md"))  # doctest: +SKIP
True
"""

from __future__ import annotations

import asyncio
import typing as typ
from pathlib import Path


class ContentStore(typ.Protocol):
    """Read-only view of a content tree addressed by relative file paths."""

    async def exists(self, relpath: str) -> bool:
        """Return whether a file exists at ``relpath``."""
        ...

    async def read_text(self, relpath: str) -> str:
        """Return the UTF-8 text stored at ``relpath``."""
        ...


class FileSystemContentStore:
    """Serve content files from a directory on disk."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def _resolve(self, relpath: str) -> Path:
        return self.root / relpath.lstrip("/")

    async def exists(self, relpath: str) -> bool:
        """Return whether ``relpath`` names a regular file under the root."""
        return await asyncio.to_thread(self._resolve(relpath).is_file)

    async def read_text(self, relpath: str) -> str:
        """Read ``relpath`` as UTF-8 text.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        """
        path = self._resolve(relpath)
        return await asyncio.to_thread(path.read_text, encoding="utf-8")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.root)!r})"


__all__ = ["ContentStore", "FileSystemContentStore"]
