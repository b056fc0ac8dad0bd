"""Shared dataclasses used by the rendering pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class Variable:
    """A named value injected into page content at render time.

    Attributes
    ----------
    name : str
        Variable name; referenced as ``%name%`` or ``{{ name }}`` in content.
    content : str
        Replacement text.
    """

    name: str
    content: str


__all__ = ["Variable"]
