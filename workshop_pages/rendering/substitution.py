"""Strategies for injecting variables into page bodies before conversion.

Two strategies share the :class:`VariableSubstitutor` capability:

- :class:`NaiveSubstitutor` replaces literal ``%name%`` tokens.
- :class:`JinjaSubstitutor` runs the body through a sandboxed Jinja template
  pass so content can use ``{{ name }}`` plus conditionals and loops.

The workshop configuration picks one for every render via
:func:`build_substitutor`.
"""

from __future__ import annotations

import typing as typ

from jinja2 import TemplateError
from jinja2.sandbox import SandboxedEnvironment

from workshop_pages._constants import ENGINE_JINJA2, ENGINE_NAIVE, TEMPLATE_ENGINES
from workshop_pages.config import ConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import Variable


class SubstitutionError(ValueError):
    """Raised when page content is not a valid template."""


class VariableSubstitutor(typ.Protocol):
    """Capability shared by the substitution strategies."""

    async def substitute(self, text: str, variables: cabc.Sequence[Variable]) -> str:
        """Return ``text`` with ``variables`` applied."""
        ...


class NaiveSubstitutor:
    """Replace ``%name%`` tokens one variable at a time, in input order.

    Replacements are not rescanned for the same variable, but a later
    variable's token introduced by an earlier replacement is substituted.
    """

    async def substitute(self, text: str, variables: cabc.Sequence[Variable]) -> str:
        """Return ``text`` with every ``%name%`` token replaced."""
        for variable in variables:
            text = text.replace(f"%{variable.name}%", variable.content)
        return text


class JinjaSubstitutor:
    """Render the body as a sandboxed Jinja template in one async pass."""

    def __init__(self) -> None:
        self.env = SandboxedEnvironment(
            enable_async=True,
            autoescape=False,
            keep_trailing_newline=True,
        )

    async def substitute(self, text: str, variables: cabc.Sequence[Variable]) -> str:
        """Render ``text`` with the variables as a flat template context.

        Raises
        ------
        SubstitutionError
            If ``text`` has invalid template syntax or trips the sandbox.
        """
        params = {variable.name: variable.content for variable in variables}
        try:
            template = self.env.from_string(text)
            return await template.render_async(params)
        except TemplateError as exc:
            msg = f"Unable to render page template: {exc}"
            raise SubstitutionError(msg) from exc


SUBSTITUTORS: dict[str, typ.Callable[[], VariableSubstitutor]] = {
    ENGINE_NAIVE: NaiveSubstitutor,
    ENGINE_JINJA2: JinjaSubstitutor,
}


def build_substitutor(engine: str) -> VariableSubstitutor:
    """Return the substitution strategy configured by ``engine``.

    Raises
    ------
    ConfigError
        If ``engine`` is not one of the supported template engine names.
    """
    try:
        factory = SUBSTITUTORS[engine]
    except KeyError as exc:
        choices = ", ".join(TEMPLATE_ENGINES)
        msg = f"Unknown template engine '{engine}'. Expected one of: {choices}"
        raise ConfigError(msg) from exc
    return factory()


__all__ = [
    "SUBSTITUTORS",
    "JinjaSubstitutor",
    "NaiveSubstitutor",
    "SubstitutionError",
    "VariableSubstitutor",
    "build_substitutor",
]
