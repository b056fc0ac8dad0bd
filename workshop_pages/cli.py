"""Cyclopts CLI entrypoint for inspecting and rendering workshop pages.

The ``workshop-pages`` console script resolves the page sequence described by a
workshop configuration file and renders individual pages to HTML. ``pages``
prints the reading order with prev/next links; ``render`` converts one page,
substituting ``--var name=value`` pairs into its content.

Examples
--------
List the resolved pages for the default configuration:

>>> from workshop_pages.cli import main
>>> main()  # doctest: +SKIP

Render a single page into a file:

>>> from workshop_pages.cli import app
>>> app(
...     ["render", "setup/install", "--var", "user=alice", "--output", "out.html"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import asyncio
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_workshop_config
from .content import FileSystemContentStore
from .navigation import PageResolver
from .rendering import RenderingPipeline, Variable

DEFAULT_CONFIG = Path("workshop.yaml")

app = App(name="workshop-pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


def _parse_variables(pairs: typ.Iterable[str]) -> list[Variable]:
    """Turn ``name=value`` strings into variables, keeping their order."""
    variables: list[Variable] = []
    for pair in pairs:
        name, sep, content = pair.partition("=")
        if not sep or not name.strip():
            msg = f"Variables must be given as name=value, got '{pair}'."
            raise ValueError(msg)
        variables.append(Variable(name=name.strip(), content=content))
    return variables


@app.command(help="List the workshop pages in reading order.")
def pages(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to workshop config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    verbose: typ.Annotated[bool, Parameter(help="Log resolution details")] = False,
) -> None:
    """Print every resolved page with its title and neighbours.

    Parameters
    ----------
    config : Path, optional
        Path to the workshop configuration file (overridable via
        ``INPUT_CONFIG``).
    verbose : bool, optional
        Emit debug logging while resolving pages.

    Returns
    -------
    None
        Writes one line per page to stdout.
    """
    _configure_logging(verbose)
    workshop = load_workshop_config(config)
    resolver = PageResolver(workshop, FileSystemContentStore(workshop.content_dir))
    resolved = asyncio.run(resolver.resolve_pages())
    if not resolved:
        print("no pages found")
        return
    for page in resolved:
        prev_page = page.prev_page or "-"
        next_page = page.next_page or "-"
        print(f"{page.path}: {page.title} (prev: {prev_page}, next: {next_page})")


@app.command(help="Render a single workshop page to HTML.")
def render(
    path: typ.Annotated[str, Parameter(help="Page path without extension")],
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to workshop config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    var: typ.Annotated[
        list[str] | None,
        Parameter(help="Variable as name=value; repeat for more"),
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write HTML to this file instead of stdout")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log rendering details")] = False,
) -> None:
    """Render ``path`` with the configured template engine and converters.

    Parameters
    ----------
    path : str
        Content-relative page path, without ``.md`` or ``.adoc``.
    config : Path, optional
        Path to the workshop configuration file.
    var : list[str] or None, optional
        ``name=value`` pairs substituted into the page in the given order.
    output : Path or None, optional
        Destination file; HTML goes to stdout when omitted.
    verbose : bool, optional
        Emit debug logging while rendering.

    Raises
    ------
    ValueError
        If a ``--var`` value is not of the form ``name=value``.
    SystemExit
        With status 1 when the page has no source file.
    """
    _configure_logging(verbose)
    variables = _parse_variables(var or [])
    workshop = load_workshop_config(config)
    pipeline = RenderingPipeline(workshop, FileSystemContentStore(workshop.content_dir))
    html = asyncio.run(pipeline.render(path, variables))
    if html is None:
        print(f"page '{path}' not found", file=sys.stderr)
        raise SystemExit(1)
    if output is None:
        print(html)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    print(f"wrote {output}")


def main() -> None:
    """Invoke the Cyclopts application behind the ``workshop-pages`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
