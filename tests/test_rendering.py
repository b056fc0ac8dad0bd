"""Tests for variable substitution, markup conversion, and the render pipeline.

Converters are exercised directly and through :class:`RenderingPipeline`;
dispatch tests swap in recording converters so they can assert which format
handled a page without depending on converter output.

Usage
-----
Run ``pytest tests/test_rendering.py -v``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from conftest import MemoryContentStore, page_source

from workshop_pages.config import ConfigError, WorkshopConfig
from workshop_pages.content import FileSystemContentStore
from workshop_pages.metadata import MetadataError
from workshop_pages.rendering import (
    AsciiDocConverter,
    ConversionError,
    JinjaSubstitutor,
    MarkdownConverter,
    NaiveSubstitutor,
    RenderingPipeline,
    SubstitutionError,
    Variable,
    build_substitutor,
)

GREETING_PAGE = "---\ntitle: Foo\n---\nHello %name%"


class RecordingConverter:
    """Converter stub remembering the bodies it was asked to convert."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.calls: list[str] = []

    def convert(self, text: str) -> str:
        self.calls.append(text)
        return f"<{self.label}>{text}</{self.label}>"


def _recording_pipeline(
    store: MemoryContentStore, *, engine: str = "naive"
) -> tuple[RenderingPipeline, RecordingConverter, RecordingConverter]:
    markdown = RecordingConverter("md")
    asciidoc = RecordingConverter("adoc")
    pipeline = RenderingPipeline(
        WorkshopConfig(template_engine=engine),
        store,
        converters={".md": markdown, ".adoc": asciidoc},
    )
    return pipeline, markdown, asciidoc


def test_naive_substitution_replaces_every_token() -> None:
    text = "%user% logs in as %user% on %host%."
    variables = [Variable("user", "alice"), Variable("host", "lab-1")]
    result = asyncio.run(NaiveSubstitutor().substitute(text, variables))
    assert result == "alice logs in as alice on lab-1."


def test_naive_substitution_is_order_dependent() -> None:
    forward = [Variable("a", "%b%"), Variable("b", "x")]
    backward = [Variable("b", "x"), Variable("a", "%b%")]
    substitutor = NaiveSubstitutor()

    assert asyncio.run(substitutor.substitute("%a%", forward)) == "x"
    assert asyncio.run(substitutor.substitute("%a%", backward)) == "%b%"


def test_naive_substitution_leaves_unknown_tokens() -> None:
    result = asyncio.run(NaiveSubstitutor().substitute("%missing% here", []))
    assert result == "%missing% here"


def test_jinja_substitution_supports_control_flow() -> None:
    text = "{% if show %}Hi {{ name }}{% endif %}{% for c in name %}.{% endfor %}"
    variables = [Variable("show", "yes"), Variable("name", "Bob")]
    result = asyncio.run(JinjaSubstitutor().substitute(text, variables))
    assert result == "Hi Bob..."


def test_jinja_substitution_later_variables_win() -> None:
    variables = [Variable("name", "first"), Variable("name", "second")]
    result = asyncio.run(JinjaSubstitutor().substitute("{{ name }}", variables))
    assert result == "second"


def test_jinja_substitution_renders_undefined_as_empty() -> None:
    result = asyncio.run(JinjaSubstitutor().substitute("[{{ nothing }}]", []))
    assert result == "[]"


def test_jinja_substitution_does_not_escape_html() -> None:
    variables = [Variable("link", "<a href='/x'>x</a>")]
    result = asyncio.run(JinjaSubstitutor().substitute("{{ link }}", variables))
    assert result == "<a href='/x'>x</a>"


def test_jinja_syntax_errors_are_wrapped() -> None:
    with pytest.raises(SubstitutionError):
        asyncio.run(JinjaSubstitutor().substitute("{% if %}", []))


def test_build_substitutor_selects_strategy() -> None:
    assert isinstance(build_substitutor("naive"), NaiveSubstitutor)
    assert isinstance(build_substitutor("jinja2"), JinjaSubstitutor)
    with pytest.raises(ConfigError, match="Unknown template engine"):
        build_substitutor("liquid")


def test_markdown_converter_renders_tables() -> None:
    text = "| Name | Value |\n| ---- | ----- |\n| a    | 1     |\n"
    soup = BeautifulSoup(MarkdownConverter().convert(text), "html.parser")
    cells = [cell.get_text() for cell in soup.select("table td")]
    assert cells == ["a", "1"]


def test_markdown_converter_highlights_fenced_code() -> None:
    text = "Intro\n\n```python\nprint('hi')\n```\n"
    soup = BeautifulSoup(MarkdownConverter().convert(text), "html.parser")
    block = soup.select_one("div.codehilite")
    assert block is not None
    assert "print" in block.get_text()


def test_markdown_converter_keeps_raw_html_and_plain_quotes() -> None:
    text = 'Say "hello" -- to <span class="note">everyone</span>.'
    html = MarkdownConverter().convert(text)
    soup = BeautifulSoup(html, "html.parser")

    assert soup.select_one("span.note").get_text() == "everyone"
    assert '"hello" --' in soup.get_text()
    assert "&ldquo;" not in html


def test_markdown_converter_blank_input() -> None:
    assert MarkdownConverter().convert("  \n") == ""


def test_markdown_converter_exposes_stylesheet() -> None:
    assert ".codehilite" in MarkdownConverter().stylesheet


def test_asciidoc_converter_renders_body() -> None:
    html = AsciiDocConverter().convert("Some *bold* text.\n")
    soup = BeautifulSoup(html, "html.parser")

    assert soup.select_one("strong").get_text() == "bold"
    assert soup.find("html") is None


def test_asciidoc_converter_blank_input() -> None:
    assert AsciiDocConverter().convert("\n  \n") == ""


def test_asciidoc_converter_refuses_includes(tmp_path: Path) -> None:
    secret = tmp_path / "secret.txt"
    secret.write_text("classified-contents\n", encoding="utf-8")

    with pytest.raises(ConversionError, match="unsafe") as excinfo:
        AsciiDocConverter().convert(f"Before\n\ninclude::{secret}[]\n\nAfter\n")

    assert "classified-contents" not in str(excinfo.value)


def test_asciidoc_converter_refuses_system_macros(tmp_path: Path) -> None:
    marker = tmp_path / "ran"

    with pytest.raises(ConversionError, match="unsafe"):
        AsciiDocConverter().convert(f"Before\n\nsys::[touch {marker}]\n\nAfter\n")

    assert not marker.exists()


def test_render_asciidoc_page_with_real_converter() -> None:
    store = MemoryContentStore(
        {"guide/page.adoc": "---\ntitle: Guide\n---\nHello *%who%*.\n"}
    )
    pipeline = RenderingPipeline(WorkshopConfig(), store)

    html = asyncio.run(pipeline.render("guide/page", [Variable("who", "Ada")]))

    assert html is not None
    soup = BeautifulSoup(html, "html.parser")
    assert soup.select_one("strong").get_text() == "Ada"
    assert "title:" not in html
    assert soup.find("html") is None


def test_render_propagates_conversion_errors() -> None:
    store = MemoryContentStore({"page.adoc": "sys::[echo hi]\n"})
    pipeline = RenderingPipeline(WorkshopConfig(), store)

    with pytest.raises(ConversionError):
        asyncio.run(pipeline.render("page"))


def test_render_naive_strips_metadata(content_dir) -> None:
    (content_dir / "page.md").write_text(GREETING_PAGE, encoding="utf-8")
    config = WorkshopConfig(content_dir=content_dir)
    pipeline = RenderingPipeline(config, FileSystemContentStore(content_dir))

    html = asyncio.run(pipeline.render("page", [Variable("name", "World")]))

    assert html is not None
    text = BeautifulSoup(html, "html.parser").get_text()
    assert "Hello World" in text
    assert "---" not in html
    assert "title: Foo" not in html


def test_render_with_jinja_engine() -> None:
    store = MemoryContentStore(
        {"page.md": page_source("{% if name %}Hello {{ name }}{% endif %}", title="T")}
    )
    pipeline = RenderingPipeline(WorkshopConfig(template_engine="jinja2"), store)

    html = asyncio.run(pipeline.render("page", [Variable("name", "World")]))

    assert html == "<p>Hello World</p>"


def test_render_prefers_markdown_source() -> None:
    store = MemoryContentStore({"page.md": "Markdown", "page.adoc": "AsciiDoc"})
    pipeline, markdown, asciidoc = _recording_pipeline(store)

    html = asyncio.run(pipeline.render("page"))

    assert html == "<md>Markdown</md>"
    assert markdown.calls == ["Markdown"]
    assert asciidoc.calls == []
    assert store.reads == ["page.md"]


def test_render_falls_back_to_asciidoc() -> None:
    store = MemoryContentStore({"guide/page.adoc": "---\ntitle: X\n---\n= %who%"})
    pipeline, markdown, asciidoc = _recording_pipeline(store)

    html = asyncio.run(pipeline.render("guide/page", [Variable("who", "Ada")]))

    assert html == "<adoc>= Ada</adoc>"
    assert markdown.calls == []


def test_render_missing_page_returns_none() -> None:
    pipeline, markdown, asciidoc = _recording_pipeline(MemoryContentStore())
    assert asyncio.run(pipeline.render("nowhere")) is None
    assert markdown.calls == asciidoc.calls == []


def test_render_propagates_malformed_metadata_block() -> None:
    store = MemoryContentStore({"page.md": "---\ntitle: [oops\n---\nBody"})
    pipeline, markdown, _ = _recording_pipeline(store)

    with pytest.raises(MetadataError):
        asyncio.run(pipeline.render("page"))
    assert markdown.calls == []


def test_render_uses_injected_substitutor() -> None:
    class Upper:
        async def substitute(self, text: str, variables: object) -> str:
            return text.upper()

    store = MemoryContentStore({"page.md": "quiet"})
    markdown = RecordingConverter("md")
    pipeline = RenderingPipeline(
        WorkshopConfig(), store, substitutor=Upper(), converters={".md": markdown}
    )

    assert asyncio.run(pipeline.render("page")) == "<md>QUIET</md>"


def test_pipeline_rejects_unknown_engine() -> None:
    with pytest.raises(ConfigError):
        RenderingPipeline(WorkshopConfig(template_engine="mustache"), MemoryContentStore())


def test_pages_render_concurrently() -> None:
    store = MemoryContentStore(
        {"one.md": "Page %n%", "two.md": "Page %n%", "three.adoc": "unused"}
    )
    pipeline, _, _ = _recording_pipeline(store)

    async def _render_all() -> list[str | None]:
        return await asyncio.gather(
            pipeline.render("one", [Variable("n", "1")]),
            pipeline.render("two", [Variable("n", "2")]),
        )

    assert asyncio.run(_render_all()) == ["<md>Page 1</md>", "<md>Page 2</md>"]
