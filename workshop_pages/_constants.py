"""Common literal values used across workshop_pages.

File extensions, template engine names, and configuration defaults live here so
the resolver, the rendering pipeline, the CLI, and the tests agree on them.

Examples
--------
>>> from workshop_pages import _constants
>>> _constants.MARKDOWN_EXTENSION
'.md'
>>> _constants.ENGINE_JINJA2 in _constants.TEMPLATE_ENGINES
True
"""

MARKDOWN_EXTENSION = ".md"
ASCIIDOC_EXTENSION = ".adoc"

ENGINE_NAIVE = "naive"
ENGINE_JINJA2 = "jinja2"
TEMPLATE_ENGINES = (ENGINE_NAIVE, ENGINE_JINJA2)

DEFAULT_CONTENT_DIR = "content"
DEFAULT_PAGE = "index"
