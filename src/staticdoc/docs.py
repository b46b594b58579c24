"""Conversion of documentation comments to HTML."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

import mistune

from staticdoc.config import MarkdownConfig
from staticdoc.exceptions import StructureError
from staticdoc.models import DOCS_ATTRIBUTE

if TYPE_CHECKING:
    from staticdoc.models import Entity


@lru_cache(maxsize=None)
def _markdown(plugins: tuple[str, ...], escape: bool, hard_wrap: bool) -> mistune.Markdown:
    return mistune.create_markdown(
        escape=escape,
        hard_wrap=hard_wrap,
        renderer="html",
        plugins=list(plugins),
    )


def markdown_to_html(text: str, config: MarkdownConfig | None = None) -> str:
    """Convert markdown text to an HTML fragment."""
    config = config or MarkdownConfig()
    markdown = _markdown(tuple(config.plugins), config.escape, config.hard_wrap)
    # The html renderer always returns a string
    return str(markdown(text))


def render_docs(entity: Entity, config: MarkdownConfig | None = None) -> str | None:
    """Return an entity's documentation rendered as HTML.

    Returns None when the entity has no ``docs`` attribute or the rendered
    HTML is empty; templates show a documentation block only for a value.

    Raises:
        StructureError: If the docs attribute is not a string
    """
    docs = entity.attributes.get(DOCS_ATTRIBUTE)
    if docs is None:
        return None

    if not isinstance(docs, str):
        raise StructureError(
            f"docs attribute of '{entity.id}' was not a string (got {type(docs).__name__})"
        )

    rendered = markdown_to_html(docs, config)
    if not rendered.strip():
        return None
    return rendered
