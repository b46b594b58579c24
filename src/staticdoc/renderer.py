"""Rendering of a document into a tree of static HTML files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any, Protocol

from jinja2 import (
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from staticdoc.config import StaticdocConfig
from staticdoc.context import build_context
from staticdoc.exceptions import OutputError, TemplateRenderError
from staticdoc.logger import get_logger
from staticdoc.paths import derive_path

if TYPE_CHECKING:
    from staticdoc.models import Diagnostic, Document, Entity

logger = get_logger()

# Output namespace under the output root, so successive renderer
# generations do not write over each other
DOC_ROOT_NAME = "doc2"

ITEM_TEMPLATE = "item"


class TemplateEngine(Protocol):
    """Protocol for template engines used to render pages."""

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a named template with the given context.

        Raises:
            TemplateRenderError: If the template is missing or fails to render
        """
        ...


class JinjaTemplateEngine:
    """Template engine backed by jinja2.

    Template names map onto ``<name>.html`` files, looked up in
    ``template_dir`` or, when it is not given, in the bundled templates.
    """

    def __init__(self, template_dir: Path | None = None):
        if template_dir is not None:
            loader: FileSystemLoader | PackageLoader = FileSystemLoader(str(template_dir))
        else:
            loader = PackageLoader("staticdoc", "templates")
        self.env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render ``<template_name>.html`` with the given context."""
        try:
            template = self.env.get_template(f"{template_name}.html")
            return template.render(**context)
        except TemplateError as e:
            raise TemplateRenderError(f"Failed to render template '{template_name}': {e}") from e


@dataclass
class RenderReport:
    """Outcome of a successful run."""

    root: Path
    written: list[Path] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def plan_tree(document: Document) -> list[tuple[Entity, PurePosixPath]]:
    """List every entity with its output path, in render order."""
    return [(entity, derive_path(entity)) for entity in document.entities()]


def _write_page(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Failed to write {path}: {e}") from e


def render_tree(
    document: Document,
    output_root: Path | str,
    engine: TemplateEngine | None = None,
    *,
    config: StaticdocConfig | None = None,
) -> RenderReport:
    """Generate a tree of documentation files under ``output_root/doc2``.

    The primary entity is rendered first, then every included entity in
    document order. Any failure aborts the run; files already written are
    left in place.

    Args:
        document: Parsed JSON:API document
        output_root: Directory to render into (created if missing)
        engine: Template engine; defaults to jinja2 with the configured templates
        config: Rendering configuration

    Returns:
        RenderReport listing written files and dangling-reference diagnostics
    """
    config = config or StaticdocConfig()
    if engine is None:
        engine = JinjaTemplateEngine(config.templates.directory)

    doc_root = Path(output_root) / DOC_ROOT_NAME
    try:
        doc_root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"Failed to create documentation root {doc_root}: {e}") from e

    report = RenderReport(root=doc_root)

    for entity in document.entities():
        path = doc_root / derive_path(entity)
        logger.pages("rendering `%s`", path)

        context = build_context(
            document,
            entity,
            diagnostics=report.diagnostics,
            markdown=config.markdown,
        )
        rendered = engine.render(ITEM_TEMPLATE, context)
        _write_page(path, rendered)
        report.written.append(path)

    logger.debug(
        "wrote %d page(s) with %d diagnostic(s)", len(report.written), len(report.diagnostics)
    )
    return report
