"""Template context assembly for a single entity page."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from staticdoc.docs import render_docs
from staticdoc.logger import get_logger
from staticdoc.models import Diagnostic, DiagnosticKind, ItemSummary
from staticdoc.paths import relative_link

if TYPE_CHECKING:
    from staticdoc.config import MarkdownConfig
    from staticdoc.models import Document, Entity

logger = get_logger()


def resolve_section(
    document: Document,
    entity: Entity,
    relationship: str,
    target_ids: list[str],
    *,
    diagnostics: list[Diagnostic] | None = None,
    markdown: MarkdownConfig | None = None,
) -> list[ItemSummary]:
    """Resolve one relationship of an entity into summaries, in target order.

    Targets missing from the document are skipped and reported as dangling
    references.
    """
    summaries: list[ItemSummary] = []

    for target_id in target_ids:
        target = document.get_entity_by_id(target_id)
        if target is None:
            diagnostic = Diagnostic(
                kind=DiagnosticKind.DANGLING_REFERENCE,
                entity_id=entity.id,
                relationship=relationship,
                target_id=target_id,
            )
            logger.warning(
                "%s. This is probably a bug in the documentation backend.",
                diagnostic.message,
            )
            if diagnostics is not None:
                diagnostics.append(diagnostic)
            continue

        link = relative_link(entity, target)
        logger.links("%s -[%s]-> %s", entity.id, relationship, link)
        summaries.append(
            ItemSummary(
                name=target.short_name,
                link=link,
                docs=render_docs(target, markdown),
            )
        )

    return summaries


def build_context(
    document: Document,
    entity: Entity,
    *,
    diagnostics: list[Diagnostic] | None = None,
    markdown: MarkdownConfig | None = None,
) -> dict[str, Any]:
    """Generate the context used when rendering an entity's page.

    Args:
        document: The document the entity belongs to (used for lookups)
        entity: The entity being rendered
        diagnostics: Optional list that collects dangling-reference records
        markdown: Markdown conversion settings

    Returns:
        Mapping with ``kind``, ``name`` and ``id``, plus ``docs`` when the
        entity has documentation and ``sections`` when it has relationships.
    """
    context: dict[str, Any] = {
        "kind": entity.kind,
        "name": entity.short_name,
        "id": entity.id,
    }

    docs = render_docs(entity, markdown)
    if docs is not None:
        context["docs"] = docs

    if entity.relationships is not None:
        sections: dict[str, list[dict[str, Any]]] = {}
        for relationship, target_ids in entity.relationships.items():
            summaries = resolve_section(
                document,
                entity,
                relationship,
                target_ids,
                diagnostics=diagnostics,
                markdown=markdown,
            )
            sections[relationship] = [summary.to_dict() for summary in summaries]
        context["sections"] = sections

    return context
