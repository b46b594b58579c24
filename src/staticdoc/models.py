"""Data models for staticdoc."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Any

from staticdoc.exceptions import UnsupportedKindError

# Separator between segments of a fully-qualified entity id
PATH_SEPARATOR = "::"

# The only attribute the renderer consumes
DOCS_ATTRIBUTE = "docs"


class ItemKind(str, Enum):
    """Entity kinds the renderer knows how to place on disk."""

    CRATE = "crate"
    MODULE = "module"
    STRUCT = "struct"

    @classmethod
    def parse(cls, tag: str) -> ItemKind:
        """Map a raw type tag onto a known kind.

        Raises:
            UnsupportedKindError: If the tag has no path strategy yet
        """
        try:
            return cls(tag)
        except ValueError:
            raise UnsupportedKindError(f"No path strategy for entity kind '{tag}'") from None

    @property
    def is_container(self) -> bool:
        """Whether entities of this kind render as a directory index page."""
        return self in (ItemKind.CRATE, ItemKind.MODULE)


def _default_attributes() -> dict[str, Any]:
    return {}


@dataclass(frozen=True)
class Entity:
    """One documented item (crate, module, struct, ...)."""

    kind: str
    id: str
    attributes: dict[str, Any] = field(default_factory=_default_attributes)
    # None means the resource carried no relationships member at all
    relationships: dict[str, list[str]] | None = None

    @property
    def segments(self) -> list[str]:
        """Path segments of the fully-qualified id."""
        return self.id.split(PATH_SEPARATOR)

    @property
    def short_name(self) -> str:
        """Human-readable name: the last segment of the id."""
        return self.segments[-1]


def _default_entities() -> list[Entity]:
    return []


@dataclass(frozen=True)
class Document:
    """The primary entity plus every related entity reachable from it."""

    primary: Entity
    included: list[Entity] = field(default_factory=_default_entities)

    @cached_property
    def by_id(self) -> dict[str, Entity]:
        """Index of included entities by id, built once per document."""
        return {entity.id: entity for entity in self.included}

    def get_entity_by_id(self, entity_id: str) -> Entity | None:
        """Get an included entity by its id."""
        return self.by_id.get(entity_id)

    def entities(self) -> Iterator[Entity]:
        """Yield the primary entity, then included entities in document order."""
        yield self.primary
        yield from self.included


@dataclass
class ItemSummary:
    """A resolved relationship target as shown on the referencing page."""

    name: str
    link: str
    docs: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the mapping handed to templates."""
        return {"name": self.name, "link": self.link, "docs": self.docs}


class DiagnosticKind(str, Enum):
    """Kinds of recoverable problems found while rendering."""

    DANGLING_REFERENCE = "dangling_reference"


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable warning collected during a run."""

    kind: DiagnosticKind
    entity_id: str
    relationship: str
    target_id: str

    @property
    def message(self) -> str:
        """Human-readable description of the problem."""
        return (
            f"could not find '{self.target_id}' (referenced by '{self.entity_id}' "
            f"under '{self.relationship}') in the document's included resources"
        )

    def __str__(self) -> str:
        return self.message
