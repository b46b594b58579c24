"""JSON:API document parser for staticdoc."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, StructureError, ValidationError
from .models import Document, Entity
from .schemas import DocumentSchema, ResourceSchema


def _to_entity(resource: ResourceSchema) -> Entity:
    relationships: dict[str, list[str]] | None = None
    if resource.relationships is not None:
        relationships = {
            name: [identifier.id for identifier in relationship.data]
            for name, relationship in resource.relationships.items()
        }

    return Entity(
        kind=resource.type,
        id=resource.id,
        attributes=dict(resource.attributes),
        relationships=relationships,
    )


def _check_unique_ids(entities: list[Entity]) -> None:
    seen: set[str] = set()
    for entity in entities:
        if entity.id in seen:
            raise ValidationError(f"Duplicate entity id in document: {entity.id}")
        seen.add(entity.id)


class DocumentParser:
    """Parser for JSON:API documents produced by the documentation backend."""

    def parse_file(self, file_path: Path | str) -> Document:
        """Parse a JSON file into a Document."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with path.open(encoding="utf-8") as f:
                data: Any = json.load(f)
        except json.JSONDecodeError as e:
            raise ParseError(f"Failed to parse JSON: {e}") from e

        if not isinstance(data, dict):
            raise ParseError("JSON must contain an object at the root level")

        return self.parse_data(data)  # type: ignore[arg-type]

    def parse_data(self, data: dict[str, Any]) -> Document:
        """Convert already-decoded JSON:API data into a Document."""
        try:
            schema = DocumentSchema.model_validate(data)
        except PydanticValidationError as e:
            # Our own shape validators raise ValueError; anything else is a plain schema error
            if any(error["type"] == "value_error" for error in e.errors()):
                raise StructureError(f"Unexpected document structure: {e}") from e
            raise ValidationError(f"Invalid document: {e}") from e

        primary = _to_entity(schema.data)
        included = [_to_entity(resource) for resource in schema.included]
        _check_unique_ids([primary, *included])

        return Document(primary=primary, included=included)


def load_document(path: Path | str) -> Document:
    """Load a JSON:API document from disk."""
    return DocumentParser().parse_file(path)
