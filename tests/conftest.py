"""Pytest configuration and fixtures for staticdoc tests."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from staticdoc.logger import reset_logger
from staticdoc.models import Document, Entity


@pytest.fixture(autouse=True)
def clean_logger() -> Iterator[None]:
    """Give every test an unconfigured logger that propagates to caplog."""
    reset_logger()
    yield
    reset_logger()


def make_entity(
    kind: str,
    entity_id: str,
    docs: str | None = None,
    relationships: dict[str, list[str]] | None = None,
) -> Entity:
    """Build an entity with an optional docs attribute."""
    attributes: dict[str, Any] = {}
    if docs is not None:
        attributes["docs"] = docs
    return Entity(kind=kind, id=entity_id, attributes=attributes, relationships=relationships)


@pytest.fixture
def crate_document() -> Document:
    """A crate with one module holding one struct, plus a top-level struct."""
    crate = make_entity(
        "crate",
        "test_crate",
        docs="The **test crate**.",
        relationships={
            "modules": ["test_crate::test_module"],
            "structs": ["test_crate::TestStruct"],
        },
    )
    module = make_entity(
        "module",
        "test_crate::test_module",
        docs="A module.",
        relationships={"items": ["test_crate::test_module::TestStruct"]},
    )
    nested_struct = make_entity(
        "struct", "test_crate::test_module::TestStruct", docs="A nested struct."
    )
    top_struct = make_entity("struct", "test_crate::TestStruct")

    return Document(primary=crate, included=[module, nested_struct, top_struct])


def resource(
    kind: str,
    entity_id: str,
    attributes: dict[str, Any] | None = None,
    relationships: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a JSON:API resource object."""
    data: dict[str, Any] = {"type": kind, "id": entity_id}
    if attributes is not None:
        data["attributes"] = attributes
    if relationships is not None:
        data["relationships"] = relationships
    return data


def to_many(*targets: tuple[str, str]) -> dict[str, Any]:
    """Build a to-many relationship object from (type, id) pairs."""
    return {"data": [{"type": kind, "id": entity_id} for kind, entity_id in targets]}


@pytest.fixture
def document_data() -> dict[str, Any]:
    """A JSON:API document mirroring crate_document, with one dangling target."""
    return {
        "jsonapi": {"version": "1.0"},
        "data": resource(
            "crate",
            "test_crate",
            attributes={"docs": "The **test crate**."},
            relationships={"modules": to_many(("module", "test_crate::test_module"))},
        ),
        "included": [
            resource(
                "module",
                "test_crate::test_module",
                attributes={"docs": "A module."},
                relationships={
                    "items": to_many(
                        ("struct", "test_crate::test_module::TestStruct"),
                        ("struct", "test_crate::test_module::Missing"),
                    )
                },
            ),
            resource(
                "struct",
                "test_crate::test_module::TestStruct",
                attributes={"docs": "A nested struct."},
            ),
        ],
    }


@pytest.fixture
def document_file(tmp_path: Path, document_data: dict[str, Any]) -> Path:
    """document_data written to a JSON file."""
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(document_data), encoding="utf-8")
    return path
