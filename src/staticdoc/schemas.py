"""Pydantic schemas for JSON:API document validation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class ResourceIdentifierSchema(BaseModel):
    """Schema for a resource identifier object (``{"type": ..., "id": ...}``)."""

    type: str
    id: str


class RelationshipSchema(BaseModel):
    """Schema for a relationship object.

    The renderer only understands to-many relationships, so ``data`` must be a
    list of identifiers.
    """

    data: list[ResourceIdentifierSchema]

    @field_validator("data", mode="before")
    @classmethod
    def ensure_many(cls, v: Any) -> Any:
        """Reject to-one and empty linkage."""
        if not isinstance(v, list):
            raise ValueError(
                "relationship data must be a list of resource identifiers, "
                f"got {type(v).__name__}"
            )
        return v


class ResourceSchema(BaseModel):
    """Schema for a resource object."""

    type: str
    id: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    relationships: dict[str, RelationshipSchema] | None = None

    @field_validator("attributes", mode="before")
    @classmethod
    def coerce_null_attributes(cls, v: Any) -> Any:
        """Treat ``"attributes": null`` as no attributes."""
        if v is None:
            return {}
        return v


class DocumentSchema(BaseModel):
    """Schema for the top-level JSON:API document."""

    data: ResourceSchema
    included: list[ResourceSchema] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def ensure_single(cls, v: Any) -> Any:
        """Primary data must be exactly one resource."""
        if not isinstance(v, dict):
            raise ValueError(
                f"primary data must be a single resource object, got {type(v).__name__}"
            )
        return v

    @field_validator("included", mode="before")
    @classmethod
    def coerce_null_included(cls, v: Any) -> Any:
        """Treat ``"included": null`` as an empty collection."""
        if v is None:
            return []
        return v
