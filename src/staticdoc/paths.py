"""Output path derivation and relative link resolution."""

from __future__ import annotations

import posixpath
from pathlib import PurePosixPath

from staticdoc.exceptions import InvalidIdentifierError, LinkResolutionError
from staticdoc.models import Entity, ItemKind

INDEX_FILENAME = "index.html"

# File name prefix for each non-container kind; extend together with ItemKind
KIND_TAGS: dict[ItemKind, str] = {
    ItemKind.STRUCT: "struct",
}


def derive_path(entity: Entity) -> PurePosixPath:
    """Return the path of an entity's page, relative to the documentation root.

    Crates and modules become ``<segments>/index.html``; any other supported
    kind becomes ``<parent segments>/<tag>.<name>.html``.

    Raises:
        UnsupportedKindError: If the entity's kind has no path strategy
        InvalidIdentifierError: If a segment of the id is empty or a dot path
    """
    kind = ItemKind.parse(entity.kind)
    segments = entity.segments

    for segment in segments:
        if segment in ("", ".", "..") or "/" in segment:
            raise InvalidIdentifierError(
                f"Entity id '{entity.id}' has a segment that cannot be used as a path: "
                f"'{segment}'"
            )

    if kind.is_container:
        return PurePosixPath(*segments, INDEX_FILENAME)

    tag = KIND_TAGS[kind]
    *parents, name = segments
    return PurePosixPath(*parents, f"{tag}.{name}.html")


def relative_link(from_entity: Entity, to_entity: Entity) -> str:
    """Build a browser link from one entity's page to another's.

    Every page acts like a folder index in the browser, so the link is
    computed from the directory containing the "from" page.
    """
    from_path = derive_path(from_entity)
    to_path = derive_path(to_entity)

    if from_path.is_absolute() or to_path.is_absolute():
        raise LinkResolutionError(
            f"Cannot link '{from_entity.id}' to '{to_entity.id}': "
            "paths must share the documentation root"
        )

    return posixpath.relpath(str(to_path), str(from_path.parent))
