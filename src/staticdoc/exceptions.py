"""Custom exceptions for staticdoc."""


class StaticdocError(Exception):
    """Base exception for all staticdoc errors."""

    pass


class ParseError(StaticdocError):
    """Raised when the input document cannot be read or decoded."""

    pass


class ValidationError(StaticdocError):
    """Raised when validation fails."""

    pass


class StructureError(ValidationError):
    """Raised when the document deviates from the shape the renderer relies on.

    This means the documentation backend and the renderer have drifted out of
    sync (e.g. primary data is a list, or a relationship carries one target).
    """

    pass


class InvalidIdentifierError(ValidationError):
    """Raised when an entity id cannot be mapped onto a path."""

    pass


class UnsupportedKindError(StaticdocError):
    """Raised when there is no path strategy for an entity kind."""

    pass


class LinkResolutionError(StaticdocError):
    """Raised when no relative link can be built between two output paths."""

    pass


class RenderError(StaticdocError):
    """Base exception for failures while writing the output tree."""

    pass


class TemplateRenderError(RenderError):
    """Raised when the template engine fails to render a page."""

    pass


class OutputError(RenderError):
    """Raised when a directory or file in the output tree cannot be written."""

    pass
