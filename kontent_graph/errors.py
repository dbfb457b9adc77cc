"""
Kontent Graph — Error Types

All errors raised while loading content derive from KontentGraphError.
None of them are handled inside the load: they propagate to
GraphMaterializer.load(), which logs and re-raises.
"""

from typing import List, Optional


class KontentGraphError(Exception):
    """Base class for every error raised by kontent_graph."""


class DeliveryError(KontentGraphError):
    """The Delivery API returned an error status or an unreadable payload."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code

    def __str__(self):
        message = super().__str__()
        if self.status_code is not None:
            return f"{message} (HTTP {self.status_code} at {self.url})"
        if self.url:
            return f"{message} ({self.url})"
        return message


class UnknownContentTypeError(KontentGraphError):
    """A raw entry's content type has no registered type resolver."""

    def __init__(self, codename: str):
        super().__init__(f"No type resolver registered for content type '{codename}'")
        self.codename = codename


class InvalidContentNodeError(KontentGraphError):
    """A node constructor produced output that failed validation."""

    def __init__(self, item_id, errors: List[str]):
        summary = "; ".join(errors)
        super().__init__(f"Invalid content node '{item_id}': {summary}")
        self.item_id = item_id
        self.errors = errors


class AmbiguousReferenceError(KontentGraphError):
    """A linked item field references entries of more than one type."""

    def __init__(self, field_name: str, type_names: List[str]):
        names = ", ".join(type_names)
        super().__init__(
            f"Linked item field '{field_name}' references several types ({names})"
        )
        self.field_name = field_name
        self.type_names = type_names


class DuplicateNodeError(KontentGraphError):
    """A node with the same id already exists in the collection."""

    def __init__(self, type_name: str, node_id):
        super().__init__(f"Node '{node_id}' already exists in collection '{type_name}'")
        self.type_name = type_name
        self.node_id = node_id
