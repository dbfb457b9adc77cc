"""
Kontent Graph — Delivery API Response Models
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ContentType:
    id: str
    codename: str
    name: str
    elements: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: dict) -> "ContentType":
        system = raw.get("system") or {}
        return cls(
            id=system.get("id", ""),
            codename=system["codename"],
            name=system.get("name", system["codename"]),
            elements=raw.get("elements") or {},
        )


@dataclass
class ContentTypesResponse:
    types: List[ContentType] = field(default_factory=list)


@dataclass
class TaxonomiesResponse:
    taxonomies: List[dict] = field(default_factory=list)


@dataclass
class ContentResponse:
    """Primary items for one content type plus every item they link to.

    linked_items is keyed by item codename, the key the Delivery API uses
    for its modular_content side-table.
    """

    items: List[Any] = field(default_factory=list)
    linked_items: Dict[str, Any] = field(default_factory=dict)
