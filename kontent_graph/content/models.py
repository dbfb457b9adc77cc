"""
Kontent Graph — Content Node Models

A node constructor always produces a ContentNode: the item fields
plus three explicit field groups (linked items, taxonomy, assets).
ContentNode validates itself on construction.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class LinkedItemRef:
    id: str
    type_name: str


@dataclass
class LinkedItemField:
    field_name: str
    linked_items: List[LinkedItemRef] = field(default_factory=list)

    @property
    def type_names(self) -> List[str]:
        """Distinct type names of the linked items, in first-seen order."""
        seen = []
        for linked_item in self.linked_items:
            if linked_item.type_name not in seen:
                seen.append(linked_item.type_name)
        return seen


@dataclass
class TaxonomyField:
    field_name: str
    taxonomy_group: str


@dataclass
class Asset:
    id: str
    url: str
    type: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    size: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None

    def to_node(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "size": self.size,
            "width": self.width,
            "height": self.height,
        }


@dataclass
class AssetField:
    field_name: str
    assets: List[Asset] = field(default_factory=list)


@dataclass
class ContentNode:
    item: Dict[str, Any]
    linked_item_fields: List[LinkedItemField] = field(default_factory=list)
    taxonomy_fields: List[TaxonomyField] = field(default_factory=list)
    asset_fields: List[AssetField] = field(default_factory=list)

    def __post_init__(self):
        from kontent_graph.content.validator import NodeValidator

        NodeValidator().ensure_valid(self)

    @property
    def id(self) -> str:
        return self.item["id"]

    @property
    def type_name(self) -> str:
        return self.item["type_name"]


@dataclass
class TaxonomyTerm:
    id: str
    name: str
    slug: str
    terms: List["TaxonomyTerm"] = field(default_factory=list)


@dataclass
class TaxonomyItem:
    codename: str
    name: str
    type_name: str
    terms: List[TaxonomyTerm] = field(default_factory=list)
