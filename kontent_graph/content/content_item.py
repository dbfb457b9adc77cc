"""
Kontent Graph — Content Item

Typed in-memory representation of one Kontent content item.

A ContentItem is created empty by the type resolver registered for its
content type, bound to its raw Delivery API payload by the client, and
turned into a ContentNode by create_node(). Subclass it and map the
subclass to a content type codename under content_items.content_item_classes
to customize the node of that type.

Elements are classified by type (falling back to the content type model
when the payload omits it):

- modular_content elements -> LinkedItemField (value: linked item ids)
- taxonomy elements        -> TaxonomyField   (value: term ids)
- asset elements           -> AssetField      (value: asset ids)
- everything else          -> plain item field
"""

from typing import Dict, Optional

from kontent_graph.content.models import (
    AssetField,
    ContentNode,
    LinkedItemField,
    LinkedItemRef,
    TaxonomyField,
)
from kontent_graph.content.schema import (
    ELEMENT_ASSET,
    ELEMENT_LINKED_ITEMS,
    ELEMENT_TAXONOMY,
    SYSTEM_FIELDS,
)
from kontent_graph.utils.logging_utils import get_component_logger


# =====================================================
# LOGGER SETUP
# =====================================================

logger = get_component_logger("ContentItem", component="source")


class ContentItem:

    def __init__(self, content_type, factory):
        self.content_type = content_type
        self.factory = factory
        self.raw: Optional[dict] = None
        self.linked_items: Dict[str, "ContentItem"] = {}

    # -------------------------------------------------
    def bind(self, raw: dict, linked_items: Dict[str, "ContentItem"]):
        self.raw = raw
        self.linked_items = linked_items
        return self

    # -------------------------------------------------
    @property
    def system(self) -> dict:
        if self.raw is None:
            raise RuntimeError("ContentItem is not bound to a raw payload")
        return self.raw.get("system") or {}

    @property
    def elements(self) -> dict:
        if self.raw is None:
            raise RuntimeError("ContentItem is not bound to a raw payload")
        return self.raw.get("elements") or {}

    @property
    def id(self) -> str:
        return self.system.get("id")

    @property
    def codename(self) -> str:
        return self.system.get("codename")

    @property
    def type_name(self) -> str:
        return self.factory.get_type_name(self.system.get("type"))

    @property
    def is_component(self) -> bool:
        # Rich text components get a codename derived from their id
        item_id = self.id or ""
        return self.codename == "n" + item_id.replace("-", "_")

    # =====================================================
    # NODE CONSTRUCTION
    # =====================================================

    def create_node(self) -> ContentNode:

        item = {}
        linked_item_fields = []
        taxonomy_fields = []
        asset_fields = []

        for field_name, element in self.elements.items():
            element_type = self.get_element_type(field_name, element)
            value = element.get("value")

            if element_type == ELEMENT_LINKED_ITEMS:
                linked_item_field = self._create_linked_item_field(field_name, value)
                linked_item_fields.append(linked_item_field)
                item[field_name] = [ref.id for ref in linked_item_field.linked_items]

            elif element_type == ELEMENT_TAXONOMY:
                taxonomy_fields.append(
                    TaxonomyField(field_name, element.get("taxonomy_group"))
                )
                item[field_name] = [term.get("codename") for term in value or []]

            elif element_type == ELEMENT_ASSET:
                assets = [
                    self.factory.asset_item_factory.create_asset(raw_asset)
                    for raw_asset in value or []
                ]
                asset_fields.append(AssetField(field_name, assets))
                item[field_name] = [asset.id for asset in assets]

            else:
                item[field_name] = value

        self._add_system_fields(item)

        return ContentNode(
            item=item,
            linked_item_fields=linked_item_fields,
            taxonomy_fields=taxonomy_fields,
            asset_fields=asset_fields,
        )

    # -------------------------------------------------
    def get_element_type(self, field_name: str, element: dict) -> Optional[str]:
        """Element type from the item payload, else from the content type model."""

        if element.get("type"):
            return element["type"]

        declared = (self.content_type.elements or {}).get(field_name) or {}
        return declared.get("type")

    # -------------------------------------------------
    def _create_linked_item_field(self, field_name: str, codenames) -> LinkedItemField:

        refs = []

        for codename in codenames or []:
            linked_item = self.linked_items.get(codename)

            if linked_item is None:
                # Beyond the requested depth the API omits the item
                logger.debug(
                    f"Linked item {codename} in {self.codename}.{field_name} "
                    f"was not returned by the Delivery API"
                )
                continue

            refs.append(LinkedItemRef(linked_item.id, linked_item.type_name))

        return LinkedItemField(field_name, refs)

    # -------------------------------------------------
    def _add_system_fields(self, item: dict):

        for key in SYSTEM_FIELDS:
            if key in item:
                logger.warning(
                    f"Element '{key}' on {self.codename} is shadowed by the system field"
                )

        system = self.system

        item["id"] = system.get("id")
        item["type_name"] = self.type_name
        item["is_component"] = self.is_component
        item["system"] = {
            "name": system.get("name"),
            "codename": system.get("codename"),
            "language": system.get("language"),
            "type": system.get("type"),
            "last_modified": system.get("last_modified"),
            "sitemap_locations": system.get("sitemap_locations") or [],
        }
