"""
Kontent Graph — Reference Resolver

Declares, on the owning collection, a typed reference for every
classified field of a content node before the node is inserted:

- Linked item fields -> collection of the linked items' type
                        (skipped while the field is empty)
- Taxonomy fields    -> taxonomy group collection
- Asset fields       -> shared Asset collection (always declared);
                        each asset is inserted there once per id
"""

from enum import Enum

from kontent_graph.errors import AmbiguousReferenceError
from kontent_graph.graph.store import ensure_collection
from kontent_graph.utils.logging_utils import get_component_logger


# =====================================================
# LOGGER SETUP
# =====================================================

logger = get_component_logger("ReferenceResolver", component="source")


class MultiTypePolicy(str, Enum):
    """What to do with a linked item field whose items span several types."""

    FIRST_TYPE = "first_type"
    STRICT = "strict"


class ReferenceResolver:

    def __init__(
        self,
        content_item_factory,
        taxonomy_item_factory,
        multi_type_policy=MultiTypePolicy.FIRST_TYPE
    ):
        self.content_item_factory = content_item_factory
        self.taxonomy_item_factory = taxonomy_item_factory
        self.multi_type_policy = MultiTypePolicy(multi_type_policy)

    def resolve(self, store, collection, node):
        self.resolve_linked_item_fields(collection, node)
        self.resolve_taxonomy_fields(collection, node)
        self.resolve_asset_fields(store, collection, node)

    # =====================================================
    # LINKED ITEMS
    # =====================================================

    def resolve_linked_item_fields(self, collection, node):

        for linked_item_field in node.linked_item_fields:
            if not linked_item_field.linked_items:
                continue

            field_name = linked_item_field.field_name
            type_names = linked_item_field.type_names

            if len(type_names) > 1:
                if self.multi_type_policy is MultiTypePolicy.STRICT:
                    raise AmbiguousReferenceError(field_name, type_names)

                logger.warning(
                    f"{collection.type_name}.{field_name} links items of types "
                    f"{type_names}; referencing {type_names[0]} only"
                )

            collection.add_reference(field_name, type_names[0])

    # =====================================================
    # TAXONOMY
    # =====================================================

    def resolve_taxonomy_fields(self, collection, node):

        for taxonomy_field in node.taxonomy_fields:
            type_name = self.taxonomy_item_factory.get_type_name(
                taxonomy_field.taxonomy_group
            )

            collection.add_reference(taxonomy_field.field_name, type_name)

    # =====================================================
    # ASSETS
    # =====================================================

    def resolve_asset_fields(self, store, collection, node):

        if not node.asset_fields:
            return

        type_name = self.content_item_factory.get_asset_type_name()
        asset_collection = ensure_collection(store, type_name)

        for asset_field in node.asset_fields:
            for asset in asset_field.assets:
                if asset_collection.find_node(id=asset.id) is None:
                    logger.debug(f"Adding asset {asset.id} ({asset.url})")
                    asset_collection.add_node(asset.to_node())

            collection.add_reference(asset_field.field_name, type_name)
