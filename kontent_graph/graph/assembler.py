"""
Kontent Graph — Content Node Assembler

Per content type:
1. Fetch the items of the type (and the linked items table)
2. Add the linked item nodes first
3. Add the items themselves

Adding one item = build its node, skip it if the id already exists
in its collection, declare its references, insert it, then derive
an ItemLink node unless it is a rich text component.
"""

from kontent_graph.content.models import ContentNode
from kontent_graph.errors import InvalidContentNodeError
from kontent_graph.graph.store import ensure_collection
from kontent_graph.utils.logging_utils import get_component_logger


# =====================================================
# LOGGER SETUP
# =====================================================

logger = get_component_logger("ContentNodeAssembler", component="source")


class ContentNodeAssembler:

    def __init__(
        self,
        delivery_client,
        content_item_factory,
        reference_resolver,
        type_resolvers
    ):
        self.delivery_client = delivery_client
        self.content_item_factory = content_item_factory
        self.reference_resolver = reference_resolver
        self.type_resolvers = type_resolvers

    # =====================================================
    # ONE CONTENT TYPE
    # =====================================================

    async def assemble_type(self, store, content_type):

        codename = content_type.codename

        content = await self.delivery_client.get_content(codename, self.type_resolvers)
        content_items = content.items
        linked_items = list(content.linked_items.values())

        if not content_items:
            logger.info(f"No content items found for content type {codename}")
            return

        if linked_items:
            # Linked items go first: item fields reference them, and rich
            # text components are only ever returned as linked items
            logger.info(f"Adding {len(linked_items)} linked items for content type {codename}")
            await self.assemble_items(store, linked_items)

        logger.info(f"Adding {len(content_items)} content items for content type {codename}")
        await self.assemble_items(store, content_items)

    async def assemble_items(self, store, content_items):

        for content_item in content_items:
            node = content_item.create_node()

            if not isinstance(node, ContentNode):
                raise InvalidContentNodeError(
                    getattr(content_item, "id", None),
                    [f"node constructor returned {type(node).__name__}, expected ContentNode"]
                )

            logger.debug(f"Built node {node.id} ({node.type_name})")

            collection = ensure_collection(store, node.type_name)

            self.add_content_node(store, collection, node)

    # =====================================================
    # ONE NODE
    # =====================================================

    def add_content_node(self, store, collection, node: ContentNode):

        existing_node = collection.find_node(id=node.id)

        if existing_node is not None:
            return existing_node

        self.reference_resolver.resolve(store, collection, node)

        collection_node = collection.add_node(node.item)

        if not collection_node.is_component:
            # ItemLink nodes resolve rich text links back to page paths
            self.add_item_link_node(store, collection_node)

        return collection_node

    def add_item_link_node(self, store, collection_node):

        type_name = self.content_item_factory.get_item_link_type_name()
        collection = ensure_collection(store, type_name)

        item_link_node = {
            "id": collection_node.id,
            "type_name": collection_node.type_name,
            "path": collection_node.path,
        }

        logger.debug(f"Adding item link {item_link_node}")

        return collection.add_node(item_link_node)
