"""
Kontent Graph — Taxonomy Tree Builder

One collection per taxonomy group. Each term becomes a node whose
"terms" field lists the ids of its direct children; the collection
references itself through that field so nested terms resolve.
"""

from kontent_graph.content.schema import TERMS
from kontent_graph.graph.store import ensure_collection
from kontent_graph.utils.logging_utils import get_component_logger


# =====================================================
# LOGGER SETUP
# =====================================================

logger = get_component_logger("TaxonomyTreeBuilder", component="source")


class TaxonomyTreeBuilder:

    def __init__(self, delivery_client, taxonomy_item_factory):
        self.delivery_client = delivery_client
        self.taxonomy_item_factory = taxonomy_item_factory

    # =====================================================
    # ALL GROUPS
    # =====================================================

    async def build_all(self, store):

        taxonomy_groups = await self.delivery_client.get_taxonomy_groups()

        for taxonomy_group in taxonomy_groups.taxonomies:
            taxonomy_item = self.taxonomy_item_factory.create_taxonomy_item(taxonomy_group)
            type_name = taxonomy_item.type_name

            collection = ensure_collection(store, type_name)

            # Nested terms reference other terms of the same group
            collection.add_reference(TERMS, type_name)

            self.insert_terms(collection, taxonomy_item.terms)

            logger.info(
                f"Taxonomy group {taxonomy_item.codename} -> "
                f"{type_name} ({len(collection)} terms)"
            )

    # =====================================================
    # TERMS (PRE-ORDER, DEPTH-FIRST)
    # =====================================================

    def insert_terms(self, collection, terms):

        if not isinstance(terms, list) or not terms:
            return

        for term in terms:
            children = term.terms if isinstance(term.terms, list) else []

            term_node = {
                "id": term.id,
                "name": term.name,
                "slug": term.slug,
                TERMS: [child.id for child in children],
            }

            logger.debug(f"Adding taxonomy term {term_node}")

            collection.add_node(term_node)

            self.insert_terms(collection, children)
