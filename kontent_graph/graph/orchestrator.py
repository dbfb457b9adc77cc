"""
Kontent Graph — Graph Materializer

Loads a Kontent project into a graph store, strictly in order:

STEP 1: Register a type resolver per content type
STEP 2: Build the taxonomy collections
STEP 3: Add content nodes, one content type at a time
STEP 4: Register asset schema resolvers

Every fetch is awaited before the next one starts. Later content
types rely on earlier types and on taxonomy already being in the
store, so nothing here runs concurrently.
"""

import time
from typing import Optional

from config.system_loader import get_system_config
from kontent_graph.content.factories import (
    AssetItemFactory,
    ContentItemFactory,
    TaxonomyItemFactory,
)
from kontent_graph.delivery.type_resolvers import TypeResolvers
from kontent_graph.graph.assembler import ContentNodeAssembler
from kontent_graph.graph.image_url import get_asset_schema_resolvers
from kontent_graph.graph.references import MultiTypePolicy, ReferenceResolver
from kontent_graph.graph.registrar import TypeResolverRegistrar
from kontent_graph.graph.taxonomy import TaxonomyTreeBuilder
from kontent_graph.utils.logging_utils import get_component_logger


# =====================================================
# LOGGER SETUP
# =====================================================

logger = get_component_logger("GraphMaterializer", component="source")


class GraphMaterializer:

    # =====================================================
    # INIT
    # =====================================================

    def __init__(
        self,
        delivery_client,
        content_item_factory: Optional[ContentItemFactory] = None,
        taxonomy_item_factory: Optional[TaxonomyItemFactory] = None,
        settings: Optional[dict] = None
    ):

        if settings is None:
            settings = get_system_config()

        if content_item_factory is None:
            content_item_factory = ContentItemFactory(
                settings.get("content_items") or {},
                AssetItemFactory(settings.get("assets") or {})
            )

        if taxonomy_item_factory is None:
            taxonomy_item_factory = TaxonomyItemFactory(settings.get("taxonomy") or {})

        multi_type_policy = (settings.get("linked_items") or {}).get(
            "multi_type_policy",
            MultiTypePolicy.FIRST_TYPE
        )

        self.delivery_client = delivery_client
        self.content_item_factory = content_item_factory
        self.taxonomy_item_factory = taxonomy_item_factory

        self.type_resolvers = TypeResolvers()
        self.registrar = TypeResolverRegistrar(content_item_factory)
        self.taxonomy_builder = TaxonomyTreeBuilder(delivery_client, taxonomy_item_factory)
        self.reference_resolver = ReferenceResolver(
            content_item_factory,
            taxonomy_item_factory,
            multi_type_policy=multi_type_policy
        )
        self.assembler = ContentNodeAssembler(
            delivery_client,
            content_item_factory,
            self.reference_resolver,
            self.type_resolvers
        )

    # =====================================================
    # MAIN LOAD
    # =====================================================

    async def load(self, store):

        start_time = time.time()

        logger.info("=" * 80)
        logger.info("KONTENT GRAPH: LOAD STARTED")
        logger.info("=" * 80)

        try:
            # -----------------------------------------
            # STEP 1: Type resolvers
            # -----------------------------------------

            content_types = await self.delivery_client.get_content_types()

            logger.info(f"[STEP 1] Registering {len(content_types.types)} type resolvers")
            self.registrar.register_all(self.type_resolvers, content_types.types)

            # -----------------------------------------
            # STEP 2: Taxonomy (content fields reference its terms)
            # -----------------------------------------

            logger.info("[STEP 2] Building taxonomy collections")
            await self.taxonomy_builder.build_all(store)

            # -----------------------------------------
            # STEP 3: Content nodes
            # -----------------------------------------

            logger.info("[STEP 3] Adding content nodes")
            for content_type in content_types.types:
                await self.assembler.assemble_type(store, content_type)

            # -----------------------------------------
            # STEP 4: Schema resolvers
            # -----------------------------------------

            logger.info("[STEP 4] Adding schema resolvers")
            self.add_schema_resolvers(store)

        except Exception:
            logger.exception("Content load failed; the store is incomplete")
            raise

        total_time = round(time.time() - start_time, 2)

        logger.info("=" * 80)
        logger.info(f"KONTENT GRAPH: LOAD COMPLETED in {total_time} seconds")
        logger.info("=" * 80)

    # =====================================================
    # SCHEMA RESOLVERS
    # =====================================================

    def add_schema_resolvers(self, store):
        self.add_asset_schema_resolvers(store)

    def add_asset_schema_resolvers(self, store):

        type_name = self.content_item_factory.get_asset_type_name()
        asset_collection = store.get_collection(type_name)

        if asset_collection is None or len(asset_collection) == 0:
            logger.info("No assets found; skipping asset schema resolvers")
            return

        store.add_schema_resolvers(get_asset_schema_resolvers(type_name))
