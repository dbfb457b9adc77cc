"""
Kontent Graph — Type Resolver Registrar
"""

from kontent_graph.utils.logging_utils import get_component_logger


# =====================================================
# LOGGER SETUP
# =====================================================

logger = get_component_logger("TypeResolverRegistrar", component="source")


class TypeResolverRegistrar:

    def __init__(self, content_item_factory):
        self.content_item_factory = content_item_factory

    def register_all(self, type_resolvers, content_types):
        """
        Register a ContentItem factory per content type.
        Registering a codename twice keeps the last factory.
        """

        for content_type in content_types:
            logger.info(f"Adding type resolver for content type {content_type.codename}")

            type_resolvers.add_type_resolver(
                content_type.codename,
                self._factory_for(content_type)
            )

        return type_resolvers

    def _factory_for(self, content_type):
        # Bind content_type now, not at call time
        def factory():
            return self.content_item_factory.create_content_item(content_type)

        return factory
