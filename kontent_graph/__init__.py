"""
Kontent Graph

Loads a Kontent project (content types, taxonomy, content items,
assets) into a typed in-memory graph store for static-site builds:
- kontent_graph.delivery -> async Delivery API client
- kontent_graph.content  -> typed content items and node models
- kontent_graph.graph    -> store, load stages, Neo4j export

ContentItem is exported here for subclassing; map a subclass to a
content type codename under content_items.content_item_classes.
"""

from kontent_graph.content.content_item import ContentItem

__version__ = "0.4.1"

__all__ = ["ContentItem", "__version__"]
