"""
Kontent Graph — Graph Module

Provides:
- GraphStore / Collection / Node (in-memory typed graph store)
- GraphMaterializer (load orchestrator)
- ContentNodeAssembler, ReferenceResolver, TaxonomyTreeBuilder,
  TypeResolverRegistrar (load stages)
- GraphExporter (Neo4j export)

Usage:
    from kontent_graph.graph import GraphMaterializer, GraphStore
"""

from .store import GraphStore, Collection, Node, ensure_collection
from .registrar import TypeResolverRegistrar
from .taxonomy import TaxonomyTreeBuilder
from .references import MultiTypePolicy, ReferenceResolver
from .assembler import ContentNodeAssembler
from .image_url import ImageUrlBuilder, get_asset_schema_resolvers, resolve_asset_url
from .orchestrator import GraphMaterializer
from .neo4j_export import GraphExporter

__all__ = [
    "GraphStore",
    "Collection",
    "Node",
    "ensure_collection",
    "TypeResolverRegistrar",
    "TaxonomyTreeBuilder",
    "MultiTypePolicy",
    "ReferenceResolver",
    "ContentNodeAssembler",
    "ImageUrlBuilder",
    "get_asset_schema_resolvers",
    "resolve_asset_url",
    "GraphMaterializer",
    "GraphExporter",
]
