"""
Kontent Graph — Content Module

Provides:
- ContentItem (typed item -> ContentNode)
- ContentItemFactory / TaxonomyItemFactory / AssetItemFactory
- NodeValidator
- Node models
"""

from .models import (
    Asset,
    AssetField,
    ContentNode,
    LinkedItemField,
    LinkedItemRef,
    TaxonomyField,
    TaxonomyItem,
    TaxonomyTerm,
)
from .validator import NodeValidator
from .content_item import ContentItem
from .factories import AssetItemFactory, ContentItemFactory, TaxonomyItemFactory

__all__ = [
    "Asset",
    "AssetField",
    "ContentNode",
    "LinkedItemField",
    "LinkedItemRef",
    "TaxonomyField",
    "TaxonomyItem",
    "TaxonomyTerm",
    "NodeValidator",
    "ContentItem",
    "AssetItemFactory",
    "ContentItemFactory",
    "TaxonomyItemFactory",
]
