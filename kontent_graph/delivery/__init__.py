"""
Kontent Graph — Delivery Module

Provides:
- DeliveryClient (async Kontent Delivery API client)
- TypeResolvers (codename -> ContentItem factory mapping)
- Response models
"""

from .client import DeliveryClient
from .type_resolvers import TypeResolvers
from .models import (
    ContentType,
    ContentTypesResponse,
    TaxonomiesResponse,
    ContentResponse,
)

__all__ = [
    "DeliveryClient",
    "TypeResolvers",
    "ContentType",
    "ContentTypesResponse",
    "TaxonomiesResponse",
    "ContentResponse",
]
