"""
Kontent Graph — Item Factories

- ContentItemFactory   -> ContentItem per content type + store type names
- TaxonomyItemFactory  -> TaxonomyItem (term forest) per taxonomy group
- AssetItemFactory     -> Asset per Delivery API asset value

All three read their settings from settings.yaml unless given a dict.
"""

import importlib
import uuid
from typing import Optional
from urllib.parse import urlparse

from config.system_loader import get_system_config
from kontent_graph.content.content_item import ContentItem
from kontent_graph.content.models import Asset, TaxonomyItem, TaxonomyTerm
from kontent_graph.content.schema import (
    DEFAULT_ASSET_TYPE_NAME,
    DEFAULT_CONTENT_ITEM_TYPE_NAME_PREFIX,
    DEFAULT_ITEM_LINK_TYPE_NAME,
    DEFAULT_TAXONOMY_TYPE_NAME_PREFIX,
)
from kontent_graph.utils.logging_utils import get_component_logger
from kontent_graph.utils.text import pascal_case, slugify


# =====================================================
# LOGGER SETUP
# =====================================================

logger = get_component_logger("ItemFactories", component="source")


# =====================================================
# ASSETS
# =====================================================

class AssetItemFactory:

    def __init__(self, config: Optional[dict] = None):

        if config is None:
            config = get_system_config().get("assets") or {}

        self.asset_type_name = config.get("asset_type_name", DEFAULT_ASSET_TYPE_NAME)

    def get_type_name(self) -> str:
        return self.asset_type_name

    def create_asset(self, raw: dict) -> Asset:
        url = raw.get("url") or ""

        return Asset(
            id=raw.get("id") or self.get_asset_id(raw),
            url=url,
            type=raw.get("type"),
            name=raw.get("name"),
            description=raw.get("description"),
            size=raw.get("size"),
            width=raw.get("width"),
            height=raw.get("height"),
        )

    @staticmethod
    def get_asset_id(raw: dict) -> str:
        url = raw.get("url") or ""

        # Asset URLs look like https://host/<project id>/<asset id>/<file name>
        segments = [s for s in urlparse(url).path.split("/") if s]

        if len(segments) >= 3:
            return segments[-2]

        if not url:
            logger.warning(f"Asset without url: {raw.get('name')!r}")

        # Identical descriptors share an id
        fingerprint = "|".join(
            str(raw.get(key) or "")
            for key in ("url", "name", "type", "size", "width", "height", "description")
        )

        return str(uuid.uuid5(uuid.NAMESPACE_URL, fingerprint))


# =====================================================
# CONTENT ITEMS
# =====================================================

def _load_content_item_class(codename: str, target):
    """
    Resolve a content_item_classes entry.
    Accepts a ContentItem subclass or its dotted path ("package.module.Class").
    """

    if isinstance(target, str):
        module_path, _, attr_name = target.rpartition(".")
        if not module_path:
            raise ValueError(
                f"Content item class for {codename} must be a dotted path, got {target!r}"
            )
        target = getattr(importlib.import_module(module_path), attr_name)

    if not isinstance(target, type) or not issubclass(target, ContentItem):
        raise TypeError(f"Content item class for {codename} must subclass ContentItem")

    logger.info(f"Using {target.__module__}.{target.__name__} for content type {codename}")

    return target


class ContentItemFactory:

    def __init__(
        self,
        config: Optional[dict] = None,
        asset_item_factory: Optional[AssetItemFactory] = None
    ):

        if config is None:
            config = get_system_config().get("content_items") or {}

        self.type_name_prefix = config.get(
            "content_item_type_name_prefix",
            DEFAULT_CONTENT_ITEM_TYPE_NAME_PREFIX
        ) or ""
        self.item_link_type_name = config.get(
            "item_link_type_name",
            DEFAULT_ITEM_LINK_TYPE_NAME
        )
        self.asset_item_factory = asset_item_factory or AssetItemFactory()
        self.content_item_classes = {
            codename: _load_content_item_class(codename, target)
            for codename, target in (config.get("content_item_classes") or {}).items()
        }

    def create_content_item(self, content_type) -> ContentItem:
        item_class = self.content_item_classes.get(content_type.codename, ContentItem)
        return item_class(content_type, self)

    def get_type_name(self, codename: str) -> str:
        return f"{self.type_name_prefix}{pascal_case(codename)}"

    def get_item_link_type_name(self) -> str:
        return self.item_link_type_name

    def get_asset_type_name(self) -> str:
        return self.asset_item_factory.get_type_name()


# =====================================================
# TAXONOMY
# =====================================================

class TaxonomyItemFactory:

    def __init__(self, config: Optional[dict] = None):

        if config is None:
            config = get_system_config().get("taxonomy") or {}

        self.type_name_prefix = config.get(
            "taxonomy_type_name_prefix",
            DEFAULT_TAXONOMY_TYPE_NAME_PREFIX
        ) or ""

    def get_type_name(self, codename: str) -> str:
        return f"{self.type_name_prefix}{pascal_case(codename)}"

    def create_taxonomy_item(self, taxonomy_group: dict) -> TaxonomyItem:
        system = taxonomy_group.get("system") or {}
        codename = system["codename"]

        return TaxonomyItem(
            codename=codename,
            name=system.get("name", codename),
            type_name=self.get_type_name(codename),
            terms=self._create_terms(taxonomy_group.get("terms")),
        )

    def _create_terms(self, raw_terms) -> list:

        if not isinstance(raw_terms, list):
            if raw_terms is not None:
                logger.warning(f"Ignoring malformed taxonomy term list: {raw_terms!r}")
            return []

        terms = []

        for raw in raw_terms:
            if not isinstance(raw, dict) or not raw.get("codename"):
                logger.warning(f"Ignoring malformed taxonomy term: {raw!r}")
                continue

            name = raw.get("name") or raw["codename"]

            terms.append(TaxonomyTerm(
                id=raw["codename"],
                name=name,
                slug=slugify(name),
                terms=self._create_terms(raw.get("terms")),
            ))

        return terms
