"""
Kontent Graph — Delivery API Client

Async client for the Kontent Delivery REST API.

Endpoints used:
- /types        -> content types
- /taxonomies   -> taxonomy groups
- /items        -> content items of one type + modular_content side-table

Every listing follows the response pagination until the last page.
Errors are raised as DeliveryError; nothing is retried here.
"""

from typing import AsyncIterator, Dict, Optional

import httpx

from config.system_loader import get_delivery_config
from kontent_graph.delivery.models import (
    ContentResponse,
    ContentType,
    ContentTypesResponse,
    TaxonomiesResponse,
)
from kontent_graph.delivery.type_resolvers import TypeResolvers
from kontent_graph.errors import DeliveryError
from kontent_graph.utils.logging_utils import get_component_logger


# =====================================================
# LOGGER SETUP
# =====================================================

logger = get_component_logger("DeliveryClient", component="delivery")

DEFAULT_BASE_URL = "https://deliver.kontent.ai"
DEFAULT_PREVIEW_BASE_URL = "https://preview-deliver.kontent.ai"


class DeliveryClient:

    # =====================================================
    # INIT
    # =====================================================

    def __init__(
        self,
        config: Optional[dict] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):

        if config is None:
            config = get_delivery_config()["delivery"]

        self.project_id = config.get("project_id")
        self.depth = int(config.get("depth", 3))
        self.page_size = int(config.get("page_size", 100))
        self.language = config.get("language") or None

        preview_api_key = config.get("preview_api_key")
        secure_api_key = config.get("secure_api_key")

        if http_client is not None:
            self._client = http_client
            return

        if not self.project_id:
            raise ValueError("Kontent project_id is not configured")

        headers = {"Accept": "application/json"}

        if preview_api_key:
            base_url = config.get("preview_base_url", DEFAULT_PREVIEW_BASE_URL)
            headers["Authorization"] = f"Bearer {preview_api_key}"
        else:
            base_url = config.get("base_url", DEFAULT_BASE_URL)
            if secure_api_key:
                headers["Authorization"] = f"Bearer {secure_api_key}"

        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/{self.project_id}",
            headers=headers,
            timeout=float(config.get("timeout", 30.0))
        )

        logger.info(
            f"DeliveryClient ready (project={self.project_id}, "
            f"preview={bool(preview_api_key)}, depth={self.depth})"
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    # =====================================================
    # HTTP
    # =====================================================

    async def _get_json(self, path: str, params: dict) -> dict:

        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise DeliveryError(f"Request to {path} failed: {e}", url=path) from e

        if response.status_code >= 400:
            message = response.reason_phrase or "Delivery API error"
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("message"):
                message = str(body["message"])
            raise DeliveryError(message, url=str(response.url), status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise DeliveryError("Response is not valid JSON", url=str(response.url)) from e

        if not isinstance(payload, dict):
            raise DeliveryError("Response is not a JSON object", url=str(response.url))

        return payload

    async def _get_pages(self, path: str, params: Optional[dict] = None) -> AsyncIterator[dict]:

        params = dict(params or {})
        skip = 0

        while True:
            page_params = {**params, "skip": skip, "limit": self.page_size}
            payload = await self._get_json(path, page_params)

            yield payload

            pagination = payload.get("pagination") or {}
            if not pagination.get("next_page"):
                return

            skip += int(pagination.get("count") or self.page_size)

    # =====================================================
    # CONTENT TYPES
    # =====================================================

    async def get_content_types(self) -> ContentTypesResponse:

        types = []

        async for page in self._get_pages("/types"):
            for raw in page.get("types") or []:
                types.append(ContentType.from_raw(raw))

        logger.info(f"Fetched {len(types)} content types")
        return ContentTypesResponse(types=types)

    # =====================================================
    # TAXONOMY GROUPS
    # =====================================================

    async def get_taxonomy_groups(self) -> TaxonomiesResponse:

        taxonomies = []

        async for page in self._get_pages("/taxonomies"):
            taxonomies.extend(page.get("taxonomies") or [])

        logger.info(f"Fetched {len(taxonomies)} taxonomy groups")
        return TaxonomiesResponse(taxonomies=taxonomies)

    # =====================================================
    # CONTENT ITEMS
    # =====================================================

    async def get_content(self, codename: str, type_resolvers: TypeResolvers) -> ContentResponse:

        params = {"system.type": codename, "depth": self.depth}
        if self.language:
            params["language"] = self.language

        raw_items = []
        raw_linked_items: Dict[str, dict] = {}

        async for page in self._get_pages("/items", params):
            raw_items.extend(page.get("items") or [])
            raw_linked_items.update(page.get("modular_content") or {})

        # Items resolve their linked items lazily through this shared table
        linked_items = {}

        for linked_codename, raw in raw_linked_items.items():
            linked_items[linked_codename] = self._resolve_item(raw, type_resolvers, linked_items)

        items = [
            self._resolve_item(raw, type_resolvers, linked_items)
            for raw in raw_items
        ]

        logger.info(
            f"Fetched {len(items)} items and {len(linked_items)} linked items "
            f"for content type {codename}"
        )

        return ContentResponse(items=items, linked_items=linked_items)

    def _resolve_item(self, raw: dict, type_resolvers: TypeResolvers, linked_items: dict):

        system = raw.get("system") or {}
        type_codename = system.get("type")

        if not type_codename:
            raise DeliveryError(f"Content item {system.get('codename')} has no system.type")

        content_item = type_resolvers.resolve(type_codename)
        content_item.bind(raw, linked_items)

        return content_item
