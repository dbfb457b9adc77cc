"""
Pytest configuration and Kontent payload fixtures.

The Delivery API is served by KontentApiStub through httpx.MockTransport,
so tests run the real DeliveryClient against canned payloads.
"""

import os
import tempfile

os.environ.setdefault("KONTENT_GRAPH_LOG_DIR", tempfile.mkdtemp(prefix="kontent-graph-logs-"))

import httpx
import pytest

from kontent_graph.content import AssetItemFactory, ContentItemFactory, TaxonomyItemFactory
from kontent_graph.delivery import DeliveryClient
from kontent_graph.graph import GraphStore
from kontent_graph.graph.store import Collection


PROJECT_ID = "8d6d2bc6-4f4d-4c5e-9a3f-2c3f5b0c9e11"
BASE_URL = f"https://deliver.kontent.ai/{PROJECT_ID}"

COMPONENT_ID = "c0ffee00-1111-2222-3333-444455556666"
COMPONENT_CODENAME = "n" + COMPONENT_ID.replace("-", "_")


# =====================================================
# RAW PAYLOAD BUILDERS
# =====================================================

def asset_url(asset_id, file_name):
    return f"https://assets-us-01.kc-usercontent.com/{PROJECT_ID}/{asset_id}/{file_name}"


def raw_asset(asset_id, file_name, media_type="image/png"):
    return {
        "name": file_name,
        "description": None,
        "type": media_type,
        "size": 1024,
        "url": asset_url(asset_id, file_name),
        "width": 800,
        "height": 600,
    }


def text_element(value, name="Text"):
    return {"type": "text", "name": name, "value": value}


def linked_element(codenames, name="Linked items"):
    return {"type": "modular_content", "name": name, "value": list(codenames)}


def taxonomy_element(group, term_codenames, name="Taxonomy"):
    return {
        "type": "taxonomy",
        "name": name,
        "taxonomy_group": group,
        "value": [{"name": c.title(), "codename": c} for c in term_codenames],
    }


def asset_element(assets, name="Asset"):
    return {"type": "asset", "name": name, "value": list(assets)}


def raw_item(item_id, codename, type_codename, elements):
    return {
        "system": {
            "id": item_id,
            "name": codename.replace("_", " ").title(),
            "codename": codename,
            "language": "default",
            "type": type_codename,
            "sitemap_locations": [],
            "last_modified": "2019-10-01T10:00:00Z",
        },
        "elements": elements,
    }


def raw_type(codename):
    return {
        "system": {
            "id": f"type-{codename}",
            "name": codename.title(),
            "codename": codename,
            "last_modified": "2019-10-01T10:00:00Z",
        },
        "elements": {},
    }


def raw_term(codename, children=None, name=None):
    return {
        "name": name or codename.title(),
        "codename": codename,
        "terms": children if children is not None else [],
    }


def raw_taxonomy_group(codename, terms):
    return {
        "system": {
            "id": f"taxonomy-{codename}",
            "name": codename.title(),
            "codename": codename,
            "last_modified": "2019-10-01T10:00:00Z",
        },
        "terms": terms,
    }


# =====================================================
# DELIVERY API STUB
# =====================================================

class KontentApiStub:
    """Serves /types, /taxonomies and /items with skip/limit pagination."""

    def __init__(self, types, taxonomies, items, linked_items=None, status_code=200):
        self.types = types
        self.taxonomies = taxonomies
        self.items = items
        self.linked_items = linked_items or {}
        self.status_code = status_code
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:

        params = dict(request.url.params)
        path = request.url.path
        self.requests.append((path, params))

        if self.status_code >= 400:
            return httpx.Response(
                self.status_code,
                json={"message": "The requested resource could not be found."}
            )

        if path.endswith("/types"):
            return self._page(request, "types", self.types, params)

        if path.endswith("/taxonomies"):
            return self._page(request, "taxonomies", self.taxonomies, params)

        if path.endswith("/items"):
            type_codename = params.get("system.type")
            items = [i for i in self.items if i["system"]["type"] == type_codename]
            extra = {"modular_content": self.linked_items.get(type_codename, {})}
            return self._page(request, "items", items, params, extra)

        return httpx.Response(404, json={"message": "Not found"})

    def _page(self, request, key, rows, params, extra=None):

        skip = int(params.get("skip", 0))
        limit = int(params.get("limit", 100))
        page = rows[skip:skip + limit]
        has_more = skip + limit < len(rows)

        payload = {
            key: page,
            "pagination": {
                "skip": skip,
                "limit": limit,
                "count": len(page),
                "next_page": str(request.url) + "&more" if has_more else "",
            },
        }
        payload.update(extra or {})

        return httpx.Response(200, json=payload)


def make_client(stub, page_size=100, depth=3):
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(stub.handler),
        base_url=BASE_URL
    )
    return DeliveryClient(
        config={"project_id": PROJECT_ID, "page_size": page_size, "depth": depth},
        http_client=http_client
    )


# =====================================================
# SAMPLE PROJECT
# =====================================================

@pytest.fixture
def topics_taxonomy():
    return raw_taxonomy_group("topics", [
        raw_term("a", [raw_term("b", [raw_term("d")])]),
        raw_term("c"),
    ])


@pytest.fixture
def sample_project(topics_taxonomy):
    """
    article "hello"  -> author "jane", topic "b", hero asset A1,
                        rich text component, empty related / gallery
    author "jane"    -> photo asset A1
    callout          -> only exists as a rich text component
    """

    jane = raw_item("a1a1a1a1-0000-0000-0000-000000000001", "jane", "author", {
        "full_name": text_element("Jane Doe"),
        "photo": asset_element([raw_asset("A1", "photo.png")]),
    })

    component = raw_item(COMPONENT_ID, COMPONENT_CODENAME, "callout", {
        "message": text_element("Watch out"),
    })

    hello = raw_item("b2b2b2b2-0000-0000-0000-000000000002", "hello", "article", {
        "title": text_element("Hello world"),
        "slug": {"type": "url_slug", "name": "Slug", "value": "hello-world"},
        "author": linked_element(["jane"]),
        "related": linked_element([]),
        "topics": taxonomy_element("topics", ["b"]),
        "hero": asset_element([raw_asset("A1", "photo.png")]),
        "gallery": asset_element([]),
        "body": {
            "type": "rich_text",
            "name": "Body",
            "value": f'<object type="application/kenticocloud" data-codename="{COMPONENT_CODENAME}"></object>',
            "modular_content": [COMPONENT_CODENAME],
        },
    })

    return KontentApiStub(
        types=[raw_type("article"), raw_type("author"), raw_type("callout")],
        taxonomies=[topics_taxonomy],
        items=[hello, jane],
        linked_items={"article": {"jane": jane, COMPONENT_CODENAME: component}},
    )


@pytest.fixture
def settings():
    return {
        "content_items": {"content_item_type_name_prefix": "", "item_link_type_name": "ItemLink"},
        "taxonomy": {"taxonomy_type_name_prefix": "Taxonomy"},
        "assets": {"asset_type_name": "Asset"},
        "linked_items": {"multi_type_policy": "first_type"},
        "routes": {"Article": "/articles/{slug}"},
    }


@pytest.fixture
def content_item_factory(settings):
    return ContentItemFactory(settings["content_items"], AssetItemFactory(settings["assets"]))


@pytest.fixture
def taxonomy_item_factory(settings):
    return TaxonomyItemFactory(settings["taxonomy"])


@pytest.fixture
def store(settings):
    return GraphStore(routes=settings["routes"])


@pytest.fixture
def insert_log(monkeypatch):
    """Records (collection type name, node id) for every node insertion."""

    log = []
    original_add_node = Collection.add_node

    def recording_add_node(self, data):
        node = original_add_node(self, data)
        log.append((self.type_name, node.id))
        return node

    monkeypatch.setattr(Collection, "add_node", recording_add_node)
    return log
