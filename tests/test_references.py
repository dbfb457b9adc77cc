"""
Test: Reference Resolver
"""

import pytest

from kontent_graph.content.models import (
    Asset,
    AssetField,
    ContentNode,
    LinkedItemField,
    LinkedItemRef,
    TaxonomyField,
)
from kontent_graph.errors import AmbiguousReferenceError
from kontent_graph.graph.references import MultiTypePolicy, ReferenceResolver


def make_node(item_id="p1", **groups):
    return ContentNode(item={"id": item_id, "type_name": "Article"}, **groups)


def make_asset(asset_id):
    return Asset(id=asset_id, url=f"https://assets/project/{asset_id}/file.png", type="image/png")


@pytest.fixture
def resolver(content_item_factory, taxonomy_item_factory):
    return ReferenceResolver(content_item_factory, taxonomy_item_factory)


@pytest.fixture
def article_collection(store):
    return store.add_collection("Article")


class TestLinkedItemFields:

    def test_declares_reference_to_linked_type(self, resolver, store, article_collection):
        node = make_node(linked_item_fields=[
            LinkedItemField("author", [LinkedItemRef("a1", "Author")])
        ])

        resolver.resolve(store, article_collection, node)

        assert article_collection.references == {"author": "Author"}

    def test_empty_field_declares_nothing(self, resolver, store, article_collection):
        node = make_node(linked_item_fields=[LinkedItemField("related", [])])

        resolver.resolve(store, article_collection, node)

        assert "related" not in article_collection.references

    def test_multiple_items_same_type(self, resolver, store, article_collection):
        node = make_node(linked_item_fields=[
            LinkedItemField("authors", [LinkedItemRef("a1", "Author"), LinkedItemRef("a2", "Author")])
        ])

        resolver.resolve(store, article_collection, node)

        assert article_collection.references == {"authors": "Author"}

    def test_multi_type_first_type_wins(self, resolver, store, article_collection):
        node = make_node(linked_item_fields=[
            LinkedItemField("blocks", [LinkedItemRef("q1", "Quote"), LinkedItemRef("v1", "Video")])
        ])

        resolver.resolve(store, article_collection, node)

        assert article_collection.references == {"blocks": "Quote"}

    def test_multi_type_strict_rejects(self, content_item_factory, taxonomy_item_factory, store, article_collection):
        resolver = ReferenceResolver(
            content_item_factory,
            taxonomy_item_factory,
            multi_type_policy="strict"
        )
        node = make_node(linked_item_fields=[
            LinkedItemField("blocks", [LinkedItemRef("q1", "Quote"), LinkedItemRef("v1", "Video")])
        ])

        with pytest.raises(AmbiguousReferenceError) as exc_info:
            resolver.resolve(store, article_collection, node)

        assert exc_info.value.type_names == ["Quote", "Video"]
        assert "blocks" not in article_collection.references

    def test_policy_accepts_enum_and_string(self, content_item_factory, taxonomy_item_factory):
        assert ReferenceResolver(
            content_item_factory, taxonomy_item_factory, "strict"
        ).multi_type_policy is MultiTypePolicy.STRICT

    def test_unknown_policy_rejected(self, content_item_factory, taxonomy_item_factory):
        with pytest.raises(ValueError):
            ReferenceResolver(content_item_factory, taxonomy_item_factory, "guess")


class TestTaxonomyFields:

    def test_declares_reference_to_group_collection(self, resolver, store, article_collection):
        node = make_node(taxonomy_fields=[TaxonomyField("topics", "blog_topics")])

        resolver.resolve(store, article_collection, node)

        assert article_collection.references == {"topics": "TaxonomyBlogTopics"}


class TestAssetFields:

    def test_inserts_assets_and_declares_reference(self, resolver, store, article_collection):
        node = make_node(asset_fields=[AssetField("hero", [make_asset("A1"), make_asset("A2")])])

        resolver.resolve(store, article_collection, node)

        assets = store.get_collection("Asset")
        assert [n.id for n in assets.nodes] == ["A1", "A2"]
        assert assets.find_node(id="A1")["type"] == "image/png"
        assert article_collection.references == {"hero": "Asset"}

    def test_empty_field_still_declares_reference(self, resolver, store, article_collection):
        node = make_node(asset_fields=[AssetField("gallery", [])])

        resolver.resolve(store, article_collection, node)

        assert article_collection.references == {"gallery": "Asset"}
        assert len(store.get_collection("Asset")) == 0

    def test_asset_deduplicated_across_fields_and_nodes(self, resolver, store, article_collection):
        first = make_node("p1", asset_fields=[
            AssetField("hero", [make_asset("A1")]),
            AssetField("thumbnail", [make_asset("A1")]),
        ])
        second = make_node("p2", asset_fields=[AssetField("hero", [make_asset("A1")])])

        resolver.resolve(store, article_collection, first)
        resolver.resolve(store, article_collection, second)

        assert len(store.get_collection("Asset")) == 1

    def test_no_asset_fields_creates_no_collection(self, resolver, store, article_collection):
        resolver.resolve(store, article_collection, make_node())

        assert store.get_collection("Asset") is None

    def test_does_not_insert_the_resolved_node(self, resolver, store, article_collection):
        node = make_node(asset_fields=[AssetField("hero", [make_asset("A1")])])

        resolver.resolve(store, article_collection, node)

        assert len(article_collection) == 0
