"""
Test: Content Node Assembler
"""

import pytest

from kontent_graph import ContentItem
from kontent_graph.content import AssetItemFactory, ContentItemFactory
from kontent_graph.delivery import TypeResolvers
from kontent_graph.delivery.models import ContentType
from kontent_graph.errors import InvalidContentNodeError
from kontent_graph.graph.assembler import ContentNodeAssembler
from kontent_graph.graph.references import ReferenceResolver
from kontent_graph.graph.registrar import TypeResolverRegistrar

from conftest import COMPONENT_ID, make_client, raw_type


ARTICLE = ContentType.from_raw(raw_type("article"))
AUTHOR = ContentType.from_raw(raw_type("author"))
CALLOUT = ContentType.from_raw(raw_type("callout"))

HELLO_ID = "b2b2b2b2-0000-0000-0000-000000000002"
JANE_ID = "a1a1a1a1-0000-0000-0000-000000000001"


@pytest.fixture
def assembler(sample_project, content_item_factory, taxonomy_item_factory):
    type_resolvers = TypeResolverRegistrar(content_item_factory).register_all(
        TypeResolvers(), [ARTICLE, AUTHOR, CALLOUT]
    )
    return ContentNodeAssembler(
        make_client(sample_project),
        content_item_factory,
        ReferenceResolver(content_item_factory, taxonomy_item_factory),
        type_resolvers
    )


class TestAssembleType:

    @pytest.mark.asyncio
    async def test_linked_items_inserted_before_primary_items(self, assembler, store, insert_log):
        await assembler.assemble_type(store, ARTICLE)

        content_inserts = [
            node_id for type_name, node_id in insert_log
            if type_name in ("Article", "Author", "Callout")
        ]
        assert content_inserts == [JANE_ID, COMPONENT_ID, HELLO_ID]

    @pytest.mark.asyncio
    async def test_linked_item_also_primary_is_inserted_once(self, assembler, store):
        await assembler.assemble_type(store, ARTICLE)
        jane = store.get_collection("Author").find_node(id=JANE_ID)

        await assembler.assemble_type(store, AUTHOR)

        authors = store.get_collection("Author")
        assert len(authors) == 1
        assert authors.find_node(id=JANE_ID) is jane
        assert len(store.get_collection("ItemLink").nodes) == 2

    @pytest.mark.asyncio
    async def test_type_without_items_creates_nothing(self, assembler, store):
        await assembler.assemble_type(store, CALLOUT)

        assert store.collections == {}

    @pytest.mark.asyncio
    async def test_references_declared(self, assembler, store):
        await assembler.assemble_type(store, ARTICLE)

        articles = store.get_collection("Article")
        assert articles.references == {
            "author": "Author",
            "topics": "TaxonomyTopics",
            "hero": "Asset",
            "gallery": "Asset",
        }
        assert store.get_collection("Author").references == {"photo": "Asset"}

    @pytest.mark.asyncio
    async def test_shared_asset_inserted_once(self, assembler, store):
        await assembler.assemble_type(store, ARTICLE)
        await assembler.assemble_type(store, AUTHOR)

        assets = store.get_collection("Asset")
        assert [n.id for n in assets.nodes] == ["A1"]


class TestItemLinks:

    @pytest.mark.asyncio
    async def test_item_link_per_page_node(self, assembler, store):
        await assembler.assemble_type(store, ARTICLE)

        item_links = store.get_collection("ItemLink")
        assert {n.id for n in item_links.nodes} == {HELLO_ID, JANE_ID}

        hello_link = item_links.find_node(id=HELLO_ID)
        assert hello_link["type_name"] == "Article"
        assert hello_link["path"] == "/articles/hello-world"

    @pytest.mark.asyncio
    async def test_component_has_no_item_link(self, assembler, store):
        await assembler.assemble_type(store, ARTICLE)

        assert store.get_collection("Callout").find_node(id=COMPONENT_ID).is_component
        assert store.get_collection("ItemLink").find_node(id=COMPONENT_ID) is None


class AuthorItem(ContentItem):

    def create_node(self):
        node = super().create_node()
        node.item["display_name"] = f"By {self.system['name']}"
        return node


class TestNodeConstructorOutput:

    @pytest.mark.asyncio
    async def test_custom_content_item_class_reaches_store(
        self, sample_project, settings, taxonomy_item_factory, store
    ):
        content_item_factory = ContentItemFactory(
            {**settings["content_items"], "content_item_classes": {"author": AuthorItem}},
            AssetItemFactory(settings["assets"])
        )
        type_resolvers = TypeResolverRegistrar(content_item_factory).register_all(
            TypeResolvers(), [ARTICLE, AUTHOR, CALLOUT]
        )
        assembler = ContentNodeAssembler(
            make_client(sample_project),
            content_item_factory,
            ReferenceResolver(content_item_factory, taxonomy_item_factory),
            type_resolvers
        )

        await assembler.assemble_type(store, ARTICLE)

        jane = store.get_collection("Author").find_node(id=JANE_ID)
        assert jane["display_name"] == "By Jane"
        assert "display_name" not in store.get_collection("Article").find_node(id=HELLO_ID).fields

    @pytest.mark.asyncio
    async def test_non_node_output_rejected(self, assembler, store):

        class BrokenItem:
            id = "broken"

            def create_node(self):
                return {"item": {"id": "broken"}}

        with pytest.raises(InvalidContentNodeError):
            await assembler.assemble_items(store, [BrokenItem()])
