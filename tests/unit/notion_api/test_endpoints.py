"""Tests for the resource wrappers: paths, methods, bodies and decoding.

Each test queues a canned API response on the recording handler, calls one
wrapper method and checks both the request that went out and the typed
object that came back.
"""

from __future__ import annotations

import pytest
from factories import block_json, database_json, list_json, page_json, rich_text_json, user_json

from typednotion.errors import NotionInvalidParamsError, NotionObjectNotFoundError
from typednotion.models import (
    AppendBlockChildrenParams,
    Block,
    BlockType,
    CheckboxCondition,
    CreateCommentParams,
    CreateDatabaseParams,
    CreatePageParams,
    Database,
    DatabaseProperty,
    DatabaseQuery,
    FindCommentsByBlockIDQuery,
    Page,
    PagePropListResponse,
    PaginationQuery,
    ParentType,
    PropertyFilter,
    PropertyType,
    RichText,
    SearchFilter,
    SearchOpts,
    UpdateDatabaseParams,
    UpdatePageParams,
)
from typednotion.notion_api import (
    BlockAPI,
    CommentAPI,
    DatabaseAPI,
    PageAPI,
    SearchAPI,
    UserAPI,
)
from typednotion.notion_api.blocks import update_payload
from typednotion.notion_api.transport import NotionTransport


@pytest.fixture
def transport(config, http_client):
    return NotionTransport(config, client=http_client)


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


class TestPageAPI:
    def test_find(self, transport, handler):
        handler.queue(200, page_json(page_id="p1"))
        page = PageAPI(transport).find("p1")
        assert handler.last.method == "GET"
        assert handler.last.url.path == "/v1/pages/p1"
        assert isinstance(page, Page)
        assert page.id == "p1"

    def test_find_not_found(self, transport, handler):
        handler.queue(404, {"object": "error", "status": 404, "code": "object_not_found", "message": "gone"})
        with pytest.raises(NotionObjectNotFoundError, match="^failed to find page: gone"):
            PageAPI(transport).find("p1")

    def test_create(self, transport, handler):
        handler.queue(200, page_json())
        params = CreatePageParams(parent_type=ParentType.PAGE, parent_id="parent-1", title=[RichText.plain("Hi")])
        PageAPI(transport).create(params)
        assert handler.last.method == "POST"
        assert handler.last.url.path == "/v1/pages"
        assert handler.last_json() == params.to_json()

    def test_create_invalid_sends_nothing(self, transport, handler):
        with pytest.raises(NotionInvalidParamsError):
            PageAPI(transport).create(CreatePageParams())
        assert handler.requests == []

    def test_update(self, transport, handler):
        handler.queue(200, page_json(page_id="p1"))
        PageAPI(transport).update("p1", UpdatePageParams(archived=True))
        assert handler.last.method == "PATCH"
        assert handler.last.url.path == "/v1/pages/p1"
        assert handler.last_json() == {"archived": True}

    def test_find_property_paginated(self, transport, handler):
        handler.queue(200, {
            "object": "list",
            "results": [{"object": "property_item", "id": "title", "type": "title", "title": rich_text_json("A")}],
            "has_more": False,
            "next_cursor": None,
            "property_item": {"id": "title", "type": "title", "title": {}},
        })
        result = PageAPI(transport).find_property("p1", "title", PaginationQuery(page_size=5))
        assert handler.last.url.path == "/v1/pages/p1/properties/title"
        assert handler.last.url.params["page_size"] == "5"
        assert isinstance(result, PagePropListResponse)

    def test_find_property_without_query(self, transport, handler):
        handler.queue(200, {"object": "property_item", "id": "n", "type": "number", "number": 1})
        item = PageAPI(transport).find_property("p1", "n")
        assert item.value == 1
        assert str(handler.last.url.query, "ascii") == ""


# ---------------------------------------------------------------------------
# Databases
# ---------------------------------------------------------------------------


class TestDatabaseAPI:
    def test_find(self, transport, handler):
        handler.queue(200, database_json("db-1"))
        database = DatabaseAPI(transport).find("db-1")
        assert handler.last.url.path == "/v1/databases/db-1"
        assert isinstance(database, Database)

    def test_query(self, transport, handler):
        row = page_json(
            parent={"type": "database_id", "database_id": "db-1"},
            properties={"Done": {"id": "a", "type": "checkbox", "checkbox": True}},
        )
        handler.queue(200, list_json([row], "next"))
        query = DatabaseQuery(filter=PropertyFilter("Done", CheckboxCondition(equals=True)), page_size=1)
        pages = DatabaseAPI(transport).query("db-1", query)

        assert handler.last.method == "POST"
        assert handler.last.url.path == "/v1/databases/db-1/query"
        assert handler.last_json() == {
            "filter": {"property": "Done", "checkbox": {"equals": True}},
            "page_size": 1,
        }
        assert pages.next_cursor == "next"
        assert pages.results[0].properties["Done"].value is True

    def test_query_without_body(self, transport, handler):
        handler.queue(200, list_json([]))
        pages = DatabaseAPI(transport).query("db-1")
        assert handler.last_json() == {}
        assert pages.results == []

    def test_query_page_size_checked(self, transport, handler):
        with pytest.raises(NotionInvalidParamsError):
            DatabaseAPI(transport).query("db-1", DatabaseQuery(page_size=500))
        assert handler.requests == []

    def test_create(self, transport, handler):
        handler.queue(200, database_json())
        params = CreateDatabaseParams(parent_page_id="p1", properties={"Name": DatabaseProperty(PropertyType.TITLE)})
        DatabaseAPI(transport).create(params)
        assert handler.last.url.path == "/v1/databases"
        assert handler.last_json()["parent"] == {"type": "page_id", "page_id": "p1"}

    def test_update(self, transport, handler):
        handler.queue(200, database_json())
        DatabaseAPI(transport).update("db-1", UpdateDatabaseParams(title=[RichText.plain("Renamed")]))
        assert handler.last.method == "PATCH"
        assert handler.last.url.path == "/v1/databases/db-1"
        assert handler.last_json()["title"][0]["text"]["content"] == "Renamed"


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


class TestBlockAPI:
    def test_find(self, transport, handler):
        handler.queue(200, block_json("divider", {}, "b1"))
        block = BlockAPI(transport).find("b1")
        assert handler.last.url.path == "/v1/blocks/b1"
        assert block.type is BlockType.DIVIDER

    def test_find_children_with_cursor(self, transport, handler):
        handler.queue(200, list_json([block_json("divider", {}, "c1")], "cursor-2"))
        children = BlockAPI(transport).find_children("b1", PaginationQuery(start_cursor="cursor-1"))
        assert handler.last.url.path == "/v1/blocks/b1/children"
        assert handler.last.url.params["start_cursor"] == "cursor-1"
        assert [block.id for block in children] == ["c1"]
        assert children.next_cursor == "cursor-2"

    def test_append_children_list(self, transport, handler):
        handler.queue(200, list_json([block_json("divider", {}, "new")]))
        result = BlockAPI(transport).append_children("b1", [Block.divider()])
        assert handler.last.method == "PATCH"
        assert handler.last.url.path == "/v1/blocks/b1/children"
        assert handler.last_json() == {"children": [{"object": "block", "type": "divider", "divider": {}}]}
        assert result.results[0].id == "new"

    def test_append_children_after(self, transport, handler):
        handler.queue(200, list_json([]))
        BlockAPI(transport).append_children("b1", AppendBlockChildrenParams([Block.divider()], after="b0"))
        assert handler.last_json()["after"] == "b0"

    def test_append_nothing_rejected(self, transport, handler):
        with pytest.raises(NotionInvalidParamsError, match="children are required"):
            BlockAPI(transport).append_children("b1", [])
        assert handler.requests == []

    def test_update(self, transport, handler):
        handler.queue(200, block_json("to_do", {"rich_text": [], "checked": True}, "b1"))
        block = BlockAPI(transport).update("b1", Block.to_do("Done", checked=True))
        body = handler.last_json()
        assert handler.last.method == "PATCH"
        assert handler.last.url.path == "/v1/blocks/b1"
        assert set(body) == {"to_do"}
        assert body["to_do"]["checked"] is True
        assert block.payload.checked is True

    def test_update_payload_drops_children(self):
        block = Block.paragraph("parent", children=[Block.paragraph("child")])
        assert "children" not in update_payload(block)["paragraph"]

    def test_update_payload_archived(self):
        block = Block(BlockType.DIVIDER, Block.divider().payload, archived=True)
        assert update_payload(block) == {"divider": {}, "archived": True}

    def test_delete(self, transport, handler):
        handler.queue(200, {**block_json("divider", {}, "b1"), "archived": True})
        block = BlockAPI(transport).delete("b1")
        assert handler.last.method == "DELETE"
        assert handler.last.url.path == "/v1/blocks/b1"
        assert block.archived is True


# ---------------------------------------------------------------------------
# Users, search and comments
# ---------------------------------------------------------------------------


class TestUserAPI:
    def test_find(self, transport, handler):
        handler.queue(200, user_json("u1"))
        assert UserAPI(transport).find("u1").name == "Jane Doe"
        assert handler.last.url.path == "/v1/users/u1"

    def test_me(self, transport, handler):
        handler.queue(200, {"object": "user", "id": "bot-1", "type": "bot", "bot": {}})
        user = UserAPI(transport).me()
        assert handler.last.url.path == "/v1/users/me"
        assert user.bot is not None

    def test_list(self, transport, handler):
        handler.queue(200, list_json([user_json("u1"), user_json("u2")]))
        users = UserAPI(transport).list(PaginationQuery(page_size=2))
        assert handler.last.url.path == "/v1/users"
        assert handler.last.url.params["page_size"] == "2"
        assert [user.id for user in users] == ["u1", "u2"]


class TestSearchAPI:
    def test_search(self, transport, handler):
        handler.queue(200, list_json([page_json(page_id="p1"), database_json("d1")]))
        results = SearchAPI(transport).search(SearchOpts(query="tasks", filter=SearchFilter("page")))
        assert handler.last.method == "POST"
        assert handler.last.url.path == "/v1/search"
        assert handler.last_json() == {"query": "tasks", "filter": {"value": "page", "property": "object"}}
        assert [type(result) for result in results] == [Page, Database]

    def test_search_without_options(self, transport, handler):
        handler.queue(200, list_json([]))
        assert SearchAPI(transport).search().results == []
        assert handler.last_json() == {}


class TestCommentAPI:
    _COMMENT = {
        "object": "comment",
        "id": "c1",
        "discussion_id": "d1",
        "parent": {"type": "page_id", "page_id": "p1"},
        "rich_text": [rich_text_json("hi")],
    }

    def test_create(self, transport, handler):
        handler.queue(200, self._COMMENT)
        comment = CommentAPI(transport).create(CreateCommentParams(parent_page_id="p1", rich_text=[RichText.plain("hi")]))
        assert handler.last.method == "POST"
        assert handler.last.url.path == "/v1/comments"
        assert comment.discussion_id == "d1"

    def test_find_by_block_id(self, transport, handler):
        handler.queue(200, list_json([self._COMMENT]))
        comments = CommentAPI(transport).find_by_block_id(FindCommentsByBlockIDQuery("b1", page_size=10))
        assert handler.last.method == "GET"
        assert handler.last.url.path == "/v1/comments"
        assert handler.last.url.params["block_id"] == "b1"
        assert handler.last.url.params["page_size"] == "10"
        assert comments.results[0].plain_text == "hi"

    def test_find_requires_block_id(self, transport, handler):
        with pytest.raises(NotionInvalidParamsError, match="block ID is required"):
            CommentAPI(transport).find_by_block_id(FindCommentsByBlockIDQuery())
        assert handler.requests == []
