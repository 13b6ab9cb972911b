"""Synchronous Notion API client.

:class:`NotionClient` is the main entry point.  It owns a
:class:`NotionTransport` and one wrapper per API resource, and exposes
every endpoint as a method that takes typed parameters and returns typed
objects.

Usage::

    from typednotion import NotionClient, RichText
    from typednotion.models import CreatePageParams, ParentType

    with NotionClient(token="secret_xxx") as client:
        page = client.create_page(CreatePageParams(
            parent_type=ParentType.PAGE,
            parent_id="<page_id>",
            title=[RichText.plain("Hello")],
        ))
        print(page.url)
"""

from __future__ import annotations

from typing import Any

import httpx

from typednotion.config import NotionConfig
from typednotion.models.blocks import Block
from typednotion.models.comments import Comment
from typednotion.models.common import User
from typednotion.models.lists import PaginatedList
from typednotion.models.page_properties import PagePropItem, PagePropListResponse
from typednotion.models.pages import Database, Page
from typednotion.models.params import (
    AppendBlockChildrenParams,
    CreateCommentParams,
    CreateDatabaseParams,
    CreatePageParams,
    DatabaseQuery,
    FindCommentsByBlockIDQuery,
    PaginationQuery,
    SearchOpts,
    UpdateDatabaseParams,
    UpdatePageParams,
)
from typednotion.models.search import SearchResult
from typednotion.notion_api.blocks import BlockAPI
from typednotion.notion_api.comments import CommentAPI
from typednotion.notion_api.databases import DatabaseAPI
from typednotion.notion_api.pages import PageAPI
from typednotion.notion_api.search import SearchAPI
from typednotion.notion_api.transport import NotionTransport
from typednotion.notion_api.users import UserAPI


class NotionClient:
    """Synchronous Notion API client.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**
    http_client:
        Optional ``httpx.Client`` to send requests with (e.g. one built on
        ``httpx.MockTransport`` in tests).  The caller keeps ownership.
    **kwargs:
        All remaining keyword arguments are forwarded to
        :class:`NotionConfig`.
    """

    def __init__(
        self,
        token: str,
        *,
        http_client: httpx.Client | None = None,
        **kwargs: Any,
    ) -> None:
        """Create client.  All kwargs are forwarded to NotionConfig."""
        self._config = NotionConfig(token=token, **kwargs)
        self._transport = NotionTransport(self._config, client=http_client)
        self._databases = DatabaseAPI(self._transport)
        self._pages = PageAPI(self._transport)
        self._blocks = BlockAPI(self._transport)
        self._users = UserAPI(self._transport)
        self._search = SearchAPI(self._transport)
        self._comments = CommentAPI(self._transport)

    @property
    def config(self) -> NotionConfig:
        return self._config

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------

    def find_database_by_id(self, database_id: str) -> Database:
        return self._databases.find(database_id)

    def query_database(
        self,
        database_id: str,
        query: DatabaseQuery | None = None,
    ) -> PaginatedList[Page]:
        return self._databases.query(database_id, query)

    def create_database(self, params: CreateDatabaseParams) -> Database:
        return self._databases.create(params)

    def update_database(self, database_id: str, params: UpdateDatabaseParams) -> Database:
        return self._databases.update(database_id, params)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def find_page_by_id(self, page_id: str) -> Page:
        return self._pages.find(page_id)

    def create_page(self, params: CreatePageParams) -> Page:
        return self._pages.create(params)

    def update_page(self, page_id: str, params: UpdatePageParams) -> Page:
        return self._pages.update(page_id, params)

    def find_page_property_by_id(
        self,
        page_id: str,
        property_id: str,
        query: PaginationQuery | None = None,
    ) -> PagePropItem | PagePropListResponse:
        return self._pages.find_property(page_id, property_id, query)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def find_block_by_id(self, block_id: str) -> Block:
        return self._blocks.find(block_id)

    def find_block_children_by_id(
        self,
        block_id: str,
        query: PaginationQuery | None = None,
    ) -> PaginatedList[Block]:
        return self._blocks.find_children(block_id, query)

    def append_block_children(
        self,
        block_id: str,
        children: list[Block] | AppendBlockChildrenParams,
    ) -> PaginatedList[Block]:
        return self._blocks.append_children(block_id, children)

    def update_block(self, block_id: str, block: Block) -> Block:
        return self._blocks.update(block_id, block)

    def delete_block(self, block_id: str) -> Block:
        return self._blocks.delete(block_id)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def find_user_by_id(self, user_id: str) -> User:
        return self._users.find(user_id)

    def find_current_user(self) -> User:
        return self._users.me()

    def list_users(self, query: PaginationQuery | None = None) -> PaginatedList[User]:
        return self._users.list(query)

    # ------------------------------------------------------------------
    # Search and comments
    # ------------------------------------------------------------------

    def search(self, opts: SearchOpts | None = None) -> PaginatedList[SearchResult]:
        return self._search.search(opts)

    def create_comment(self, params: CreateCommentParams) -> Comment:
        return self._comments.create(params)

    def find_comments_by_block_id(self, query: FindCommentsByBlockIDQuery) -> PaginatedList[Comment]:
        return self._comments.find_by_block_id(query)

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the HTTP transport."""
        self._transport.close()

    def __enter__(self) -> NotionClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
