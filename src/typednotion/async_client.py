"""Asynchronous Notion API client.

:class:`AsyncNotionClient` mirrors :class:`NotionClient` but every I/O
method is an ``async def`` coroutine backed by ``httpx.AsyncClient``.

Usage::

    import asyncio
    from typednotion import AsyncNotionClient

    async def main():
        async with AsyncNotionClient(token="secret_xxx") as client:
            me = await client.find_current_user()
            print(me.name)

    asyncio.run(main())
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
from typednotion.notion_api.blocks import AsyncBlockAPI
from typednotion.notion_api.comments import AsyncCommentAPI
from typednotion.notion_api.databases import AsyncDatabaseAPI
from typednotion.notion_api.pages import AsyncPageAPI
from typednotion.notion_api.search import AsyncSearchAPI
from typednotion.notion_api.transport import AsyncNotionTransport
from typednotion.notion_api.users import AsyncUserAPI


class AsyncNotionClient:
    """Asynchronous Notion API client.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**
    http_client:
        Optional caller-owned ``httpx.AsyncClient``.
    **kwargs:
        All remaining keyword arguments are forwarded to
        :class:`NotionConfig`.
    """

    def __init__(
        self,
        token: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = NotionConfig(token=token, **kwargs)
        self._transport = AsyncNotionTransport(self._config, client=http_client)
        self._databases = AsyncDatabaseAPI(self._transport)
        self._pages = AsyncPageAPI(self._transport)
        self._blocks = AsyncBlockAPI(self._transport)
        self._users = AsyncUserAPI(self._transport)
        self._search = AsyncSearchAPI(self._transport)
        self._comments = AsyncCommentAPI(self._transport)

    @property
    def config(self) -> NotionConfig:
        return self._config

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------

    async def find_database_by_id(self, database_id: str) -> Database:
        return await self._databases.find(database_id)

    async def query_database(
        self,
        database_id: str,
        query: DatabaseQuery | None = None,
    ) -> PaginatedList[Page]:
        return await self._databases.query(database_id, query)

    async def create_database(self, params: CreateDatabaseParams) -> Database:
        return await self._databases.create(params)

    async def update_database(self, database_id: str, params: UpdateDatabaseParams) -> Database:
        return await self._databases.update(database_id, params)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    async def find_page_by_id(self, page_id: str) -> Page:
        return await self._pages.find(page_id)

    async def create_page(self, params: CreatePageParams) -> Page:
        return await self._pages.create(params)

    async def update_page(self, page_id: str, params: UpdatePageParams) -> Page:
        return await self._pages.update(page_id, params)

    async def find_page_property_by_id(
        self,
        page_id: str,
        property_id: str,
        query: PaginationQuery | None = None,
    ) -> PagePropItem | PagePropListResponse:
        return await self._pages.find_property(page_id, property_id, query)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    async def find_block_by_id(self, block_id: str) -> Block:
        return await self._blocks.find(block_id)

    async def find_block_children_by_id(
        self,
        block_id: str,
        query: PaginationQuery | None = None,
    ) -> PaginatedList[Block]:
        return await self._blocks.find_children(block_id, query)

    async def append_block_children(
        self,
        block_id: str,
        children: list[Block] | AppendBlockChildrenParams,
    ) -> PaginatedList[Block]:
        return await self._blocks.append_children(block_id, children)

    async def update_block(self, block_id: str, block: Block) -> Block:
        return await self._blocks.update(block_id, block)

    async def delete_block(self, block_id: str) -> Block:
        return await self._blocks.delete(block_id)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def find_user_by_id(self, user_id: str) -> User:
        return await self._users.find(user_id)

    async def find_current_user(self) -> User:
        return await self._users.me()

    async def list_users(self, query: PaginationQuery | None = None) -> PaginatedList[User]:
        return await self._users.list(query)

    # ------------------------------------------------------------------
    # Search and comments
    # ------------------------------------------------------------------

    async def search(self, opts: SearchOpts | None = None) -> PaginatedList[SearchResult]:
        return await self._search.search(opts)

    async def create_comment(self, params: CreateCommentParams) -> Comment:
        return await self._comments.create(params)

    async def find_comments_by_block_id(
        self,
        query: FindCommentsByBlockIDQuery,
    ) -> PaginatedList[Comment]:
        return await self._comments.find_by_block_id(query)

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the HTTP transport."""
        await self._transport.close()

    async def __aenter__(self) -> AsyncNotionClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
