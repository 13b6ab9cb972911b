"""Database API wrappers for the Notion API.

:class:`DatabaseAPI` (sync) and :class:`AsyncDatabaseAPI` (async) cover
retrieving, querying, creating and updating databases.
"""

from __future__ import annotations

from typednotion.models.lists import PaginatedList
from typednotion.models.pages import Database, Page
from typednotion.models.params import CreateDatabaseParams, DatabaseQuery, UpdateDatabaseParams

from .transport import AsyncNotionTransport, NotionTransport


def _query_body(query: DatabaseQuery | None) -> dict:
    if query is None:
        return {}
    query.validate()
    return query.to_json()


class DatabaseAPI:
    """Synchronous wrapper for the Notion Databases API.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def find(self, database_id: str) -> Database:
        """Retrieve a database and its schema."""
        data = self._transport.request(
            "GET", f"/databases/{database_id}", prefix="failed to find database",
        )
        return Database.from_json(data)

    def query(self, database_id: str, query: DatabaseQuery | None = None) -> PaginatedList[Page]:
        """Query the pages of a database.

        Parameters
        ----------
        database_id:
            The UUID of the database.
        query:
            Optional filter, sorts and pagination.  Returns the first page
            of results when omitted.

        Returns
        -------
        PaginatedList[Page]
            One page of results; resubmit ``next_cursor`` as
            ``start_cursor`` while ``has_more`` is true.
        """
        data = self._transport.request(
            "POST",
            f"/databases/{database_id}/query",
            json=_query_body(query),
            prefix="failed to query database",
        )
        return PaginatedList.from_json(data, Page.from_json, "database query response")

    def create(self, params: CreateDatabaseParams) -> Database:
        """Create a database as a child of a page."""
        params.validate()
        data = self._transport.request(
            "POST", "/databases", json=params.to_json(), prefix="failed to create database",
        )
        return Database.from_json(data)

    def update(self, database_id: str, params: UpdateDatabaseParams) -> Database:
        """Update a database's title, description, schema, icon or cover."""
        params.validate()
        data = self._transport.request(
            "PATCH",
            f"/databases/{database_id}",
            json=params.to_json(),
            prefix="failed to update database",
        )
        return Database.from_json(data)


class AsyncDatabaseAPI:
    """Asynchronous wrapper for the Notion Databases API.

    Mirrors :class:`DatabaseAPI` but all methods are coroutines.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def find(self, database_id: str) -> Database:
        data = await self._transport.request(
            "GET", f"/databases/{database_id}", prefix="failed to find database",
        )
        return Database.from_json(data)

    async def query(
        self,
        database_id: str,
        query: DatabaseQuery | None = None,
    ) -> PaginatedList[Page]:
        data = await self._transport.request(
            "POST",
            f"/databases/{database_id}/query",
            json=_query_body(query),
            prefix="failed to query database",
        )
        return PaginatedList.from_json(data, Page.from_json, "database query response")

    async def create(self, params: CreateDatabaseParams) -> Database:
        params.validate()
        data = await self._transport.request(
            "POST", "/databases", json=params.to_json(), prefix="failed to create database",
        )
        return Database.from_json(data)

    async def update(self, database_id: str, params: UpdateDatabaseParams) -> Database:
        params.validate()
        data = await self._transport.request(
            "PATCH",
            f"/databases/{database_id}",
            json=params.to_json(),
            prefix="failed to update database",
        )
        return Database.from_json(data)
