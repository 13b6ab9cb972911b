"""Page API wrappers for the Notion API.

Provides :class:`PageAPI` (sync) and :class:`AsyncPageAPI` (async) thin
wrappers around the Notion ``/pages`` endpoints.  Parameters are validated
before any request is sent; responses are decoded into
:class:`~typednotion.models.Page` objects.
"""

from __future__ import annotations

from typednotion.models.pages import Page
from typednotion.models.page_properties import (
    PagePropItem,
    PagePropListResponse,
    decode_page_property_response,
)
from typednotion.models.params import CreatePageParams, PaginationQuery, UpdatePageParams

from .transport import AsyncNotionTransport, NotionTransport


def _property_query(query: PaginationQuery | None) -> dict[str, str] | None:
    if query is None:
        return None
    query.validate()
    return query.to_query()


class PageAPI:
    """Synchronous wrapper for the Notion Pages API.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def find(self, page_id: str) -> Page:
        """Retrieve a page by its ID.

        Parameters
        ----------
        page_id:
            The UUID of the page to retrieve (with or without hyphens).

        Returns
        -------
        Page
            The page, with ``properties`` shaped by its parent.
        """
        data = self._transport.request("GET", f"/pages/{page_id}", prefix="failed to find page")
        return Page.from_json(data)

    def create(self, params: CreatePageParams) -> Page:
        """Create a new page under a page or in a database.

        Raises
        ------
        NotionInvalidParamsError
            If *params* fail validation; no request is sent.
        """
        params.validate()
        data = self._transport.request(
            "POST", "/pages", json=params.to_json(), prefix="failed to create page",
        )
        return Page.from_json(data)

    def update(self, page_id: str, params: UpdatePageParams) -> Page:
        """Update a page's properties, icon, cover or archive status.

        Only the fields set on *params* are changed.
        """
        params.validate()
        data = self._transport.request(
            "PATCH", f"/pages/{page_id}", json=params.to_json(), prefix="failed to update page",
        )
        return Page.from_json(data)

    def find_property(
        self,
        page_id: str,
        property_id: str,
        query: PaginationQuery | None = None,
    ) -> PagePropItem | PagePropListResponse:
        """Retrieve one property value of a page.

        Paginated property types (title, rich_text, people, relation and
        rollups over them) answer with a :class:`PagePropListResponse`;
        all others with a single :class:`PagePropItem`.
        """
        data = self._transport.request(
            "GET",
            f"/pages/{page_id}/properties/{property_id}",
            params=_property_query(query),
            prefix="failed to find page property",
        )
        return decode_page_property_response(data)


class AsyncPageAPI:
    """Asynchronous wrapper for the Notion Pages API.

    Mirrors :class:`PageAPI` but all methods are coroutines.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def find(self, page_id: str) -> Page:
        """Retrieve a page by its ID (async).

        See :meth:`PageAPI.find` for parameter documentation.
        """
        data = await self._transport.request("GET", f"/pages/{page_id}", prefix="failed to find page")
        return Page.from_json(data)

    async def create(self, params: CreatePageParams) -> Page:
        """Create a new page (async)."""
        params.validate()
        data = await self._transport.request(
            "POST", "/pages", json=params.to_json(), prefix="failed to create page",
        )
        return Page.from_json(data)

    async def update(self, page_id: str, params: UpdatePageParams) -> Page:
        """Update a page (async)."""
        params.validate()
        data = await self._transport.request(
            "PATCH", f"/pages/{page_id}", json=params.to_json(), prefix="failed to update page",
        )
        return Page.from_json(data)

    async def find_property(
        self,
        page_id: str,
        property_id: str,
        query: PaginationQuery | None = None,
    ) -> PagePropItem | PagePropListResponse:
        """Retrieve one property value of a page (async).

        See :meth:`PageAPI.find_property`.
        """
        data = await self._transport.request(
            "GET",
            f"/pages/{page_id}/properties/{property_id}",
            params=_property_query(query),
            prefix="failed to find page property",
        )
        return decode_page_property_response(data)
