"""Search API wrappers for the Notion API."""

from __future__ import annotations

from typing import Any

from typednotion.models.lists import PaginatedList
from typednotion.models.params import SearchOpts
from typednotion.models.search import SearchResult, decode_search_results

from .transport import AsyncNotionTransport, NotionTransport


def _search_body(opts: SearchOpts | None) -> dict[str, Any]:
    if opts is None:
        return {}
    opts.validate()
    return opts.to_json()


class SearchAPI:
    """Synchronous wrapper for ``POST /search``.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def search(self, opts: SearchOpts | None = None) -> PaginatedList[SearchResult]:
        """Search pages and databases shared with the integration.

        Returns
        -------
        PaginatedList[SearchResult]
            :class:`~typednotion.models.Page` and
            :class:`~typednotion.models.Database` objects, in the order
            Notion returned them.
        """
        data = self._transport.request(
            "POST", "/search", json=_search_body(opts), prefix="failed to search",
        )
        return PaginatedList.from_results(data, decode_search_results, "search response")


class AsyncSearchAPI:
    """Asynchronous wrapper for ``POST /search``."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def search(self, opts: SearchOpts | None = None) -> PaginatedList[SearchResult]:
        data = await self._transport.request(
            "POST", "/search", json=_search_body(opts), prefix="failed to search",
        )
        return PaginatedList.from_results(data, decode_search_results, "search response")
