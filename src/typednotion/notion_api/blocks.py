"""Block API wrappers for the Notion API.

Provides :class:`BlockAPI` (sync) and :class:`AsyncBlockAPI` (async) thin
wrappers around the Notion ``/blocks`` endpoints.  Children are returned
one page at a time; pass ``next_cursor`` back to fetch the next page.
"""

from __future__ import annotations

from typing import Any

from typednotion.models.blocks import Block, UnsupportedBlock
from typednotion.models.lists import PaginatedList
from typednotion.models.params import AppendBlockChildrenParams, PaginationQuery

from .transport import AsyncNotionTransport, NotionTransport


def update_payload(block: Block) -> dict[str, Any]:
    """Request body for ``PATCH /blocks/{id}``: the type-keyed payload
    without children, which cannot be changed this way."""
    key = block.type.value
    if isinstance(block.payload, UnsupportedBlock):
        key = block.payload.raw_type
    payload = block.payload.to_json()
    payload.pop("children", None)
    body: dict[str, Any] = {key: payload}
    if block.archived:
        body["archived"] = True
    return body


def _children_query(query: PaginationQuery | None) -> dict[str, str] | None:
    if query is None:
        return None
    query.validate()
    return query.to_query()


class BlockAPI:
    """Synchronous wrapper for the Notion Blocks API.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def find(self, block_id: str) -> Block:
        """Retrieve a single block by its ID.

        Parameters
        ----------
        block_id:
            The UUID of the block to retrieve.

        Returns
        -------
        Block
            The block.  Its children are not included; check
            ``has_children`` and call :meth:`find_children`.
        """
        data = self._transport.request("GET", f"/blocks/{block_id}", prefix="failed to find block")
        return Block.from_json(data)

    def find_children(
        self,
        block_id: str,
        query: PaginationQuery | None = None,
    ) -> PaginatedList[Block]:
        """Retrieve one page of children of a block (or page).

        Parameters
        ----------
        block_id:
            The UUID of the parent block or page.
        query:
            Optional ``start_cursor`` / ``page_size``.
        """
        data = self._transport.request(
            "GET",
            f"/blocks/{block_id}/children",
            params=_children_query(query),
            prefix="failed to find block children",
        )
        return PaginatedList.from_json(data, Block.from_json, "block children response")

    def append_children(
        self,
        block_id: str,
        children: list[Block] | AppendBlockChildrenParams,
    ) -> PaginatedList[Block]:
        """Append blocks to a block (or page).

        Parameters
        ----------
        block_id:
            The UUID of the parent block or page.
        children:
            The blocks to append, or :class:`AppendBlockChildrenParams` to
            also set the ``after`` anchor.

        Returns
        -------
        PaginatedList[Block]
            The appended blocks as created by Notion.
        """
        params = _append_params(children)
        params.validate()
        data = self._transport.request(
            "PATCH",
            f"/blocks/{block_id}/children",
            json=params.to_json(),
            prefix="failed to append block children",
        )
        return PaginatedList.from_json(data, Block.from_json, "append block children response")

    def update(self, block_id: str, block: Block) -> Block:
        """Replace the content of a block.  The type must match the
        existing block's type."""
        data = self._transport.request(
            "PATCH", f"/blocks/{block_id}", json=update_payload(block), prefix="failed to update block",
        )
        return Block.from_json(data)

    def delete(self, block_id: str) -> Block:
        """Delete (archive) a block and return it."""
        data = self._transport.request("DELETE", f"/blocks/{block_id}", prefix="failed to delete block")
        return Block.from_json(data)


class AsyncBlockAPI:
    """Asynchronous wrapper for the Notion Blocks API.

    Mirrors :class:`BlockAPI` but all methods are coroutines.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def find(self, block_id: str) -> Block:
        data = await self._transport.request(
            "GET", f"/blocks/{block_id}", prefix="failed to find block",
        )
        return Block.from_json(data)

    async def find_children(
        self,
        block_id: str,
        query: PaginationQuery | None = None,
    ) -> PaginatedList[Block]:
        data = await self._transport.request(
            "GET",
            f"/blocks/{block_id}/children",
            params=_children_query(query),
            prefix="failed to find block children",
        )
        return PaginatedList.from_json(data, Block.from_json, "block children response")

    async def append_children(
        self,
        block_id: str,
        children: list[Block] | AppendBlockChildrenParams,
    ) -> PaginatedList[Block]:
        params = _append_params(children)
        params.validate()
        data = await self._transport.request(
            "PATCH",
            f"/blocks/{block_id}/children",
            json=params.to_json(),
            prefix="failed to append block children",
        )
        return PaginatedList.from_json(data, Block.from_json, "append block children response")

    async def update(self, block_id: str, block: Block) -> Block:
        data = await self._transport.request(
            "PATCH", f"/blocks/{block_id}", json=update_payload(block), prefix="failed to update block",
        )
        return Block.from_json(data)

    async def delete(self, block_id: str) -> Block:
        data = await self._transport.request(
            "DELETE", f"/blocks/{block_id}", prefix="failed to delete block",
        )
        return Block.from_json(data)


def _append_params(children: list[Block] | AppendBlockChildrenParams) -> AppendBlockChildrenParams:
    if isinstance(children, AppendBlockChildrenParams):
        return children
    return AppendBlockChildrenParams(children=list(children))
