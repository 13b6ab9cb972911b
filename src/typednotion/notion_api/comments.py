"""Comment API wrappers for the Notion API."""

from __future__ import annotations

from typednotion.models.comments import Comment
from typednotion.models.lists import PaginatedList
from typednotion.models.params import CreateCommentParams, FindCommentsByBlockIDQuery

from .transport import AsyncNotionTransport, NotionTransport


class CommentAPI:
    """Synchronous wrapper for the Notion Comments API.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def create(self, params: CreateCommentParams) -> Comment:
        """Add a comment to a page or reply in a discussion thread."""
        params.validate()
        data = self._transport.request(
            "POST", "/comments", json=params.to_json(), prefix="failed to create comment",
        )
        return Comment.from_json(data)

    def find_by_block_id(self, query: FindCommentsByBlockIDQuery) -> PaginatedList[Comment]:
        """List the unresolved comments of a page or block."""
        query.validate()
        data = self._transport.request(
            "GET", "/comments", params=query.to_query(), prefix="failed to find comments",
        )
        return PaginatedList.from_json(data, Comment.from_json, "comment list")


class AsyncCommentAPI:
    """Asynchronous wrapper for the Notion Comments API."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def create(self, params: CreateCommentParams) -> Comment:
        params.validate()
        data = await self._transport.request(
            "POST", "/comments", json=params.to_json(), prefix="failed to create comment",
        )
        return Comment.from_json(data)

    async def find_by_block_id(self, query: FindCommentsByBlockIDQuery) -> PaginatedList[Comment]:
        query.validate()
        data = await self._transport.request(
            "GET", "/comments", params=query.to_query(), prefix="failed to find comments",
        )
        return PaginatedList.from_json(data, Comment.from_json, "comment list")
