"""User API wrappers for the Notion API."""

from __future__ import annotations

from typednotion.models.common import User
from typednotion.models.lists import PaginatedList
from typednotion.models.params import PaginationQuery

from .transport import AsyncNotionTransport, NotionTransport


def _list_query(query: PaginationQuery | None) -> dict[str, str] | None:
    if query is None:
        return None
    query.validate()
    return query.to_query()


class UserAPI:
    """Synchronous wrapper for the Notion Users API.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def find(self, user_id: str) -> User:
        data = self._transport.request("GET", f"/users/{user_id}", prefix="failed to find user")
        return User.from_json(data)

    def me(self) -> User:
        """Return the bot user of the integration token."""
        data = self._transport.request("GET", "/users/me", prefix="failed to find current user")
        return User.from_json(data)

    def list(self, query: PaginationQuery | None = None) -> PaginatedList[User]:
        """List one page of the workspace's users."""
        data = self._transport.request(
            "GET", "/users", params=_list_query(query), prefix="failed to list users",
        )
        return PaginatedList.from_json(data, User.from_json, "user list")


class AsyncUserAPI:
    """Asynchronous wrapper for the Notion Users API."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def find(self, user_id: str) -> User:
        data = await self._transport.request("GET", f"/users/{user_id}", prefix="failed to find user")
        return User.from_json(data)

    async def me(self) -> User:
        data = await self._transport.request("GET", "/users/me", prefix="failed to find current user")
        return User.from_json(data)

    async def list(self, query: PaginationQuery | None = None) -> PaginatedList[User]:
        data = await self._transport.request(
            "GET", "/users", params=_list_query(query), prefix="failed to list users",
        )
        return PaginatedList.from_json(data, User.from_json, "user list")
