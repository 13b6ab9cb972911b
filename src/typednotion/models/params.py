"""Outbound parameter objects.

Each class has ``validate()``, which raises
:class:`~typednotion.errors.NotionInvalidParamsError` before any request
is sent, and ``to_json()`` (request body) or ``to_query()`` (query
string).  The endpoint wrappers always call ``validate()`` first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from typednotion.errors import NotionInvalidParamsError

from .blocks import Block, encode_blocks
from .common import Cover, Icon, ParentType
from .filters import DatabaseQuerySort, Filter, SearchFilter, SearchSort
from .page_properties import DatabasePageProperty, encode_page_properties
from .properties import DatabaseProperty, PropertyType, encode_database_properties
from .rich_text import RichText, encode_rich_text

MAX_PAGE_SIZE = 100


def _invalid(params: Any, message: str) -> NotionInvalidParamsError:
    return NotionInvalidParamsError(message, context={"params": type(params).__name__})


def _check_page_size(params: Any, page_size: int | None) -> None:
    if page_size is not None and not 1 <= page_size <= MAX_PAGE_SIZE:
        raise _invalid(params, f"page size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")


def _pagination_body(start_cursor: str | None, page_size: int | None) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if start_cursor:
        data["start_cursor"] = start_cursor
    if page_size is not None:
        data["page_size"] = page_size
    return data


def _check_icon_and_cover(params: Any, icon: Any, cover: Any) -> None:
    if icon is not None and not isinstance(icon, Icon):
        raise _invalid(params, f"icon must be an Icon, got {type(icon).__name__}")
    if cover is not None and not isinstance(cover, Cover):
        raise _invalid(params, f"cover must be a File, got {type(cover).__name__}")


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PaginationQuery:
    """Cursor and page size for paginated GET endpoints."""

    start_cursor: str | None = None
    page_size: int | None = None

    def validate(self) -> None:
        _check_page_size(self, self.page_size)

    def to_query(self) -> dict[str, str]:
        return {key: str(value) for key, value in _pagination_body(self.start_cursor, self.page_size).items()}


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CreatePageParams:
    """Parameters for ``POST /pages``.

    A page under another page needs ``title``; a page in a database needs
    ``database_page_properties``.  ``children`` blocks are appended to the
    new page.
    """

    parent_type: ParentType | str = ""
    parent_id: str = ""
    database_page_properties: dict[str, DatabasePageProperty] | None = None
    title: list[RichText] | None = None
    children: list[Block] = field(default_factory=list)
    icon: Icon | None = None
    cover: Cover | None = None

    def validate(self) -> None:
        if not self.parent_type:
            raise _invalid(self, "parent type is required")
        if not self.parent_id:
            raise _invalid(self, "parent ID is required")
        try:
            parent_type = ParentType(self.parent_type)
        except ValueError as exc:
            raise _invalid(self, f"unsupported parent type {self.parent_type!r}") from exc
        if parent_type not in (ParentType.DATABASE, ParentType.PAGE):
            raise _invalid(self, f"unsupported parent type {parent_type.value!r}")
        if parent_type is ParentType.DATABASE and self.database_page_properties is None:
            raise _invalid(self, "database page properties is required when parent type is database")
        if parent_type is ParentType.PAGE and self.title is None:
            raise _invalid(self, "title is required when parent type is page")
        if self.title is not None and self.database_page_properties is not None:
            raise _invalid(self, "title and database page properties cannot both be set")
        _check_icon_and_cover(self, self.icon, self.cover)

    def to_json(self) -> dict[str, Any]:
        key = ParentType(self.parent_type).value
        data: dict[str, Any] = {"parent": {"type": key, key: self.parent_id}}
        if self.database_page_properties is not None:
            data["properties"] = encode_page_properties(self.database_page_properties)
        else:
            data["properties"] = {"title": {"title": encode_rich_text(self.title or [])}}
        if self.children:
            data["children"] = encode_blocks(self.children)
        if self.icon is not None:
            data["icon"] = self.icon.to_json()
        if self.cover is not None:
            data["cover"] = self.cover.to_json()
        return data


@dataclass(frozen=True)
class UpdatePageParams:
    """Parameters for ``PATCH /pages/{id}``.

    At least one field must be set.  ``title`` (page-parented pages) and
    ``database_page_properties`` (database pages) are mutually exclusive.
    Set ``archived=True`` to move the page to the trash.
    """

    database_page_properties: dict[str, DatabasePageProperty] | None = None
    title: list[RichText] | None = None
    icon: Icon | None = None
    cover: Cover | None = None
    archived: bool | None = None

    def validate(self) -> None:
        if (
            self.database_page_properties is None
            and self.title is None
            and self.icon is None
            and self.cover is None
            and self.archived is None
        ):
            raise _invalid(
                self,
                "at least one of database page properties, title, icon, cover or archived is required",
            )
        if self.title is not None and self.database_page_properties is not None:
            raise _invalid(self, "title and database page properties cannot both be set")
        _check_icon_and_cover(self, self.icon, self.cover)

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.database_page_properties is not None:
            data["properties"] = encode_page_properties(self.database_page_properties)
        elif self.title is not None:
            data["properties"] = {"title": {"title": encode_rich_text(self.title)}}
        if self.icon is not None:
            data["icon"] = self.icon.to_json()
        if self.cover is not None:
            data["cover"] = self.cover.to_json()
        if self.archived is not None:
            data["archived"] = self.archived
        return data


# ---------------------------------------------------------------------------
# Databases
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CreateDatabaseParams:
    """Parameters for ``POST /databases``.

    Databases are created under a page.  ``properties`` is the schema and
    must contain exactly one title column.
    """

    parent_page_id: str = ""
    properties: dict[str, DatabaseProperty] = field(default_factory=dict)
    title: list[RichText] = field(default_factory=list)
    description: list[RichText] = field(default_factory=list)
    icon: Icon | None = None
    cover: Cover | None = None
    is_inline: bool = False

    def validate(self) -> None:
        if not self.parent_page_id:
            raise _invalid(self, "parent page ID is required")
        if not self.properties:
            raise _invalid(self, "database properties are required")
        titles = [prop for prop in self.properties.values() if prop.type is PropertyType.TITLE]
        if len(titles) != 1:
            raise _invalid(self, "database properties must contain exactly one title property")
        _check_icon_and_cover(self, self.icon, self.cover)

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "parent": {"type": "page_id", "page_id": self.parent_page_id},
            "title": encode_rich_text(self.title),
            "properties": encode_database_properties(dict(self.properties)),
        }
        if self.description:
            data["description"] = encode_rich_text(self.description)
        if self.icon is not None:
            data["icon"] = self.icon.to_json()
        if self.cover is not None:
            data["cover"] = self.cover.to_json()
        if self.is_inline:
            data["is_inline"] = True
        return data


@dataclass(frozen=True)
class UpdateDatabaseParams:
    """Parameters for ``PATCH /databases/{id}``.

    In ``properties`` a ``None`` value removes that column.
    """

    title: list[RichText] | None = None
    description: list[RichText] | None = None
    properties: dict[str, DatabaseProperty | None] | None = None
    icon: Icon | None = None
    cover: Cover | None = None

    def validate(self) -> None:
        if (
            self.title is None
            and self.description is None
            and self.properties is None
            and self.icon is None
            and self.cover is None
        ):
            raise _invalid(
                self, "at least one of title, description, properties, icon or cover is required"
            )
        _check_icon_and_cover(self, self.icon, self.cover)

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.title is not None:
            data["title"] = encode_rich_text(self.title)
        if self.description is not None:
            data["description"] = encode_rich_text(self.description)
        if self.properties is not None:
            data["properties"] = encode_database_properties(self.properties)
        if self.icon is not None:
            data["icon"] = self.icon.to_json()
        if self.cover is not None:
            data["cover"] = self.cover.to_json()
        return data


@dataclass(frozen=True)
class DatabaseQuery:
    """Body of ``POST /databases/{id}/query``."""

    filter: Filter | None = None
    sorts: list[DatabaseQuerySort] = field(default_factory=list)
    start_cursor: str | None = None
    page_size: int | None = None

    def validate(self) -> None:
        _check_page_size(self, self.page_size)

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.filter is not None:
            data["filter"] = self.filter.to_json()
        if self.sorts:
            data["sorts"] = [sort.to_json() for sort in self.sorts]
        data.update(_pagination_body(self.start_cursor, self.page_size))
        return data


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AppendBlockChildrenParams:
    """Body of ``PATCH /blocks/{id}/children``.

    ``after`` inserts the new blocks after that sibling instead of at the
    end.
    """

    children: list[Block] = field(default_factory=list)
    after: str | None = None

    def validate(self) -> None:
        if not self.children:
            raise _invalid(self, "children are required")
        if len(self.children) > MAX_PAGE_SIZE:
            raise _invalid(
                self, f"at most {MAX_PAGE_SIZE} children can be appended at once, got {len(self.children)}"
            )

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"children": encode_blocks(self.children)}
        if self.after is not None:
            data["after"] = self.after
        return data


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchOpts:
    """Body of ``POST /search``."""

    query: str | None = None
    sort: SearchSort | None = None
    filter: SearchFilter | None = None
    start_cursor: str | None = None
    page_size: int | None = None

    def validate(self) -> None:
        _check_page_size(self, self.page_size)

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.query:
            data["query"] = self.query
        if self.sort is not None:
            data["sort"] = self.sort.to_json()
        if self.filter is not None:
            data["filter"] = self.filter.to_json()
        data.update(_pagination_body(self.start_cursor, self.page_size))
        return data


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CreateCommentParams:
    """Body of ``POST /comments``.

    Set ``parent_page_id`` to start a new discussion on a page, or
    ``discussion_id`` to reply in an existing thread; not both.
    """

    parent_page_id: str = ""
    discussion_id: str = ""
    rich_text: list[RichText] = field(default_factory=list)

    def validate(self) -> None:
        if not self.parent_page_id and not self.discussion_id:
            raise _invalid(self, "either parent page ID or discussion ID is required")
        if self.parent_page_id and self.discussion_id:
            raise _invalid(self, "parent page ID and discussion ID cannot both be non-empty")
        if not self.rich_text:
            raise _invalid(self, "rich text is required")

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"rich_text": encode_rich_text(self.rich_text)}
        if self.parent_page_id:
            data["parent"] = {"type": "page_id", "page_id": self.parent_page_id}
        else:
            data["discussion_id"] = self.discussion_id
        return data


@dataclass(frozen=True)
class FindCommentsByBlockIDQuery:
    """Query of ``GET /comments``."""

    block_id: str = ""
    start_cursor: str | None = None
    page_size: int | None = None

    def validate(self) -> None:
        if not self.block_id:
            raise _invalid(self, "block ID is required")
        _check_page_size(self, self.page_size)

    def to_query(self) -> dict[str, str]:
        query = {"block_id": self.block_id}
        query.update(
            (key, str(value))
            for key, value in _pagination_body(self.start_cursor, self.page_size).items()
        )
        return query
