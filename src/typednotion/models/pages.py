"""Page and database envelopes.

The shape of ``Page.properties`` depends on the parent: pages under a
workspace or another page only have a title, pages in a database carry
one value per database column.  :meth:`Page.from_json` therefore decodes
``parent`` first and then picks the properties decoder for it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Union

from typednotion.errors import NotionDecodeError

from ._codec import (
    decode_list,
    encode_timestamp,
    expect_dict,
    optional,
    optional_timestamp,
    require,
)
from .common import Cover, Icon, Parent, ParentType, User
from .page_properties import (
    DatabasePageProperty,
    decode_page_properties,
    encode_page_properties,
)
from .properties import (
    DatabaseProperty,
    decode_database_properties,
    encode_database_properties,
)
from .rich_text import RichText, decode_rich_text, encode_rich_text, to_plain_text


@dataclass(frozen=True)
class TitlePageProperties:
    """Properties of a page whose parent is a workspace or a page."""

    title: list[RichText] = field(default_factory=list)

    @property
    def plain_title(self) -> str:
        return to_plain_text(self.title)

    @classmethod
    def from_json(cls, data: Any) -> TitlePageProperties:
        data = expect_dict(data, "page properties")
        raw = data.get("title")
        if raw is None:
            return cls()
        # Responses wrap the value in a property object; requests may not.
        if isinstance(raw, dict):
            raw = raw.get("title")
        return cls(decode_rich_text(raw))

    def to_json(self) -> dict[str, Any]:
        return {"title": {"title": encode_rich_text(self.title)}}


@dataclass(frozen=True)
class DatabasePageProperties:
    """Properties of a page in a database, keyed by column name."""

    properties: dict[str, DatabasePageProperty] = field(default_factory=dict)

    def __getitem__(self, name: str) -> DatabasePageProperty:
        return self.properties[name]

    def get(self, name: str) -> DatabasePageProperty | None:
        return self.properties.get(name)

    @classmethod
    def from_json(cls, data: Any) -> DatabasePageProperties:
        return cls(decode_page_properties(data))

    def to_json(self) -> dict[str, Any]:
        return encode_page_properties(self.properties)


PageProperties = Union[TitlePageProperties, DatabasePageProperties]


def decode_properties_for_parent(parent: Parent, data: Any) -> PageProperties:
    """Decode a page ``properties`` object according to the parent kind.

    Raises
    ------
    NotionDecodeError
        If the parent is neither a workspace, a page nor a database.
    """
    if parent.type in (ParentType.WORKSPACE, ParentType.PAGE):
        return TitlePageProperties.from_json(data)
    if parent.type is ParentType.DATABASE:
        return DatabasePageProperties.from_json(data)
    raise NotionDecodeError(
        f"unknown page parent type {parent.type.value!r}",
        context={"kind": "page", "value": parent.type.value},
    )


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Page:
    """A Notion page.

    See: https://developers.notion.com/reference/page
    """

    id: str
    parent: Parent
    properties: PageProperties
    created_time: datetime | None = None
    last_edited_time: datetime | None = None
    created_by: User | None = None
    last_edited_by: User | None = None
    archived: bool = False
    url: str | None = None
    icon: Icon | None = None
    cover: Cover | None = None

    @classmethod
    def from_json(cls, data: Any) -> Page:
        data = expect_dict(data, "page")
        parent = Parent.from_json(require(data, "parent", "page"))
        properties = decode_properties_for_parent(parent, require(data, "properties", "page"))
        return cls(
            id=require(data, "id", "page"),
            parent=parent,
            properties=properties,
            created_time=optional_timestamp(data, "created_time"),
            last_edited_time=optional_timestamp(data, "last_edited_time"),
            created_by=optional(data.get("created_by"), User.from_json),
            last_edited_by=optional(data.get("last_edited_by"), User.from_json),
            archived=bool(data.get("archived", False)),
            url=data.get("url"),
            icon=optional(data.get("icon"), Icon.from_json),
            cover=optional(data.get("cover"), Cover.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "object": "page",
            "id": self.id,
            "parent": self.parent.to_json(),
            "properties": self.properties.to_json(),
            "archived": self.archived,
        }
        for key in ("created_time", "last_edited_time"):
            value = getattr(self, key)
            if value is not None:
                data[key] = encode_timestamp(value)
        for key in ("created_by", "last_edited_by", "icon", "cover"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value.to_json()
        if self.url is not None:
            data["url"] = self.url
        return data


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Database:
    """A Notion database and its schema.

    See: https://developers.notion.com/reference/database
    """

    id: str
    parent: Parent | None = None
    title: list[RichText] = field(default_factory=list)
    description: list[RichText] = field(default_factory=list)
    properties: dict[str, DatabaseProperty] = field(default_factory=dict)
    created_time: datetime | None = None
    last_edited_time: datetime | None = None
    url: str | None = None
    icon: Icon | None = None
    cover: Cover | None = None
    is_inline: bool = False
    archived: bool = False

    @property
    def plain_title(self) -> str:
        return to_plain_text(self.title)

    @classmethod
    def from_json(cls, data: Any) -> Database:
        data = expect_dict(data, "database")
        return cls(
            id=require(data, "id", "database"),
            parent=optional(data.get("parent"), Parent.from_json),
            title=decode_rich_text(data.get("title")),
            description=decode_rich_text(data.get("description")),
            properties=decode_database_properties(data.get("properties") or {}),
            created_time=optional_timestamp(data, "created_time"),
            last_edited_time=optional_timestamp(data, "last_edited_time"),
            url=data.get("url"),
            icon=optional(data.get("icon"), Icon.from_json),
            cover=optional(data.get("cover"), Cover.from_json),
            is_inline=bool(data.get("is_inline", False)),
            archived=bool(data.get("archived", False)),
        )

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "object": "database",
            "id": self.id,
            "title": encode_rich_text(self.title),
            "description": encode_rich_text(self.description),
            "properties": encode_database_properties(dict(self.properties)),
            "is_inline": self.is_inline,
            "archived": self.archived,
        }
        if self.parent is not None:
            data["parent"] = self.parent.to_json()
        for key in ("created_time", "last_edited_time"):
            value = getattr(self, key)
            if value is not None:
                data[key] = encode_timestamp(value)
        for key in ("icon", "cover"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value.to_json()
        if self.url is not None:
            data["url"] = self.url
        return data


def decode_pages(data: Any) -> list[Page]:
    return decode_list(data, Page.from_json, "pages")
