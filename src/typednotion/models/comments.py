"""Comment objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ._codec import encode_timestamp, expect_dict, optional, optional_timestamp, require
from .common import Parent, User
from .rich_text import RichText, decode_rich_text, encode_rich_text, to_plain_text


@dataclass(frozen=True)
class Comment:
    """A comment on a page or in a block discussion thread.

    See: https://developers.notion.com/reference/comment-object
    """

    id: str
    discussion_id: str
    parent: Parent | None = None
    rich_text: list[RichText] = field(default_factory=list)
    created_time: datetime | None = None
    last_edited_time: datetime | None = None
    created_by: User | None = None

    @property
    def plain_text(self) -> str:
        return to_plain_text(self.rich_text)

    @classmethod
    def from_json(cls, data: Any) -> Comment:
        data = expect_dict(data, "comment")
        return cls(
            id=require(data, "id", "comment"),
            discussion_id=require(data, "discussion_id", "comment"),
            parent=optional(data.get("parent"), Parent.from_json),
            rich_text=decode_rich_text(data.get("rich_text")),
            created_time=optional_timestamp(data, "created_time"),
            last_edited_time=optional_timestamp(data, "last_edited_time"),
            created_by=optional(data.get("created_by"), User.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "object": "comment",
            "id": self.id,
            "discussion_id": self.discussion_id,
            "rich_text": encode_rich_text(self.rich_text),
        }
        if self.parent is not None:
            data["parent"] = self.parent.to_json()
        if self.created_time is not None:
            data["created_time"] = encode_timestamp(self.created_time)
        if self.last_edited_time is not None:
            data["last_edited_time"] = encode_timestamp(self.last_edited_time)
        if self.created_by is not None:
            data["created_by"] = self.created_by.to_json()
        return data
