"""Block objects.

A :class:`Block` is an envelope (id, timestamps, ``has_children``) around
one payload selected by its ``type``.  Payload classes are shared between
block types with the same wire shape, e.g. :class:`TextBlock` serves
paragraphs, list items, toggles and quotes; :class:`FileBlock` serves
image, video, file, pdf and audio blocks.

Payloads that can own children (``children`` inside the payload, as used
when appending blocks) decode them recursively, so a tree of any depth
round-trips.  Block types this SDK does not know decode to an
:class:`UnsupportedBlock` payload that keeps the raw tag and body, and
encode back to the same shape.

See: https://developers.notion.com/reference/block
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union

from typednotion.errors import NotionDecodeError, NotionInvalidParamsError

from ._codec import (
    coerce_enum,
    decode_list,
    encode_timestamp,
    expect_dict,
    optional,
    optional_timestamp,
    require,
)
from .common import Color, File, Icon, Parent, decode_color
from .rich_text import RichText, decode_rich_text, encode_rich_text


class BlockType(str, Enum):
    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    TOGGLE = "toggle"
    QUOTE = "quote"
    CALLOUT = "callout"
    CODE = "code"
    CHILD_PAGE = "child_page"
    CHILD_DATABASE = "child_database"
    EMBED = "embed"
    BOOKMARK = "bookmark"
    IMAGE = "image"
    VIDEO = "video"
    FILE = "file"
    PDF = "pdf"
    AUDIO = "audio"
    EQUATION = "equation"
    DIVIDER = "divider"
    TABLE_OF_CONTENTS = "table_of_contents"
    BREADCRUMB = "breadcrumb"
    COLUMN_LIST = "column_list"
    COLUMN = "column"
    LINK_PREVIEW = "link_preview"
    LINK_TO_PAGE = "link_to_page"
    SYNCED_BLOCK = "synced_block"
    TEMPLATE = "template"
    TABLE = "table"
    TABLE_ROW = "table_row"
    UNSUPPORTED = "unsupported"


def _decode_children(data: dict[str, Any]) -> list[Block]:
    return decode_list(data.get("children"), Block.from_json, "block children")


def _put_children(data: dict[str, Any], children: list[Block]) -> dict[str, Any]:
    if children:
        data["children"] = [child.to_json() for child in children]
    return data


# Targets a ``link_to_page`` block can point at.
LINK_TARGETS = ("page_id", "database_id", "comment_id")


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextBlock:
    """Paragraph, bulleted / numbered list item, toggle and quote."""

    rich_text: list[RichText] = field(default_factory=list)
    color: Color = Color.DEFAULT
    children: list[Block] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TextBlock:
        return cls(
            rich_text=decode_rich_text(data.get("rich_text")),
            color=decode_color(data.get("color")),
            children=_decode_children(data),
        )

    def to_json(self) -> dict[str, Any]:
        data = {"rich_text": encode_rich_text(self.rich_text), "color": self.color.value}
        return _put_children(data, self.children)


@dataclass(frozen=True)
class HeadingBlock:
    rich_text: list[RichText] = field(default_factory=list)
    color: Color = Color.DEFAULT
    is_toggleable: bool = False
    children: list[Block] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> HeadingBlock:
        return cls(
            rich_text=decode_rich_text(data.get("rich_text")),
            color=decode_color(data.get("color")),
            is_toggleable=bool(data.get("is_toggleable", False)),
            children=_decode_children(data),
        )

    def to_json(self) -> dict[str, Any]:
        data = {
            "rich_text": encode_rich_text(self.rich_text),
            "color": self.color.value,
            "is_toggleable": self.is_toggleable,
        }
        return _put_children(data, self.children)


@dataclass(frozen=True)
class ToDoBlock:
    rich_text: list[RichText] = field(default_factory=list)
    checked: bool = False
    color: Color = Color.DEFAULT
    children: list[Block] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ToDoBlock:
        return cls(
            rich_text=decode_rich_text(data.get("rich_text")),
            checked=bool(data.get("checked", False)),
            color=decode_color(data.get("color")),
            children=_decode_children(data),
        )

    def to_json(self) -> dict[str, Any]:
        data = {
            "rich_text": encode_rich_text(self.rich_text),
            "checked": self.checked,
            "color": self.color.value,
        }
        return _put_children(data, self.children)


@dataclass(frozen=True)
class CalloutBlock:
    rich_text: list[RichText] = field(default_factory=list)
    icon: Icon | None = None
    color: Color = Color.DEFAULT
    children: list[Block] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> CalloutBlock:
        return cls(
            rich_text=decode_rich_text(data.get("rich_text")),
            icon=optional(data.get("icon"), Icon.from_json),
            color=decode_color(data.get("color")),
            children=_decode_children(data),
        )

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"rich_text": encode_rich_text(self.rich_text), "color": self.color.value}
        if self.icon is not None:
            data["icon"] = self.icon.to_json()
        return _put_children(data, self.children)


@dataclass(frozen=True)
class CodeBlock:
    rich_text: list[RichText] = field(default_factory=list)
    language: str = "plain text"
    caption: list[RichText] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> CodeBlock:
        return cls(
            rich_text=decode_rich_text(data.get("rich_text")),
            language=data.get("language") or "plain text",
            caption=decode_rich_text(data.get("caption")),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "rich_text": encode_rich_text(self.rich_text),
            "language": self.language,
            "caption": encode_rich_text(self.caption),
        }


@dataclass(frozen=True)
class ChildPageBlock:
    """A child page or child database; only the title is exposed."""

    title: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ChildPageBlock:
        return cls(require(data, "title", "child block"))

    def to_json(self) -> dict[str, Any]:
        return {"title": self.title}


@dataclass(frozen=True)
class EmbedBlock:
    """Embed or bookmark."""

    url: str
    caption: list[RichText] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> EmbedBlock:
        return cls(
            url=require(data, "url", "embed block"),
            caption=decode_rich_text(data.get("caption")),
        )

    def to_json(self) -> dict[str, Any]:
        return {"url": self.url, "caption": encode_rich_text(self.caption)}


@dataclass(frozen=True)
class FileBlock:
    """Image, video, file, pdf or audio block."""

    file: File
    caption: list[RichText] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> FileBlock:
        return cls(
            file=File.from_json(data),
            caption=decode_rich_text(data.get("caption")),
        )

    def to_json(self) -> dict[str, Any]:
        data = self.file.to_json()
        data["caption"] = encode_rich_text(self.caption)
        return data


@dataclass(frozen=True)
class EquationBlock:
    expression: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> EquationBlock:
        return cls(require(data, "expression", "equation block"))

    def to_json(self) -> dict[str, Any]:
        return {"expression": self.expression}


@dataclass(frozen=True)
class EmptyBlock:
    """Divider and breadcrumb: no content."""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> EmptyBlock:
        return cls()

    def to_json(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class TableOfContentsBlock:
    color: Color = Color.DEFAULT

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TableOfContentsBlock:
        return cls(decode_color(data.get("color")))

    def to_json(self) -> dict[str, Any]:
        return {"color": self.color.value}


@dataclass(frozen=True)
class ColumnListBlock:
    """A row of columns.  Every child must be a ``column`` block."""

    children: list[Block] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_child_types(self.children, BlockType.COLUMN, "column list")

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ColumnListBlock:
        return cls(_decode_children(data))

    def to_json(self) -> dict[str, Any]:
        return _put_children({}, self.children)


@dataclass(frozen=True)
class ColumnBlock:
    children: list[Block] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ColumnBlock:
        return cls(_decode_children(data))

    def to_json(self) -> dict[str, Any]:
        return _put_children({}, self.children)


@dataclass(frozen=True)
class LinkPreviewBlock:
    url: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> LinkPreviewBlock:
        return cls(require(data, "url", "link preview block"))

    def to_json(self) -> dict[str, Any]:
        return {"url": self.url}


@dataclass(frozen=True)
class LinkToPageBlock:
    """Link to a page, a database or a comment.  Exactly one ID is set."""

    page_id: str | None = None
    database_id: str | None = None
    comment_id: str | None = None

    def __post_init__(self) -> None:
        targets = [self.page_id, self.database_id, self.comment_id]
        if sum(target is not None for target in targets) != 1:
            raise NotionInvalidParamsError(
                "link to page requires exactly one of page_id, database_id or comment_id",
                context={"params": "link to page block"},
            )

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> LinkToPageBlock:
        link_type = require(data, "type", "link to page block")
        if link_type not in LINK_TARGETS:
            raise NotionDecodeError(
                f"unknown link to page type {link_type!r}",
                context={"kind": "link to page block"},
            )
        return cls(**{link_type: require(data, link_type, "link to page block")})

    def to_json(self) -> dict[str, Any]:
        if self.page_id is not None:
            return {"type": "page_id", "page_id": self.page_id}
        if self.database_id is not None:
            return {"type": "database_id", "database_id": self.database_id}
        return {"type": "comment_id", "comment_id": self.comment_id}


@dataclass(frozen=True)
class SyncedBlock:
    """A synced block.  ``synced_from`` is ``None`` for the original block
    and holds the source block ID for a duplicate."""

    synced_from: str | None = None
    children: list[Block] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SyncedBlock:
        source = data.get("synced_from")
        synced_from = None
        if source is not None:
            synced_from = require(expect_dict(source, "synced from"), "block_id", "synced from")
        return cls(synced_from=synced_from, children=_decode_children(data))

    def to_json(self) -> dict[str, Any]:
        source = None
        if self.synced_from is not None:
            source = {"type": "block_id", "block_id": self.synced_from}
        return _put_children({"synced_from": source}, self.children)


@dataclass(frozen=True)
class TemplateBlock:
    rich_text: list[RichText] = field(default_factory=list)
    children: list[Block] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TemplateBlock:
        return cls(
            rich_text=decode_rich_text(data.get("rich_text")),
            children=_decode_children(data),
        )

    def to_json(self) -> dict[str, Any]:
        return _put_children({"rich_text": encode_rich_text(self.rich_text)}, self.children)


@dataclass(frozen=True)
class TableRowBlock:
    """One row of a table: a list of cells, each a rich text array."""

    cells: list[list[RichText]] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TableRowBlock:
        cells = data.get("cells") or []
        if not isinstance(cells, list):
            cells = []
        return cls([decode_rich_text(cell) for cell in cells])

    def to_json(self) -> dict[str, Any]:
        return {"cells": [encode_rich_text(cell) for cell in self.cells]}


@dataclass(frozen=True)
class TableBlock:
    """A table.  Rows are ``table_row`` children with ``table_width`` cells
    each."""

    table_width: int
    has_column_header: bool = False
    has_row_header: bool = False
    children: list[Block] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_child_types(self.children, BlockType.TABLE_ROW, "table")
        for row in self.children:
            if len(row.payload.cells) != self.table_width:
                raise NotionInvalidParamsError(
                    f"table row has {len(row.payload.cells)} cells, expected {self.table_width}",
                    context={"params": "table", "table_width": self.table_width},
                )

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TableBlock:
        return cls(
            table_width=require(data, "table_width", "table block"),
            has_column_header=bool(data.get("has_column_header", False)),
            has_row_header=bool(data.get("has_row_header", False)),
            children=_decode_children(data),
        )

    def to_json(self) -> dict[str, Any]:
        data = {
            "table_width": self.table_width,
            "has_column_header": self.has_column_header,
            "has_row_header": self.has_row_header,
        }
        return _put_children(data, self.children)


@dataclass(frozen=True)
class UnsupportedBlock:
    """Payload of a block type this SDK does not model.

    ``raw_type`` is the type tag as sent by Notion and ``raw`` its payload,
    so the block can be passed through unchanged.
    """

    raw_type: str = BlockType.UNSUPPORTED.value
    raw: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        return dict(self.raw)


BlockPayload = Union[
    TextBlock,
    HeadingBlock,
    ToDoBlock,
    CalloutBlock,
    CodeBlock,
    ChildPageBlock,
    EmbedBlock,
    FileBlock,
    EquationBlock,
    EmptyBlock,
    TableOfContentsBlock,
    ColumnListBlock,
    ColumnBlock,
    LinkPreviewBlock,
    LinkToPageBlock,
    SyncedBlock,
    TemplateBlock,
    TableBlock,
    TableRowBlock,
    UnsupportedBlock,
]

_PAYLOAD_CLASSES: dict[BlockType, type] = {
    BlockType.PARAGRAPH: TextBlock,
    BlockType.HEADING_1: HeadingBlock,
    BlockType.HEADING_2: HeadingBlock,
    BlockType.HEADING_3: HeadingBlock,
    BlockType.BULLETED_LIST_ITEM: TextBlock,
    BlockType.NUMBERED_LIST_ITEM: TextBlock,
    BlockType.TO_DO: ToDoBlock,
    BlockType.TOGGLE: TextBlock,
    BlockType.QUOTE: TextBlock,
    BlockType.CALLOUT: CalloutBlock,
    BlockType.CODE: CodeBlock,
    BlockType.CHILD_PAGE: ChildPageBlock,
    BlockType.CHILD_DATABASE: ChildPageBlock,
    BlockType.EMBED: EmbedBlock,
    BlockType.BOOKMARK: EmbedBlock,
    BlockType.IMAGE: FileBlock,
    BlockType.VIDEO: FileBlock,
    BlockType.FILE: FileBlock,
    BlockType.PDF: FileBlock,
    BlockType.AUDIO: FileBlock,
    BlockType.EQUATION: EquationBlock,
    BlockType.DIVIDER: EmptyBlock,
    BlockType.TABLE_OF_CONTENTS: TableOfContentsBlock,
    BlockType.BREADCRUMB: EmptyBlock,
    BlockType.COLUMN_LIST: ColumnListBlock,
    BlockType.COLUMN: ColumnBlock,
    BlockType.LINK_PREVIEW: LinkPreviewBlock,
    BlockType.LINK_TO_PAGE: LinkToPageBlock,
    BlockType.SYNCED_BLOCK: SyncedBlock,
    BlockType.TEMPLATE: TemplateBlock,
    BlockType.TABLE: TableBlock,
    BlockType.TABLE_ROW: TableRowBlock,
    BlockType.UNSUPPORTED: UnsupportedBlock,
}


def _check_child_types(children: list[Block], expected: BlockType, kind: str) -> None:
    for child in children:
        if child.type is not expected:
            raise NotionInvalidParamsError(
                f"{kind} children must be {expected.value!r} blocks, got {child.type.value!r}",
                context={"params": kind},
            )


# ---------------------------------------------------------------------------
# Block envelope
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Block:
    """A block and its payload.

    Build outbound blocks with the classmethod constructors, e.g.
    ``Block.paragraph("Hello")`` or ``Block.to_do("Ship it", checked=True)``.
    ``object`` is always written as ``"block"``.
    """

    type: BlockType
    payload: BlockPayload
    id: str | None = None
    parent: Parent | None = None
    created_time: datetime | None = None
    last_edited_time: datetime | None = None
    has_children: bool = False
    archived: bool = False
    object: str = "block"

    def __post_init__(self) -> None:
        block_type = coerce_enum(self, "type", BlockType, "block type")
        expected = _PAYLOAD_CLASSES[block_type]
        if not isinstance(self.payload, expected):
            raise NotionInvalidParamsError(
                f"block type {block_type.value!r} requires {expected.__name__}, "
                f"got {type(self.payload).__name__}",
                context={"params": "block", "type": block_type.value},
            )

    @property
    def children(self) -> list[Block]:
        """Inline children of the payload (empty when it has none)."""
        return list(getattr(self.payload, "children", []))

    # -- constructors -------------------------------------------------------

    @classmethod
    def paragraph(cls, text: list[RichText] | str, children: list[Block] | None = None) -> Block:
        return cls(BlockType.PARAGRAPH, TextBlock(_runs(text), children=list(children or [])))

    @classmethod
    def heading(cls, level: int, text: list[RichText] | str) -> Block:
        if level not in (1, 2, 3):
            raise NotionInvalidParamsError(
                f"heading level must be 1, 2 or 3, got {level}",
                context={"params": "heading block"},
            )
        return cls(BlockType(f"heading_{level}"), HeadingBlock(_runs(text)))

    @classmethod
    def bulleted_list_item(cls, text: list[RichText] | str, children: list[Block] | None = None) -> Block:
        return cls(BlockType.BULLETED_LIST_ITEM, TextBlock(_runs(text), children=list(children or [])))

    @classmethod
    def numbered_list_item(cls, text: list[RichText] | str, children: list[Block] | None = None) -> Block:
        return cls(BlockType.NUMBERED_LIST_ITEM, TextBlock(_runs(text), children=list(children or [])))

    @classmethod
    def to_do(cls, text: list[RichText] | str, checked: bool = False) -> Block:
        return cls(BlockType.TO_DO, ToDoBlock(_runs(text), checked=checked))

    @classmethod
    def toggle(cls, text: list[RichText] | str, children: list[Block] | None = None) -> Block:
        return cls(BlockType.TOGGLE, TextBlock(_runs(text), children=list(children or [])))

    @classmethod
    def quote(cls, text: list[RichText] | str) -> Block:
        return cls(BlockType.QUOTE, TextBlock(_runs(text)))

    @classmethod
    def code(cls, source: str, language: str = "plain text") -> Block:
        return cls(BlockType.CODE, CodeBlock(_runs(source), language=language))

    @classmethod
    def divider(cls) -> Block:
        return cls(BlockType.DIVIDER, EmptyBlock())

    @classmethod
    def table(cls, rows: list[list[list[RichText] | str]], has_column_header: bool = False) -> Block:
        """Build a table from a grid of cells (strings or rich text arrays)."""
        width = len(rows[0]) if rows else 0
        row_blocks = [
            cls(BlockType.TABLE_ROW, TableRowBlock([_runs(cell) for cell in row]))
            for row in rows
        ]
        return cls(
            BlockType.TABLE,
            TableBlock(width, has_column_header=has_column_header, children=row_blocks),
        )

    # -- codec --------------------------------------------------------------

    @classmethod
    def from_json(cls, data: Any) -> Block:
        data = expect_dict(data, "block")
        raw_type = require(data, "type", "block")
        if not isinstance(raw_type, str):
            raise NotionDecodeError(
                f"block type must be a string, got {type(raw_type).__name__}",
                context={"kind": "block"},
            )
        payload: BlockPayload
        try:
            block_type = BlockType(raw_type)
        except ValueError:
            block_type = BlockType.UNSUPPORTED
        raw_payload = data.get(raw_type)
        if (
            block_type is BlockType.LINK_TO_PAGE
            and isinstance(raw_payload, dict)
            and raw_payload.get("type") not in LINK_TARGETS
        ):
            block_type = BlockType.UNSUPPORTED
        try:
            if block_type is BlockType.UNSUPPORTED:
                payload = UnsupportedBlock(
                    raw_type=raw_type,
                    raw=raw_payload if isinstance(raw_payload, dict) else {},
                )
            else:
                raw_payload = expect_dict(require(data, raw_type, "block"), raw_type)
                payload = _PAYLOAD_CLASSES[block_type].from_json(raw_payload)
            return cls(
                type=block_type,
                payload=payload,
                id=data.get("id"),
                parent=optional(data.get("parent"), Parent.from_json),
                created_time=optional_timestamp(data, "created_time"),
                last_edited_time=optional_timestamp(data, "last_edited_time"),
                has_children=bool(data.get("has_children", False)),
                archived=bool(data.get("archived", False)),
                object=data.get("object", "block"),
            )
        except NotionInvalidParamsError as exc:
            raise NotionDecodeError(
                exc.message,
                context={"kind": "block", "type": raw_type},
                cause=exc,
            ) from exc

    def to_json(self) -> dict[str, Any]:
        key = self.type.value
        if isinstance(self.payload, UnsupportedBlock):
            key = self.payload.raw_type
        data: dict[str, Any] = {"object": "block", "type": key, key: self.payload.to_json()}
        if self.id is not None:
            data["id"] = self.id
        if self.created_time is not None:
            data["created_time"] = encode_timestamp(self.created_time)
        if self.last_edited_time is not None:
            data["last_edited_time"] = encode_timestamp(self.last_edited_time)
        if self.has_children:
            data["has_children"] = True
        return data


def _runs(text: list[RichText] | str) -> list[RichText]:
    return [RichText.plain(text)] if isinstance(text, str) else list(text)


def decode_blocks(data: Any) -> list[Block]:
    return decode_list(data, Block.from_json, "blocks")


def encode_blocks(blocks: list[Block]) -> list[dict[str, Any]]:
    return [block.to_json() for block in blocks]
