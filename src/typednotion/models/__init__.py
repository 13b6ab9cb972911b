"""typednotion.models -- typed object model and JSON codecs.

This sub-package provides:

* :mod:`.common` -- colors, parents, users, files, icons, dates.
* :mod:`.rich_text` -- rich text runs and mentions.
* :mod:`.properties` -- database schema properties.
* :mod:`.page_properties` -- page property values and property items.
* :mod:`.blocks` -- the block envelope and its payloads.
* :mod:`.pages` -- pages and databases.
* :mod:`.comments` -- comments.
* :mod:`.search` -- the page / database search result union.
* :mod:`.lists` -- the paginated list envelope.
* :mod:`.filters` -- database query filters and sorts.
* :mod:`.params` -- outbound parameter objects.
"""

from __future__ import annotations

from .blocks import (
    Block,
    BlockPayload,
    BlockType,
    CalloutBlock,
    ChildPageBlock,
    CodeBlock,
    ColumnBlock,
    ColumnListBlock,
    EmbedBlock,
    EmptyBlock,
    EquationBlock,
    FileBlock,
    HeadingBlock,
    LinkPreviewBlock,
    LinkToPageBlock,
    SyncedBlock,
    TableBlock,
    TableOfContentsBlock,
    TableRowBlock,
    TemplateBlock,
    TextBlock,
    ToDoBlock,
    UnsupportedBlock,
    decode_blocks,
)
from .comments import Comment
from .common import (
    Annotations,
    Bot,
    BotOwner,
    Color,
    Cover,
    Date,
    File,
    FileExternal,
    FileFile,
    FileType,
    Icon,
    IconType,
    Parent,
    ParentType,
    Person,
    SelectOption,
    User,
    UserType,
)
from .filters import (
    CheckboxCondition,
    CompoundFilter,
    ContainsCondition,
    DatabaseQuerySort,
    DateCondition,
    FilesCondition,
    FormulaCondition,
    NumberCondition,
    PropertyFilter,
    SearchFilter,
    SearchSort,
    SelectCondition,
    SortDirection,
    SortTimestamp,
    TextCondition,
    TimestampFilter,
)
from .lists import PaginatedList
from .page_properties import (
    DatabasePageProperty,
    FormulaResult,
    FormulaResultType,
    PagePropItem,
    PagePropListResponse,
    RollupResult,
    RollupResultType,
    UniqueID,
    decode_page_property_response,
)
from .pages import Database, DatabasePageProperties, Page, TitlePageProperties
from .params import (
    AppendBlockChildrenParams,
    CreateCommentParams,
    CreateDatabaseParams,
    CreatePageParams,
    DatabaseQuery,
    FindCommentsByBlockIDQuery,
    PaginationQuery,
    SearchOpts,
    UpdateDatabaseParams,
    UpdatePageParams,
)
from .properties import (
    DatabaseProperty,
    EmptyMetadata,
    FormulaMetadata,
    NumberMetadata,
    PropertyType,
    RelationMetadata,
    RelationType,
    RollupMetadata,
    SelectMetadata,
    StatusGroup,
    StatusMetadata,
    UniqueIDMetadata,
)
from .rich_text import (
    Equation,
    Link,
    LinkPreview,
    Mention,
    MentionType,
    ObjectReference,
    RichText,
    RichTextType,
    TemplateMention,
    TemplateMentionType,
    Text,
    to_plain_text,
)
from .search import SearchResult, decode_search_results

__all__ = [
    "Annotations",
    "AppendBlockChildrenParams",
    "Block",
    "BlockPayload",
    "BlockType",
    "Bot",
    "BotOwner",
    "CalloutBlock",
    "CheckboxCondition",
    "ChildPageBlock",
    "CodeBlock",
    "Color",
    "ColumnBlock",
    "ColumnListBlock",
    "Comment",
    "CompoundFilter",
    "ContainsCondition",
    "Cover",
    "CreateCommentParams",
    "CreateDatabaseParams",
    "CreatePageParams",
    "Database",
    "DatabasePageProperties",
    "DatabasePageProperty",
    "DatabaseProperty",
    "DatabaseQuery",
    "DatabaseQuerySort",
    "Date",
    "DateCondition",
    "EmbedBlock",
    "EmptyBlock",
    "EmptyMetadata",
    "Equation",
    "EquationBlock",
    "File",
    "FileBlock",
    "FileExternal",
    "FileFile",
    "FileType",
    "FilesCondition",
    "FindCommentsByBlockIDQuery",
    "FormulaCondition",
    "FormulaMetadata",
    "FormulaResult",
    "FormulaResultType",
    "HeadingBlock",
    "Icon",
    "IconType",
    "Link",
    "LinkPreview",
    "LinkPreviewBlock",
    "LinkToPageBlock",
    "Mention",
    "MentionType",
    "NumberCondition",
    "NumberMetadata",
    "ObjectReference",
    "Page",
    "PagePropItem",
    "PagePropListResponse",
    "PaginatedList",
    "PaginationQuery",
    "Parent",
    "ParentType",
    "Person",
    "PropertyFilter",
    "PropertyType",
    "RelationMetadata",
    "RelationType",
    "RichText",
    "RichTextType",
    "RollupMetadata",
    "RollupResult",
    "RollupResultType",
    "SearchFilter",
    "SearchOpts",
    "SearchResult",
    "SearchSort",
    "SelectCondition",
    "SelectMetadata",
    "SelectOption",
    "SortDirection",
    "SortTimestamp",
    "StatusGroup",
    "StatusMetadata",
    "SyncedBlock",
    "TableBlock",
    "TableOfContentsBlock",
    "TableRowBlock",
    "TemplateBlock",
    "TemplateMention",
    "TemplateMentionType",
    "Text",
    "TextBlock",
    "TextCondition",
    "TimestampFilter",
    "TitlePageProperties",
    "ToDoBlock",
    "UniqueID",
    "UniqueIDMetadata",
    "UnsupportedBlock",
    "UpdateDatabaseParams",
    "UpdatePageParams",
    "User",
    "UserType",
    "decode_blocks",
    "decode_page_property_response",
    "decode_search_results",
    "to_plain_text",
]
