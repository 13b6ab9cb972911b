"""typednotion.notion_api -- Notion API transport and endpoint wrappers.

This sub-package provides:

* :mod:`.transport` -- HTTP transport with auth headers and error mapping.
* :mod:`.pages` -- Page API wrappers.
* :mod:`.databases` -- Database API wrappers.
* :mod:`.blocks` -- Block API wrappers.
* :mod:`.users` -- User API wrappers.
* :mod:`.search` -- Search API wrappers.
* :mod:`.comments` -- Comment API wrappers.
"""

from __future__ import annotations

from .blocks import AsyncBlockAPI, BlockAPI
from .comments import AsyncCommentAPI, CommentAPI
from .databases import AsyncDatabaseAPI, DatabaseAPI
from .pages import AsyncPageAPI, PageAPI
from .search import AsyncSearchAPI, SearchAPI
from .transport import AsyncNotionTransport, NotionTransport, build_headers
from .users import AsyncUserAPI, UserAPI

__all__ = [
    "AsyncBlockAPI",
    "AsyncCommentAPI",
    "AsyncDatabaseAPI",
    "AsyncNotionTransport",
    "AsyncPageAPI",
    "AsyncSearchAPI",
    "AsyncUserAPI",
    "BlockAPI",
    "CommentAPI",
    "DatabaseAPI",
    "NotionTransport",
    "PageAPI",
    "SearchAPI",
    "UserAPI",
    "build_headers",
]
