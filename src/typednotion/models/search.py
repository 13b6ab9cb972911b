"""Search results.

``POST /search`` returns pages and databases mixed in one array.  Each
element is routed on its ``object`` field; the order of the array is kept.
"""

from __future__ import annotations

from typing import Any, Union

from typednotion.errors import NotionDecodeError

from ._codec import expect_dict
from .pages import Database, Page

SearchResult = Union[Page, Database]


def decode_search_result(data: Any) -> SearchResult:
    data = expect_dict(data, "search result")
    kind = data.get("object")
    if kind == "page":
        return Page.from_json(data)
    if kind == "database":
        return Database.from_json(data)
    raise NotionDecodeError(
        f"unsupported result object {kind!r}",
        context={"kind": "search result", "value": kind},
    )


def decode_search_results(data: Any) -> list[SearchResult]:
    """Decode a search ``results`` array.

    Raises
    ------
    NotionDecodeError
        If any element is neither a page nor a database.
    """
    if not isinstance(data, list):
        raise NotionDecodeError(
            f"expected a JSON array for search results, got {type(data).__name__}",
            context={"kind": "search results"},
        )
    return [decode_search_result(item) for item in data]
