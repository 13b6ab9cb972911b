"""typednotion -- typed Python client for the Notion API.

Public re-exports
-----------------

* **Clients:** :class:`NotionClient`, :class:`AsyncNotionClient`
* **Configuration:** :class:`NotionConfig`
* **Errors:** Every :class:`NotionError` subclass and :class:`ErrorCode`
* **Dates:** :class:`DateTime`
* **Models:** The most used object model types; everything else lives in
  :mod:`typednotion.models`.

Usage::

    from typednotion import NotionClient

    client = NotionClient(token="secret_xxx")
    page = client.find_page_by_id("<page_id>")
    print(page.properties)
"""

from __future__ import annotations

from typednotion._version import __version__
from typednotion.async_client import AsyncNotionClient

# ── Clients ────────────────────────────────────────────────────────────
from typednotion.client import NotionClient

# ── Configuration ───────────────────────────────────────────────────────
from typednotion.config import NotionConfig

# ── Dates ───────────────────────────────────────────────────────────────
from typednotion.dates import DateTime

# ── Errors ──────────────────────────────────────────────────────────────
from typednotion.errors import (
    APIError,
    ErrorCode,
    NotionConflictError,
    NotionDecodeError,
    NotionError,
    NotionInternalServerError,
    NotionInvalidJSONError,
    NotionInvalidParamsError,
    NotionInvalidRequestError,
    NotionInvalidRequestURLError,
    NotionNetworkError,
    NotionObjectNotFoundError,
    NotionParseError,
    NotionRateLimitedError,
    NotionRestrictedResourceError,
    NotionServiceUnavailableError,
    NotionUnauthorizedError,
    NotionUnknownAPIError,
    NotionValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from typednotion.models import (
    Block,
    BlockType,
    Comment,
    CreateCommentParams,
    CreateDatabaseParams,
    CreatePageParams,
    Database,
    DatabasePageProperty,
    DatabaseProperty,
    DatabaseQuery,
    FindCommentsByBlockIDQuery,
    Page,
    PaginatedList,
    PaginationQuery,
    Parent,
    ParentType,
    PropertyType,
    RichText,
    SearchOpts,
    UpdateDatabaseParams,
    UpdatePageParams,
    User,
)

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    "__version__",
    # Clients
    "NotionClient",
    "AsyncNotionClient",
    # Configuration
    "NotionConfig",
    # Dates
    "DateTime",
    # Error base + code enum
    "NotionError",
    "ErrorCode",
    # Local errors
    "NotionInvalidParamsError",
    "NotionDecodeError",
    "NotionParseError",
    "NotionNetworkError",
    # API errors
    "APIError",
    "NotionInvalidJSONError",
    "NotionInvalidRequestURLError",
    "NotionInvalidRequestError",
    "NotionValidationError",
    "NotionUnauthorizedError",
    "NotionRestrictedResourceError",
    "NotionObjectNotFoundError",
    "NotionConflictError",
    "NotionRateLimitedError",
    "NotionInternalServerError",
    "NotionServiceUnavailableError",
    "NotionUnknownAPIError",
    # Models
    "Block",
    "BlockType",
    "Comment",
    "Database",
    "DatabasePageProperty",
    "DatabaseProperty",
    "Page",
    "PaginatedList",
    "Parent",
    "ParentType",
    "PropertyType",
    "RichText",
    "User",
    # Parameters
    "CreateCommentParams",
    "CreateDatabaseParams",
    "CreatePageParams",
    "DatabaseQuery",
    "FindCommentsByBlockIDQuery",
    "PaginationQuery",
    "SearchOpts",
    "UpdateDatabaseParams",
    "UpdatePageParams",
]
