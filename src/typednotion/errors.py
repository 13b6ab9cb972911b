"""Full error hierarchy for the typednotion SDK.

Every public error class inherits from NotionError. Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Error codes are defined as a :class:`str` enum so that they serialise
naturally to JSON and can be matched with simple ``==`` comparisons.
Callers branch on ``err.code`` (or on the subclass) instead of matching
message strings.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the SDK can raise."""

    # Local errors
    INVALID_PARAMS = "INVALID_PARAMS"
    DECODE_ERROR = "DECODE_ERROR"
    DATETIME_PARSE_ERROR = "DATETIME_PARSE_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"

    # API errors, one per documented Notion error code
    INVALID_JSON = "INVALID_JSON"
    INVALID_REQUEST_URL = "INVALID_REQUEST_URL"
    INVALID_REQUEST = "INVALID_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    RESTRICTED_RESOURCE = "RESTRICTED_RESOURCE"
    OBJECT_NOT_FOUND = "OBJECT_NOT_FOUND"
    CONFLICT = "CONFLICT"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    UNKNOWN_API_ERROR = "UNKNOWN_API_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class NotionError(Exception):
    """Base exception for all typednotion errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Local errors
# ---------------------------------------------------------------------------

class NotionInvalidParamsError(NotionError):
    """Caller-supplied parameters violate a required-field or
    mutual-exclusion rule.  Raised before any network call.

    Context keys: ``params`` (class name of the parameter object).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PARAMS,
            message=message,
            context=context,
            cause=cause,
        )


class NotionDecodeError(NotionError):
    """A JSON payload does not have the expected shape, or carries an
    unrecognized discriminant where no fallback variant exists.

    Context keys: ``kind`` (the object being decoded), ``value``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        code: str = ErrorCode.DECODE_ERROR,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class NotionParseError(NotionDecodeError):
    """A date or date-time string could not be parsed.

    Context keys: ``value``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            context=context,
            cause=cause,
            code=ErrorCode.DATETIME_PARSE_ERROR,
        )


class NotionNetworkError(NotionError):
    """A transport-level failure occurred (timeout, DNS, connection reset).

    Context keys: ``method``, ``path``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NETWORK_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# API errors
# ---------------------------------------------------------------------------

class APIError(NotionError):
    """Notion API answered with a non-2xx status and an error body.

    The concrete subclass (and ``code``) is selected from the ``code``
    field of the body via :func:`api_error_from_body`.

    Attributes
    ----------
    status:
        HTTP status reported in the body (falls back to the response status).
    api_code:
        The raw Notion error code string, e.g. ``"validation_error"``.
    api_message:
        The raw Notion error message.
    prefix:
        Optional operation description prepended to ``str(err)``.
    """

    error_code: str = ErrorCode.UNKNOWN_API_ERROR

    def __init__(
        self,
        status: int,
        api_code: str,
        api_message: str,
        prefix: str = "",
        context: dict[str, Any] | None = None,
    ) -> None:
        self.status = status
        self.api_code = api_code
        self.api_message = api_message
        self.prefix = prefix
        message = f"{api_message} (code: {api_code}, status: {status})"
        if prefix:
            message = f"{prefix}: {message}"
        super().__init__(
            code=self.error_code,
            message=message,
            context={"status_code": status, "notion_code": api_code, **(context or {})},
        )


class NotionInvalidJSONError(APIError):
    """The request body could not be decoded as JSON (400)."""

    error_code = ErrorCode.INVALID_JSON


class NotionInvalidRequestURLError(APIError):
    """The request URL is not valid (400)."""

    error_code = ErrorCode.INVALID_REQUEST_URL


class NotionInvalidRequestError(APIError):
    """The request is not supported (400)."""

    error_code = ErrorCode.INVALID_REQUEST


class NotionValidationError(APIError):
    """The request body does not match the schema for the expected
    parameters (400)."""

    error_code = ErrorCode.VALIDATION_ERROR


class NotionUnauthorizedError(APIError):
    """The bearer token is not valid (401)."""

    error_code = ErrorCode.UNAUTHORIZED


class NotionRestrictedResourceError(APIError):
    """The integration lacks permission for this operation (403)."""

    error_code = ErrorCode.RESTRICTED_RESOURCE


class NotionObjectNotFoundError(APIError):
    """The resource does not exist or is not shared with the integration (404)."""

    error_code = ErrorCode.OBJECT_NOT_FOUND


class NotionConflictError(APIError):
    """The transaction could not be completed, potentially due to a data
    collision (409)."""

    error_code = ErrorCode.CONFLICT


class NotionRateLimitedError(APIError):
    """The request exceeds the number of requests allowed (429)."""

    error_code = ErrorCode.RATE_LIMITED


class NotionInternalServerError(APIError):
    """An unexpected error occurred on the Notion side (500)."""

    error_code = ErrorCode.INTERNAL_SERVER_ERROR


class NotionServiceUnavailableError(APIError):
    """Notion is unavailable (503)."""

    error_code = ErrorCode.SERVICE_UNAVAILABLE


class NotionUnknownAPIError(APIError):
    """The error body carried a code this SDK does not know about."""

    error_code = ErrorCode.UNKNOWN_API_ERROR


# See: https://developers.notion.com/reference/errors
API_ERROR_CLASSES: dict[str, type[APIError]] = {
    "invalid_json": NotionInvalidJSONError,
    "invalid_request_url": NotionInvalidRequestURLError,
    "invalid_request": NotionInvalidRequestError,
    "validation_error": NotionValidationError,
    "unauthorized": NotionUnauthorizedError,
    "restricted_resource": NotionRestrictedResourceError,
    "object_not_found": NotionObjectNotFoundError,
    "conflict_error": NotionConflictError,
    "rate_limited": NotionRateLimitedError,
    "internal_server_error": NotionInternalServerError,
    "service_unavailable": NotionServiceUnavailableError,
}


def api_error_from_body(
    body: dict[str, Any],
    status: int,
    prefix: str = "",
    context: dict[str, Any] | None = None,
) -> APIError:
    """Build the :class:`APIError` subclass matching ``body["code"]``.

    Unknown codes yield :class:`NotionUnknownAPIError`.
    """
    api_code = str(body.get("code", ""))
    error_class = API_ERROR_CLASSES.get(api_code, NotionUnknownAPIError)
    raw_status = body.get("status", status)
    return error_class(
        status=raw_status if isinstance(raw_status, int) else status,
        api_code=api_code,
        api_message=str(body.get("message", "")),
        prefix=prefix,
        context=context,
    )
