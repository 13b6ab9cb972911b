"""Date / date-time values as exchanged with the Notion API.

Notion date properties hold either a bare date (``2021-05-23``) or a full
timestamp (``2021-05-23T09:11:50.123+00:00``).  A plain :class:`datetime`
cannot remember which of the two it was parsed from, so :class:`DateTime`
pairs the instant with a ``has_time`` flag and re-encodes to the same
shape it was decoded from.

Resource timestamps (``created_time``, ``last_edited_time``) are always
full timestamps and use :func:`parse_timestamp` / :func:`format_timestamp`
directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from typednotion.errors import NotionParseError

DATE_LENGTH = len("2006-01-02")

# Longest accepted template: microsecond precision plus a numeric offset.
MAX_DATETIME_LENGTH = len("2006-01-02T15:04:05.999999+07:00")


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp into a timezone-aware :class:`datetime`.

    Naive timestamps are interpreted as UTC.

    Raises
    ------
    NotionParseError
        If *value* is not a string or is not a valid timestamp.
    """
    if not isinstance(value, str):
        raise NotionParseError(
            f"invalid datetime value {value!r}",
            context={"value": value},
        )
    if len(value) > MAX_DATETIME_LENGTH:
        raise NotionParseError(
            f"invalid datetime string {value!r}: too long",
            context={"value": value},
        )
    if len(value) <= DATE_LENGTH or value[DATE_LENGTH] not in "Tt ":
        raise NotionParseError(
            f"invalid datetime string {value!r}: missing time component",
            context={"value": value},
        )
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise NotionParseError(
            f"invalid datetime string {value!r}: {exc}",
            context={"value": value},
            cause=exc,
        ) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format *value* as an RFC 3339 timestamp.

    UTC is rendered as ``Z`` and fractional seconds are trimmed of trailing
    zeros (omitted entirely when zero).
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")

    offset = value.utcoffset()
    if not offset:
        return text + "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    total = abs(total)
    return f"{text}{sign}{total // 3600:02d}:{total % 3600 // 60:02d}"


@dataclass(frozen=True)
class DateTime:
    """A Notion date with an optional time-of-day component.

    Two values are equal only when both the instant and ``has_time``
    match: ``DateTime.parse("2021-05-23")`` differs from
    ``DateTime.parse("2021-05-23T00:00:00Z")``.

    Attributes
    ----------
    value:
        Timezone-aware instant.  Date-only values sit at midnight UTC.
    has_time:
        ``True`` when the value was parsed from (or should be encoded as)
        a full timestamp.
    """

    value: datetime
    has_time: bool = True

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            object.__setattr__(self, "value", self.value.replace(tzinfo=timezone.utc))

    @classmethod
    def from_datetime(cls, value: datetime | date, has_time: bool = True) -> DateTime:
        """Build a DateTime.  When *has_time* is ``False`` the time of day is
        dropped and the date is kept at midnight UTC."""
        if has_time and isinstance(value, datetime):
            return cls(value, True)
        return cls(datetime(value.year, value.month, value.day, tzinfo=timezone.utc), False)

    @classmethod
    def parse(cls, value: Any) -> DateTime:
        """Parse a ``YYYY-MM-DD`` date or an ISO-8601 timestamp.

        Raises
        ------
        NotionParseError
            If the string is longer than :data:`MAX_DATETIME_LENGTH` or is
            malformed.
        """
        if not isinstance(value, str):
            raise NotionParseError(
                f"invalid datetime value {value!r}",
                context={"value": value},
            )
        if len(value) > MAX_DATETIME_LENGTH:
            raise NotionParseError(
                f"invalid datetime string {value!r}: too long",
                context={"value": value},
            )
        if len(value) == DATE_LENGTH:
            try:
                parsed = date.fromisoformat(value)
            except ValueError as exc:
                raise NotionParseError(
                    f"invalid date string {value!r}: {exc}",
                    context={"value": value},
                    cause=exc,
                ) from exc
            return cls.from_datetime(parsed, has_time=False)
        return cls(parse_timestamp(value), True)

    def to_json(self) -> str:
        """Encode as a date-only string or a full timestamp."""
        if not self.has_time:
            return f"{self.value.year:04d}-{self.value.month:02d}-{self.value.day:02d}"
        return format_timestamp(self.value)

    def __str__(self) -> str:
        return self.to_json()
