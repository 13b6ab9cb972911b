"""Database query filters and sorts, search sort and filter.

Conditions are plain dataclasses whose unset fields are left out of the
request body.  A :class:`PropertyFilter` applies one condition to a named
column, a :class:`TimestampFilter` to the page's created / last edited
time, and :class:`CompoundFilter` nests filters under ``and`` / ``or``.

Example::

    query_filter = CompoundFilter.all_of(
        PropertyFilter("Done", CheckboxCondition(equals=False)),
        PropertyFilter("Name", TextCondition(contains="draft"), type="title"),
    )

See: https://developers.notion.com/reference/post-database-query-filter
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, Union

from typednotion.dates import DateTime
from typednotion.errors import NotionInvalidParamsError

from ._codec import coerce_enum


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class SortTimestamp(str, Enum):
    CREATED_TIME = "created_time"
    LAST_EDITED_TIME = "last_edited_time"


# Flags that are sent as ``true`` only when set.
_FLAG_FIELDS = frozenset({"is_empty", "is_not_empty"})
# Relative date conditions take an empty object.
_RELATIVE_DATE_FIELDS = frozenset({
    "past_week", "past_month", "past_year", "next_week", "next_month", "next_year", "this_week",
})


def _encode_value(value: Any) -> Any:
    if isinstance(value, DateTime):
        return value.to_json()
    if isinstance(value, datetime):
        return DateTime(value).to_json()
    if isinstance(value, date):
        return value.isoformat()
    return value


def _encode_condition(condition: Any) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for fld in fields(condition):
        value = getattr(condition, fld.name)
        if value is None:
            continue
        if fld.name in _FLAG_FIELDS:
            if value:
                data[fld.name] = True
        elif fld.name in _RELATIVE_DATE_FIELDS:
            if value:
                data[fld.name] = {}
        else:
            data[fld.name] = _encode_value(value)
    return data


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextCondition:
    """For title, rich_text, url, email and phone_number columns."""

    equals: str | None = None
    does_not_equal: str | None = None
    contains: str | None = None
    does_not_contain: str | None = None
    starts_with: str | None = None
    ends_with: str | None = None
    is_empty: bool = False
    is_not_empty: bool = False

    def to_json(self) -> dict[str, Any]:
        return _encode_condition(self)


@dataclass(frozen=True)
class NumberCondition:
    equals: int | float | None = None
    does_not_equal: int | float | None = None
    greater_than: int | float | None = None
    less_than: int | float | None = None
    greater_than_or_equal_to: int | float | None = None
    less_than_or_equal_to: int | float | None = None
    is_empty: bool = False
    is_not_empty: bool = False

    def to_json(self) -> dict[str, Any]:
        return _encode_condition(self)


@dataclass(frozen=True)
class CheckboxCondition:
    equals: bool | None = None
    does_not_equal: bool | None = None

    def to_json(self) -> dict[str, Any]:
        return _encode_condition(self)


@dataclass(frozen=True)
class SelectCondition:
    """For select and status columns."""

    equals: str | None = None
    does_not_equal: str | None = None
    is_empty: bool = False
    is_not_empty: bool = False

    def to_json(self) -> dict[str, Any]:
        return _encode_condition(self)


@dataclass(frozen=True)
class ContainsCondition:
    """For multi_select, people and relation columns."""

    contains: str | None = None
    does_not_contain: str | None = None
    is_empty: bool = False
    is_not_empty: bool = False

    def to_json(self) -> dict[str, Any]:
        return _encode_condition(self)


@dataclass(frozen=True)
class DateCondition:
    """For date, created_time and last_edited_time columns.

    Absolute bounds accept a :class:`DateTime`, a ``datetime`` or a
    ``date``; the relative flags (``past_week`` ...) take ``True``.
    """

    equals: DateTime | datetime | date | None = None
    before: DateTime | datetime | date | None = None
    after: DateTime | datetime | date | None = None
    on_or_before: DateTime | datetime | date | None = None
    on_or_after: DateTime | datetime | date | None = None
    is_empty: bool = False
    is_not_empty: bool = False
    past_week: bool = False
    past_month: bool = False
    past_year: bool = False
    this_week: bool = False
    next_week: bool = False
    next_month: bool = False
    next_year: bool = False

    def to_json(self) -> dict[str, Any]:
        return _encode_condition(self)


@dataclass(frozen=True)
class FilesCondition:
    is_empty: bool = False
    is_not_empty: bool = False

    def to_json(self) -> dict[str, Any]:
        return _encode_condition(self)


@dataclass(frozen=True)
class FormulaCondition:
    """Condition on a formula column, keyed by the formula's result type.
    Exactly one sub-condition is set."""

    string: TextCondition | None = None
    checkbox: CheckboxCondition | None = None
    number: NumberCondition | None = None
    date: DateCondition | None = None

    def __post_init__(self) -> None:
        populated = [fld.name for fld in fields(self) if getattr(self, fld.name) is not None]
        if len(populated) != 1:
            raise NotionInvalidParamsError(
                "formula condition requires exactly one of string, checkbox, number or date",
                context={"params": "FormulaCondition"},
            )

    def to_json(self) -> dict[str, Any]:
        return {
            fld.name: getattr(self, fld.name).to_json()
            for fld in fields(self)
            if getattr(self, fld.name) is not None
        }


Condition = Union[
    TextCondition,
    NumberCondition,
    CheckboxCondition,
    SelectCondition,
    ContainsCondition,
    DateCondition,
    FilesCondition,
    FormulaCondition,
]

# Property type key used when ``PropertyFilter.type`` is not given.
_DEFAULT_KEYS: dict[type, str] = {
    TextCondition: "rich_text",
    NumberCondition: "number",
    CheckboxCondition: "checkbox",
    SelectCondition: "select",
    ContainsCondition: "multi_select",
    DateCondition: "date",
    FilesCondition: "files",
    FormulaCondition: "formula",
}


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PropertyFilter:
    """Apply *condition* to the column named *property*.

    ``type`` is the column's property type as used for the request key
    (``"title"``, ``"status"``, ``"people"`` ...).  It defaults to the most
    common type for the condition class.
    """

    property: str
    condition: Condition
    type: str | None = None

    def __post_init__(self) -> None:
        if not self.property:
            raise NotionInvalidParamsError(
                "filter property is required",
                context={"params": "PropertyFilter"},
            )
        if self.type is None:
            object.__setattr__(self, "type", _DEFAULT_KEYS[type(self.condition)])
        elif isinstance(self.type, Enum):
            object.__setattr__(self, "type", self.type.value)

    def to_json(self) -> dict[str, Any]:
        return {"property": self.property, self.type: self.condition.to_json()}


@dataclass(frozen=True)
class TimestampFilter:
    """Filter on the page's ``created_time`` or ``last_edited_time``."""

    timestamp: SortTimestamp
    condition: DateCondition

    def __post_init__(self) -> None:
        coerce_enum(self, "timestamp", SortTimestamp, "timestamp")

    def to_json(self) -> dict[str, Any]:
        key = self.timestamp.value
        return {"timestamp": key, key: self.condition.to_json()}


@dataclass(frozen=True)
class CompoundFilter:
    """``and`` / ``or`` combination of filters."""

    operator: str
    filters: list[Filter] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.operator not in ("and", "or"):
            raise NotionInvalidParamsError(
                f"compound filter operator must be 'and' or 'or', got {self.operator!r}",
                context={"params": "CompoundFilter"},
            )

    @classmethod
    def all_of(cls, *filters: Filter) -> CompoundFilter:
        return cls("and", list(filters))

    @classmethod
    def any_of(cls, *filters: Filter) -> CompoundFilter:
        return cls("or", list(filters))

    def to_json(self) -> dict[str, Any]:
        return {self.operator: [f.to_json() for f in self.filters]}


Filter = Union[PropertyFilter, TimestampFilter, CompoundFilter]


# ---------------------------------------------------------------------------
# Sorts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatabaseQuerySort:
    """Sort by a column or by a timestamp; exactly one of the two is set."""

    property: str | None = None
    timestamp: SortTimestamp | None = None
    direction: SortDirection = SortDirection.ASCENDING

    def __post_init__(self) -> None:
        if (self.property is None) == (self.timestamp is None):
            raise NotionInvalidParamsError(
                "sort requires exactly one of property or timestamp",
                context={"params": "DatabaseQuerySort"},
            )
        if self.timestamp is not None:
            coerce_enum(self, "timestamp", SortTimestamp, "sort timestamp")
        coerce_enum(self, "direction", SortDirection, "sort direction")

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"direction": self.direction.value}
        if self.property is not None:
            data["property"] = self.property
        else:
            data["timestamp"] = self.timestamp.value
        return data


@dataclass(frozen=True)
class SearchSort:
    direction: SortDirection = SortDirection.DESCENDING
    timestamp: str = "last_edited_time"

    def __post_init__(self) -> None:
        coerce_enum(self, "direction", SortDirection, "sort direction")

    def to_json(self) -> dict[str, Any]:
        return {"direction": self.direction.value, "timestamp": self.timestamp}


@dataclass(frozen=True)
class SearchFilter:
    """Restrict search results to pages or databases."""

    value: str
    property: str = "object"

    def __post_init__(self) -> None:
        if self.value not in ("page", "database"):
            raise NotionInvalidParamsError(
                f"search filter value must be 'page' or 'database', got {self.value!r}",
                context={"params": "SearchFilter"},
            )

    def to_json(self) -> dict[str, Any]:
        return {"value": self.value, "property": self.property}
