"""Page property values.

Where a database *declares* a column (:class:`DatabaseProperty`), each of
its pages *holds* a value for it.  :class:`DatabasePageProperty` shares the
:class:`PropertyType` tag with the schema model but carries data: the
chosen option instead of the available options, a computed formula result
instead of the expression, and so on.

The Python type of ``value`` is fixed per tag:

=================  ===========================================
Type               ``value``
=================  ===========================================
title, rich_text   ``list[RichText]``
number             ``int | float | None``
select, status     ``SelectOption | None``
multi_select       ``list[SelectOption]``
date               ``Date | None``
people             ``list[User]``
files              ``list[File]``
checkbox           ``bool``
url, email, phone  ``str | None``
formula            :class:`FormulaResult`
relation           ``list[ObjectReference]``
rollup             :class:`RollupResult`
created_time ...   ``datetime``
created_by ...     ``User``
unique_id          :class:`UniqueID`
=================  ===========================================
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from typednotion.dates import format_timestamp, parse_timestamp
from typednotion.errors import NotionDecodeError, NotionInvalidParamsError

from ._codec import (
    coerce_enum,
    decode_enum,
    decode_list,
    expect_dict,
    optional,
    require,
)
from .common import Date, File, SelectOption, User
from .properties import PropertyType
from .rich_text import ObjectReference, RichText, decode_rich_text, encode_rich_text


class FormulaResultType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


class RollupResultType(str, Enum):
    NUMBER = "number"
    DATE = "date"
    ARRAY = "array"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _decode_number(value: Any) -> int | float | None:
    if value is not None and not _is_number(value):
        raise NotionDecodeError(
            f"expected a number, got {type(value).__name__}",
            context={"kind": "number", "value": value},
        )
    return value


# ---------------------------------------------------------------------------
# Formula / rollup results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FormulaResult:
    """Computed result of a formula column.

    ``type`` is kept as the raw string so that results of a formula type
    added by Notion later still decode; ``value`` is then ``None``.
    Compare ``type`` against :class:`FormulaResultType` before trusting
    ``value``.
    """

    type: str
    value: str | int | float | bool | Date | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", getattr(self.type, "value", self.type))

    @classmethod
    def from_json(cls, data: Any) -> FormulaResult:
        data = expect_dict(data, "formula result")
        result_type = str(require(data, "type", "formula result"))
        raw = data.get(result_type)
        if result_type == FormulaResultType.DATE:
            return cls(result_type, optional(raw, Date.from_json))
        if result_type == FormulaResultType.NUMBER:
            return cls(result_type, _decode_number(raw))
        if result_type in (FormulaResultType.STRING, FormulaResultType.BOOLEAN):
            return cls(result_type, raw)
        return cls(result_type, None)

    def to_json(self) -> dict[str, Any]:
        value = self.value.to_json() if isinstance(self.value, Date) else self.value
        return {"type": self.type, self.type: value}


@dataclass(frozen=True)
class RollupResult:
    """Computed result of a rollup column.

    ``array`` results hold one :class:`DatabasePageProperty` per rolled-up
    value.  Unrecognized result types decode with ``value=None``.
    """

    type: str
    value: int | float | Date | list[DatabasePageProperty] | None = None
    function: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", getattr(self.type, "value", self.type))

    @classmethod
    def from_json(cls, data: Any) -> RollupResult:
        data = expect_dict(data, "rollup result")
        result_type = str(require(data, "type", "rollup result"))
        raw = data.get(result_type)
        function = data.get("function")
        if result_type == RollupResultType.NUMBER:
            return cls(result_type, _decode_number(raw), function)
        if result_type == RollupResultType.DATE:
            return cls(result_type, optional(raw, Date.from_json), function)
        if result_type == RollupResultType.ARRAY:
            return cls(
                result_type,
                decode_list(raw, DatabasePageProperty.from_json, "rollup array"),
                function,
            )
        return cls(result_type, None, function)

    def to_json(self) -> dict[str, Any]:
        if isinstance(self.value, Date):
            value: Any = self.value.to_json()
        elif isinstance(self.value, list):
            value = [item.to_json() for item in self.value]
        else:
            value = self.value
        data: dict[str, Any] = {"type": self.type, self.type: value}
        if self.function is not None:
            data["function"] = self.function
        return data


@dataclass(frozen=True)
class UniqueID:
    number: int | None
    prefix: str | None = None


# ---------------------------------------------------------------------------
# Per-type value codecs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _ValueCodec:
    decode: Callable[[Any], Any]
    encode: Callable[[Any], Any]
    check: Callable[[Any], bool]


def _list_of(item_type: type) -> Callable[[Any], bool]:
    return lambda value: isinstance(value, list) and all(isinstance(i, item_type) for i in value)


def _nullable(item_type: type | tuple[type, ...]) -> Callable[[Any], bool]:
    return lambda value: value is None or isinstance(value, item_type)


def _encode_optional(value: Any) -> Any:
    return None if value is None else value.to_json()


def _encode_list(values: list[Any]) -> list[Any]:
    return [value.to_json() for value in values]


def _decode_reference(data: Any) -> ObjectReference:
    return ObjectReference(require(expect_dict(data, "relation"), "id", "relation"))


def _decode_unique_id(data: Any) -> UniqueID:
    data = expect_dict(data, "unique id")
    return UniqueID(number=data.get("number"), prefix=data.get("prefix"))


_RICH_TEXT = _ValueCodec(decode_rich_text, encode_rich_text, _list_of(RichText))
_OPTION = _ValueCodec(
    lambda raw: optional(raw, SelectOption.from_json),
    _encode_optional,
    _nullable(SelectOption),
)
_STRING = _ValueCodec(lambda raw: raw, lambda value: value, _nullable(str))
_TIMESTAMP = _ValueCodec(parse_timestamp, format_timestamp, lambda value: isinstance(value, datetime))
_USER = _ValueCodec(User.from_json, lambda user: user.to_json(), lambda value: isinstance(value, User))

_VALUE_CODECS: dict[PropertyType, _ValueCodec] = {
    PropertyType.TITLE: _RICH_TEXT,
    PropertyType.RICH_TEXT: _RICH_TEXT,
    PropertyType.NUMBER: _ValueCodec(
        _decode_number, lambda value: value, lambda value: value is None or _is_number(value),
    ),
    PropertyType.SELECT: _OPTION,
    PropertyType.STATUS: _OPTION,
    PropertyType.MULTI_SELECT: _ValueCodec(
        lambda raw: decode_list(raw, SelectOption.from_json, "multi select"),
        _encode_list,
        _list_of(SelectOption),
    ),
    PropertyType.DATE: _ValueCodec(
        lambda raw: optional(raw, Date.from_json), _encode_optional, _nullable(Date),
    ),
    PropertyType.PEOPLE: _ValueCodec(
        lambda raw: decode_list(raw, User.from_json, "people"), _encode_list, _list_of(User),
    ),
    PropertyType.FILES: _ValueCodec(
        lambda raw: decode_list(raw, File.from_json, "files"), _encode_list, _list_of(File),
    ),
    PropertyType.CHECKBOX: _ValueCodec(bool, bool, lambda value: isinstance(value, bool)),
    PropertyType.URL: _STRING,
    PropertyType.EMAIL: _STRING,
    PropertyType.PHONE_NUMBER: _STRING,
    PropertyType.FORMULA: _ValueCodec(
        FormulaResult.from_json,
        lambda value: value.to_json(),
        lambda value: isinstance(value, FormulaResult),
    ),
    PropertyType.RELATION: _ValueCodec(
        lambda raw: decode_list(raw, _decode_reference, "relation"),
        lambda refs: [{"id": ref.id} for ref in refs],
        _list_of(ObjectReference),
    ),
    PropertyType.ROLLUP: _ValueCodec(
        RollupResult.from_json,
        lambda value: value.to_json(),
        lambda value: isinstance(value, RollupResult),
    ),
    PropertyType.CREATED_TIME: _TIMESTAMP,
    PropertyType.LAST_EDITED_TIME: _TIMESTAMP,
    PropertyType.CREATED_BY: _USER,
    PropertyType.LAST_EDITED_BY: _USER,
    PropertyType.UNIQUE_ID: _ValueCodec(
        _decode_unique_id,
        lambda value: {"number": value.number, "prefix": value.prefix},
        lambda value: isinstance(value, UniqueID),
    ),
}


# ---------------------------------------------------------------------------
# DatabasePageProperty
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatabasePageProperty:
    """The value of one property on a database page.

    Prefer the classmethod constructors (``DatabasePageProperty.number(3)``,
    ``DatabasePageProperty.select("Done")`` ...), which always pair the tag
    with a value of the right shape.
    """

    type: PropertyType
    value: Any = None
    id: str | None = None

    def __post_init__(self) -> None:
        prop_type = coerce_enum(self, "type", PropertyType, "property type")
        if not _VALUE_CODECS[prop_type].check(self.value):
            raise NotionInvalidParamsError(
                f"invalid value for {prop_type.value!r} property: {self.value!r}",
                context={"params": "database page property", "type": prop_type.value},
            )

    # -- constructors -------------------------------------------------------

    @classmethod
    def title(cls, runs: list[RichText] | str) -> DatabasePageProperty:
        return cls(PropertyType.TITLE, _as_runs(runs))

    @classmethod
    def rich_text(cls, runs: list[RichText] | str) -> DatabasePageProperty:
        return cls(PropertyType.RICH_TEXT, _as_runs(runs))

    @classmethod
    def number(cls, value: int | float | None) -> DatabasePageProperty:
        return cls(PropertyType.NUMBER, value)

    @classmethod
    def select(cls, name: str | None) -> DatabasePageProperty:
        return cls(PropertyType.SELECT, None if name is None else SelectOption(name=name))

    @classmethod
    def status(cls, name: str | None) -> DatabasePageProperty:
        return cls(PropertyType.STATUS, None if name is None else SelectOption(name=name))

    @classmethod
    def multi_select(cls, names: list[str]) -> DatabasePageProperty:
        return cls(PropertyType.MULTI_SELECT, [SelectOption(name=name) for name in names])

    @classmethod
    def date(cls, value: Date | None) -> DatabasePageProperty:
        return cls(PropertyType.DATE, value)

    @classmethod
    def people(cls, user_ids: list[str]) -> DatabasePageProperty:
        return cls(PropertyType.PEOPLE, [User(id=user_id) for user_id in user_ids])

    @classmethod
    def files(cls, files: list[File]) -> DatabasePageProperty:
        return cls(PropertyType.FILES, list(files))

    @classmethod
    def checkbox(cls, checked: bool) -> DatabasePageProperty:
        return cls(PropertyType.CHECKBOX, checked)

    @classmethod
    def url(cls, value: str | None) -> DatabasePageProperty:
        return cls(PropertyType.URL, value)

    @classmethod
    def email(cls, value: str | None) -> DatabasePageProperty:
        return cls(PropertyType.EMAIL, value)

    @classmethod
    def phone_number(cls, value: str | None) -> DatabasePageProperty:
        return cls(PropertyType.PHONE_NUMBER, value)

    @classmethod
    def relation(cls, page_ids: list[str]) -> DatabasePageProperty:
        return cls(PropertyType.RELATION, [ObjectReference(page_id) for page_id in page_ids])

    # -- codec --------------------------------------------------------------

    @classmethod
    def from_json(cls, data: Any) -> DatabasePageProperty:
        data = expect_dict(data, "page property")
        prop_type = decode_enum(
            PropertyType, require(data, "type", "page property"), "page property type"
        )
        raw = require(data, prop_type.value, "page property")
        try:
            return cls(prop_type, _VALUE_CODECS[prop_type].decode(raw), data.get("id"))
        except NotionInvalidParamsError as exc:
            raise NotionDecodeError(
                exc.message,
                context={"kind": "page property", "type": prop_type.value},
                cause=exc,
            ) from exc

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type.value,
            self.type.value: _VALUE_CODECS[self.type].encode(self.value),
        }
        if self.id is not None:
            data["id"] = self.id
        return data


def _as_runs(runs: list[RichText] | str) -> list[RichText]:
    return [RichText.plain(runs)] if isinstance(runs, str) else list(runs)


def decode_page_properties(data: Any) -> dict[str, DatabasePageProperty]:
    data = expect_dict(data, "page properties")
    return {name: DatabasePageProperty.from_json(raw) for name, raw in data.items()}


def encode_page_properties(properties: dict[str, DatabasePageProperty]) -> dict[str, Any]:
    return {name: prop.to_json() for name, prop in properties.items()}


# ---------------------------------------------------------------------------
# Property items (GET /pages/{id}/properties/{property_id})
# ---------------------------------------------------------------------------

# In the paginated form each item holds one element of the full value.
_LIST_ITEM_DECODERS: dict[PropertyType, Callable[[Any], Any]] = {
    PropertyType.TITLE: RichText.from_json,
    PropertyType.RICH_TEXT: RichText.from_json,
    PropertyType.PEOPLE: User.from_json,
    PropertyType.RELATION: _decode_reference,
}


@dataclass(frozen=True)
class PagePropItem:
    """A ``property_item`` object.

    For paginated property types (title, rich_text, people, relation) each
    item carries a single element: one :class:`RichText`, :class:`User` or
    :class:`ObjectReference`.  Other types carry their full value, shaped as
    in :class:`DatabasePageProperty`.
    """

    type: PropertyType
    value: Any = None
    id: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> PagePropItem:
        data = expect_dict(data, "property item")
        prop_type = decode_enum(
            PropertyType, require(data, "type", "property item"), "property item type"
        )
        raw = require(data, prop_type.value, "property item")
        decoder = _LIST_ITEM_DECODERS.get(prop_type)
        if decoder is not None and isinstance(raw, dict):
            value = decoder(raw)
        else:
            value = _VALUE_CODECS[prop_type].decode(raw)
        return cls(prop_type, value, data.get("id"))


@dataclass(frozen=True)
class PagePropListResponse:
    """Paginated ``property_item`` list.

    ``property_item`` describes the property itself; for rollups it also
    carries the aggregated :class:`RollupResult` in ``value``.
    """

    results: list[PagePropItem] = field(default_factory=list)
    has_more: bool = False
    next_cursor: str | None = None
    property_item: PagePropItem | None = None


def decode_page_property_response(data: Any) -> PagePropItem | PagePropListResponse:
    """Decode the response of the page property item endpoint, in either
    its single-item or paginated-list form."""
    data = expect_dict(data, "page property response")
    if data.get("object") != "list":
        return PagePropItem.from_json(data)

    property_item = None
    raw_item = data.get("property_item")
    if isinstance(raw_item, dict):
        prop_type = decode_enum(
            PropertyType, require(raw_item, "type", "property item"), "property item type"
        )
        payload = raw_item.get(prop_type.value)
        value = None
        if prop_type is PropertyType.ROLLUP and isinstance(payload, dict):
            value = RollupResult.from_json(payload)
        property_item = PagePropItem(prop_type, value, raw_item.get("id"))

    return PagePropListResponse(
        results=decode_list(data.get("results"), PagePropItem.from_json, "property items"),
        has_more=bool(data.get("has_more", False)),
        next_cursor=data.get("next_cursor"),
        property_item=property_item,
    )
