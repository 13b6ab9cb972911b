"""Database schema properties.

A database declares its columns as a mapping of name to
:class:`DatabaseProperty`.  Each property has a :class:`PropertyType` tag
selecting the metadata shape: number format, select options, formula
expression, relation target, rollup configuration, and so on.

Types without configuration (checkbox, url, date, people ...) store an
:class:`EmptyMetadata` marker as their payload and report ``None`` through
:attr:`DatabaseProperty.metadata`.

Page *values* share the same :class:`PropertyType` enumeration but use a
different wire shape; see :mod:`typednotion.models.page_properties`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from typednotion.errors import NotionInvalidParamsError

from ._codec import (
    coerce_enum,
    decode_enum,
    decode_list,
    drop_none,
    expect_dict,
    require,
)
from .common import Color, SelectOption, decode_color


class PropertyType(str, Enum):
    TITLE = "title"
    RICH_TEXT = "rich_text"
    NUMBER = "number"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    STATUS = "status"
    DATE = "date"
    PEOPLE = "people"
    FILES = "files"
    CHECKBOX = "checkbox"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    FORMULA = "formula"
    RELATION = "relation"
    ROLLUP = "rollup"
    CREATED_TIME = "created_time"
    CREATED_BY = "created_by"
    LAST_EDITED_TIME = "last_edited_time"
    LAST_EDITED_BY = "last_edited_by"
    UNIQUE_ID = "unique_id"


class RelationType(str, Enum):
    SINGLE_PROPERTY = "single_property"
    DUAL_PROPERTY = "dual_property"


# ---------------------------------------------------------------------------
# Metadata shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EmptyMetadata:
    """Marker for property types that take no configuration."""

    @classmethod
    def from_json(cls, data: Any) -> EmptyMetadata:
        expect_dict(data, "property metadata")
        return cls()

    def to_json(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class NumberMetadata:
    format: str = "number"

    @classmethod
    def from_json(cls, data: Any) -> NumberMetadata:
        return cls(format=expect_dict(data, "number metadata").get("format", "number"))

    def to_json(self) -> dict[str, Any]:
        return {"format": self.format}


@dataclass(frozen=True)
class SelectMetadata:
    """Available options of a select or multi-select column."""

    options: list[SelectOption] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> SelectMetadata:
        data = expect_dict(data, "select metadata")
        return cls(decode_list(data.get("options"), SelectOption.from_json, "select options"))

    def to_json(self) -> dict[str, Any]:
        return {"options": [option.to_json() for option in self.options]}


@dataclass(frozen=True)
class StatusGroup:
    id: str
    name: str
    color: Color = Color.DEFAULT
    option_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class StatusMetadata:
    options: list[SelectOption] = field(default_factory=list)
    groups: list[StatusGroup] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> StatusMetadata:
        data = expect_dict(data, "status metadata")
        groups = [
            StatusGroup(
                id=require(group, "id", "status group"),
                name=require(group, "name", "status group"),
                color=decode_color(group.get("color")),
                option_ids=list(group.get("option_ids") or []),
            )
            for group in (expect_dict(raw, "status group") for raw in data.get("groups") or [])
        ]
        return cls(
            options=decode_list(data.get("options"), SelectOption.from_json, "status options"),
            groups=groups,
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "options": [option.to_json() for option in self.options],
            "groups": [
                {
                    "id": group.id,
                    "name": group.name,
                    "color": group.color.value,
                    "option_ids": list(group.option_ids),
                }
                for group in self.groups
            ],
        }


@dataclass(frozen=True)
class FormulaMetadata:
    expression: str

    @classmethod
    def from_json(cls, data: Any) -> FormulaMetadata:
        data = expect_dict(data, "formula metadata")
        return cls(require(data, "expression", "formula metadata"))

    def to_json(self) -> dict[str, Any]:
        return {"expression": self.expression}


@dataclass(frozen=True)
class RelationMetadata:
    """Target database of a relation column.

    ``synced_property_*`` are only meaningful for ``dual_property``
    relations.
    """

    database_id: str
    type: RelationType | None = None
    synced_property_name: str | None = None
    synced_property_id: str | None = None

    def __post_init__(self) -> None:
        if self.type is not None:
            coerce_enum(self, "type", RelationType, "relation type")

    @classmethod
    def from_json(cls, data: Any) -> RelationMetadata:
        data = expect_dict(data, "relation metadata")
        raw_type = data.get("type")
        relation_type = None if raw_type is None else decode_enum(RelationType, raw_type, "relation type")
        synced = data
        if relation_type is RelationType.DUAL_PROPERTY:
            synced = expect_dict(data.get("dual_property") or {}, "dual property")
        return cls(
            database_id=require(data, "database_id", "relation metadata"),
            type=relation_type,
            synced_property_name=synced.get("synced_property_name"),
            synced_property_id=synced.get("synced_property_id"),
        )

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"database_id": self.database_id}
        synced = drop_none({
            "synced_property_name": self.synced_property_name,
            "synced_property_id": self.synced_property_id,
        })
        if self.type is None:
            data.update(synced)
        else:
            data["type"] = self.type.value
            data[self.type.value] = synced if self.type is RelationType.DUAL_PROPERTY else {}
        return data


@dataclass(frozen=True)
class RollupMetadata:
    function: str
    relation_property_name: str | None = None
    relation_property_id: str | None = None
    rollup_property_name: str | None = None
    rollup_property_id: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> RollupMetadata:
        data = expect_dict(data, "rollup metadata")
        return cls(
            function=require(data, "function", "rollup metadata"),
            relation_property_name=data.get("relation_property_name"),
            relation_property_id=data.get("relation_property_id"),
            rollup_property_name=data.get("rollup_property_name"),
            rollup_property_id=data.get("rollup_property_id"),
        )

    def to_json(self) -> dict[str, Any]:
        return drop_none({
            "function": self.function,
            "relation_property_name": self.relation_property_name,
            "relation_property_id": self.relation_property_id,
            "rollup_property_name": self.rollup_property_name,
            "rollup_property_id": self.rollup_property_id,
        })


@dataclass(frozen=True)
class UniqueIDMetadata:
    prefix: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> UniqueIDMetadata:
        return cls(prefix=expect_dict(data, "unique id metadata").get("prefix"))

    def to_json(self) -> dict[str, Any]:
        return {"prefix": self.prefix}


PropertyMetadata = Union[
    EmptyMetadata,
    NumberMetadata,
    SelectMetadata,
    StatusMetadata,
    FormulaMetadata,
    RelationMetadata,
    RollupMetadata,
    UniqueIDMetadata,
]

_METADATA_CLASSES: dict[PropertyType, type] = {
    PropertyType.NUMBER: NumberMetadata,
    PropertyType.SELECT: SelectMetadata,
    PropertyType.MULTI_SELECT: SelectMetadata,
    PropertyType.STATUS: StatusMetadata,
    PropertyType.FORMULA: FormulaMetadata,
    PropertyType.RELATION: RelationMetadata,
    PropertyType.ROLLUP: RollupMetadata,
    PropertyType.UNIQUE_ID: UniqueIDMetadata,
}


def metadata_class(prop_type: PropertyType) -> type:
    """Metadata class for *prop_type* (:class:`EmptyMetadata` when the type
    takes no configuration)."""
    return _METADATA_CLASSES.get(prop_type, EmptyMetadata)


# ---------------------------------------------------------------------------
# DatabaseProperty
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatabaseProperty:
    """A column declared on a database.

    ``payload`` holds the type's configuration.  It defaults to
    :class:`EmptyMetadata` for types without configuration; for configured
    types it must be an instance of the matching metadata class.
    :attr:`metadata` exposes it, or ``None`` for unconfigured types.

    Example::

        DatabaseProperty(PropertyType.TITLE)
        DatabaseProperty(PropertyType.NUMBER, NumberMetadata("dollar"))
    """

    type: PropertyType
    payload: PropertyMetadata | None = None
    id: str | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        prop_type = coerce_enum(self, "type", PropertyType, "property type")
        expected = metadata_class(prop_type)
        if self.payload is None and expected is EmptyMetadata:
            object.__setattr__(self, "payload", EmptyMetadata())
        if not isinstance(self.payload, expected):
            raise NotionInvalidParamsError(
                f"property type {prop_type.value!r} requires {expected.__name__}, "
                f"got {type(self.payload).__name__}",
                context={"params": "database property", "type": prop_type.value},
            )

    @classmethod
    def from_json(cls, data: Any) -> DatabaseProperty:
        data = expect_dict(data, "database property")
        prop_type = decode_enum(
            PropertyType, require(data, "type", "database property"), "database property type"
        )
        raw = require(data, prop_type.value, "database property")
        return cls(
            type=prop_type,
            payload=metadata_class(prop_type).from_json(raw),
            id=data.get("id"),
            name=data.get("name"),
        )

    @property
    def metadata(self) -> PropertyMetadata | None:
        """The configuration of this column, or ``None`` when its type has none."""
        if isinstance(self.payload, EmptyMetadata):
            return None
        return self.payload

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value, self.type.value: self.payload.to_json()}
        if self.id is not None:
            data["id"] = self.id
        if self.name is not None:
            data["name"] = self.name
        return data


def decode_database_properties(data: Any) -> dict[str, DatabaseProperty]:
    data = expect_dict(data, "database properties")
    return {name: DatabaseProperty.from_json(raw) for name, raw in data.items()}


def encode_database_properties(
    properties: dict[str, DatabaseProperty | None],
) -> dict[str, Any]:
    """Encode a schema mapping.  A ``None`` value removes the column when
    updating a database."""
    return {
        name: None if prop is None else prop.to_json()
        for name, prop in properties.items()
    }
