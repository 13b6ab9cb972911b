"""Shared helpers for the JSON codecs of the object model.

Decoders work on already-parsed JSON (``dict`` / ``list``) and raise
:class:`~typednotion.errors.NotionDecodeError` for anything that does not
have the expected shape.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

from typednotion.dates import format_timestamp, parse_timestamp
from typednotion.errors import NotionDecodeError, NotionInvalidParamsError

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


def expect_dict(data: Any, kind: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise NotionDecodeError(
            f"expected a JSON object for {kind}, got {type(data).__name__}",
            context={"kind": kind},
        )
    return data


def require(data: Mapping[str, Any], key: str, kind: str) -> Any:
    """Return ``data[key]``, raising if the key is absent."""
    if key not in data:
        raise NotionDecodeError(
            f"{kind} is missing required field {key!r}",
            context={"kind": kind, "field": key},
        )
    return data[key]


def decode_enum(enum_cls: type[E], value: Any, kind: str) -> E:
    """Map *value* onto *enum_cls*, rejecting unrecognized members."""
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise NotionDecodeError(
            f"unknown {kind} {value!r}",
            context={"kind": kind, "value": value},
            cause=exc,
        ) from exc


def decode_list(
    data: Any,
    decoder: Callable[[Any], T],
    kind: str,
) -> list[T]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise NotionDecodeError(
            f"expected a JSON array for {kind}, got {type(data).__name__}",
            context={"kind": kind},
        )
    return [decoder(item) for item in data]


def optional(data: Any, decoder: Callable[[Any], T]) -> T | None:
    return None if data is None else decoder(data)


def optional_timestamp(data: Mapping[str, Any], key: str) -> datetime | None:
    value = data.get(key)
    return None if value is None else parse_timestamp(value)


def encode_timestamp(value: datetime | None) -> str | None:
    return None if value is None else format_timestamp(value)


def drop_none(data: dict[str, Any]) -> dict[str, Any]:
    """Return *data* without keys whose value is ``None``."""
    return {key: value for key, value in data.items() if value is not None}


def check_one_of(tag: str, payloads: Mapping[str, Any], kind: str) -> None:
    """Enforce that exactly one payload is populated and that it is the one
    named by *tag*.

    Raises
    ------
    NotionInvalidParamsError
        When no payload, several payloads, or the wrong payload is set.
    """
    populated = [name for name, value in payloads.items() if value is not None]
    if len(populated) != 1:
        raise NotionInvalidParamsError(
            f"{kind} must have exactly one payload set, got {populated or 'none'}",
            context={"params": kind, "type": tag},
        )
    if populated[0] != tag:
        raise NotionInvalidParamsError(
            f"{kind} type {tag!r} does not match populated payload {populated[0]!r}",
            context={"params": kind, "type": tag},
        )


def coerce_enum(obj: Any, field_name: str, enum_cls: type[E], kind: str) -> E:
    """Normalize ``obj.<field_name>`` on a frozen dataclass to *enum_cls*.

    Raises
    ------
    NotionInvalidParamsError
        If the value is not a member of *enum_cls*.
    """
    value = getattr(obj, field_name)
    try:
        member = enum_cls(value)
    except ValueError as exc:
        raise NotionInvalidParamsError(
            f"unknown {kind} {value!r}",
            context={"params": kind, "value": value},
            cause=exc,
        ) from exc
    object.__setattr__(obj, field_name, member)
    return member
