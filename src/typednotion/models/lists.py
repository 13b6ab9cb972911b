"""Paginated list envelope.

List endpoints return ``{"object": "list", "results": [...],
"has_more": bool, "next_cursor": str | null}``.  Pagination is left to the
caller: pass ``next_cursor`` back as ``start_cursor`` while ``has_more`` is
true.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ._codec import decode_list, expect_dict

T = TypeVar("T")


@dataclass(frozen=True)
class PaginatedList(Generic[T]):
    results: list[T] = field(default_factory=list)
    has_more: bool = False
    next_cursor: str | None = None

    def __iter__(self) -> Iterator[T]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    @classmethod
    def from_json(
        cls,
        data: Any,
        decoder: Callable[[Any], T],
        kind: str = "list",
    ) -> PaginatedList[T]:
        """Decode a list envelope, decoding each result with *decoder*."""
        data = expect_dict(data, kind)
        return cls(
            results=decode_list(data.get("results"), decoder, kind),
            has_more=bool(data.get("has_more", False)),
            next_cursor=data.get("next_cursor"),
        )

    @classmethod
    def from_results(
        cls,
        data: Any,
        results_decoder: Callable[[Any], list[T]],
        kind: str = "list",
    ) -> PaginatedList[T]:
        """Like :meth:`from_json` but *results_decoder* handles the whole
        ``results`` array at once."""
        data = expect_dict(data, kind)
        return cls(
            results=results_decoder(data.get("results") or []),
            has_more=bool(data.get("has_more", False)),
            next_cursor=data.get("next_cursor"),
        )
