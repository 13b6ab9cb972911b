"""Metrics hook protocol and no-op default implementation.

typednotion emits counters and timings for every API request.  By default
a :class:`NoopMetricsHook` is used so there is zero overhead.  Users can
supply their own implementation that satisfies the :class:`MetricsHook`
protocol to route metrics to Datadog, Prometheus, StatsD, or any other
backend.

Emitted metric names:

* ``typednotion.requests_total``       -- counter
* ``typednotion.request_duration_ms``  -- timing
* ``typednotion.api_errors_total``     -- counter
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict whose keys and values are
    strings.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a timing / duration metric in milliseconds."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that silently discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
