"""Typed descriptors for the benchmark query shapes.

Timestamps are milliseconds since the Unix epoch, matching :class:`Record`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from tsbench.schema.device import DeviceSchema

__all__ = [
    "AggRangeQuery",
    "AggRangeValueQuery",
    "AggValueQuery",
    "GroupByQuery",
    "LatestPointQuery",
    "PreciseQuery",
    "RangeQuery",
    "ValueRangeQuery",
]


def _validate_agg_fun(agg_fun: str) -> None:
    if not agg_fun or not agg_fun.isidentifier():
        msg = f"agg_fun must be a SQL function name, got {agg_fun!r}"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class _DeviceQuery:
    device_schemas: tuple[DeviceSchema, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "device_schemas", tuple(self.device_schemas))
        if not self.device_schemas:
            raise ValueError("A query must target at least one device")


@dataclass(frozen=True, slots=True)
class PreciseQuery(_DeviceQuery):
    """Rows of the selected series at exactly ``timestamp``."""

    timestamp: int


@dataclass(frozen=True, slots=True)
class LatestPointQuery(_DeviceQuery):
    """Most recent row of the selected series."""


@dataclass(frozen=True, slots=True)
class RangeQuery(_DeviceQuery):
    """Rows with ``start_timestamp <= time <= end_timestamp``."""

    start_timestamp: int
    end_timestamp: int

    def __post_init__(self) -> None:
        _DeviceQuery.__post_init__(self)
        if self.end_timestamp < self.start_timestamp:
            msg = "end_timestamp must not precede start_timestamp"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ValueRangeQuery(RangeQuery):
    """Range query restricted to rows whose value exceeds ``value_threshold``."""

    value_threshold: float


@dataclass(frozen=True, slots=True)
class AggRangeQuery(RangeQuery):
    agg_fun: str

    def __post_init__(self) -> None:
        RangeQuery.__post_init__(self)
        _validate_agg_fun(self.agg_fun)


@dataclass(frozen=True, slots=True)
class AggValueQuery(_DeviceQuery):
    agg_fun: str
    value_threshold: float

    def __post_init__(self) -> None:
        _DeviceQuery.__post_init__(self)
        _validate_agg_fun(self.agg_fun)


@dataclass(frozen=True, slots=True)
class AggRangeValueQuery(AggRangeQuery):
    value_threshold: float


@dataclass(frozen=True, slots=True)
class GroupByQuery(RangeQuery):
    """Aggregate per time bucket of width ``granularity`` within the range."""

    granularity: timedelta
    agg_fun: str = "max"

    def __post_init__(self) -> None:
        RangeQuery.__post_init__(self)
        _validate_agg_fun(self.agg_fun)
        if self.granularity < timedelta(seconds=1):
            msg = "granularity must be at least one second"
            raise ValueError(msg)

    @property
    def granularity_seconds(self) -> int:
        return int(self.granularity.total_seconds())
