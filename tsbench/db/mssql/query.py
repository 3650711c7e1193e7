"""SELECT generation for the benchmark query shapes.

Queries are assembled from small clause objects and rendered by
:func:`compile_select`, so each clause can be checked in isolation from any
connection. :class:`MsSqlQueryBuilder` expands a query descriptor into one
statement per (device, value type) pair, following the policy table
:data:`SHAPE_VALUE_TYPES`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Union

from tsbench.schema.device import DeviceSchema
from tsbench.schema.types import ALL_VALUE_TYPES, ValueType, value_types
from tsbench.workload.queries import (
    AggRangeQuery,
    AggRangeValueQuery,
    AggValueQuery,
    GroupByQuery,
    LatestPointQuery,
    PreciseQuery,
    RangeQuery,
    ValueRangeQuery,
)

from .encoding import SeriesKeyEncoder
from .literals import format_timestamp, render_threshold
from .schema import SERIES_KEY_COLUMN, TIMESTAMP_COLUMN, VALUE_COLUMN, table_name

__all__ = [
    "GroupByBucket",
    "MsSqlQueryBuilder",
    "OrderByTimeDesc",
    "QueryShape",
    "SHAPE_VALUE_TYPES",
    "SelectStatement",
    "TimeBetween",
    "TimeEquals",
    "ValueAbove",
    "applicable_value_types",
    "compile_latest_point",
    "compile_select",
    "is_count",
]


class QueryShape(str, Enum):
    PRECISE = "precise"
    RANGE = "range"
    VALUE_RANGE = "value_range"
    AGG_RANGE = "agg_range"
    AGG_VALUE = "agg_value"
    AGG_RANGE_VALUE = "agg_range_value"
    GROUP_BY = "group_by"
    LATEST_POINT = "latest_point"
    RANGE_ORDER_BY_DESC = "range_order_by_desc"
    VALUE_RANGE_ORDER_BY_DESC = "value_range_order_by_desc"


# Value comparisons and non-count aggregates only make sense on numeric tables.
SHAPE_VALUE_TYPES: Mapping[QueryShape, tuple[ValueType, ...]] = {
    QueryShape.PRECISE: ALL_VALUE_TYPES,
    QueryShape.RANGE: ALL_VALUE_TYPES,
    QueryShape.VALUE_RANGE: value_types(),
    QueryShape.AGG_RANGE: value_types(),
    QueryShape.AGG_VALUE: value_types(),
    QueryShape.AGG_RANGE_VALUE: value_types(),
    QueryShape.GROUP_BY: value_types(),
    QueryShape.LATEST_POINT: ALL_VALUE_TYPES,
    QueryShape.RANGE_ORDER_BY_DESC: ALL_VALUE_TYPES,
    QueryShape.VALUE_RANGE_ORDER_BY_DESC: value_types(),
}


def is_count(aggregate: str | None) -> bool:
    return aggregate is not None and aggregate.lower().startswith("count")


def applicable_value_types(shape: QueryShape, aggregate: str | None = None) -> tuple[ValueType, ...]:
    """Value types whose tables a query of ``shape`` is run against.

    A counting aggregate over a time range has no value predicate and
    therefore covers every type.
    """

    if shape is QueryShape.AGG_RANGE and is_count(aggregate):
        return ALL_VALUE_TYPES
    return SHAPE_VALUE_TYPES[shape]


# ----------------------------------------------------------------------
# Clauses
# ----------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class TimeEquals:
    timestamp: int

    def render(self) -> str:
        return f"{TIMESTAMP_COLUMN} = '{format_timestamp(self.timestamp)}'"


@dataclass(frozen=True, slots=True)
class TimeBetween:
    """Inclusive on both ends."""

    start: int
    end: int

    def render(self) -> str:
        return (
            f"{TIMESTAMP_COLUMN} >= '{format_timestamp(self.start)}'"
            f" AND {TIMESTAMP_COLUMN} <= '{format_timestamp(self.end)}'"
        )


@dataclass(frozen=True, slots=True)
class ValueAbove:
    """Strictly greater than ``threshold``."""

    threshold: float

    def render(self) -> str:
        return f"{VALUE_COLUMN} > {render_threshold(self.threshold)}"


@dataclass(frozen=True, slots=True)
class GroupByBucket:
    """Buckets rows by ``floor(epoch_seconds / seconds)``."""

    seconds: int

    def __post_init__(self) -> None:
        if self.seconds <= 0:
            raise ValueError("bucket width must be a positive number of seconds")

    def render(self) -> str:
        return f"datediff(ss, '1970-01-01', {TIMESTAMP_COLUMN}) / {self.seconds}"


@dataclass(frozen=True, slots=True)
class OrderByTimeDesc:
    def render(self) -> str:
        return f"{TIMESTAMP_COLUMN} DESC"


Filter = Union[TimeEquals, TimeBetween, ValueAbove]


@dataclass(frozen=True, slots=True)
class SelectStatement:
    table: str
    series_keys: tuple[int, ...]
    aggregate: str | None = None
    filters: tuple[Filter, ...] = field(default_factory=tuple)
    group_by: GroupByBucket | None = None
    order_by: OrderByTimeDesc | None = None

    def __post_init__(self) -> None:
        if not self.series_keys:
            raise ValueError("A select statement needs at least one series key")

    def where(self, *clauses: Filter) -> "SelectStatement":
        return replace(self, filters=self.filters + clauses)

    @property
    def projection(self) -> str:
        if self.aggregate is None:
            return "*"
        target = "*" if is_count(self.aggregate) else VALUE_COLUMN
        return f"{self.aggregate}({target})"


def _key_list(keys: Iterable[int]) -> str:
    return ",".join(str(key) for key in keys)


def compile_select(statement: SelectStatement) -> str:
    """Render ``statement`` as T-SQL."""

    conditions = [f"{SERIES_KEY_COLUMN} IN ({_key_list(statement.series_keys)})"]
    conditions.extend(clause.render() for clause in statement.filters)
    sql = f"SELECT {statement.projection} FROM {statement.table} WHERE " + " AND ".join(conditions)
    if statement.group_by is not None:
        sql += f" GROUP BY {statement.group_by.render()}"
    if statement.order_by is not None:
        sql += f" ORDER BY {statement.order_by.render()}"
    return sql


def compile_latest_point(table: str, series_keys: Sequence[int]) -> str:
    """Rows of ``series_keys`` stamped with the newest timestamp of the set."""

    keys = _key_list(series_keys)
    return (
        f"SELECT * FROM {table}, "
        f"(SELECT max({TIMESTAMP_COLUMN}) AS target FROM {table} "
        f"WHERE {SERIES_KEY_COLUMN} IN ({keys})) AS m "
        f"WHERE {SERIES_KEY_COLUMN} IN ({keys}) AND {TIMESTAMP_COLUMN} = m.target"
    )


# ----------------------------------------------------------------------
# Builder
# ----------------------------------------------------------------------
class MsSqlQueryBuilder:
    """Expand query descriptors into per-device, per-type SQL.

    Statements are ordered by device (caller order) then value type
    (enumeration order).
    """

    def __init__(self, db_name: str, encoder: SeriesKeyEncoder) -> None:
        self._db_name = db_name
        self._encoder = encoder

    def precise(self, query: PreciseQuery) -> tuple[str, ...]:
        return self._expand(
            QueryShape.PRECISE,
            query.device_schemas,
            filters=(TimeEquals(query.timestamp),),
        )

    def range(self, query: RangeQuery) -> tuple[str, ...]:
        return self._expand(QueryShape.RANGE, query.device_schemas, filters=(_between(query),))

    def value_range(self, query: ValueRangeQuery) -> tuple[str, ...]:
        return self._expand(
            QueryShape.VALUE_RANGE,
            query.device_schemas,
            filters=(_between(query), ValueAbove(query.value_threshold)),
        )

    def agg_range(self, query: AggRangeQuery) -> tuple[str, ...]:
        return self._expand(
            QueryShape.AGG_RANGE,
            query.device_schemas,
            aggregate=query.agg_fun,
            filters=(_between(query),),
        )

    def agg_value(self, query: AggValueQuery) -> tuple[str, ...]:
        return self._expand(
            QueryShape.AGG_VALUE,
            query.device_schemas,
            aggregate=query.agg_fun,
            filters=(ValueAbove(query.value_threshold),),
        )

    def agg_range_value(self, query: AggRangeValueQuery) -> tuple[str, ...]:
        return self._expand(
            QueryShape.AGG_RANGE_VALUE,
            query.device_schemas,
            aggregate=query.agg_fun,
            filters=(_between(query), ValueAbove(query.value_threshold)),
        )

    def group_by(self, query: GroupByQuery) -> tuple[str, ...]:
        return self._expand(
            QueryShape.GROUP_BY,
            query.device_schemas,
            aggregate=query.agg_fun,
            filters=(_between(query),),
            group_by=GroupByBucket(query.granularity_seconds),
        )

    def latest_point(self, query: LatestPointQuery) -> tuple[str, ...]:
        statements = []
        for schema in query.device_schemas:
            keys = self._encoder.series_keys(schema)
            for value_type in applicable_value_types(QueryShape.LATEST_POINT):
                statements.append(compile_latest_point(self._table(value_type), keys))
        return tuple(statements)

    def range_order_by_desc(self, query: RangeQuery) -> tuple[str, ...]:
        return self._expand(
            QueryShape.RANGE_ORDER_BY_DESC,
            query.device_schemas,
            filters=(_between(query),),
            order_by=OrderByTimeDesc(),
        )

    def value_range_order_by_desc(self, query: ValueRangeQuery) -> tuple[str, ...]:
        return self._expand(
            QueryShape.VALUE_RANGE_ORDER_BY_DESC,
            query.device_schemas,
            filters=(_between(query), ValueAbove(query.value_threshold)),
            order_by=OrderByTimeDesc(),
        )

    def _table(self, value_type: ValueType) -> str:
        return table_name(self._db_name, value_type)

    def _expand(
        self,
        shape: QueryShape,
        device_schemas: Sequence[DeviceSchema],
        *,
        aggregate: str | None = None,
        filters: tuple[Filter, ...] = (),
        group_by: GroupByBucket | None = None,
        order_by: OrderByTimeDesc | None = None,
    ) -> tuple[str, ...]:
        statements = []
        for schema in device_schemas:
            keys = self._encoder.series_keys(schema)
            for value_type in applicable_value_types(shape, aggregate):
                statement = SelectStatement(
                    table=self._table(value_type),
                    series_keys=keys,
                    aggregate=aggregate,
                    filters=filters,
                    group_by=group_by,
                    order_by=order_by,
                )
                statements.append(compile_select(statement))
        return tuple(statements)


def _between(query: RangeQuery) -> TimeBetween:
    return TimeBetween(query.start_timestamp, query.end_timestamp)
