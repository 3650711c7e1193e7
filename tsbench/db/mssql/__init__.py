"""Microsoft SQL Server storage adapter."""

from .adapter import ConnectionFactory, MsSqlServerAdapter
from .encoding import SeriesKeyEncoder
from .query import (
    SHAPE_VALUE_TYPES,
    GroupByBucket,
    MsSqlQueryBuilder,
    OrderByTimeDesc,
    QueryShape,
    SelectStatement,
    TimeBetween,
    TimeEquals,
    ValueAbove,
    applicable_value_types,
    compile_latest_point,
    compile_select,
)
from .schema import MsSqlSchemaCompiler, table_name
from .writer import MsSqlBatchWriter

__all__ = [
    "ConnectionFactory",
    "GroupByBucket",
    "MsSqlBatchWriter",
    "MsSqlQueryBuilder",
    "MsSqlSchemaCompiler",
    "MsSqlServerAdapter",
    "OrderByTimeDesc",
    "QueryShape",
    "SHAPE_VALUE_TYPES",
    "SelectStatement",
    "SeriesKeyEncoder",
    "TimeBetween",
    "TimeEquals",
    "ValueAbove",
    "applicable_value_types",
    "compile_latest_point",
    "compile_select",
    "table_name",
]
