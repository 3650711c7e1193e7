"""Logical value types of benchmark sensors and their SQL Server storage types."""

from __future__ import annotations

from enum import Enum

from tsbench.utils.logging import get_logger

__all__ = [
    "ALL_VALUE_TYPES",
    "NUMERIC_VALUE_TYPES",
    "PhysicalType",
    "ValueType",
    "physical_type",
    "value_types",
]

_LOGGER = get_logger(__name__)


class ValueType(str, Enum):
    """Declared type of a sensor. Member order drives query iteration order."""

    BOOLEAN = "BOOLEAN"
    INT32 = "INT32"
    INT64 = "INT64"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    TEXT = "TEXT"


class PhysicalType(str, Enum):
    """Column type used for the ``Value`` column of a physical table."""

    BIT = "bit"
    INT = "int"
    BIGINT = "bigint"
    FLOAT = "float"
    TEXT = "text"


ALL_VALUE_TYPES: tuple[ValueType, ...] = tuple(ValueType)
NUMERIC_VALUE_TYPES: tuple[ValueType, ...] = (
    ValueType.INT32,
    ValueType.INT64,
    ValueType.FLOAT,
    ValueType.DOUBLE,
)

_PHYSICAL_TYPES: dict[ValueType, PhysicalType] = {
    ValueType.BOOLEAN: PhysicalType.BIT,
    ValueType.INT32: PhysicalType.INT,
    ValueType.INT64: PhysicalType.BIGINT,
    ValueType.FLOAT: PhysicalType.FLOAT,
    ValueType.DOUBLE: PhysicalType.FLOAT,
    ValueType.TEXT: PhysicalType.TEXT,
}


def value_types() -> tuple[ValueType, ...]:
    """Return the numeric types that support ``value`` comparisons and aggregates."""

    return NUMERIC_VALUE_TYPES


def physical_type(value_type: ValueType | str) -> PhysicalType:
    """Map a logical type to its storage type.

    DOUBLE shares FLOAT's storage. Unknown names fall back to ``text``.
    """

    try:
        resolved = ValueType(value_type)
    except ValueError:
        _LOGGER.error(
            f"Unsupported data type {value_type}, use default data type: text.",
            value_type=str(value_type),
        )
        return PhysicalType.TEXT
    return _PHYSICAL_TYPES[resolved]
