"""DDL for the per-type tables backing the SQL Server adapter."""

from __future__ import annotations

from dataclasses import dataclass

from tsbench.schema.types import ALL_VALUE_TYPES, PhysicalType, ValueType, physical_type

__all__ = [
    "SERIES_KEY_COLUMN",
    "TIMESTAMP_COLUMN",
    "VALUE_COLUMN",
    "MsSqlSchemaCompiler",
    "table_name",
]

SERIES_KEY_COLUMN = "pk_fk_Id"
TIMESTAMP_COLUMN = "pk_TimeStamp"
VALUE_COLUMN = "Value"

_CREATE_TABLE = (
    "CREATE TABLE [{table}]\n"
    "([" + SERIES_KEY_COLUMN + "] [bigint] NOT NULL,\n"
    "[" + TIMESTAMP_COLUMN + "] [datetime2](7) NOT NULL,\n"
    "[" + VALUE_COLUMN + "] [{value_type}] NULL,\n"
    "CONSTRAINT [PK_{table}] PRIMARY KEY CLUSTERED\n"
    "([" + SERIES_KEY_COLUMN + "] ASC,\n"
    "[" + TIMESTAMP_COLUMN + "] ASC\n"
    ") WITH (IGNORE_DUP_KEY = ON) ON [PRIMARY]\n"
    ") ON [PRIMARY]"
)


def table_name(db_name: str, value_type: ValueType | PhysicalType) -> str:
    """Physical table holding rows of ``value_type`` (``<db>_<physical type>``)."""

    physical = value_type if isinstance(value_type, PhysicalType) else physical_type(value_type)
    return f"{db_name}_{physical.value}"


@dataclass(frozen=True, slots=True)
class MsSqlSchemaCompiler:
    """Generates CREATE and DROP statements for every value type."""

    db_name: str
    compression: str | None = None

    def table_name(self, value_type: ValueType | PhysicalType) -> str:
        return table_name(self.db_name, value_type)

    def create_table_sql(self, value_type: ValueType) -> str:
        physical = physical_type(value_type)
        statement = _CREATE_TABLE.format(
            table=self.table_name(physical),
            value_type=physical.value,
        )
        if self.compression:
            statement += f"\nWITH (DATA_COMPRESSION = {self.compression})"
        return statement

    def create_table_statements(self) -> tuple[str, ...]:
        """One CREATE TABLE per physical table; DOUBLE reuses FLOAT's table."""

        return tuple(
            self.create_table_sql(value_type)
            for value_type in ALL_VALUE_TYPES
            if value_type is not ValueType.DOUBLE
        )

    def drop_table_sql(self, value_type: ValueType) -> str:
        return f"drop table if exists {self.table_name(value_type)}"

    def drop_table_statements(self) -> tuple[str, ...]:
        """One DROP per value type, DOUBLE's alias included."""

        return tuple(self.drop_table_sql(value_type) for value_type in ALL_VALUE_TYPES)
