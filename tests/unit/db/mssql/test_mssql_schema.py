"""Tests for the per-type table DDL."""

from __future__ import annotations

from tsbench.db.mssql import MsSqlSchemaCompiler, table_name
from tsbench.schema import PhysicalType, ValueType


def test_table_name_uses_physical_type() -> None:
    assert table_name("bench", ValueType.INT32) == "bench_int"
    assert table_name("bench", ValueType.DOUBLE) == "bench_float"
    assert table_name("bench", PhysicalType.BIT) == "bench_bit"


def test_create_table_sql_defines_clustered_key() -> None:
    sql = MsSqlSchemaCompiler("bench").create_table_sql(ValueType.INT64)

    assert sql.startswith("CREATE TABLE [bench_bigint]")
    assert "[pk_fk_Id] [bigint] NOT NULL" in sql
    assert "[pk_TimeStamp] [datetime2](7) NOT NULL" in sql
    assert "[Value] [bigint] NULL" in sql
    assert "CONSTRAINT [PK_bench_bigint] PRIMARY KEY CLUSTERED" in sql
    assert "IGNORE_DUP_KEY = ON" in sql
    assert "DATA_COMPRESSION" not in sql


def test_compression_clause_is_appended_when_configured() -> None:
    sql = MsSqlSchemaCompiler("bench", compression="PAGE").create_table_sql(ValueType.TEXT)

    assert sql.endswith("\nWITH (DATA_COMPRESSION = PAGE)")


def test_create_statements_cover_each_physical_table_once() -> None:
    statements = MsSqlSchemaCompiler("bench").create_table_statements()

    assert [statement.splitlines()[0] for statement in statements] == [
        "CREATE TABLE [bench_bit]",
        "CREATE TABLE [bench_int]",
        "CREATE TABLE [bench_bigint]",
        "CREATE TABLE [bench_float]",
        "CREATE TABLE [bench_text]",
    ]


def test_drop_statements_cover_every_value_type() -> None:
    assert MsSqlSchemaCompiler("bench").drop_table_statements() == (
        "drop table if exists bench_bit",
        "drop table if exists bench_int",
        "drop table if exists bench_bigint",
        "drop table if exists bench_float",
        "drop table if exists bench_float",
        "drop table if exists bench_text",
    )
