# SPDX-License-Identifier: MIT
"""End-to-end checks against a live SQL Server.

Set ``TSBENCH_MSSQL_HOST`` (and optionally ``TSBENCH_MSSQL_PORT``,
``TSBENCH_MSSQL_DATABASE``, ``TSBENCH_MSSQL_USER``, ``TSBENCH_MSSQL_PASSWORD``)
to run this module. The target database must exist; its ``<db>_*`` tables are
dropped before and after every test.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from datetime import timedelta

import pytest

from tsbench.db.access import StatementExecutor
from tsbench.db.config import BenchmarkConfig, DatabaseSettings, FleetConfig
from tsbench.db.engine import open_connection
from tsbench.db.mssql import MsSqlServerAdapter
from tsbench.schema import DeviceSchema, SchemaRegistry, ValueType
from tsbench.workload import (
    Batch,
    GroupByQuery,
    LatestPointQuery,
    PreciseQuery,
    RangeQuery,
    Record,
    ValueRangeQuery,
)

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        "TSBENCH_MSSQL_HOST" not in os.environ,
        reason="TSBENCH_MSSQL_HOST is not set",
    ),
]

DEVICE = DeviceSchema(group="group_0", device="device_0", sensors=("sensor_0", "sensor_1"))
OTHER = DeviceSchema(group="group_0", device="device_1", sensors=("sensor_0", "sensor_1"))


@pytest.fixture
def settings() -> DatabaseSettings:
    pytest.importorskip("pymssql")
    return DatabaseSettings(
        host=os.environ["TSBENCH_MSSQL_HOST"],
        port=int(os.environ.get("TSBENCH_MSSQL_PORT", "1433")),
        db_name=os.environ.get("TSBENCH_MSSQL_DATABASE", "test"),
        username=os.environ.get("TSBENCH_MSSQL_USER", "sa"),
        password=os.environ.get("TSBENCH_MSSQL_PASSWORD", ""),
    )


@pytest.fixture
def live_adapter(settings: DatabaseSettings) -> Iterator[MsSqlServerAdapter]:
    config = BenchmarkConfig(
        database=settings,
        fleet=FleetConfig(group_number=1, device_number=2, sensor_number=2),
    )
    registry = SchemaRegistry.from_mapping(
        (DEVICE, OTHER),
        {
            "device_0": {"sensor_0": ValueType.INT32, "sensor_1": ValueType.BOOLEAN},
            "device_1": {"sensor_0": ValueType.INT32, "sensor_1": ValueType.BOOLEAN},
        },
    )
    adapter = MsSqlServerAdapter(config, registry)
    adapter.init()
    adapter.cleanup()
    adapter.register_schema((DEVICE, OTHER))
    try:
        yield adapter
    finally:
        adapter.cleanup()
        adapter.close()


def _insert(adapter: MsSqlServerAdapter, schema: DeviceSchema, *records: Record) -> None:
    assert adapter.insert_batch(Batch(schema, records)).is_ok


def test_written_record_is_returned_by_precise_query(live_adapter: MsSqlServerAdapter) -> None:
    _insert(live_adapter, DEVICE, Record(1_000_000, (42, True)))

    status = live_adapter.precise_query(PreciseQuery((DEVICE,), timestamp=1_000_000))

    assert status.is_ok
    assert status.query_result_point_num == 2


def test_stored_row_matches_written_values(
    live_adapter: MsSqlServerAdapter, settings: DatabaseSettings
) -> None:
    _insert(live_adapter, DEVICE, Record(1_000_000, (42, True)))

    executor = StatementExecutor(open_connection(settings))
    try:
        int_rows = executor.fetch_all(f"SELECT * FROM {settings.db_name}_int WHERE pk_fk_Id = 0")
        bit_rows = executor.fetch_all(f"SELECT * FROM {settings.db_name}_bit WHERE pk_fk_Id = 1")
    finally:
        executor.close()

    assert [(row[0], row[2]) for row in int_rows] == [(0, 42)]
    assert str(int_rows[0][1]).startswith("1970-01-01 00:16:40")
    assert [(row[0], bool(row[2])) for row in bit_rows] == [(1, True)]


def test_records_of_other_devices_are_not_returned(live_adapter: MsSqlServerAdapter) -> None:
    _insert(live_adapter, OTHER, Record(1_000_000, (7, False)))

    status = live_adapter.precise_query(PreciseQuery((DEVICE,), timestamp=1_000_000))

    assert status.query_result_point_num == 0


def test_range_is_inclusive_at_both_ends(live_adapter: MsSqlServerAdapter) -> None:
    _insert(
        live_adapter,
        DEVICE,
        Record(10_000, (1, True)),
        Record(20_000, (2, False)),
        Record(30_000, (3, True)),
    )

    def count(start: int, end: int) -> int:
        status = live_adapter.range_query(RangeQuery((DEVICE,), start_timestamp=start, end_timestamp=end))
        assert status.is_ok
        return status.query_result_point_num

    assert count(10_000, 30_000) == 6
    assert count(11_000, 29_000) == 2
    assert count(10_000, 10_000) == 2


def test_value_filter_is_strict(live_adapter: MsSqlServerAdapter) -> None:
    _insert(live_adapter, DEVICE, Record(1_000, (42, True)))

    def count(threshold: float) -> int:
        query = ValueRangeQuery(
            (DEVICE,), start_timestamp=0, end_timestamp=2_000, value_threshold=threshold
        )
        return live_adapter.value_range_query(query).query_result_point_num

    assert count(42) == 0
    assert count(41.5) == 1


def test_latest_point_returns_newest_row(live_adapter: MsSqlServerAdapter) -> None:
    _insert(
        live_adapter,
        DEVICE,
        Record(1_000, (1, True)),
        Record(2_000, (2, True)),
        Record(3_000, (3, False)),
    )

    status = live_adapter.latest_point_query(LatestPointQuery((DEVICE,)))

    assert status.is_ok
    assert status.query_result_point_num == 2


def test_group_by_buckets_by_granularity(live_adapter: MsSqlServerAdapter) -> None:
    _insert(
        live_adapter,
        DEVICE,
        *(Record(second * 1_000, (second, True)) for second in range(100, 110)),
    )

    status = live_adapter.group_by_query(
        GroupByQuery(
            (DEVICE,),
            start_timestamp=100_000,
            end_timestamp=109_000,
            granularity=timedelta(seconds=5),
        )
    )

    assert status.is_ok
    assert status.query_result_point_num == 2
