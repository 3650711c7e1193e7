# SPDX-License-Identifier: MIT
"""Shared fixtures for the tsbench test-suite.

The default fleet is one group of two devices with two sensors each.
``device_0`` stores INT32 and BOOLEAN readings, ``device_1`` DOUBLE and TEXT.
"""

from __future__ import annotations

import pytest

from tests.fakes import FakeConnection
from tsbench.db.config import BenchmarkConfig, DatabaseSettings, FleetConfig
from tsbench.db.mssql import MsSqlServerAdapter, SeriesKeyEncoder
from tsbench.schema import DeviceSchema, SchemaRegistry, ValueType


@pytest.fixture
def fleet() -> FleetConfig:
    return FleetConfig(group_number=1, device_number=2, sensor_number=2)


@pytest.fixture
def device_schemas() -> tuple[DeviceSchema, ...]:
    return (
        DeviceSchema(group="group_0", device="device_0", sensors=("sensor_0", "sensor_1")),
        DeviceSchema(group="group_0", device="device_1", sensors=("sensor_0", "sensor_1")),
    )


@pytest.fixture
def registry(device_schemas: tuple[DeviceSchema, ...]) -> SchemaRegistry:
    return SchemaRegistry.from_mapping(
        device_schemas,
        {
            "device_0": {"sensor_0": ValueType.INT32, "sensor_1": ValueType.BOOLEAN},
            "device_1": {"sensor_0": ValueType.DOUBLE, "sensor_1": ValueType.TEXT},
        },
    )


@pytest.fixture
def config(fleet: FleetConfig) -> BenchmarkConfig:
    return BenchmarkConfig(
        database=DatabaseSettings(host="mssql.test", db_name="bench", username="sa"),
        fleet=fleet,
    )


@pytest.fixture
def encoder(fleet: FleetConfig) -> SeriesKeyEncoder:
    return SeriesKeyEncoder.from_fleet(fleet)


@pytest.fixture
def connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def adapter(
    config: BenchmarkConfig, registry: SchemaRegistry, connection: FakeConnection
) -> MsSqlServerAdapter:
    adapter = MsSqlServerAdapter(config, registry, connection_factory=lambda settings: connection)
    adapter.init()
    return adapter
