"""Tests for the in-memory schema registry."""

from __future__ import annotations

import pytest

from tsbench.schema import DeviceSchema, SchemaRegistry, ValueType


def test_registry_reports_declared_types(registry: SchemaRegistry) -> None:
    assert registry.sensor_value_type("device_0", "sensor_0") is ValueType.INT32
    assert registry.sensor_value_type("device_0", "sensor_1") is ValueType.BOOLEAN
    assert registry.sensor_value_type("device_1", "sensor_0") is ValueType.DOUBLE
    assert len(registry) == 4


def test_registry_keeps_device_schemas(
    registry: SchemaRegistry, device_schemas: tuple[DeviceSchema, ...]
) -> None:
    assert registry.device_schemas() == device_schemas
    assert registry.device_schema("device_1") is device_schemas[1]


def test_register_coerces_type_names() -> None:
    schema = DeviceSchema(group="group_0", device="device_0", sensors=("sensor_0",))
    registry = SchemaRegistry()

    registry.register(schema, {"sensor_0": "FLOAT"})

    assert registry.sensor_value_type("device_0", "sensor_0") is ValueType.FLOAT


def test_register_requires_every_sensor_type() -> None:
    schema = DeviceSchema(group="group_0", device="device_0", sensors=("sensor_0", "sensor_1"))

    with pytest.raises(ValueError, match="sensor_1"):
        SchemaRegistry().register(schema, {"sensor_0": ValueType.INT32})


def test_unknown_sensor_lookup_raises_key_error(registry: SchemaRegistry) -> None:
    with pytest.raises(KeyError, match="sensor_9"):
        registry.sensor_value_type("device_0", "sensor_9")
