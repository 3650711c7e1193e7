"""Fleet schema primitives: value types, device schemas and the type registry."""

from .device import (
    DEVICE_NAME_PREFIX,
    GROUP_NAME_PREFIX,
    SENSOR_NAME_PREFIX,
    DeviceSchema,
    device_name,
    group_name,
    parse_ordinal,
    sensor_name,
)
from .registry import SchemaRegistry, SensorTypeLookup
from .types import (
    ALL_VALUE_TYPES,
    NUMERIC_VALUE_TYPES,
    PhysicalType,
    ValueType,
    physical_type,
    value_types,
)

__all__ = [
    "ALL_VALUE_TYPES",
    "DEVICE_NAME_PREFIX",
    "DeviceSchema",
    "GROUP_NAME_PREFIX",
    "NUMERIC_VALUE_TYPES",
    "PhysicalType",
    "SENSOR_NAME_PREFIX",
    "SchemaRegistry",
    "SensorTypeLookup",
    "ValueType",
    "device_name",
    "group_name",
    "parse_ordinal",
    "physical_type",
    "sensor_name",
    "value_types",
]
